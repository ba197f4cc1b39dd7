"""
API Request Models

Pydantic models for API request validation.

Proof steps are accepted as plain strings here. Hex and side values are
checked when the proof is parsed, so a malformed proof is reported as
not verifying instead of as a validation error.
"""

from typing import Any

from pydantic import BaseModel, Field


class ProofStepIn(BaseModel):
    """One proof step as sent by a client."""

    sibling: str = Field(..., description="Sibling digest (0x hex)")
    side: str = Field(..., description="'left' or 'right'")


class InitRequest(BaseModel):
    """Request body for POST /init."""

    root_hash: str = Field(
        ...,
        description="Root digest of the distribution (0x hex)",
    )
    owner: str = Field(
        ...,
        min_length=2,
        max_length=64,
        description="Owner account id",
    )


class CanClaimRequest(BaseModel):
    """Request body for POST /can_claim."""

    account_id: str = Field(..., description="Recipient account id")
    amount: int | str = Field(..., description="Claimed amount (integer or decimal string)")
    proof: list[ProofStepIn] = Field(default_factory=list)

    def proof_payload(self) -> list[dict[str, Any]]:
        return [step.model_dump() for step in self.proof]


class ClaimRequest(BaseModel):
    """Request body for POST /claim. The recipient is the caller."""

    amount: int | str = Field(..., description="Claimed amount (integer or decimal string)")
    proof: list[ProofStepIn] = Field(default_factory=list)

    def proof_payload(self) -> list[dict[str, Any]]:
        return [step.model_dump() for step in self.proof]


class VerifyRequest(BaseModel):
    """Request body for POST /verify (stateless)."""

    root: str = Field(..., description="Root digest (0x hex)")
    leaf: str = Field(..., description="Raw leaf bytes (0x hex), e.g. an encoded entitlement")
    proof: list[ProofStepIn] = Field(default_factory=list)
    hasher: str = Field(default="sha256", description="Merkle hasher name")

    def proof_payload(self) -> list[dict[str, Any]]:
        return [step.model_dump() for step in self.proof]
