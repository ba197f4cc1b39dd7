"""
Schemas & Encoding
File: distribution.py

Purpose: The published distribution artifact: the root, the hasher it was
built with, and every recipient's claim with its proof.

Only `root` (and `hasher`) need to be stored by the claiming side; the claim
entries are handed out to recipients.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from airdrop.crypto.hashing import MerkleHasher, digest_from_hex, from_hex, get_hasher, to_hex
from airdrop.merkle.merkle_tree import MerkleProof, ProofStep, Side

from .entitlement import Entitlement, validate_account_id, validate_amount
from .errors import EntitlementEncodingException
from .versioning import SCHEMA_VERSION, assert_supported_schema_version


HEX_PATTERN = r"^0x([0-9a-fA-F]{2})*$"


class ProofStepModel(BaseModel):
    """Wire form of one proof step."""

    model_config = ConfigDict(extra="forbid")

    sibling: str = Field(..., description="Sibling digest (0x-prefixed)", pattern=HEX_PATTERN)
    side: Literal["left", "right"] = Field(..., description="Side of the sibling")

    def to_step(self) -> ProofStep:
        return ProofStep(sibling=from_hex(self.sibling), side=Side(self.side))

    @classmethod
    def from_step(cls, step: ProofStep) -> "ProofStepModel":
        return cls(sibling=to_hex(step.sibling), side=step.side.value)


def proof_to_models(proof: MerkleProof) -> list[ProofStepModel]:
    """Convert a MerkleProof to its wire models."""
    return [ProofStepModel.from_step(step) for step in proof.steps]


def proof_from_models(steps: list[ProofStepModel]) -> MerkleProof:
    """Convert wire models back into a MerkleProof."""
    return MerkleProof(steps=tuple(step.to_step() for step in steps))


class ClaimEntry(BaseModel):
    """One recipient's claim: their entitlement, leaf index, and proof."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=0, description="Leaf index in the committed list")
    account_id: str = Field(..., description="Recipient account id")
    amount: int = Field(..., description="Entitled amount (u128)")
    proof: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("account_id", mode="before")
    @classmethod
    def _check_account_id(cls, value: Any) -> str:
        try:
            return validate_account_id(value)
        except EntitlementEncodingException as e:
            raise ValueError(e.message) from e

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value: Any) -> int:
        try:
            return validate_amount(value)
        except EntitlementEncodingException as e:
            raise ValueError(e.message) from e

    @field_serializer("amount")
    def _serialize_amount(self, value: int) -> str:
        return str(value)

    @property
    def entitlement(self) -> Entitlement:
        return Entitlement(account_id=self.account_id, amount=self.amount)

    def to_proof(self) -> MerkleProof:
        return proof_from_models(self.proof)


class Distribution(BaseModel):
    """
    A committed entitlement set.

    Invariants:
        - claims are ordered by index and indexes are exactly 0..leaf_count-1
        - each recipient appears once
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    hasher: str = Field(default="sha256", description="Name of the Merkle hasher")
    root: str = Field(..., description="Merkle root (0x-prefixed)", pattern=HEX_PATTERN)
    leaf_count: int = Field(..., ge=1)
    claims: list[ClaimEntry] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        assert_supported_schema_version(value)
        return value

    @field_validator("hasher")
    @classmethod
    def _check_hasher(cls, value: str) -> str:
        get_hasher(value)
        return value

    @model_validator(mode="after")
    def _check_claims(self) -> "Distribution":
        if len(self.claims) != self.leaf_count:
            raise ValueError(
                f"leaf_count is {self.leaf_count} but {len(self.claims)} claims are listed"
            )
        seen: set[str] = set()
        for position, claim in enumerate(self.claims):
            if claim.index != position:
                raise ValueError(
                    f"Claim at position {position} has index {claim.index}"
                )
            if claim.account_id in seen:
                raise ValueError(f"Duplicate recipient: {claim.account_id!r}")
            seen.add(claim.account_id)
        digest_from_hex(self.root, get_hasher(self.hasher))
        return self

    @property
    def merkle_hasher(self) -> MerkleHasher:
        return get_hasher(self.hasher)

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def get_claim(self, account_id: str) -> ClaimEntry | None:
        """Look up a recipient's claim, or None if they are not included."""
        for claim in self.claims:
            if claim.account_id == account_id:
                return claim
        return None
