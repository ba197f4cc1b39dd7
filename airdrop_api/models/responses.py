"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-airdrop-api"
    version: str = "v1"


class StateResponse(BaseModel):
    """Contract status, returned by GET /state and POST /init."""

    ok: bool = True
    initialized: bool = Field(..., description="Whether a root has been published")
    root: str | None = Field(default=None, description="Published root (0x hex)")
    owner: str | None = Field(default=None, description="Owner account id")
    hasher: str = Field(..., description="Merkle hasher in use")
    claimed_count: int = Field(default=0, description="Number of recipients that have claimed")


class CanClaimResponse(BaseModel):
    """Response for POST /can_claim."""

    ok: bool = True
    can_claim: bool = Field(..., description="Whether the claim would be accepted now")


class ClaimResponse(BaseModel):
    """Response for an accepted POST /claim."""

    ok: bool = True
    receipt: dict[str, Any] = Field(..., description="Claim receipt")


class VerifyResponse(BaseModel):
    """Response for POST /verify."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the proof connects the leaf to the root")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
