"""API request and response models."""

from airdrop_api.models.requests import (
    ProofStepIn,
    InitRequest,
    CanClaimRequest,
    ClaimRequest,
    VerifyRequest,
)
from airdrop_api.models.responses import (
    HealthResponse,
    StateResponse,
    CanClaimResponse,
    ClaimResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "ProofStepIn",
    "InitRequest",
    "CanClaimRequest",
    "ClaimRequest",
    "VerifyRequest",
    "HealthResponse",
    "StateResponse",
    "CanClaimResponse",
    "ClaimResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
