"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for the airdrop distributor.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Malformed proofs are NOT errors: verification answers them with False.
The exceptions below cover precondition violations and rejected claims.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Schema & Encoding Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    ENTITLEMENT_ENCODING_ERROR = "ENTITLEMENT_ENCODING_ERROR"
    DUPLICATE_RECIPIENT = "DUPLICATE_RECIPIENT"

    # Contract Lifecycle Errors
    ALREADY_INITIALIZED = "ALREADY_INITIALIZED"
    NOT_INITIALIZED = "NOT_INITIALIZED"

    # Claim Errors
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    CLAIM_REJECTED = "CLAIM_REJECTED"
    TRANSFER_FAILED = "TRANSFER_FAILED"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors across the API boundary without exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.CLAIM_REJECTED],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all airdrop errors.

    Carries structured error information and converts to an
    AirdropError model for API responses.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(AirdropException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class EntitlementEncodingException(AirdropException):
    """Exception raised when an entitlement cannot be encoded or decoded."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.ENTITLEMENT_ENCODING_ERROR,
            details=full_details,
            retryable=False,
        )


class DuplicateRecipientException(AirdropException):
    """Exception raised when a recipient appears twice in one distribution."""

    def __init__(self, account_id: str, indexes: list[int]) -> None:
        super().__init__(
            message=f"Recipient {account_id!r} appears more than once",
            code=ErrorCodes.DUPLICATE_RECIPIENT,
            details={"account_id": account_id, "indexes": indexes},
            retryable=False,
        )


class AlreadyInitializedException(AirdropException):
    """Exception raised when the contract is initialized a second time."""

    def __init__(self, message: str = "AirdropContract: already initialized") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ALREADY_INITIALIZED,
            retryable=False,
        )


class NotInitializedException(AirdropException):
    """Exception raised when the contract is used before initialization."""

    def __init__(self, message: str = "AirdropContract: not initialized") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_INITIALIZED,
            retryable=False,
        )


class ClaimRejectedException(AirdropException):
    """Exception raised when a claim does not pass can_claim."""

    def __init__(
        self,
        account_id: str,
        reason: str,
        code: str = ErrorCodes.CLAIM_REJECTED,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["account_id"] = account_id
        full_details["reason"] = reason
        super().__init__(
            message=f"AirdropContract: can't claim ({reason})",
            code=code,
            details=full_details,
            retryable=False,
        )


class TransferFailedException(AirdropException):
    """Exception raised by a ValueTransfer that could not move funds."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSFER_FAILED,
            details=details,
            retryable=False,
        )
