"""
Schemas & Encoding
File: __init__.py

Purpose: Export the public API for the schemas module.

The distribution artifact models live in airdrop.schemas.distribution and
are imported from there directly (they depend on airdrop.merkle).
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    AlreadyInitializedException,
    CanonicalizationException,
    ClaimRejectedException,
    DuplicateRecipientException,
    EntitlementEncodingException,
    ErrorCodes,
    NotInitializedException,
    TransferFailedException,
)

# Entitlement encoding
from .entitlement import (
    Entitlement,
    U128_MAX,
    decode_entitlement,
    encode_entitlement,
    validate_account_id,
    validate_amount,
)

# Verification results
from .verification import (
    CheckResult,
    CheckSeverity,
    DistributionChecks,
    VerificationResult,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "AirdropError",
    "AirdropException",
    "AlreadyInitializedException",
    "CanonicalizationException",
    "ClaimRejectedException",
    "DuplicateRecipientException",
    "EntitlementEncodingException",
    "ErrorCodes",
    "NotInitializedException",
    "TransferFailedException",
    # Entitlements
    "Entitlement",
    "U128_MAX",
    "decode_entitlement",
    "encode_entitlement",
    "validate_account_id",
    "validate_amount",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "DistributionChecks",
    "VerificationResult",
]
