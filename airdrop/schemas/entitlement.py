"""
Schemas & Encoding
File: entitlement.py

Purpose: The (recipient, amount) entitlement and its canonical byte encoding.

Encoding (Borsh layout of the tuple (AccountId, u128)):
    u32 little-endian  byte length of the UTF-8 account id
    bytes              the account id
    u128 little-endian the amount (16 bytes)

The length prefix makes the encoding injective: two distinct entitlements
never encode to the same bytes. The offline builder and the claim-time
verifier MUST both use encode_entitlement.
"""

from __future__ import annotations

import re
import struct
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .errors import EntitlementEncodingException


ACCOUNT_ID_MIN_LENGTH: int = 2
ACCOUNT_ID_MAX_LENGTH: int = 64

# Lowercase alphanumeric parts separated by single '-', '_' or '.'
ACCOUNT_ID_PATTERN = re.compile(r"^(([a-z\d]+[\-_])*[a-z\d]+\.)*([a-z\d]+[\-_])*[a-z\d]+$")

U128_MAX: int = 2**128 - 1
U128_MAX_DIGITS: int = len(str(U128_MAX))

_LENGTH_PREFIX = struct.Struct("<I")
_AMOUNT_SIZE: int = 16


def validate_account_id(account_id: Any) -> str:
    """
    Check an account id against the NEAR naming rules.

    Args:
        account_id: Candidate account id.

    Returns:
        The account id unchanged.

    Raises:
        EntitlementEncodingException: If the id is not a valid account id.
    """
    if not isinstance(account_id, str):
        raise EntitlementEncodingException(
            message=f"Account id must be a string, got {type(account_id).__name__}",
            field_path="account_id",
        )
    if not ACCOUNT_ID_MIN_LENGTH <= len(account_id) <= ACCOUNT_ID_MAX_LENGTH:
        raise EntitlementEncodingException(
            message=(
                f"Account id length must be between {ACCOUNT_ID_MIN_LENGTH} and "
                f"{ACCOUNT_ID_MAX_LENGTH}, got {len(account_id)}"
            ),
            field_path="account_id",
            details={"account_id": account_id},
        )
    if not ACCOUNT_ID_PATTERN.match(account_id):
        raise EntitlementEncodingException(
            message=f"Invalid account id: {account_id!r}",
            field_path="account_id",
            details={"account_id": account_id},
        )
    return account_id


def validate_amount(amount: Any) -> int:
    """
    Check that amount is an integer in the u128 range.

    Accepts ints and decimal strings (amounts travel as strings in JSON).

    Raises:
        EntitlementEncodingException: If amount is not a u128.
    """
    if isinstance(amount, bool):
        raise EntitlementEncodingException(
            message="Amount must be an integer, got bool",
            field_path="amount",
        )
    if isinstance(amount, str):
        if not amount.isdigit() or not amount.isascii():
            raise EntitlementEncodingException(
                message=f"Amount string must be a non-negative decimal integer: {amount!r}",
                field_path="amount",
            )
        digits = amount.lstrip("0") or "0"
        if len(digits) > U128_MAX_DIGITS:
            raise EntitlementEncodingException(
                message=f"Amount out of u128 range: {len(amount)}-digit string",
                field_path="amount",
            )
        amount = int(digits)
    if not isinstance(amount, int):
        raise EntitlementEncodingException(
            message=f"Amount must be an integer, got {type(amount).__name__}",
            field_path="amount",
        )
    if amount < 0 or amount > U128_MAX:
        # Only the bit length is reported; huge ints may not convert to str
        raise EntitlementEncodingException(
            message=f"Amount out of u128 range ({amount.bit_length()} bits)",
            field_path="amount",
        )
    return amount


def encode_entitlement(account_id: str, amount: int) -> bytes:
    """
    Encode a (recipient, amount) pair into its canonical item bytes.

    Args:
        account_id: Recipient account id.
        amount: Entitlement amount (u128).

    Returns:
        The Borsh encoding of (account_id, amount).

    Raises:
        EntitlementEncodingException: If either value is invalid.

    Example:
        >>> encode_entitlement("alice.near", 100).hex()
        '0a000000616c6963652e6e65617264000000000000000000000000000000'
    """
    account_bytes = validate_account_id(account_id).encode("utf-8")
    value = validate_amount(amount)
    return (
        _LENGTH_PREFIX.pack(len(account_bytes))
        + account_bytes
        + value.to_bytes(_AMOUNT_SIZE, "little")
    )


def decode_entitlement(data: bytes) -> "Entitlement":
    """
    Decode item bytes produced by encode_entitlement.

    Raises:
        EntitlementEncodingException: If data is not a well-formed encoding.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise EntitlementEncodingException(
            message=f"Encoded entitlement must be bytes, got {type(data).__name__}",
        )
    if len(data) < _LENGTH_PREFIX.size + _AMOUNT_SIZE:
        raise EntitlementEncodingException(
            message=f"Encoded entitlement too short: {len(data)} bytes",
        )

    (length,) = _LENGTH_PREFIX.unpack_from(data, 0)
    expected = _LENGTH_PREFIX.size + length + _AMOUNT_SIZE
    if len(data) != expected:
        raise EntitlementEncodingException(
            message=f"Encoded entitlement length mismatch: expected {expected}, got {len(data)}",
        )

    start = _LENGTH_PREFIX.size
    try:
        account_id = bytes(data[start:start + length]).decode("utf-8")
    except UnicodeDecodeError as e:
        raise EntitlementEncodingException(
            message=f"Account id is not valid UTF-8: {e}",
            field_path="account_id",
        ) from e

    amount = int.from_bytes(data[start + length:], "little")
    return Entitlement(account_id=validate_account_id(account_id), amount=amount)


class Entitlement(BaseModel):
    """A single (recipient, amount) entitlement."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    account_id: str = Field(..., description="Recipient account id")
    amount: int = Field(..., description="Amount owed to the recipient (u128)")

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

    def encode(self) -> bytes:
        """Canonical item bytes for this entitlement."""
        return encode_entitlement(self.account_id, self.amount)


__all__ = [
    "ACCOUNT_ID_MIN_LENGTH",
    "ACCOUNT_ID_MAX_LENGTH",
    "U128_MAX",
    "U128_MAX_DIGITS",
    "validate_account_id",
    "validate_amount",
    "encode_entitlement",
    "decode_entitlement",
    "Entitlement",
]
