"""
Receipt Models

Schemas for recording accepted claims. A receipt is the audit trail for one
Unclaimed -> Claimed transition: who claimed, how much, against which root,
and which transfer paid it out.

Key Design Principles:
1. receipt_id is derived from (account_id, root) so replays map to one id
2. Timestamps are non-committed metadata
"""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def generate_receipt_id(account_id: str, root: str) -> str:
    """
    Generate a deterministic receipt ID for a claim.

    Format: rc_claim_{hash_prefix}
    """
    stable_str = f"claim|{account_id}|{root}"
    hash_hex = hashlib.sha256(stable_str.encode()).hexdigest()[:12]
    return f"rc_claim_{hash_hex}"


class ClaimReceipt(BaseModel):
    """
    Record of one accepted claim.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    receipt_id: str = Field(
        ...,
        description="Deterministic receipt identifier",
    )
    account_id: str = Field(
        ...,
        description="Recipient that claimed",
    )
    amount: int = Field(
        ...,
        ge=0,
        description="Amount transferred",
    )
    root: str = Field(
        ...,
        description="Root the proof was verified against (0x-prefixed)",
    )
    hasher: str = Field(
        ...,
        description="Merkle hasher used for verification",
    )
    leaf_hash: str = Field(
        ...,
        description="Leaf digest of the claimed entitlement (0x-prefixed)",
    )
    transfer_id: str = Field(
        ...,
        description="Identifier returned by the value transfer",
    )
    claimed_at: Optional[datetime] = Field(
        default=None,
        description="When the claim was recorded (non-committed)",
    )

    @field_serializer("amount")
    def _serialize_amount(self, value: int) -> str:
        return str(value)
