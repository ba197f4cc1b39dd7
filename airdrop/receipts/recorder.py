"""
Receipt Recorder

Keeps the ordered log of accepted claims for one contract.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Optional

from .models import ClaimReceipt, generate_receipt_id


class ReceiptRecorder:
    """
    Records receipts for accepted claims.

    Usage:
        recorder = ReceiptRecorder()

        receipt = recorder.record_claim(
            account_id="alice.near", amount=100, root="0x...",
            hasher="sha256", leaf_hash="0x...", transfer_id="tx_1",
        )

        receipts = recorder.get_receipts()
    """

    def __init__(self) -> None:
        self._receipts: list[ClaimReceipt] = []
        self._by_account: dict[str, ClaimReceipt] = {}
        self._lock = threading.Lock()

    def record_claim(
        self,
        *,
        account_id: str,
        amount: int,
        root: str,
        hasher: str,
        leaf_hash: str,
        transfer_id: str,
        claimed_at: Optional[datetime] = None,
    ) -> ClaimReceipt:
        """Record a completed claim and return its receipt."""
        receipt = ClaimReceipt(
            receipt_id=generate_receipt_id(account_id, root),
            account_id=account_id,
            amount=amount,
            root=root,
            hasher=hasher,
            leaf_hash=leaf_hash,
            transfer_id=transfer_id,
            claimed_at=claimed_at or datetime.now(timezone.utc),
        )
        with self._lock:
            self._receipts.append(receipt)
            self._by_account[account_id] = receipt
        return receipt

    def get_receipts(self) -> list[ClaimReceipt]:
        """Get all receipts in the order claims were accepted."""
        with self._lock:
            return list(self._receipts)

    def get(self, account_id: str) -> ClaimReceipt | None:
        """Get the receipt for a recipient, if they have claimed."""
        with self._lock:
            return self._by_account.get(account_id)

    def clear(self) -> None:
        """Clear all receipts."""
        with self._lock:
            self._receipts.clear()
            self._by_account.clear()

    def to_dict_list(self) -> list[dict[str, Any]]:
        """Convert all receipts to JSON-serializable dicts."""
        return [r.model_dump(mode="json", exclude_none=True) for r in self.get_receipts()]
