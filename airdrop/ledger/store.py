"""
Claim Store

The per-recipient "already claimed" set. Lifecycle per recipient:
absent (Unclaimed) -> True (Claimed). Entries are never reset.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod


class ClaimStore(ABC):
    """Interface for the claimed set owned by the surrounding system."""

    @abstractmethod
    def is_claimed(self, account_id: str) -> bool:
        """Whether the recipient has already claimed."""

    @abstractmethod
    def mark_claimed(self, account_id: str) -> None:
        """Record the recipient as claimed. Must be durable once it returns."""

    @abstractmethod
    def claimed_count(self) -> int:
        """Number of recipients that have claimed."""


class InMemoryClaimStore(ClaimStore):
    """Process-local claim store keyed by account id."""

    def __init__(self) -> None:
        self._claimed: dict[str, bool] = {}
        self._lock = threading.Lock()

    def is_claimed(self, account_id: str) -> bool:
        with self._lock:
            return self._claimed.get(account_id, False)

    def mark_claimed(self, account_id: str) -> None:
        with self._lock:
            self._claimed[account_id] = True

    def claimed_count(self) -> int:
        with self._lock:
            return sum(1 for claimed in self._claimed.values() if claimed)

    def claimed_accounts(self) -> list[str]:
        with self._lock:
            return sorted(k for k, v in self._claimed.items() if v)
