"""
Value Transfer

Pays out an accepted claim. Real transfers belong to the host environment;
InMemoryTransfer keeps balances in process for tests and the local API.
"""

from __future__ import annotations

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

from airdrop.schemas.errors import TransferFailedException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferRecord:
    """One completed transfer."""
    transfer_id: str
    recipient: str
    amount: int


class ValueTransfer(ABC):
    """Interface for moving value to a recipient."""

    @abstractmethod
    def transfer(self, recipient: str, amount: int) -> str:
        """
        Transfer amount to recipient.

        Returns:
            Transfer identifier

        Raises:
            TransferFailedException: If the transfer could not be made.
                Nothing must have moved in that case.
        """


class InMemoryTransfer(ValueTransfer):
    """
    Transfers out of a fixed in-memory pool.

    Args:
        pool: Funds available to distribute, or None for an unlimited pool
    """

    def __init__(self, pool: int | None = None) -> None:
        self._pool = pool
        self._balances: dict[str, int] = {}
        self._records: list[TransferRecord] = []
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def pool(self) -> int | None:
        return self._pool

    def transfer(self, recipient: str, amount: int) -> str:
        with self._lock:
            if self._pool is not None and amount > self._pool:
                raise TransferFailedException(
                    message=f"Insufficient funds: {amount} requested, {self._pool} available",
                    details={"recipient": recipient, "amount": str(amount)},
                )
            if self._pool is not None:
                self._pool -= amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount
            transfer_id = f"tx_{next(self._counter)}"
            self._records.append(TransferRecord(transfer_id, recipient, amount))

        logger.debug(f"Transferred {amount} to {recipient} ({transfer_id})")
        return transfer_id

    def balance_of(self, recipient: str) -> int:
        with self._lock:
            return self._balances.get(recipient, 0)

    @property
    def records(self) -> list[TransferRecord]:
        with self._lock:
            return list(self._records)
