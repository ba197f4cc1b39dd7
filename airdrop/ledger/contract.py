"""
Airdrop Contract

Claim state machine around the Merkle verifier.

States per recipient: Unclaimed -> Claimed (terminal).
A claim is accepted only when the recipient is Unclaimed AND
verify(root, encode_entitlement(recipient, amount), proof) holds.
On acceptance the value transfer runs first, then Claimed is recorded.
If the transfer fails nothing is recorded.

Concurrency:
    The proof is verified without a lock. The claimed check, transfer and
    record then run under a per-recipient lock, so two concurrent claims
    for the same recipient cannot both pass the check.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Sequence

from airdrop.crypto.hashing import DEFAULT_HASHER, MerkleHasher, to_hex
from airdrop.merkle.merkle_proofs import MerkleVerifier
from airdrop.merkle.merkle_tree import MerkleProof
from airdrop.receipts import ClaimReceipt, ReceiptRecorder
from airdrop.schemas.entitlement import encode_entitlement, validate_account_id, validate_amount
from airdrop.schemas.errors import (
    AlreadyInitializedException,
    ClaimRejectedException,
    ErrorCodes,
    NotInitializedException,
)

from .store import ClaimStore, InMemoryClaimStore
from .transfer import InMemoryTransfer, ValueTransfer


logger = logging.getLogger(__name__)


class AirdropContract:
    """
    Holds the published root and the claimed set.

    Usage:
        contract = AirdropContract()
        contract.initialize(distribution.root_bytes, owner="owner.near")

        contract.can_claim("alice.near", 100, proof)   # True
        contract.claim("alice.near", 100, proof)       # ClaimReceipt
        contract.can_claim("alice.near", 100, proof)   # False
    """

    def __init__(
        self,
        *,
        store: ClaimStore | None = None,
        transfer: ValueTransfer | None = None,
        recorder: ReceiptRecorder | None = None,
        hasher: MerkleHasher | None = None,
    ) -> None:
        self.store = store or InMemoryClaimStore()
        self.transfer = transfer or InMemoryTransfer()
        self.recorder = recorder or ReceiptRecorder()
        self.hasher = hasher or DEFAULT_HASHER

        self._root_hash: bytes | None = None
        self._owner: str | None = None
        self._verifier: MerkleVerifier | None = None

        self._init_lock = threading.Lock()
        self._locks_guard = threading.Lock()
        self._recipient_locks: dict[str, threading.Lock] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._root_hash is not None

    def initialize(self, root_hash: bytes, owner: str) -> None:
        """
        Publish the root. Allowed exactly once.

        Raises:
            AlreadyInitializedException: If called a second time
            ValueError: If root_hash is not a digest of the hasher's size
            EntitlementEncodingException: If owner is not a valid account id
        """
        if not isinstance(root_hash, (bytes, bytearray)) or len(root_hash) != self.hasher.digest_size:
            raise ValueError(
                f"Root hash must be {self.hasher.digest_size} bytes"
            )
        validate_account_id(owner)

        with self._init_lock:
            if self._root_hash is not None:
                raise AlreadyInitializedException()
            self._root_hash = bytes(root_hash)
            self._owner = owner
            self._verifier = MerkleVerifier(self._root_hash, self.hasher)

        logger.info(
            f"Airdrop initialized: owner={owner} hasher={self.hasher.name} "
            f"root={to_hex(self._root_hash)}"
        )

    def _require_initialized(self) -> MerkleVerifier:
        if self._verifier is None:
            raise NotInitializedException()
        return self._verifier

    @property
    def root_hash(self) -> bytes:
        self._require_initialized()
        return self._root_hash  # type: ignore[return-value]

    @property
    def owner(self) -> str:
        self._require_initialized()
        return self._owner  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_claimed(self, account_id: Any) -> bool:
        if not isinstance(account_id, str):
            return False
        return self.store.is_claimed(account_id)

    def verify(
        self,
        account_id: Any,
        amount: Any,
        proof: MerkleProof | Sequence[Any],
    ) -> bool:
        """Check a (recipient, amount, proof) triple against the root only."""
        return self._require_initialized().verify_entitlement(account_id, amount, proof)

    def can_claim(
        self,
        account_id: Any,
        amount: Any,
        proof: MerkleProof | Sequence[Any],
    ) -> bool:
        """
        Whether recipient could claim amount with proof right now.

        Already-claimed recipients are rejected before the proof is looked at.

        Raises:
            NotInitializedException: If no root has been published
        """
        verifier = self._require_initialized()
        if self.is_claimed(account_id):
            return False
        return verifier.verify_entitlement(account_id, amount, proof)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _lock_for(self, account_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._recipient_locks.get(account_id)
            if lock is None:
                lock = threading.Lock()
                self._recipient_locks[account_id] = lock
            return lock

    def claim(
        self,
        caller: str,
        amount: Any,
        proof: MerkleProof | Sequence[Any],
    ) -> ClaimReceipt:
        """
        Claim amount for the calling recipient.

        Args:
            caller: Recipient identity resolved from the execution context
            amount: Amount being claimed
            proof: Proof for encode_entitlement(caller, amount)

        Returns:
            ClaimReceipt for the accepted claim

        Raises:
            NotInitializedException: If no root has been published
            ClaimRejectedException: If already claimed or the proof is invalid
            TransferFailedException: If the payout failed (nothing recorded)
        """
        verifier = self._require_initialized()

        if not isinstance(caller, str):
            raise ClaimRejectedException(str(caller), "invalid caller")

        if self.store.is_claimed(caller):
            logger.warning(f"Rejected claim from {caller}: already claimed")
            raise ClaimRejectedException(
                caller, "already claimed", code=ErrorCodes.ALREADY_CLAIMED
            )

        # Locks exist only for recipients with a verified entitlement
        if not verifier.verify_entitlement(caller, amount, proof):
            logger.warning(f"Rejected claim from {caller}: proof does not verify")
            raise ClaimRejectedException(caller, "invalid proof")

        value = validate_amount(amount)

        with self._lock_for(caller):
            if self.store.is_claimed(caller):
                logger.warning(f"Rejected claim from {caller}: already claimed")
                raise ClaimRejectedException(
                    caller, "already claimed", code=ErrorCodes.ALREADY_CLAIMED
                )
            transfer_id = self.transfer.transfer(caller, value)
            self.store.mark_claimed(caller)

        receipt = self.recorder.record_claim(
            account_id=caller,
            amount=value,
            root=to_hex(self.root_hash),
            hasher=self.hasher.name,
            leaf_hash=to_hex(self.hasher.hash_leaf(encode_entitlement(caller, value))),
            transfer_id=transfer_id,
        )
        logger.info(f"Accepted claim: {caller} amount={value} transfer={transfer_id}")
        return receipt

    def state(self) -> dict[str, Any]:
        """Snapshot of the contract for status reporting."""
        return {
            "initialized": self.initialized,
            "root": to_hex(self._root_hash) if self._root_hash is not None else None,
            "owner": self._owner,
            "hasher": self.hasher.name,
            "claimed_count": self.store.claimed_count(),
        }
