"""
Merkle Proofs Convenience Wrappers
Entitlement-level API over the core Merkle tree functions.

This module provides class-based interfaces:
- MerkleProver: Build trees and proofs from entitlements
- MerkleVerifier: Verify proofs against a fixed published root

Both sides encode entitlements with encode_entitlement so that the bytes
hashed offline are exactly the bytes hashed at claim time.
"""
from __future__ import annotations

from typing import Any, Sequence

from airdrop.crypto.hashing import DEFAULT_HASHER, MerkleHasher
from airdrop.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_proof,
    build_merkle_tree,
    verify_merkle_proof,
)
from airdrop.schemas.entitlement import Entitlement, encode_entitlement
from airdrop.schemas.errors import EntitlementEncodingException


class MerkleProver:
    """
    Convenience class for building trees and proofs over entitlements.

    Example:
        >>> prover = MerkleProver([Entitlement(account_id="alice.near", amount=100)])
        >>> prover.prove(0)
        MerkleProof(steps=())
    """

    def __init__(
        self,
        entitlements: Sequence[Entitlement],
        hasher: MerkleHasher | None = None,
    ) -> None:
        """
        Encode every entitlement and build the tree.

        Raises:
            ValueError: If entitlements is empty
        """
        self.entitlements: tuple[Entitlement, ...] = tuple(entitlements)
        self.hasher = hasher or DEFAULT_HASHER
        self.items: tuple[bytes, ...] = tuple(e.encode() for e in self.entitlements)
        self.tree: MerkleTree = build_merkle_tree(self.items, self.hasher)

    @property
    def root(self) -> bytes:
        return self.tree.root

    def prove(self, index: int) -> MerkleProof:
        """
        Generate the proof for the entitlement at index.

        Raises:
            IndexError: If index is out of range
        """
        return build_merkle_proof(self.tree, index)

    def index_of(self, account_id: str) -> int:
        """
        Find the leaf index of a recipient.

        Raises:
            KeyError: If the recipient is not in the list
        """
        for i, entitlement in enumerate(self.entitlements):
            if entitlement.account_id == account_id:
                return i
        raise KeyError(account_id)

    @staticmethod
    def compute_root(
        items: Sequence[bytes],
        hasher: MerkleHasher | None = None,
    ) -> bytes:
        """Compute the root over already-encoded items."""
        return build_merkle_tree(items, hasher).root


class MerkleVerifier:
    """
    Verifies claims against one published root.

    All verify methods are total: malformed input yields False.

    Example:
        >>> verifier = MerkleVerifier(prover.root)
        >>> verifier.verify_entitlement("alice.near", 100, prover.prove(0))
        True
    """

    def __init__(self, root: bytes, hasher: MerkleHasher | None = None) -> None:
        self.root = root
        self.hasher = hasher or DEFAULT_HASHER

    def verify(self, leaf: bytes, proof: MerkleProof | Sequence[Any]) -> bool:
        """Verify encoded item bytes against the root."""
        return verify_merkle_proof(self.root, leaf, proof, self.hasher)

    def verify_entitlement(
        self,
        account_id: Any,
        amount: Any,
        proof: MerkleProof | Sequence[Any],
    ) -> bool:
        """
        Verify a (recipient, amount) pair against the root.

        An account id or amount that cannot be encoded cannot have been
        committed, so it verifies as False rather than raising.
        """
        try:
            leaf = encode_entitlement(account_id, amount)
        except EntitlementEncodingException:
            return False
        return self.verify(leaf, proof)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
