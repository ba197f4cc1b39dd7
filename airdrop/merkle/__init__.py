"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: All levels of a built tree
- MerkleProof / ProofStep / Side: Inclusion proofs
- build_merkle_tree / build_merkle_root: Commit to an ordered item list
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof against a root (total, never raises)

Commitment Rules:
1. Leaf hashing: hasher.hash_leaf(item)
2. Parent hashing: hasher.hash_node(left, right)
3. Odd levels: carry the last node up unchanged
4. Empty tree: rejected
5. Single item: root = hash_leaf(item), empty proof

Usage:
    from airdrop.merkle import build_merkle_tree, build_merkle_proof, verify_merkle_proof

    tree = build_merkle_tree(items)
    proof = build_merkle_proof(tree, index=2)
    assert verify_merkle_proof(tree.root, items[2], proof)
"""
from .merkle_tree import (
    MAX_PROOF_DEPTH,
    Side,
    ProofStep,
    MerkleProof,
    MerkleTree,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MAX_PROOF_DEPTH",
    "Side",
    "ProofStep",
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
