"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic tree construction keeping every level
- Merkle proof generation for any leaf index
- Merkle proof verification against a published root
- Carry-forward rule for levels with an odd number of nodes

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = hasher.hash_leaf(item_bytes)
2. Parent hashing: parent = hasher.hash_node(left, right)
3. Odd rule: the last node of an odd level is carried up UNCHANGED.
   It is never paired with a copy of itself, so [a, b, c] and [a, b, c, c]
   commit to different roots.
4. Empty input: rejected (there is nothing to commit to)
5. Single item: root = hash_leaf(item), proof is empty

Proof Format:
- Ordered (sibling, side) steps from the leaf level upward
- side tells where the SIBLING sits relative to the path node
- A carried-forward level contributes no step, so the proof length can be
  shorter than the tree depth minus one
- Proofs carry no leaf index

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts items - it trusts input order
"""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Sequence

from airdrop.crypto.hashing import (
    DEFAULT_HASHER,
    MerkleHasher,
    from_hex,
    to_hex,
)


logger = logging.getLogger(__name__)

# Upper bound on proof length accepted by the verifier.
# A tree this deep would need more than 2**256 leaves.
MAX_PROOF_DEPTH: int = 256


class Side(str, Enum):
    """Position of a sibling digest relative to the path node."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of a Merkle proof.

    Attributes:
        sibling: Digest of the node paired with the path node at this level
        side: Whether the sibling is on the LEFT or RIGHT of the path node
    """
    sibling: bytes
    side: Side

    def __post_init__(self) -> None:
        if not isinstance(self.side, Side):
            # Accept the wire strings "left" / "right"
            object.__setattr__(self, "side", Side(self.side))

    def to_dict(self) -> dict[str, str]:
        return {"sibling": to_hex(self.sibling), "side": self.side.value}


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    The proof is meaningful only relative to a specific root and a specific
    leaf's encoded bytes.

    Attributes:
        steps: Sibling steps ordered from the leaf level toward the root
    """
    steps: tuple[ProofStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.steps, tuple):
            object.__setattr__(self, "steps", tuple(self.steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)

    def to_list(self) -> list[dict[str, str]]:
        """Serialize to JSON-friendly dicts with 0x-prefixed siblings."""
        return [step.to_dict() for step in self.steps]

    @classmethod
    def from_list(cls, data: Sequence[Any]) -> "MerkleProof":
        """
        Parse a proof from its JSON form.

        Args:
            data: List of {"sibling": "0x...", "side": "left"|"right"}

        Returns:
            MerkleProof

        Raises:
            ValueError: If the structure, hex, or side values are malformed
        """
        if not isinstance(data, (list, tuple)):
            raise ValueError(f"Proof must be a list, got {type(data).__name__}")

        steps: list[ProofStep] = []
        for i, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise ValueError(f"Proof step {i} must be an object")
            if "sibling" not in entry or "side" not in entry:
                raise ValueError(f"Proof step {i} requires 'sibling' and 'side'")
            try:
                side = Side(entry["side"])
            except ValueError:
                raise ValueError(
                    f"Proof step {i} has invalid side: {entry['side']!r}"
                ) from None
            steps.append(ProofStep(sibling=from_hex(entry["sibling"]), side=side))
        return cls(steps=tuple(steps))


@dataclass(frozen=True)
class MerkleTree:
    """
    A fully materialized Merkle tree.

    Keeps every level so proofs can be generated by index without
    rehashing. Immutable once built.

    Attributes:
        levels: Node digests per level; levels[0] are the leaves and
                levels[-1] holds only the root
        hasher: The hasher the tree was built with
    """
    levels: tuple[tuple[bytes, ...], ...]
    hasher: MerkleHasher = DEFAULT_HASHER

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self.levels[0])

    @property
    def depth(self) -> int:
        """Number of levels, leaves and root included."""
        return len(self.levels)

    def get_proof(self, index: int) -> MerkleProof:
        """Generate the inclusion proof for the leaf at index."""
        return build_merkle_proof(self, index)


def _next_level(level: Sequence[bytes], hasher: MerkleHasher) -> tuple[bytes, ...]:
    """
    Derive the parent level from a level.

    Adjacent nodes are paired left-to-right; an unpaired last node is
    carried up unchanged.
    """
    parents: list[bytes] = []
    paired = len(level) - (len(level) % 2)
    for i in range(0, paired, 2):
        parents.append(hasher.hash_node(level[i], level[i + 1]))
    if paired < len(level):
        parents.append(level[-1])
    return tuple(parents)


def build_merkle_tree(
    items: Sequence[bytes],
    hasher: MerkleHasher | None = None,
) -> MerkleTree:
    """
    Build a Merkle tree over a sequence of encoded items.

    Algorithm:
    1. Hash every item into a leaf digest (level 0)
    2. Pair adjacent nodes and hash them into the next level,
       carrying an odd last node upward unchanged
    3. Repeat until a single node (the root) remains

    Example: [a, b, c] -> [H(a), H(b), H(c)] -> [N(ab), H(c)] -> [N(N(ab), H(c))]

    Args:
        items: Encoded items. Order matters and is preserved.
        hasher: Hashing strategy (defaults to plain SHA-256)

    Returns:
        MerkleTree with all levels

    Raises:
        ValueError: If items is empty
        TypeError: If an item is not bytes
    """
    hasher = hasher or DEFAULT_HASHER

    if len(items) == 0:
        raise ValueError("Cannot build a Merkle tree from an empty item list")

    leaves: list[bytes] = []
    for i, item in enumerate(items):
        if not isinstance(item, (bytes, bytearray)):
            raise TypeError(
                f"Item {i} must be bytes, got {type(item).__name__}"
            )
        leaves.append(hasher.hash_leaf(bytes(item)))

    levels: list[tuple[bytes, ...]] = [tuple(leaves)]
    while len(levels[-1]) > 1:
        levels.append(_next_level(levels[-1], hasher))

    tree = MerkleTree(levels=tuple(levels), hasher=hasher)
    logger.debug(
        f"Built Merkle tree: leaves={tree.leaf_count} depth={tree.depth} "
        f"root={to_hex(tree.root)}"
    )
    return tree


def build_merkle_root(
    items: Sequence[bytes],
    hasher: MerkleHasher | None = None,
) -> bytes:
    """
    Compute only the root digest for a sequence of encoded items.

    Raises:
        ValueError: If items is empty
    """
    return build_merkle_tree(items, hasher).root


def build_merkle_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Algorithm:
    1. Start at the target leaf index
    2. At each level below the root:
       - If the node is the carried odd node, record nothing
       - Otherwise record the sibling (index XOR 1) and its side
       - Move up: index = index // 2
    3. Stop at the root level

    Args:
        tree: Tree returned by build_merkle_tree
        index: 0-based index of the leaf to prove

    Returns:
        MerkleProof with steps ordered bottom-up

    Raises:
        IndexError: If index is out of range
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")

    if index < 0 or index >= tree.leaf_count:
        raise IndexError(
            f"Leaf index {index} out of range for {tree.leaf_count} leaves"
        )

    steps: list[ProofStep] = []
    current_index = index

    for level in tree.levels[:-1]:
        carried = current_index == len(level) - 1 and len(level) % 2 == 1
        if not carried:
            if current_index % 2 == 0:
                steps.append(ProofStep(level[current_index + 1], Side.RIGHT))
            else:
                steps.append(ProofStep(level[current_index - 1], Side.LEFT))
        current_index //= 2

    return MerkleProof(steps=tuple(steps))


def _coerce_side(value: Any) -> Side | None:
    if isinstance(value, Side):
        return value
    if isinstance(value, str) and value in (Side.LEFT.value, Side.RIGHT.value):
        return Side(value)
    return None


def _coerce_steps(
    proof: Any,
    hasher: MerkleHasher,
) -> list[tuple[bytes, Side]] | None:
    """
    Normalize an untrusted proof into (sibling, side) pairs.

    Returns None if anything about the proof is malformed.
    """
    if isinstance(proof, MerkleProof):
        entries: Sequence[Any] = proof.steps
    elif isinstance(proof, (list, tuple)):
        entries = proof
    else:
        return None

    if len(entries) > MAX_PROOF_DEPTH:
        return None

    steps: list[tuple[bytes, Side]] = []
    for entry in entries:
        if isinstance(entry, ProofStep):
            sibling, side_value = entry.sibling, entry.side
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            sibling, side_value = entry[0], entry[1]
        else:
            return None

        if not isinstance(sibling, (bytes, bytearray)):
            return None
        if len(sibling) != hasher.digest_size:
            return None
        side = _coerce_side(side_value)
        if side is None:
            return None
        steps.append((bytes(sibling), side))

    return steps


def verify_merkle_proof(
    root: bytes,
    leaf: bytes,
    proof: MerkleProof | Sequence[Any],
    hasher: MerkleHasher | None = None,
) -> bool:
    """
    Verify that leaf is committed to by root.

    Algorithm:
    1. current = hash_leaf(leaf)
    2. For each step, in order:
       - sibling on the RIGHT: current = hash_node(current, sibling)
       - sibling on the LEFT:  current = hash_node(sibling, current)
    3. Compare current to root

    Total over all inputs: any malformed root, leaf, proof, step, sibling
    length, or side value yields False. Nothing is raised.

    Args:
        root: Published root digest
        leaf: The claimant's encoded item bytes (NOT a leaf digest)
        proof: MerkleProof, or a sequence of (sibling, side) pairs
        hasher: Hashing strategy the root was built with

    Returns:
        True only if the recomputed root equals root exactly
    """
    if hasher is None:
        hasher = DEFAULT_HASHER
    elif not isinstance(hasher, MerkleHasher):
        return False

    if not isinstance(root, (bytes, bytearray)) or len(root) != hasher.digest_size:
        return False
    if not isinstance(leaf, (bytes, bytearray)):
        return False

    steps = _coerce_steps(proof, hasher)
    if steps is None:
        logger.debug("Rejecting structurally malformed proof")
        return False

    current = hasher.hash_leaf(bytes(leaf))
    for sibling, side in steps:
        if side is Side.RIGHT:
            current = hasher.hash_node(current, sibling)
        else:
            current = hasher.hash_node(sibling, current)

    return hmac.compare_digest(current, bytes(root))


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with the given leaf count.

    A single leaf has depth 1, two leaves have depth 2, five leaves
    have depth 4 (5 -> 3 -> 2 -> 1).

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MAX_PROOF_DEPTH",
    "Side",
    "ProofStep",
    "MerkleProof",
    "MerkleTree",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
