"""
Merkle Tree Unit Tests
Tests for airdrop/merkle/merkle_tree.py

Required tests:
1. Root determinism - same items -> same root across runs
2. Odd level rule - an unpaired last node is carried up unchanged
3. Proof generation - every index gets a proof that verifies
4. Shape - proof lengths and tree depth for several leaf counts
5. Empty input - building over no items is an error
6. Single item - root equals the leaf digest, empty proof
"""
import pytest

from airdrop.crypto.hashing import RFC6962_HASHER, SHA256_HASHER, sha256, hash_concat
from airdrop.merkle.merkle_tree import (
    MerkleProof,
    ProofStep,
    Side,
    build_merkle_proof,
    build_merkle_root,
    build_merkle_tree,
    compute_tree_depth,
    verify_merkle_proof,
)


def _items(n: int) -> list[bytes]:
    return [f"item-{i}".encode() for i in range(n)]


class TestEmptyAndInvalidInput:
    """Tests for rejected inputs."""

    def test_empty_items_raises(self):
        with pytest.raises(ValueError, match="empty"):
            build_merkle_tree([])

    def test_empty_root_raises(self):
        with pytest.raises(ValueError, match="empty"):
            build_merkle_root([])

    def test_non_bytes_item_raises(self):
        with pytest.raises(TypeError, match="Item 1"):
            build_merkle_tree([b"ok", "not bytes"])  # type: ignore[list-item]


class TestSingleItem:
    """Tests for single item tree behavior."""

    def test_single_item_root_is_leaf_digest(self):
        tree = build_merkle_tree([b"only"])

        assert tree.root == sha256(b"only")
        assert tree.leaf_count == 1
        assert tree.depth == 1

    def test_single_item_proof_is_empty(self):
        tree = build_merkle_tree([b"only"])
        proof = build_merkle_proof(tree, 0)

        assert len(proof) == 0
        assert verify_merkle_proof(tree.root, b"only", proof)


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_items_same_root(self):
        assert build_merkle_root(_items(7)) == build_merkle_root(_items(7))

    def test_order_matters(self):
        items = _items(4)
        assert build_merkle_root(items) != build_merkle_root(list(reversed(items)))

    def test_two_items(self):
        a, b = b"a", b"b"
        assert build_merkle_root([a, b]) == hash_concat(sha256(a), sha256(b))

    def test_hasher_changes_root(self):
        items = _items(4)
        assert build_merkle_root(items, SHA256_HASHER) != build_merkle_root(items, RFC6962_HASHER)


class TestOddLevelCarryForward:
    """Tests for the odd-count rule: the last node is promoted, not duplicated."""

    def test_three_items(self):
        a, b, c = (sha256(x) for x in (b"a", b"b", b"c"))
        expected = hash_concat(hash_concat(a, b), c)

        assert build_merkle_root([b"a", b"b", b"c"]) == expected

    def test_five_items(self):
        """[a b c d e] -> [ab cd e] -> [abcd e] -> [abcde]"""
        h = [sha256(x) for x in (b"a", b"b", b"c", b"d", b"e")]
        ab = hash_concat(h[0], h[1])
        cd = hash_concat(h[2], h[3])
        abcd = hash_concat(ab, cd)
        expected = hash_concat(abcd, h[4])

        tree = build_merkle_tree([b"a", b"b", b"c", b"d", b"e"])

        assert tree.root == expected
        assert [len(level) for level in tree.levels] == [5, 3, 2, 1]

    def test_carry_forward_differs_from_duplication(self):
        """Duplicating the odd node would give a different root."""
        h = [sha256(x) for x in (b"a", b"b", b"c")]
        duplicated = hash_concat(hash_concat(h[0], h[1]), hash_concat(h[2], h[2]))

        assert build_merkle_root([b"a", b"b", b"c"]) != duplicated

    def test_carried_leaf_proof_skips_levels(self):
        """The last of five leaves has no sibling until the top level."""
        tree = build_merkle_tree(_items(5))
        proof = build_merkle_proof(tree, 4)

        assert len(proof) == 1
        assert proof.steps[0].side is Side.LEFT
        assert proof.steps[0].sibling == tree.levels[2][0]


class TestProofGeneration:
    """Tests for build_merkle_proof()."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7, 8, 9, 16, 17, 33])
    def test_every_index_verifies(self, n):
        items = _items(n)
        tree = build_merkle_tree(items)

        for i, item in enumerate(items):
            proof = build_merkle_proof(tree, i)
            assert verify_merkle_proof(tree.root, item, proof), f"index {i} of {n}"

    @pytest.mark.parametrize("n", [2, 5, 9])
    def test_every_index_verifies_rfc6962(self, n):
        items = _items(n)
        tree = build_merkle_tree(items, RFC6962_HASHER)

        for i, item in enumerate(items):
            assert verify_merkle_proof(tree.root, item, tree.get_proof(i), RFC6962_HASHER)

    def test_proof_length_bounded_by_depth(self):
        tree = build_merkle_tree(_items(9))
        for i in range(9):
            assert len(build_merkle_proof(tree, i)) <= tree.depth - 1

    def test_first_leaf_sibling_is_right(self):
        tree = build_merkle_tree(_items(4))
        proof = build_merkle_proof(tree, 0)

        assert proof.steps[0] == ProofStep(tree.leaves[1], Side.RIGHT)

    def test_odd_index_sibling_is_left(self):
        tree = build_merkle_tree(_items(4))
        proof = build_merkle_proof(tree, 3)

        assert proof.steps[0] == ProofStep(tree.leaves[2], Side.LEFT)

    @pytest.mark.parametrize("index", [-1, 5, 100])
    def test_out_of_range_raises(self, index):
        tree = build_merkle_tree(_items(5))
        with pytest.raises(IndexError):
            build_merkle_proof(tree, index)

    def test_non_int_index_raises(self):
        tree = build_merkle_tree(_items(5))
        with pytest.raises(TypeError):
            build_merkle_proof(tree, "0")  # type: ignore[arg-type]


class TestProofSerialization:
    """Tests for MerkleProof.to_list / from_list."""

    def test_to_list_shape(self):
        tree = build_merkle_tree(_items(3))
        data = tree.get_proof(0).to_list()

        assert data[0]["side"] == "right"
        assert data[0]["sibling"].startswith("0x")

    def test_from_list_restores_proof(self):
        tree = build_merkle_tree(_items(6))
        proof = tree.get_proof(2)

        assert MerkleProof.from_list(proof.to_list()) == proof

    @pytest.mark.parametrize("data", [
        "not a list",
        [{"sibling": "0x00"}],
        [{"sibling": "0xzz", "side": "left"}],
        [{"sibling": "0x00", "side": "up"}],
        [["0x00", "left"]],
    ])
    def test_from_list_malformed_raises(self, data):
        with pytest.raises(ValueError):
            MerkleProof.from_list(data)

    def test_side_coerced_from_string(self):
        step = ProofStep(b"\x00" * 32, "left")  # type: ignore[arg-type]
        assert step.side is Side.LEFT


class TestComputeTreeDepth:
    """Tests for compute_tree_depth()."""

    @pytest.mark.parametrize("n,depth", [(0, 0), (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5)])
    def test_depth(self, n, depth):
        assert compute_tree_depth(n) == depth

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 8, 9, 17])
    def test_depth_matches_built_tree(self, n):
        assert build_merkle_tree(_items(n)).depth == compute_tree_depth(n)
