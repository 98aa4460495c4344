"""
Merkle Tree Unit Tests
Tests for airdrop/merkle/merkle_tree.py

Tests:
1. Root determinism - same leaves -> same root across runs
2. Odd node rule - unpaired last node is promoted, never self-paired
3. Proof verification - generate proof for each index, verify passes
4. Tamper detection - tampered sibling/leaf/root fails verification
5. Empty leaves - EmptySetError
6. Single leaf - root equals leaf, empty proof
"""
import pytest

from airdrop.crypto.hashing import hash_pair, keccak256
from airdrop.merkle.merkle_tree import (
    build_merkle_levels,
    build_merkle_proof,
    build_merkle_root,
    compute_tree_depth,
    merkle_parent,
    process_proof,
    verify_merkle_proof,
)
from airdrop.schemas.errors import EmptySetError


def make_leaves(n: int) -> list[bytes]:
    return [keccak256(f"leaf-{i}".encode()) for i in range(n)]


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_empty_leaves_raises(self):
        with pytest.raises(EmptySetError):
            build_merkle_root([])

    def test_build_proof_empty_raises(self):
        with pytest.raises(EmptySetError):
            build_merkle_proof([], 0)


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        leaf = keccak256(b"single leaf")
        assert build_merkle_root([leaf]) == leaf

    def test_single_leaf_proof_is_empty(self):
        leaf = keccak256(b"single leaf")
        proof = build_merkle_proof([leaf], 0)

        assert proof == []
        assert verify_merkle_proof(leaf, proof, leaf)


class TestParent:
    """Tests for merkle_parent()."""

    def test_parent_is_sorted_pair(self):
        a, b = make_leaves(2)
        assert merkle_parent(a, b) == hash_pair(a, b)
        assert merkle_parent(a, b) == merkle_parent(b, a)


class TestOddNodePromotion:
    """Tests for the odd-node rule."""

    def test_three_leaves_levels(self):
        a, b, c = make_leaves(3)
        levels = build_merkle_levels([a, b, c])

        assert levels[0] == [a, b, c]
        assert levels[1] == [merkle_parent(a, b), c]
        assert levels[2] == [merkle_parent(merkle_parent(a, b), c)]

    def test_never_self_paired(self):
        a, b, c = make_leaves(3)
        self_paired = merkle_parent(merkle_parent(a, b), merkle_parent(c, c))
        assert build_merkle_root([a, b, c]) != self_paired

    def test_promoted_leaf_has_short_proof(self):
        a, b, c = make_leaves(3)
        assert build_merkle_proof([a, b, c], 2) == [merkle_parent(a, b)]
        assert build_merkle_proof([a, b, c], 0) == [b, c]

    def test_five_leaves_promotes_twice(self):
        leaves = make_leaves(5)
        levels = build_merkle_levels(leaves)

        assert [len(level) for level in levels] == [5, 3, 2, 1]
        assert levels[1][2] == leaves[4]
        assert levels[2][1] == leaves[4]


class TestDeterminism:
    """Tests for root determinism."""

    def test_same_leaves_same_root(self):
        leaves = make_leaves(7)
        assert build_merkle_root(leaves) == build_merkle_root(list(leaves))

    def test_different_leaves_different_root(self):
        assert build_merkle_root(make_leaves(4)) != build_merkle_root(make_leaves(5))


class TestProofs:
    """Tests for proof generation and verification."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7, 8, 9, 16, 17])
    def test_every_index_verifies(self, n):
        leaves = make_leaves(n)
        root = build_merkle_root(leaves)

        for i, leaf in enumerate(leaves):
            proof = build_merkle_proof(leaves, i)
            assert len(proof) <= compute_tree_depth(n)
            assert verify_merkle_proof(leaf, proof, root), f"index {i} of {n}"

    def test_process_proof_folds(self):
        a, b, c, d = make_leaves(4)
        proof = build_merkle_proof([a, b, c, d], 0)
        assert process_proof(a, proof) == merkle_parent(merkle_parent(a, b), merkle_parent(c, d))

    def test_index_out_of_range(self):
        with pytest.raises(IndexError):
            build_merkle_proof(make_leaves(3), 3)
        with pytest.raises(IndexError):
            build_merkle_proof(make_leaves(3), -1)


class TestTamperDetection:
    """Tampered inputs fail verification."""

    def setup_method(self):
        self.leaves = make_leaves(6)
        self.root = build_merkle_root(self.leaves)
        self.proof = build_merkle_proof(self.leaves, 3)

    def test_tampered_sibling(self):
        tampered = list(self.proof)
        tampered[0] = keccak256(b"evil")
        assert not verify_merkle_proof(self.leaves[3], tampered, self.root)

    def test_tampered_leaf(self):
        assert not verify_merkle_proof(keccak256(b"evil"), self.proof, self.root)

    def test_tampered_root(self):
        assert not verify_merkle_proof(self.leaves[3], self.proof, keccak256(b"evil"))

    def test_truncated_proof(self):
        assert not verify_merkle_proof(self.leaves[3], self.proof[:-1], self.root)


class TestTreeDepth:
    """Tests for compute_tree_depth()."""

    @pytest.mark.parametrize("n,expected", [
        (0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4),
    ])
    def test_depth(self, n, expected):
        assert compute_tree_depth(n) == expected

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 8, 9])
    def test_depth_matches_levels(self, n):
        assert compute_tree_depth(n) == len(build_merkle_levels(make_leaves(n))) - 1
