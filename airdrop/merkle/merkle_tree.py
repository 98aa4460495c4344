"""
Module 02 - Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and proof folding
over pre-hashed leaves.

This module provides:
- Level-by-level tree construction with the sorted-pair rule
- Sibling-path generation for any leaf index
- Proof folding (leaf + siblings -> candidate root)

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: done upstream (airdrop.crypto.hashing.leaf_hash)
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
3. Odd node rule: an unpaired last node is promoted unchanged to the
   next level; it is never hashed with itself
4. Empty leaves: rejected with EmptySetError
5. Single leaf: root = leaf, proof = []

Determinism Notes:
- This module trusts the order of the leaves it is given. Sorting for
  set semantics happens in the builder (merkle_proofs.py).
- Because parents are order-independent, a verifier needs only the
  sibling hashes, never left/right flags or the leaf index.
- Because of the odd node rule, roots differ from OpenZeppelin's
  StandardMerkleTree (complete-tree layout) whenever the leaf count is
  not a power of two; its roots and proofs are not interchangeable here.
"""
from __future__ import annotations

from typing import Sequence

from airdrop.crypto.hashing import hash_pair
from airdrop.schemas.errors import EmptySetError


Proof = list[bytes]


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    The sorted-pair rule makes merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_pair(left, right)


def build_merkle_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first, root last.

    Algorithm:
    1. Start with the leaf level (order preserved)
    2. Pair adjacent nodes and hash each pair with merkle_parent
    3. If a level has an odd count, carry its last node up unchanged
    4. Repeat until a single node remains

    Example: [a, b, c] -> [parent(a,b), c] -> [parent(parent(a,b), c)]

    Raises:
        EmptySetError: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptySetError()

    levels: list[list[bytes]] = [list(leaves)]
    current_level = levels[0]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(merkle_parent(current_level[i], current_level[i + 1]))

        # Promote the unpaired node
        if len(current_level) % 2 == 1:
            next_level.append(current_level[-1])

        levels.append(next_level)
        current_level = next_level

    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Raises:
        EmptySetError: If leaves is empty
    """
    return build_merkle_levels(leaves)[-1][0]


def proof_from_levels(levels: list[list[bytes]], index: int) -> Proof:
    """
    Collect the sibling path for the leaf at ``index`` from prebuilt levels.

    Levels where the node was promoted contribute no sibling, so the proof
    length equals the number of hashing steps on that leaf's path.
    """
    leaf_count = len(levels[0])
    if index < 0 or index >= leaf_count:
        raise IndexError(f"Leaf index {index} out of range for {leaf_count} leaves")

    siblings: Proof = []
    current_index = index

    for level in levels[:-1]:
        sibling_index = current_index ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        current_index //= 2

    return siblings


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> Proof:
    """
    Generate the sibling path for the leaf at the given index.

    Raises:
        EmptySetError: If leaves is empty
        IndexError: If index is out of range
    """
    return proof_from_levels(build_merkle_levels(leaves), index)


def process_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    """
    Fold a proof onto a leaf and return the candidate root.

    Each step hashes the running value with the next sibling using the
    sorted-pair rule, exactly as the builder did.
    """
    computed = leaf
    for sibling in proof:
        computed = merkle_parent(computed, sibling)
    return computed


def verify_merkle_proof(leaf: bytes, proof: Sequence[bytes], root: bytes) -> bool:
    """Check that ``proof`` folds ``leaf`` to ``root``."""
    return process_proof(leaf, proof) == root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of hashing levels above the leaves (the longest proof length).

    A single leaf has depth 0, two leaves depth 1, three or four leaves
    depth 2.
    """
    if num_leaves <= 1:
        return 0

    depth = 0
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "Proof",
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "proof_from_levels",
    "build_merkle_proof",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
