"""
Module 02 - Merkle Tree and Whitelist Commitments
Deterministic whitelist tree construction + proof generation/verification.

This module provides:
- MerkleTreeBuilder: build(addresses) -> root, prove_membership(addresses, target) -> proof
- WhitelistTree: a built tree with every member's proof
- MerkleVerifier: off-line proof check
- Low-level functions over pre-hashed leaves

Canonical Commitment Rules:
1. Leaf hashing: keccak256(keccak256(abi.encode(address)))
2. Leaf order: ascending by leaf bytes, duplicates collapsed
3. Parent hashing: keccak256(min(a, b) + max(a, b))
4. Odd node: promoted unchanged to the next level
5. Empty set: EmptySetError
6. Single leaf: root = leaf

Usage:
    from airdrop.merkle import MerkleTreeBuilder, MerkleVerifier

    root = MerkleTreeBuilder.build(addresses)
    proof = MerkleTreeBuilder.prove_membership(addresses, address)
    assert MerkleVerifier.verify(address, proof, root)
"""
from .merkle_tree import (
    Proof,
    merkle_parent,
    build_merkle_levels,
    build_merkle_root,
    build_merkle_proof,
    proof_from_levels,
    process_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleTreeBuilder,
    MerkleVerifier,
    WhitelistTree,
)

from .io import (
    WhitelistIOError,
    is_snapshot_file,
    load_snapshot,
    load_whitelist,
    save_snapshot,
)


__all__ = [
    # Core types
    "Proof",
    "WhitelistTree",
    # Core functions
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "proof_from_levels",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Builder and verifier
    "MerkleTreeBuilder",
    "MerkleVerifier",
    # IO
    "WhitelistIOError",
    "is_snapshot_file",
    "load_snapshot",
    "load_whitelist",
    "save_snapshot",
]
