"""
Module 02 - Whitelist Builder and Verifier
Address-level wrappers around the core Merkle tree functions.

This module provides class-based interfaces:
- WhitelistTree: A built tree over one eligible-address set
- MerkleTreeBuilder: Off-line, stateless builder (root + proofs)
- MerkleVerifier: Off-line proof check using the same fold as the ledger

Set semantics: the input is treated as a set. Spellings of the same
address collapse to one leaf, and leaves are sorted ascending by their
raw bytes before construction, so the root never depends on input order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from airdrop.crypto.hashing import leaf_hash, normalize_address, to_hex
from airdrop.merkle.merkle_tree import (
    Proof,
    build_merkle_levels,
    compute_tree_depth,
    process_proof,
    proof_from_levels,
)
from airdrop.schemas.errors import EmptySetError, InvalidAddressError, NotInSetError
from airdrop.schemas.whitelist import WhitelistSnapshot


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WhitelistTree:
    """
    A Merkle tree built over one eligible-address set.

    Attributes:
        levels: Tree levels, sorted leaves first, [root] last
        addresses: Checksummed members in leaf order
    """
    levels: list[list[bytes]]
    addresses: list[str]
    _index: dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self._index:
            self._index.update({addr: i for i, addr in enumerate(self.addresses)})

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def leaves(self) -> list[bytes]:
        return list(self.levels[0])

    @property
    def leaf_count(self) -> int:
        return len(self.addresses)

    @property
    def depth(self) -> int:
        return compute_tree_depth(self.leaf_count)

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, str):
            return False
        try:
            return normalize_address(address) in self._index
        except InvalidAddressError:
            return False

    def proof_for(self, address: str) -> Proof:
        """
        Sibling path for a member address.

        Raises:
            InvalidAddressError: If address is malformed
            NotInSetError: If address is not a member
        """
        key = normalize_address(address)
        index = self._index.get(key)
        if index is None:
            raise NotInSetError(address=key)
        return proof_from_levels(self.levels, index)

    def proofs(self) -> dict[str, Proof]:
        """Every member's proof, keyed by checksummed address."""
        return {addr: proof_from_levels(self.levels, i) for addr, i in self._index.items()}

    def to_snapshot(self) -> WhitelistSnapshot:
        """Serializable form of the tree for hand-off to claimants."""
        return WhitelistSnapshot(
            root=to_hex(self.root),
            leaf_count=self.leaf_count,
            depth=self.depth,
            addresses=list(self.addresses),
            proofs={
                addr: [to_hex(h) for h in proof]
                for addr, proof in self.proofs().items()
            },
        )


class MerkleTreeBuilder:
    """
    Stateless builder for whitelist commitments.

    Every method is a pure function of its arguments; independent sets can
    be built concurrently without synchronization.

    Example:
        >>> builder = MerkleTreeBuilder()
        >>> root = builder.build({"0xf39F...", "0x7099..."})
        >>> proof = builder.prove_membership({"0xf39F...", "0x7099..."}, "0xf39F...")
    """

    @staticmethod
    def canonical_leaves(addresses: Iterable[str]) -> list[tuple[bytes, str]]:
        """
        Canonicalize an address set into (leaf, checksummed address) pairs.

        Duplicates collapse; the result is sorted ascending by leaf bytes.

        Raises:
            InvalidAddressError: If any address is malformed
        """
        unique: dict[str, bytes] = {}
        for address in addresses:
            key = normalize_address(address)
            if key not in unique:
                unique[key] = leaf_hash(key)
        return sorted(((leaf, addr) for addr, leaf in unique.items()), key=lambda pair: pair[0])

    @classmethod
    def build_tree(cls, addresses: Iterable[str]) -> WhitelistTree:
        """
        Build the full tree for an address set.

        Raises:
            EmptySetError: If the set is empty
            InvalidAddressError: If any address is malformed
        """
        pairs = cls.canonical_leaves(addresses)
        if not pairs:
            raise EmptySetError()

        levels = build_merkle_levels([leaf for leaf, _ in pairs])
        tree = WhitelistTree(levels=levels, addresses=[addr for _, addr in pairs])
        logger.debug(f"Built whitelist tree: {tree.leaf_count} leaves, depth {tree.depth}")
        return tree

    @classmethod
    def build(cls, addresses: Iterable[str]) -> bytes:
        """
        Compute the root commitment for an address set.

        Raises:
            EmptySetError: If the set is empty
        """
        return cls.build_tree(addresses).root

    @classmethod
    def prove_membership(cls, addresses: Iterable[str], target: str) -> Proof:
        """
        Generate the proof for ``target`` within ``addresses``.

        Raises:
            EmptySetError: If the set is empty
            NotInSetError: If target is not a member (never an empty proof)
        """
        return cls.build_tree(addresses).proof_for(target)


class MerkleVerifier:
    """
    Off-line proof verification.

    Uses the same leaf rule and fold as WhitelistMintLedger, but has no
    claim state and never raises on a bad proof.
    """

    @staticmethod
    def compute_root(address: str, proof: Sequence[bytes]) -> bytes:
        """Fold a proof onto the address's leaf and return the candidate root."""
        return process_proof(leaf_hash(address), proof)

    @staticmethod
    def verify(address: str, proof: Sequence[bytes], root: bytes) -> bool:
        """
        Check that ``proof`` places ``address`` under ``root``.

        Returns False for malformed addresses or proofs instead of raising.
        """
        try:
            return MerkleVerifier.compute_root(address, proof) == root
        except (InvalidAddressError, TypeError, ValueError):
            return False


__all__ = [
    "WhitelistTree",
    "MerkleTreeBuilder",
    "MerkleVerifier",
]
