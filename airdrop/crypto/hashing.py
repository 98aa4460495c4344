"""
Module 02 - Hashing Utilities
Keccak-256 hashing and address canonicalization for whitelist commitments.

This module provides:
- Keccak-256 hashing for raw bytes
- Address canonicalization (EIP-55 checksum form, 20-byte raw form)
- Leaf hashing: leaf = keccak256(keccak256(abi.encode(address)))
- Sorted-pair node hashing: node = keccak256(min(a, b) + max(a, b))
- Hex encoding/decoding with 0x prefix

Canonical Commitment Rules (Hard Contracts):
1. Hash width is 32 bytes, address width is 20 bytes
2. abi.encode(address) left-pads the 20 raw bytes to a 32-byte word
3. Leaves are hashed twice so a leaf can never be confused with an
   internal node (64-byte preimage)
4. Internal nodes hash the byte-wise smaller child first
"""
from __future__ import annotations

from eth_utils import (
    is_hex_address,
    keccak,
    to_canonical_address,
    to_checksum_address,
)

from airdrop.schemas.errors import InvalidAddressError


HASH_WIDTH = 32
ADDRESS_WIDTH = 20


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def normalize_address(address: str) -> str:
    """
    Canonicalize an address to its EIP-55 checksum form.

    Accepts any letter case, with or without the 0x prefix. Surrounding
    whitespace is stripped.

    Raises:
        InvalidAddressError: If the value is not a 20-byte hex address
    """
    if not isinstance(address, str):
        raise InvalidAddressError(f"Address must be a string, got {type(address).__name__}")

    candidate = address.strip()
    if candidate and not candidate.lower().startswith("0x"):
        candidate = "0x" + candidate

    if not is_hex_address(candidate):
        raise InvalidAddressError(f"Invalid address: {address!r}", address=address)

    return to_checksum_address(candidate)


def encode_address(address: str) -> bytes:
    """
    ABI-encode an address as a single 32-byte word.

    Equivalent to Solidity's abi.encode(address): twelve zero bytes
    followed by the 20 raw address bytes.
    """
    raw = to_canonical_address(normalize_address(address))
    return b"\x00" * (HASH_WIDTH - ADDRESS_WIDTH) + raw


def leaf_hash(address: str) -> bytes:
    """
    Compute the Merkle leaf for an eligible address.

    Rule: leaf = keccak256(keccak256(abi.encode(address)))

    Any spelling of the same address (case, 0x prefix) yields the same leaf.
    """
    return keccak256(keccak256(encode_address(address)))


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling nodes using the sorted-pair rule.

    The byte-wise smaller hash goes first, so the result does not depend on
    which side of the tree each child sits.
    """
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex value must be a string, got {type(hex_string).__name__}")

    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def parse_hash(hex_string: str) -> bytes:
    """
    Decode a 0x-prefixed hex string that must hold exactly one 32-byte hash.

    Raises:
        ValueError: On bad hex or a width other than HASH_WIDTH
    """
    data = from_hex(hex_string)
    if len(data) != HASH_WIDTH:
        raise ValueError(f"Expected a {HASH_WIDTH}-byte hash, got {len(data)} bytes")
    return data


__all__ = [
    "HASH_WIDTH",
    "ADDRESS_WIDTH",
    "keccak256",
    "normalize_address",
    "encode_address",
    "leaf_hash",
    "hash_pair",
    "to_hex",
    "from_hex",
    "parse_hash",
]
