"""
Core cryptographic utilities.

Module 02 provides hashing and address canonicalization.
"""
from .hashing import (
    ADDRESS_WIDTH,
    HASH_WIDTH,
    keccak256,
    normalize_address,
    encode_address,
    leaf_hash,
    hash_pair,
    to_hex,
    from_hex,
    parse_hash,
)

__all__ = [
    "ADDRESS_WIDTH",
    "HASH_WIDTH",
    "keccak256",
    "normalize_address",
    "encode_address",
    "leaf_hash",
    "hash_pair",
    "to_hex",
    "from_hex",
    "parse_hash",
]
