"""
Hashing Unit Tests
Tests for airdrop/crypto/hashing.py

Tests:
- keccak256 known value
- address canonicalization and ABI encoding
- leaf hashing is spelling-independent
- sorted-pair hashing is order-independent
- hex helpers
"""
import pytest

from airdrop.crypto.hashing import (
    ADDRESS_WIDTH,
    HASH_WIDTH,
    encode_address,
    from_hex,
    hash_pair,
    keccak256,
    leaf_hash,
    normalize_address,
    parse_hash,
    to_hex,
)
from airdrop.schemas.errors import ErrorCodes, InvalidAddressError
from fixtures.accounts import ALICE, BOB, OWNER


class TestKeccak256:
    """Tests for keccak256()."""

    def test_empty_bytes_known_value(self):
        """Keccak-256 of b"" is the well-known constant (not SHA3-256)."""
        expected = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        assert keccak256(b"").hex() == expected

    def test_width(self):
        assert len(keccak256(b"some data")) == HASH_WIDTH

    def test_deterministic(self):
        assert keccak256(b"abc") == keccak256(b"abc")
        assert keccak256(b"abc") != keccak256(b"abd")


class TestNormalizeAddress:
    """Tests for normalize_address()."""

    def test_checksum_is_unchanged(self):
        assert normalize_address(OWNER) == OWNER

    def test_lowercase_is_checksummed(self):
        assert normalize_address(OWNER.lower()) == OWNER

    def test_uppercase_hex_is_checksummed(self):
        assert normalize_address("0x" + OWNER[2:].upper()) == OWNER

    def test_missing_prefix_is_accepted(self):
        assert normalize_address(OWNER[2:]) == OWNER

    def test_whitespace_is_stripped(self):
        assert normalize_address(f"  {ALICE}\n") == ALICE

    @pytest.mark.parametrize("bad", [
        "",
        "0x",
        "0x1234",
        OWNER + "00",
        "0xZZ9Fd6e51aad88F6F4ce6aB8827279cffFb92266",
    ])
    def test_malformed_raises(self, bad):
        with pytest.raises(InvalidAddressError) as exc_info:
            normalize_address(bad)
        assert exc_info.value.code == ErrorCodes.INVALID_ADDRESS

    def test_non_string_raises(self):
        with pytest.raises(InvalidAddressError):
            normalize_address(1234)


class TestEncodeAddress:
    """Tests for the abi.encode(address) word."""

    def test_left_padded_word(self):
        word = encode_address(OWNER)

        assert len(word) == HASH_WIDTH
        assert word[:HASH_WIDTH - ADDRESS_WIDTH] == b"\x00" * 12
        assert word[12:] == bytes.fromhex(OWNER[2:].lower())


class TestLeafHash:
    """Tests for leaf_hash()."""

    def test_double_hash_of_encoded_address(self):
        expected = keccak256(keccak256(encode_address(ALICE)))
        assert leaf_hash(ALICE) == expected

    def test_spelling_independent(self):
        assert leaf_hash(ALICE) == leaf_hash(ALICE.lower())
        assert leaf_hash(ALICE) == leaf_hash(ALICE[2:])

    def test_distinct_addresses_distinct_leaves(self):
        assert leaf_hash(ALICE) != leaf_hash(BOB)

    def test_leaf_differs_from_single_hash(self):
        assert leaf_hash(ALICE) != keccak256(encode_address(ALICE))


class TestHashPair:
    """Tests for sorted-pair node hashing."""

    def test_order_independent(self):
        a = keccak256(b"a")
        b = keccak256(b"b")
        assert hash_pair(a, b) == hash_pair(b, a)

    def test_smaller_first(self):
        a = keccak256(b"a")
        b = keccak256(b"b")
        low, high = sorted([a, b])
        assert hash_pair(a, b) == keccak256(low + high)

    def test_equal_children(self):
        a = keccak256(b"a")
        assert hash_pair(a, a) == keccak256(a + a)


class TestHexHelpers:
    """Tests for to_hex/from_hex/parse_hash."""

    def test_to_hex(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")

    def test_parse_hash_accepts_32_bytes(self):
        h = keccak256(b"x")
        assert parse_hash(to_hex(h)) == h

    def test_parse_hash_rejects_other_widths(self):
        with pytest.raises(ValueError, match="32-byte"):
            parse_hash("0x" + "ab" * 31)
