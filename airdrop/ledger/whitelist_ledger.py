"""
Module 03 - Whitelist Mint Ledger
On-line verification of membership proofs and the one-time claim record.

State:
- Root: current whitelist commitment (32 bytes)
- ClaimRecord: append-only set of addresses that have claimed
- Owner: the single identity allowed to rotate Root

Ledger Rules (Hard Contracts):
1. Claimed state is keyed by address only, never by (address, root).
   Rotating Root never removes a claim and never reopens one.
2. The already-claimed check runs before any hashing.
3. Malformed proofs are verification failures (NotWhitelistedError),
   never internal errors.
4. Every mutating operation runs under one lock: a transition either
   completes or leaves no trace.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Sequence

from airdrop.crypto.hashing import (
    HASH_WIDTH,
    leaf_hash,
    normalize_address,
    parse_hash,
    to_hex,
)
from airdrop.ledger.token import TokenSupply, to_base_units
from airdrop.merkle.merkle_tree import Proof, process_proof
from airdrop.schemas.errors import (
    AlreadyClaimedError,
    InvalidAddressError,
    LedgerStateError,
    NotWhitelistedError,
    SupplyExhaustedError,
    UnauthorizedError,
)
from airdrop.schemas.whitelist import IssuanceAuthorization


logger = logging.getLogger(__name__)

# Upper bound on caller-supplied proof length (a tree this deep holds 2**256 leaves)
MAX_PROOF_LENGTH = 256

DEFAULT_CLAIM_AMOUNT = to_base_units("2")


def coerce_root(root: bytes | str) -> bytes:
    """
    Accept a root as raw bytes or 0x-hex and return the 32 raw bytes.

    Raises:
        ValueError: If the value is not a 32-byte hash
    """
    if isinstance(root, (bytes, bytearray)):
        if len(root) != HASH_WIDTH:
            raise ValueError(f"Root must be {HASH_WIDTH} bytes, got {len(root)}")
        return bytes(root)
    if isinstance(root, str):
        return parse_hash(root.strip())
    raise ValueError(f"Root must be bytes or hex string, got {type(root).__name__}")


def coerce_proof(proof: Any) -> Proof:
    """
    Validate a caller-supplied proof and return it as a list of 32-byte hashes.

    Elements may be raw bytes or 0x-hex strings. Anything else, any element
    of the wrong width, or an over-long proof is rejected.

    Raises:
        NotWhitelistedError: If the proof is malformed
    """
    if isinstance(proof, (str, bytes, bytearray)) or not isinstance(proof, Sequence):
        raise NotWhitelistedError(reason="proof must be a sequence of hashes")

    if len(proof) > MAX_PROOF_LENGTH:
        raise NotWhitelistedError(reason=f"proof longer than {MAX_PROOF_LENGTH} elements")

    siblings: Proof = []
    for element in proof:
        try:
            siblings.append(coerce_root(element))
        except ValueError:
            raise NotWhitelistedError(reason="proof element is not a 32-byte hash") from None
    return siblings


class WhitelistMintLedger:
    """
    The claim ledger: one instance per deployment, passed explicitly.

    Usage:
        ledger = WhitelistMintLedger()
        ledger.initialize(owner, root)
        authorization = ledger.verify_and_claim(caller, proof)
        ledger.set_root(owner, new_root)
    """

    def __init__(
        self,
        claim_amount: int = DEFAULT_CLAIM_AMOUNT,
        token: TokenSupply | None = None,
    ) -> None:
        if claim_amount < 0:
            raise ValueError("claim_amount must be non-negative")
        self.claim_amount = claim_amount
        self.token = token if token is not None else TokenSupply()
        self._lock = threading.Lock()
        self._owner: str | None = None
        self._root: bytes | None = None
        self._claimed: set[str] = set()

    @classmethod
    def create(
        cls,
        owner: str,
        root: bytes | str,
        claim_amount: int = DEFAULT_CLAIM_AMOUNT,
        token: TokenSupply | None = None,
    ) -> "WhitelistMintLedger":
        """Construct and initialize in one step."""
        ledger = cls(claim_amount=claim_amount, token=token)
        ledger.initialize(owner, root)
        return ledger

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._root is not None

    def initialize(self, owner: str, root: bytes | str) -> None:
        """
        Set Owner and Root. Allowed exactly once.

        Raises:
            LedgerStateError: If already initialized
            InvalidAddressError: If owner is not a valid address
            ValueError: If root is not a 32-byte hash
        """
        owner_key = normalize_address(owner)
        root_bytes = coerce_root(root)
        with self._lock:
            if self._root is not None:
                raise LedgerStateError("ledger is already initialized")
            self._owner = owner_key
            self._root = root_bytes
        logger.info(f"Ledger initialized: owner={owner_key} root={to_hex(root_bytes)}")

    def _require_initialized(self) -> None:
        if self._root is None:
            raise LedgerStateError("ledger is not initialized")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def owner(self) -> str:
        with self._lock:
            self._require_initialized()
            return self._owner

    def get_root(self) -> bytes:
        with self._lock:
            self._require_initialized()
            return self._root

    def is_claimed(self, address: str) -> bool:
        key = normalize_address(address)
        with self._lock:
            return key in self._claimed

    def claimed_addresses(self) -> list[str]:
        with self._lock:
            return sorted(self._claimed)

    @property
    def claimed_count(self) -> int:
        with self._lock:
            return len(self._claimed)

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    def verify_and_claim(self, caller: str, proof: Sequence[bytes | str]) -> IssuanceAuthorization:
        """
        Verify ``caller``'s proof against the current root and record the claim.

        Steps:
        1. Reject an already-claimed caller (before any hashing)
        2. Recompute the caller's leaf and fold the proof
        3. Reject if the candidate root differs from the current root
        4. Record the claim, credit the fixed amount, return the authorization

        Raises:
            InvalidAddressError: If caller is not a valid address
            AlreadyClaimedError: If caller has already claimed
            NotWhitelistedError: If the proof is malformed or does not fold to Root
            SupplyExhaustedError: If the fixed supply cannot cover the claim
            LedgerStateError: If the ledger is not initialized
        """
        caller_key = normalize_address(caller)

        with self._lock:
            self._require_initialized()

            if caller_key in self._claimed:
                logger.warning(f"Claim rejected for {caller_key}: already claimed")
                raise AlreadyClaimedError(address=caller_key)

            try:
                siblings = coerce_proof(proof)
            except NotWhitelistedError as e:
                e.details["address"] = caller_key
                logger.warning(f"Claim rejected for {caller_key}: malformed proof")
                raise

            candidate = process_proof(leaf_hash(caller_key), siblings)
            if candidate != self._root:
                logger.warning(f"Claim rejected for {caller_key}: proof does not match current root")
                raise NotWhitelistedError(address=caller_key)

            if not self.token.can_mint(self.claim_amount):
                logger.warning(f"Claim rejected for {caller_key}: supply exhausted")
                raise SupplyExhaustedError(
                    details={
                        "address": caller_key,
                        "requested": self.claim_amount,
                        "total_supply": self.token.total_supply,
                        "max_supply": self.token.max_supply,
                    },
                )

            self.token.mint(caller_key, self.claim_amount)
            self._claimed.add(caller_key)
            root_hex = to_hex(self._root)

        logger.info(f"Claim accepted for {caller_key}: {self.claim_amount} base units")
        return IssuanceAuthorization(address=caller_key, amount=self.claim_amount, root=root_hex)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def _require_owner(self, caller: str) -> str:
        try:
            caller_key = normalize_address(caller)
        except InvalidAddressError:
            raise UnauthorizedError(account=str(caller)) from None
        if caller_key != self._owner:
            raise UnauthorizedError(account=caller_key)
        return caller_key

    def set_root(self, caller: str, new_root: bytes | str) -> None:
        """
        Replace the current root (whitelist rotation). Owner only.

        The new root is trusted as given. Claims are untouched.

        Raises:
            UnauthorizedError: If caller is not the owner
            ValueError: If new_root is not a 32-byte hash
            LedgerStateError: If the ledger is not initialized
        """
        with self._lock:
            self._require_initialized()
            try:
                self._require_owner(caller)
            except UnauthorizedError:
                logger.warning(f"Root rotation rejected: {caller} is not the owner")
                raise
            root_bytes = coerce_root(new_root)
            previous = self._root
            self._root = root_bytes
        logger.info(f"Root rotated: {to_hex(previous)} -> {to_hex(root_bytes)}")

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """
        Hand the owner role to ``new_owner``. Owner only.

        Raises:
            UnauthorizedError: If caller is not the owner
            InvalidAddressError: If new_owner is not a valid address
        """
        with self._lock:
            self._require_initialized()
            try:
                previous = self._require_owner(caller)
            except UnauthorizedError:
                logger.warning(f"Ownership transfer rejected: {caller} is not the owner")
                raise
            new_owner_key = normalize_address(new_owner)
            self._owner = new_owner_key
        logger.info(f"Ownership transferred: {previous} -> {new_owner_key}")

    # ------------------------------------------------------------------
    # Persistence hooks
    # ------------------------------------------------------------------

    def _restore(self, owner: str, root: bytes, claimed: Sequence[str]) -> None:
        """Load persisted state into a fresh ledger (see airdrop.ledger.store)."""
        with self._lock:
            if self._root is not None:
                raise LedgerStateError("cannot restore into an initialized ledger")
            self._owner = normalize_address(owner)
            self._root = coerce_root(root)
            self._claimed = {normalize_address(addr) for addr in claimed}
