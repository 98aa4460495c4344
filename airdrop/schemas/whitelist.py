"""
Module 01 - Schemas
File: whitelist.py

Purpose: Wire and file models for whitelist snapshots and claim results.
Hashes cross these boundaries as 0x-prefixed lowercase hex strings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

HASH_ALGORITHM = "keccak256-sorted-pair"

_HEX_HASH_PATTERN = r"^0x[0-9a-fA-F]{64}$"


class WhitelistSnapshot(BaseModel):
    """
    Output of one off-line build: the root plus every member's proof.

    This is the artifact handed to the deployment collaborator (root) and
    to claimants (their proof).
    """

    model_config = ConfigDict(extra="forbid")

    root: str = Field(..., pattern=_HEX_HASH_PATTERN, description="Merkle root commitment")
    hash_algorithm: str = Field(default=HASH_ALGORITHM)
    leaf_count: int = Field(..., ge=1)
    depth: int = Field(..., ge=0, description="Number of hashing levels above the leaves")
    addresses: list[str] = Field(..., min_length=1, description="Checksummed members, sorted by leaf")
    proofs: dict[str, list[str]] = Field(
        ...,
        description="Checksummed address -> sibling hashes, leaf level first",
    )

    @field_validator("root")
    @classmethod
    def _lower_root(cls, v: str) -> str:
        return v.lower()

    def proof_for(self, address: str) -> list[str]:
        """Look up a member's proof. Raises NotInSetError when absent."""
        from airdrop.crypto.hashing import normalize_address
        from airdrop.schemas.errors import NotInSetError

        key = normalize_address(address)
        if key not in self.proofs:
            raise NotInSetError(address=key)
        return list(self.proofs[key])


class IssuanceAuthorization(BaseModel):
    """
    Result of a successful claim: the issuance the ledger authorized.

    ``amount`` is in token base units (10**decimals per whole token).
    """

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Checksummed claimant")
    amount: int = Field(..., ge=0)
    root: str = Field(..., pattern=_HEX_HASH_PATTERN, description="Root the claim validated against")
