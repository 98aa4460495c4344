"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

from .errors import (
    AirdropError,
    AirdropException,
    AlreadyClaimedError,
    CanonicalizationException,
    EmptySetError,
    ErrorCodes,
    InvalidAddressError,
    LedgerStateError,
    NotInSetError,
    NotWhitelistedError,
    SupplyExhaustedError,
    UnauthorizedError,
)

from .whitelist import (
    HASH_ALGORITHM,
    IssuanceAuthorization,
    WhitelistSnapshot,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "AirdropError",
    "AirdropException",
    "AlreadyClaimedError",
    "CanonicalizationException",
    "EmptySetError",
    "ErrorCodes",
    "InvalidAddressError",
    "LedgerStateError",
    "NotInSetError",
    "NotWhitelistedError",
    "SupplyExhaustedError",
    "UnauthorizedError",
    # Whitelist models
    "HASH_ALGORITHM",
    "IssuanceAuthorization",
    "WhitelistSnapshot",
]
