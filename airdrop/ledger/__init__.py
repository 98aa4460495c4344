"""
Module 03 - Claim Ledger

This module provides:
- WhitelistMintLedger: root + one-time claim record + owner
- TokenSupply: fixed-supply balance book credited by successful claims
- save_ledger / load_ledger: canonical JSON persistence
- locked_ledger: locked read-modify-write shared by the CLI and the API
"""
from .token import (
    DEFAULT_DECIMALS,
    TokenSupply,
    from_base_units,
    to_base_units,
)

from .whitelist_ledger import (
    DEFAULT_CLAIM_AMOUNT,
    MAX_PROOF_LENGTH,
    WhitelistMintLedger,
    coerce_proof,
    coerce_root,
)

from .store import (
    LedgerState,
    TokenState,
    ledger_lock,
    load_ledger,
    lock_path_for,
    locked_ledger,
    save_ledger,
)


__all__ = [
    "DEFAULT_DECIMALS",
    "TokenSupply",
    "from_base_units",
    "to_base_units",
    "DEFAULT_CLAIM_AMOUNT",
    "MAX_PROOF_LENGTH",
    "WhitelistMintLedger",
    "coerce_proof",
    "coerce_root",
    "LedgerState",
    "TokenState",
    "ledger_lock",
    "load_ledger",
    "lock_path_for",
    "locked_ledger",
    "save_ledger",
]
