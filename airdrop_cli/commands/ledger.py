"""
CLI Ledger Commands

Drive a WhitelistMintLedger persisted in a JSON state file.

Usage:
    airdrop init --owner 0xOwner --root 0xRoot
    airdrop claim 0xCaller --snapshot snapshot.json
    airdrop claim 0xCaller --proof 0x... 0x...
    airdrop set-root 0xNewRoot --caller 0xOwner
    airdrop transfer-owner 0xNewOwner --caller 0xOwner
    airdrop status [0xAddress]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from airdrop.crypto.hashing import normalize_address, to_hex
from airdrop.ledger import (
    TokenSupply,
    WhitelistMintLedger,
    from_base_units,
    ledger_lock,
    load_ledger,
    locked_ledger,
    save_ledger,
)
from airdrop.merkle import WhitelistIOError, load_snapshot
from airdrop.schemas.errors import AirdropException, LedgerStateError

from airdrop_cli.commands.whitelist import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    report_rejection,
)
from airdrop_cli.config import CLIConfig


logger = logging.getLogger(__name__)


def _state_path(args: Namespace) -> Path:
    if getattr(args, "state", None):
        return Path(args.state)
    config: CLIConfig = args.cli_config
    return Path(config.state_path)


def _load(args: Namespace) -> WhitelistMintLedger | None:
    try:
        return load_ledger(_state_path(args))
    except LedgerStateError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return None


def init_cmd(args: Namespace) -> int:
    """Create a new ledger state file from an owner and a root."""
    config: CLIConfig = args.cli_config
    path = _state_path(args)

    owner = args.owner or config.runtime.ledger.owner
    if not owner:
        print("Error: --owner is required (or set AIRDROP_OWNER)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    token_cfg = config.runtime.token
    try:
        token = TokenSupply(
            name=token_cfg.name,
            symbol=token_cfg.symbol,
            decimals=token_cfg.decimals,
            max_supply=token_cfg.max_supply_base_units,
        )
        ledger = WhitelistMintLedger.create(
            owner,
            args.root,
            claim_amount=token_cfg.claim_amount_base_units,
            token=token,
        )
    except AirdropException as e:
        return report_rejection(e, args.json)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    with ledger_lock(path):
        if path.exists() and not args.force:
            print(f"Error: Ledger state already exists: {path} (use --force to overwrite)", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        save_ledger(ledger, path)
    logger.info(f"Ledger state written to {path}")
    if args.json:
        print(json.dumps({"state_path": str(path), "owner": ledger.owner, "root": to_hex(ledger.get_root())}, indent=2))
    else:
        print(f"initialized: {path}")
        print(f"owner: {ledger.owner}")
        print(f"root: {to_hex(ledger.get_root())}")
    return EXIT_SUCCESS


def claim_cmd(args: Namespace) -> int:
    """Verify a proof for the caller and record the claim."""
    try:
        if args.snapshot:
            proof: list[str] = load_snapshot(args.snapshot).proof_for(args.address)
        else:
            proof = list(args.proof or [])
        with locked_ledger(_state_path(args)) as ledger:
            authorization = ledger.verify_and_claim(args.address, proof)
            token = ledger.token
    except LedgerStateError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except WhitelistIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AirdropException as e:
        return report_rejection(e, args.json)

    if args.json:
        print(json.dumps(authorization.model_dump(), indent=2))
    else:
        amount = from_base_units(authorization.amount, token.decimals)
        print(f"claimed: {authorization.address}")
        print(f"amount: {amount.normalize():f} {token.symbol}")
    return EXIT_SUCCESS


def set_root_cmd(args: Namespace) -> int:
    """Rotate the whitelist root (owner only)."""
    try:
        with locked_ledger(_state_path(args)) as ledger:
            ledger.set_root(args.caller, args.root)
            root = to_hex(ledger.get_root())
    except LedgerStateError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AirdropException as e:
        return report_rejection(e, args.json)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(json.dumps({"root": root}, indent=2) if args.json else f"root: {root}")
    return EXIT_SUCCESS


def transfer_owner_cmd(args: Namespace) -> int:
    """Hand the owner role to a new address (owner only)."""
    try:
        with locked_ledger(_state_path(args)) as ledger:
            ledger.transfer_ownership(args.caller, args.new_owner)
            owner = ledger.owner
    except LedgerStateError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AirdropException as e:
        return report_rejection(e, args.json)

    print(json.dumps({"owner": owner}, indent=2) if args.json else f"owner: {owner}")
    return EXIT_SUCCESS


def status_cmd(args: Namespace) -> int:
    """Show the ledger root, owner and claims, or one address's status."""
    ledger = _load(args)
    if ledger is None:
        return EXIT_RUNTIME_ERROR

    status: dict = {
        "root": to_hex(ledger.get_root()),
        "owner": ledger.owner,
        "claimed_count": ledger.claimed_count,
        "total_supply": ledger.token.total_supply,
    }

    if args.address:
        try:
            address = normalize_address(args.address)
        except AirdropException as e:
            return report_rejection(e, args.json)
        status["address"] = address
        status["claimed"] = ledger.is_claimed(address)
        status["balance"] = ledger.token.balance_of(address)

    if args.json:
        print(json.dumps(status, indent=2))
    else:
        for key, value in status.items():
            if isinstance(value, bool):
                value = str(value).lower()
            print(f"{key}: {value}")
    return EXIT_SUCCESS


__all__ = [
    "init_cmd",
    "claim_cmd",
    "set_root_cmd",
    "transfer_owner_cmd",
    "status_cmd",
]
