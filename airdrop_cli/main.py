"""
Airdrop CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    airdrop build <whitelist> [--out PATH] [--json]
    airdrop prove <snapshot|whitelist> <address> [--json]
    airdrop verify <address> --root HASH [--proof HASH ...] [--json]
    airdrop init --owner ADDRESS --root HASH [--force]
    airdrop claim <address> (--snapshot PATH | --proof HASH ...)
    airdrop set-root <root> --caller ADDRESS
    airdrop transfer-owner <new_owner> --caller ADDRESS
    airdrop status [address]
    airdrop config --init

Environment Variables:
    AIRDROP_STATE_PATH          Ledger state file (default: airdrop_state.json)
    AIRDROP_OWNER               Owner used by `init` when --owner is omitted
    AIRDROP_CLAIM_AMOUNT        Whole tokens issued per claim (default: 2)
    AIRDROP_MAX_SUPPLY          Optional whole-token supply cap
    AIRDROP_LOG_LEVEL           Log level (default: WARNING)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop_cli import __version__
from airdrop_cli.commands import ledger, whitelist
from airdrop_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_REJECTED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Whitelist airdrop CLI - Commit to a whitelist, hand out proofs, and record claims.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./airdrop.json or ~/.config/airdrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--state",
        type=str,
        default=None,
        help="Ledger state file (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build the Merkle root over a whitelist file",
        description="Canonicalize a whitelist, build the tree and optionally save a proof snapshot.",
    )
    build_parser.add_argument(
        "whitelist",
        type=str,
        help="Whitelist file (.json list or one address per line)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write a snapshot with the root and every member's proof",
    )
    _add_json_flag(build_parser)
    build_parser.set_defaults(func=whitelist.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Print the membership proof for one address",
    )
    prove_parser.add_argument(
        "source",
        type=str,
        help="Snapshot written by `build --out`, or a raw whitelist file",
    )
    prove_parser.add_argument("address", type=str, help="Member address")
    _add_json_flag(prove_parser)
    prove_parser.set_defaults(func=whitelist.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a proof against a root (no claim state)",
    )
    verify_parser.add_argument("address", type=str, help="Claimed member address")
    verify_parser.add_argument("--root", type=str, required=True, help="32-byte root as 0x-hex")
    verify_parser.add_argument("--proof", type=str, nargs="*", default=[], help="Sibling hashes, leaf to root")
    _add_json_flag(verify_parser)
    verify_parser.set_defaults(func=whitelist.verify_cmd)

    # --- init command ---
    init_parser = subparsers.add_parser(
        "init",
        help="Create a ledger state file",
    )
    init_parser.add_argument("--owner", type=str, default=None, help="Owner address (default: AIRDROP_OWNER)")
    init_parser.add_argument("--root", type=str, required=True, help="Initial 32-byte root as 0x-hex")
    init_parser.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite an existing state file",
    )
    _add_json_flag(init_parser)
    init_parser.set_defaults(func=ledger.init_cmd)

    # --- claim command ---
    claim_parser = subparsers.add_parser(
        "claim",
        help="Verify a proof and record the claim",
    )
    claim_parser.add_argument("address", type=str, help="Claiming address")
    proof_group = claim_parser.add_mutually_exclusive_group(required=True)
    proof_group.add_argument("--snapshot", type=str, help="Take the proof from a snapshot file")
    proof_group.add_argument("--proof", type=str, nargs="*", help="Sibling hashes, leaf to root")
    _add_json_flag(claim_parser)
    claim_parser.set_defaults(func=ledger.claim_cmd)

    # --- set-root command ---
    set_root_parser = subparsers.add_parser(
        "set-root",
        help="Rotate the whitelist root (owner only)",
    )
    set_root_parser.add_argument("root", type=str, help="New 32-byte root as 0x-hex")
    set_root_parser.add_argument("--caller", type=str, required=True, help="Acting address")
    _add_json_flag(set_root_parser)
    set_root_parser.set_defaults(func=ledger.set_root_cmd)

    # --- transfer-owner command ---
    transfer_parser = subparsers.add_parser(
        "transfer-owner",
        help="Hand the owner role to another address (owner only)",
    )
    transfer_parser.add_argument("new_owner", type=str, help="New owner address")
    transfer_parser.add_argument("--caller", type=str, required=True, help="Acting address")
    _add_json_flag(transfer_parser)
    transfer_parser.set_defaults(func=ledger.transfer_owner_cmd)

    # --- status command ---
    status_parser = subparsers.add_parser(
        "status",
        help="Show the ledger state, or one address's claim status",
    )
    status_parser.add_argument("address", type=str, nargs="?", default=None, help="Address to look up")
    _add_json_flag(status_parser)
    status_parser.set_defaults(func=ledger.status_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="airdrop.json",
        help="Path for config file (default: airdrop.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "state_path": args.state or config.state_path,
            "log_level": config.log_level,
            "log_file": config.log_file,
            "token": config.runtime.to_dict()["token"],
            "ledger": {"owner": config.runtime.ledger.owner or "(not configured)"},
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: airdrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=claim or proof rejected)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, TypeError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
