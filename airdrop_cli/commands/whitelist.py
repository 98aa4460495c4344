"""
CLI Whitelist Commands (off-line)

Build a whitelist commitment, look up a member's proof, and check a proof
without touching any ledger.

Usage:
    airdrop build whitelist.json --out snapshot.json
    airdrop prove snapshot.json 0xabc...
    airdrop verify 0xabc... --root 0x... --proof 0x... 0x...
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from airdrop.crypto.hashing import normalize_address, parse_hash, to_hex
from airdrop.merkle import (
    MerkleTreeBuilder,
    MerkleVerifier,
    WhitelistIOError,
    is_snapshot_file,
    load_snapshot,
    load_whitelist,
    save_snapshot,
)
from airdrop.schemas.errors import AirdropException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_REJECTED = 2


@dataclass
class BuildSummary:
    """Summary of a whitelist build for CLI output."""
    source: str = ""
    root: str = ""
    entries: int = 0
    leaf_count: int = 0
    depth: int = 0
    saved_to: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["saved_to"]:
            del d["saved_to"]
        return d


@dataclass
class ProofSummary:
    """A single member's proof for CLI output."""
    address: str = ""
    root: str = ""
    proof: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def report_rejection(error: AirdropException, output_json: bool) -> int:
    """Print a rejection and return the rejected exit code."""
    if output_json:
        print(json.dumps(error.to_error_model().model_dump(), indent=2))
    else:
        print(f"rejected: {error.code}: {error.message}", file=sys.stderr)
    return EXIT_REJECTED


def build_cmd(args: Namespace) -> int:
    """Build the tree over a whitelist file and print its root."""
    source = Path(args.whitelist)
    try:
        entries = load_whitelist(source)
        tree = MerkleTreeBuilder.build_tree(entries)
    except WhitelistIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AirdropException as e:
        return report_rejection(e, args.json)

    snapshot = tree.to_snapshot()
    summary = BuildSummary(
        source=str(source),
        root=snapshot.root,
        entries=len(entries),
        leaf_count=snapshot.leaf_count,
        depth=snapshot.depth,
    )

    if args.out:
        summary.saved_to = str(save_snapshot(snapshot, args.out))
        logger.info(f"Snapshot saved to {summary.saved_to}")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"root: {summary.root}")
        print(f"leaves: {summary.leaf_count} ({summary.entries} entries)")
        print(f"depth: {summary.depth}")
        if summary.saved_to:
            print(f"saved: {summary.saved_to}")
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Print the proof for one address from a snapshot or a raw whitelist."""
    source = Path(args.source)
    try:
        if is_snapshot_file(source):
            snapshot = load_snapshot(source)
            address = normalize_address(args.address)
            summary = ProofSummary(address=address, root=snapshot.root, proof=snapshot.proof_for(address))
        else:
            tree = MerkleTreeBuilder.build_tree(load_whitelist(source))
            address = normalize_address(args.address)
            summary = ProofSummary(
                address=address,
                root=to_hex(tree.root),
                proof=[to_hex(h) for h in tree.proof_for(address)],
            )
    except WhitelistIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AirdropException as e:
        return report_rejection(e, args.json)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"address: {summary.address}")
        print(f"root: {summary.root}")
        print(f"proof ({len(summary.proof)}):")
        for h in summary.proof:
            print(f"  {h}")
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """Check a proof against a root without any claim state."""
    try:
        root = parse_hash(args.root)
        proof = [parse_hash(h) for h in (args.proof or [])]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    ok = MerkleVerifier.verify(args.address, proof, root)

    if args.json:
        print(json.dumps({"address": args.address, "root": args.root, "ok": ok}, indent=2))
    else:
        print(f"ok: {str(ok).lower()}")

    if ok:
        logger.info("Proof verified")
        return EXIT_SUCCESS
    logger.warning("Proof verification failed")
    return EXIT_REJECTED
