"""
Whitelist and Snapshot IO

Read eligible-address lists from disk and save/load WhitelistSnapshot
files produced by the builder.

Accepted whitelist formats:
- JSON: a list of addresses, or a list of single-element rows
  (e.g. [["0xabc..."], ["0xdef..."]])
- Text/CSV: one address per line; only the first comma-separated column
  is used. Blank lines and lines starting with '#' are ignored, as is a
  header row whose first column is "address".
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from airdrop.schemas.canonical import dumps_canonical
from airdrop.schemas.whitelist import WhitelistSnapshot


logger = logging.getLogger(__name__)


class WhitelistIOError(Exception):
    """Error reading a whitelist or snapshot file."""
    pass


def _addresses_from_json(data: Any, path: Path) -> list[str]:
    if isinstance(data, dict) and "addresses" in data:
        data = data["addresses"]
    if not isinstance(data, list):
        raise WhitelistIOError(f"{path}: expected a JSON list of addresses")

    addresses: list[str] = []
    for i, row in enumerate(data):
        if isinstance(row, list) and len(row) == 1:
            row = row[0]
        if not isinstance(row, str):
            raise WhitelistIOError(f"{path}: entry {i} is not an address string")
        addresses.append(row)
    return addresses


def _addresses_from_text(text: str) -> list[str]:
    addresses: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        first = line.split(",")[0].strip().strip('"')
        if first.lower() == "address":
            continue
        addresses.append(first)
    return addresses


def load_whitelist(path: str | Path) -> list[str]:
    """
    Read the raw address entries of a whitelist file.

    Entries are returned as written; canonicalization and de-duplication
    happen in MerkleTreeBuilder.

    Raises:
        WhitelistIOError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise WhitelistIOError(f"Whitelist file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise WhitelistIOError(f"{path}: invalid JSON: {e}") from e
        addresses = _addresses_from_json(data, path)
    else:
        addresses = _addresses_from_text(text)

    logger.info(f"Loaded {len(addresses)} whitelist entries from {path}")
    return addresses


def save_snapshot(snapshot: WhitelistSnapshot, path: str | Path) -> Path:
    """Write a snapshot as key-sorted, indented JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_canonical(snapshot, indent=2) + "\n", encoding="utf-8")
    return path


def load_snapshot(path: str | Path) -> WhitelistSnapshot:
    """
    Read a snapshot file written by save_snapshot.

    Raises:
        WhitelistIOError: If the file is missing or invalid
    """
    path = Path(path)
    if not path.exists():
        raise WhitelistIOError(f"Snapshot file not found: {path}")
    try:
        return WhitelistSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise WhitelistIOError(f"{path}: invalid snapshot: {e}") from e


def is_snapshot_file(path: str | Path) -> bool:
    """True if ``path`` is a JSON object carrying a root and proofs."""
    path = Path(path)
    if path.suffix.lower() != ".json" or not path.exists():
        return False
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return False
    return isinstance(data, dict) and "root" in data and "proofs" in data
