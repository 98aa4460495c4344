"""
Ledger State Persistence

Save and load a WhitelistMintLedger to/from a canonical JSON file so the
CLI and the HTTP service can share one ledger across processes.

Writes are atomic: content goes to a temp file in the target directory,
then replaces the old file with os.replace.

Every read-modify-write goes through locked_ledger, which holds an
exclusive flock on a sidecar "<state>.lock" file while it loads the
current state, applies the change and saves it. A mutation that raises
(including a failed save) leaves the file as it was.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from airdrop.crypto.hashing import to_hex
from airdrop.ledger.token import DEFAULT_DECIMALS, TokenSupply
from airdrop.ledger.whitelist_ledger import WhitelistMintLedger
from airdrop.schemas.canonical import dumps_canonical
from airdrop.schemas.errors import AirdropException, LedgerStateError


logger = logging.getLogger(__name__)

STATE_FORMAT_VERSION = "1"


class TokenState(BaseModel):
    """Persisted token metadata and balances."""

    model_config = ConfigDict(extra="forbid")

    name: str
    symbol: str
    decimals: int = Field(default=DEFAULT_DECIMALS, ge=0)
    max_supply: int | None = Field(default=None, ge=0)
    balances: dict[str, int] = Field(default_factory=dict)


class LedgerState(BaseModel):
    """Persisted form of a WhitelistMintLedger."""

    model_config = ConfigDict(extra="forbid")

    format_version: str = STATE_FORMAT_VERSION
    owner: str
    root: str = Field(..., pattern=r"^0x[0-9a-fA-F]{64}$")
    claim_amount: int = Field(..., ge=0)
    claimed: list[str] = Field(default_factory=list)
    token: TokenState

    @classmethod
    def from_ledger(cls, ledger: WhitelistMintLedger) -> "LedgerState":
        return cls(
            owner=ledger.owner,
            root=to_hex(ledger.get_root()),
            claim_amount=ledger.claim_amount,
            claimed=ledger.claimed_addresses(),
            token=TokenState(
                name=ledger.token.name,
                symbol=ledger.token.symbol,
                decimals=ledger.token.decimals,
                max_supply=ledger.token.max_supply,
                balances=ledger.token.balances(),
            ),
        )

    def to_ledger(self) -> WhitelistMintLedger:
        token = TokenSupply(
            name=self.token.name,
            symbol=self.token.symbol,
            decimals=self.token.decimals,
            max_supply=self.token.max_supply,
        )
        token.restore(self.token.balances)
        ledger = WhitelistMintLedger(claim_amount=self.claim_amount, token=token)
        ledger._restore(self.owner, self.root, self.claimed)
        return ledger


def save_ledger(ledger: WhitelistMintLedger, path: str | Path) -> Path:
    """
    Write the ledger state to ``path`` atomically.

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = dumps_canonical(LedgerState.from_ledger(ledger), indent=2) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=".ledger-", suffix=".json", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug(f"Saved ledger state to {path}")
    return path


def load_ledger(path: str | Path) -> WhitelistMintLedger:
    """
    Read a ledger state file.

    Raises:
        LedgerStateError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise LedgerStateError(f"Ledger state file not found: {path}", details={"path": str(path)})

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = LedgerState.model_validate(data)
        ledger = state.to_ledger()
    except (json.JSONDecodeError, ValidationError, ValueError, AirdropException) as e:
        raise LedgerStateError(
            f"Invalid ledger state file {path}: {e}",
            details={"path": str(path)},
        ) from e

    logger.debug(f"Loaded ledger state from {path}")
    return ledger


def lock_path_for(path: str | Path) -> Path:
    """Sidecar lock file guarding a ledger state file."""
    path = Path(path)
    return path.with_name(path.name + ".lock")


@contextmanager
def ledger_lock(path: str | Path) -> Iterator[Path]:
    """
    Hold an exclusive lock on the state file at ``path``.

    The lock is an flock on the sidecar lock file, so it serializes writers
    across processes (CLI and API) as well as threads with their own handle.
    """
    path = Path(path)
    lock_file = lock_path_for(path)
    lock_file.parent.mkdir(parents=True, exist_ok=True)

    with open(lock_file, "a") as lock_fd:
        fcntl.flock(lock_fd.fileno(), fcntl.LOCK_EX)
        logger.debug(f"Acquired ledger lock {lock_file}")
        try:
            yield path
        finally:
            fcntl.flock(lock_fd.fileno(), fcntl.LOCK_UN)
            logger.debug(f"Released ledger lock {lock_file}")


@contextmanager
def locked_ledger(path: str | Path) -> Iterator[WhitelistMintLedger]:
    """
    Load, mutate and save the ledger at ``path`` under its lock.

    The ledger is always re-read inside the lock, so a change made by
    another process since the last read is never overwritten. The state
    is saved only when the block exits normally; if the block or the save
    raises, the file keeps its previous content.

    Raises:
        LedgerStateError: If the state file is missing or invalid
    """
    with ledger_lock(path):
        ledger = load_ledger(path)
        yield ledger
        save_ledger(ledger, path)
