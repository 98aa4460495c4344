"""
API Dependencies

Dependency injection for the API.
Provides the process-wide claim ledger and the acting caller.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, Optional

from fastapi import Header

from airdrop.config.runtime import RuntimeConfig
from airdrop.ledger import (
    WhitelistMintLedger,
    ledger_lock,
    load_ledger,
    locked_ledger,
    save_ledger,
)
from airdrop_api.errors import MissingCallerError

logger = logging.getLogger(__name__)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./airdrop.json
      2. ./.airdrop.json
      3. ~/.config/airdrop/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by airdrop.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "airdrop.json",
        Path.cwd() / ".airdrop.json",
        Path.home() / ".config" / "airdrop" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                logger.info(f"Loaded config from {path}")
                config = RuntimeConfig.from_dict(data)
                break
            except (OSError, TypeError, ValueError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


class LedgerProvider:
    """
    Resolves the ledger the app serves.

    With a state file (the normal case) nothing is cached: reads load the
    file, and mutations run inside locked_ledger so the CLI and other
    workers sharing the file are never overwritten. A ledger installed
    without a state path is served from memory.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ledger: Optional[WhitelistMintLedger] = None
        self._state_path: Optional[Path] = None
        self._configured = False

    def _resolve(self) -> tuple[Optional[WhitelistMintLedger], Optional[Path]]:
        with self._lock:
            if not self._configured:
                config = _load_runtime_config()
                self._state_path = Path(config.ledger.state_path)
                self._configured = True
                logger.info(f"Serving ledger from {self._state_path}")
            return self._ledger, self._state_path

    def get(self) -> WhitelistMintLedger:
        ledger, state_path = self._resolve()
        if state_path is None:
            return ledger
        return load_ledger(state_path)

    @contextmanager
    def mutate(self) -> Iterator[WhitelistMintLedger]:
        ledger, state_path = self._resolve()
        if state_path is None:
            yield ledger
            return
        with locked_ledger(state_path) as current:
            yield current

    def set(self, ledger: Optional[WhitelistMintLedger], state_path: str | Path | None = None) -> None:
        with self._lock:
            if ledger is None:
                self._ledger = None
                self._state_path = None
                self._configured = False
                return
            if state_path is not None:
                with ledger_lock(state_path):
                    save_ledger(ledger, state_path)
                self._ledger = None
                self._state_path = Path(state_path)
            else:
                self._ledger = ledger
                self._state_path = None
            self._configured = True


_provider = LedgerProvider()


def get_ledger() -> WhitelistMintLedger:
    """FastAPI dependency returning the current ledger state for reads."""
    return _provider.get()


def mutate_ledger() -> ContextManager[WhitelistMintLedger]:
    """Context manager yielding the ledger for one locked, persisted change."""
    return _provider.mutate()


def set_ledger(ledger: Optional[WhitelistMintLedger], state_path: str | Path | None = None) -> None:
    """
    Install (or with None, reset) the served ledger.

    With a state_path the ledger is written there and served from the file.
    """
    _provider.set(ledger, state_path)


def get_caller(x_caller_address: Optional[str] = Header(default=None)) -> str:
    """FastAPI dependency returning the acting address."""
    if not x_caller_address:
        raise MissingCallerError()
    return x_caller_address
