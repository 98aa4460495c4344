"""
Runtime Configuration

Central configuration for the token, the claim ledger and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from airdrop.ledger.token import DEFAULT_DECIMALS, to_base_units

load_dotenv()

ENV_PREFIX = "AIRDROP_"


@dataclass
class TokenConfig:
    """Configuration for the distributed token."""
    name: str = "KITA Is ERC20"
    symbol: str = "KITA"
    decimals: int = DEFAULT_DECIMALS
    # Whole tokens, converted with to_base_units
    claim_amount: str = "2"
    max_supply: Optional[str] = None

    @property
    def claim_amount_base_units(self) -> int:
        return to_base_units(self.claim_amount, self.decimals)

    @property
    def max_supply_base_units(self) -> Optional[int]:
        if self.max_supply is None:
            return None
        return to_base_units(self.max_supply, self.decimals)


@dataclass
class LedgerConfig:
    """Configuration for the claim ledger."""
    state_path: str = "airdrop_state.json"
    owner: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the airdrop.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    token: TokenConfig = field(default_factory=TokenConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - AIRDROP_TOKEN_NAME: Token name
        - AIRDROP_TOKEN_SYMBOL: Token symbol
        - AIRDROP_CLAIM_AMOUNT: Whole tokens issued per claim
        - AIRDROP_MAX_SUPPLY: Whole-token supply cap
        - AIRDROP_STATE_PATH: Ledger state file
        - AIRDROP_OWNER: Owner address used by `init` when none is given
        - AIRDROP_LOG_LEVEL: Log level
        - AIRDROP_LOG_FILE: Optional log file
        """
        overrides: dict[str, Any] = {}

        token_vars = {
            "TOKEN_NAME": "name",
            "TOKEN_SYMBOL": "symbol",
            "CLAIM_AMOUNT": "claim_amount",
            "MAX_SUPPLY": "max_supply",
        }
        for env_name, key in token_vars.items():
            value = os.getenv(f"{ENV_PREFIX}{env_name}")
            if value:
                overrides.setdefault("token", {})[key] = value

        if os.getenv(f"{ENV_PREFIX}STATE_PATH"):
            overrides.setdefault("ledger", {})["state_path"] = os.getenv(f"{ENV_PREFIX}STATE_PATH")
        if os.getenv(f"{ENV_PREFIX}OWNER"):
            overrides.setdefault("ledger", {})["owner"] = os.getenv(f"{ENV_PREFIX}OWNER")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        token_data = dict(data.get("token") or {})
        ledger_data = dict(data.get("ledger") or {})
        logging_data = data.get("logging") or {}

        # A top-level "state_path" is accepted when ledger.state_path is absent
        if data.get("state_path") and not ledger_data.get("state_path"):
            ledger_data["state_path"] = data["state_path"]

        # Amounts are kept as strings so Decimal parsing stays exact
        for key in ("claim_amount", "max_supply"):
            if token_data.get(key) is not None:
                token_data[key] = str(token_data[key])
        if "decimals" in token_data:
            token_data["decimals"] = int(token_data["decimals"])

        return cls(
            token=TokenConfig(**token_data) if token_data else TokenConfig(),
            ledger=LedgerConfig(**ledger_data) if ledger_data else LedgerConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section in ("token", "ledger", "logging"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "token": {
                "name": self.token.name,
                "symbol": self.token.symbol,
                "decimals": self.token.decimals,
                "claim_amount": self.token.claim_amount,
                "max_supply": self.token.max_supply,
            },
            "ledger": {
                "state_path": self.ledger.state_path,
                "owner": self.ledger.owner,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }

