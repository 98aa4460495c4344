"""
CLI Configuration

Configuration management for the airdrop CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from airdrop.config.runtime import ENV_PREFIX, RuntimeConfig


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Token and ledger settings
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    @property
    def state_path(self) -> str:
        """Ledger state file shared by the CLI and the API (ledger.state_path)."""
        return self.runtime.ledger.state_path


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data: dict[str, Any] = json.load(f)

    config = CLIConfig()
    config.runtime = RuntimeConfig.from_dict(data)
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "airdrop.json",
            Path.cwd() / ".airdrop.json",
            Path.home() / ".config" / "airdrop" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config.runtime = config.runtime.with_env_overrides()

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = config.runtime.logging.level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = config.runtime.logging.file

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "log_level": "WARNING",
  "log_file": null,
  "token": {
    "name": "KITA Is ERC20",
    "symbol": "KITA",
    "decimals": 18,
    "claim_amount": "2",
    "max_supply": null
  },
  "ledger": {
    "state_path": "airdrop_state.json",
    "owner": null
  }
}
"""
