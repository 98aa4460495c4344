"""
Runtime Configuration Module

Provides configuration loading and management for the airdrop.
"""

from .runtime import (
    LedgerConfig,
    LoggingConfig,
    RuntimeConfig,
    TokenConfig,
)

__all__ = [
    "LedgerConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "TokenConfig",
]
