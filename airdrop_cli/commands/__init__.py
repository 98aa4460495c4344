"""
CLI command modules.
"""

from airdrop_cli.commands import ledger, whitelist

__all__ = ["ledger", "whitelist"]
