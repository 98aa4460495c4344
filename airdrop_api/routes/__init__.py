"""API route handlers."""

from airdrop_api.routes import health, whitelist, claims

__all__ = ["health", "whitelist", "claims"]
