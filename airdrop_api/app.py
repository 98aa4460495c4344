"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn airdrop_api.app:app --reload

    # Or run directly
    python -m airdrop_api.app
"""

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from airdrop.schemas.errors import AirdropException
from airdrop_api import __version__
from airdrop_api.routes import health, whitelist, claims
from airdrop_api.errors import (
    APIError,
    airdrop_error_handler,
    api_error_handler,
    generic_error_handler,
)


def _resolve_log_level() -> int:
    """Resolve log level from AIRDROP_LOG_LEVEL or airdrop.json, defaulting to INFO."""
    raw = os.getenv("AIRDROP_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "airdrop.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError, AttributeError):
                raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="KITA Airdrop API",
        description="""
HTTP API for the KITA whitelist airdrop.

## Endpoints

- **GET /root** - Current whitelist root and owner
- **PUT /root** - Rotate the root (owner only)
- **PUT /owner** - Transfer ownership (owner only)
- **POST /claim** - Submit a membership proof and claim the allocation
- **GET /claims/{address}** - Claim status and balance
- **GET /health** - Health check

## Caller Identity

Mutating endpoints act as the address in the `X-Caller-Address` header.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AirdropException, airdrop_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(whitelist.router)
    app.include_router(claims.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
