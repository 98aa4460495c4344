"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "airdrop-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Current whitelist commitment."""

    ok: bool = True
    root: str = Field(..., description="Current root as 0x-hex")
    owner: str = Field(..., description="Address allowed to rotate the root")


class OwnerResponse(BaseModel):
    """Response for PUT /owner."""

    ok: bool = True
    owner: str


class ClaimResponse(BaseModel):
    """Response for an accepted POST /claim."""

    ok: bool = True
    address: str = Field(..., description="Checksummed claiming address")
    amount: int = Field(..., description="Base units issued")
    root: str = Field(..., description="Root the proof was checked against")
    balance: int = Field(..., description="Balance after the claim")


class ClaimStatusResponse(BaseModel):
    """Response for GET /claims/{address}."""

    ok: bool = True
    address: str
    claimed: bool
    balance: int = 0


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
