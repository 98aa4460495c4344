"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field


class ClaimRequest(BaseModel):
    """Request body for POST /claim."""

    proof: list[str] = Field(
        default_factory=list,
        description="Sibling hashes as 0x-hex, ordered leaf to root",
    )


class SetRootRequest(BaseModel):
    """Request body for PUT /root."""

    root: str = Field(..., description="New 32-byte root as 0x-hex")


class TransferOwnerRequest(BaseModel):
    """Request body for PUT /owner."""

    owner: str = Field(..., description="Address of the new owner")
