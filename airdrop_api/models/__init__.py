"""API request and response models."""

from airdrop_api.models.requests import ClaimRequest, SetRootRequest, TransferOwnerRequest
from airdrop_api.models.responses import (
    HealthResponse,
    RootResponse,
    OwnerResponse,
    ClaimResponse,
    ClaimStatusResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "ClaimRequest",
    "SetRootRequest",
    "TransferOwnerRequest",
    "HealthResponse",
    "RootResponse",
    "OwnerResponse",
    "ClaimResponse",
    "ClaimStatusResponse",
    "ErrorDetail",
    "ErrorResponse",
]
