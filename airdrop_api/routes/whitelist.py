"""
Whitelist Routes

Read the current root and perform owner-only administration.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from airdrop.crypto.hashing import to_hex
from airdrop.ledger import WhitelistMintLedger
from airdrop_api.deps import get_caller, get_ledger, mutate_ledger
from airdrop_api.errors import InvalidRequestError
from airdrop_api.models.requests import SetRootRequest, TransferOwnerRequest
from airdrop_api.models.responses import OwnerResponse, RootResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["whitelist"])


@router.get("/root", response_model=RootResponse)
def get_root(ledger: WhitelistMintLedger = Depends(get_ledger)) -> RootResponse:
    """Return the current whitelist root and its owner."""
    return RootResponse(root=to_hex(ledger.get_root()), owner=ledger.owner)


@router.put("/root", response_model=RootResponse)
def set_root(
    request: SetRootRequest,
    caller: str = Depends(get_caller),
) -> RootResponse:
    """
    Rotate the whitelist root.

    Only the owner may call this. Existing claims stay recorded.
    """
    try:
        with mutate_ledger() as ledger:
            ledger.set_root(caller, request.root)
            root, owner = to_hex(ledger.get_root()), ledger.owner
    except ValueError as e:
        raise InvalidRequestError(str(e), details={"root": request.root}) from e
    return RootResponse(root=root, owner=owner)


@router.put("/owner", response_model=OwnerResponse)
def transfer_owner(
    request: TransferOwnerRequest,
    caller: str = Depends(get_caller),
) -> OwnerResponse:
    """Hand the owner role to another address."""
    with mutate_ledger() as ledger:
        ledger.transfer_ownership(caller, request.owner)
        owner = ledger.owner
    return OwnerResponse(owner=owner)
