"""
Claim Routes

Verify a caller's membership proof, record the claim and report status.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from airdrop.crypto.hashing import normalize_address
from airdrop.ledger import WhitelistMintLedger
from airdrop_api.deps import get_caller, get_ledger, mutate_ledger
from airdrop_api.models.requests import ClaimRequest
from airdrop_api.models.responses import ClaimResponse, ClaimStatusResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["claims"])


@router.post("/claim", response_model=ClaimResponse)
def claim(
    request: ClaimRequest,
    caller: str = Depends(get_caller),
) -> ClaimResponse:
    """
    Claim the fixed allocation for the caller.

    Rejections come back as 403 NOT_WHITELISTED or 409 ALREADY_CLAIMED.
    The claim is only reported once the state file has been written.
    """
    with mutate_ledger() as ledger:
        authorization = ledger.verify_and_claim(caller, request.proof)
        balance = ledger.token.balance_of(authorization.address)
    return ClaimResponse(
        address=authorization.address,
        amount=authorization.amount,
        root=authorization.root,
        balance=balance,
    )


@router.get("/claims/{address}", response_model=ClaimStatusResponse)
def claim_status(
    address: str,
    ledger: WhitelistMintLedger = Depends(get_ledger),
) -> ClaimStatusResponse:
    """Report whether an address has claimed, and its balance."""
    key = normalize_address(address)
    return ClaimStatusResponse(
        address=key,
        claimed=ledger.is_claimed(key),
        balance=ledger.token.balance_of(key),
    )
