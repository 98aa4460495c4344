"""
Error Taxonomy and Canonical JSON Unit Tests
Tests for airdrop/schemas/errors.py and airdrop/schemas/canonical.py
"""
import pytest

from airdrop.schemas.canonical import dumps_canonical, loads_canonical
from airdrop.schemas.errors import (
    AirdropError,
    AirdropException,
    AlreadyClaimedError,
    CanonicalizationException,
    EmptySetError,
    ErrorCodes,
    InvalidAddressError,
    LedgerStateError,
    NotInSetError,
    NotWhitelistedError,
    SupplyExhaustedError,
    UnauthorizedError,
)
from fixtures.accounts import ALICE


class TestErrorCodes:
    """Each rejection carries its own stable code."""

    @pytest.mark.parametrize("exc,code", [
        (EmptySetError(), ErrorCodes.EMPTY_SET),
        (NotInSetError(), ErrorCodes.NOT_IN_SET),
        (InvalidAddressError("bad"), ErrorCodes.INVALID_ADDRESS),
        (NotWhitelistedError(), ErrorCodes.NOT_WHITELISTED),
        (AlreadyClaimedError(), ErrorCodes.ALREADY_CLAIMED),
        (UnauthorizedError(), ErrorCodes.UNAUTHORIZED),
        (SupplyExhaustedError(), ErrorCodes.SUPPLY_EXHAUSTED),
        (LedgerStateError("bad"), ErrorCodes.LEDGER_STATE),
    ])
    def test_codes(self, exc, code):
        assert isinstance(exc, AirdropException)
        assert exc.code == code
        assert exc.retryable is False

    def test_default_messages(self):
        assert NotWhitelistedError().message == "NOT WHITELISTED"
        assert AlreadyClaimedError().message == "ALREADY MINTED"
        assert UnauthorizedError().message == "OwnableUnauthorizedAccount"
        assert NotInSetError().message == "Leaf is not in tree"

    def test_details(self):
        assert AlreadyClaimedError(address=ALICE).details == {"address": ALICE}
        assert UnauthorizedError(account=ALICE).details == {"account": ALICE}
        assert NotWhitelistedError(address=ALICE, reason="x").details == {"address": ALICE, "reason": "x"}

    def test_error_model(self):
        exc = AlreadyClaimedError(address=ALICE)
        model = exc.to_error_model()

        assert isinstance(model, AirdropError)
        assert model.code == ErrorCodes.ALREADY_CLAIMED
        assert model.details == {"address": ALICE}
        assert model.retryable is False

    def test_repr(self):
        assert repr(EmptySetError()) == (
            "EmptySetError(code='EMPTY_SET', message='cannot build a tree over an empty whitelist')"
        )


class TestCanonicalJson:
    """Tests for deterministic serialization."""

    def test_sorted_compact(self):
        assert dumps_canonical({"b": 2, "a": 1}) == '{"a":1,"b":2}'

    def test_bytes_as_hex(self):
        assert dumps_canonical({"h": b"\x01\xff"}) == '{"h":"0x01ff"}'

    def test_none_dropped(self):
        assert dumps_canonical({"a": None, "b": [None]}) == '{"b":[null]}'

    def test_model(self):
        model = AlreadyClaimedError(address=ALICE).to_error_model()
        assert loads_canonical(dumps_canonical(model))["code"] == ErrorCodes.ALREADY_CLAIMED

    def test_indent_is_stable(self):
        assert dumps_canonical({"b": 1, "a": 2}, indent=2) == '{\n  "a": 2,\n  "b": 1\n}'

    def test_floats_rejected(self):
        with pytest.raises(CanonicalizationException, match="Floats"):
            dumps_canonical({"amount": 1.5})

    def test_unknown_type_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"x": object()})
