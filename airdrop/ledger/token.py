"""
Fixed-supply token balance book.

Stands in for the ERC-20 side of the airdrop: the claim ledger authorizes
an issuance and this book records it. Amounts are integers in base units
(10**decimals per whole token).
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from airdrop.crypto.hashing import normalize_address
from airdrop.schemas.errors import SupplyExhaustedError


logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 18


def to_base_units(amount: str | int | Decimal, decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Convert a whole-token amount to integer base units.

    Equivalent of ethers.parseEther for 18 decimals.

    Raises:
        ValueError: If the amount is negative, not a number, or has more
            fractional digits than ``decimals`` allows

    Example:
        >>> to_base_units("2")
        2000000000000000000
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"Invalid token amount: {amount!r}") from e

    if not value.is_finite() or value < 0:
        raise ValueError(f"Token amount must be a finite non-negative number, got {amount!r}")

    scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {amount!r} has more than {decimals} decimal places")
    return int(scaled)


def from_base_units(amount: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Convert integer base units back to a whole-token Decimal."""
    return Decimal(amount).scaleb(-decimals)


class TokenSupply:
    """
    Balance book for a token with an optional hard supply cap.

    Not thread-safe on its own; WhitelistMintLedger serializes access.
    """

    def __init__(
        self,
        name: str = "KITA Is ERC20",
        symbol: str = "KITA",
        decimals: int = DEFAULT_DECIMALS,
        max_supply: int | None = None,
    ) -> None:
        if max_supply is not None and max_supply < 0:
            raise ValueError("max_supply must be non-negative")
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.max_supply = max_supply
        self._balances: dict[str, int] = {}
        self._total_supply = 0

    @property
    def total_supply(self) -> int:
        return self._total_supply

    @property
    def remaining_supply(self) -> int | None:
        if self.max_supply is None:
            return None
        return self.max_supply - self._total_supply

    def balance_of(self, address: str) -> int:
        return self._balances.get(normalize_address(address), 0)

    def balances(self) -> dict[str, int]:
        """Non-zero balances keyed by checksummed address."""
        return dict(self._balances)

    def can_mint(self, amount: int) -> bool:
        if amount < 0:
            return False
        return self.max_supply is None or self._total_supply + amount <= self.max_supply

    def mint(self, to: str, amount: int) -> None:
        """
        Credit ``amount`` base units to ``to``.

        Raises:
            ValueError: If amount is negative
            SupplyExhaustedError: If the cap would be exceeded
        """
        if amount < 0:
            raise ValueError("mint amount must be non-negative")
        if not self.can_mint(amount):
            raise SupplyExhaustedError(
                details={
                    "requested": amount,
                    "total_supply": self._total_supply,
                    "max_supply": self.max_supply,
                },
            )

        key = normalize_address(to)
        self._balances[key] = self._balances.get(key, 0) + amount
        self._total_supply += amount
        logger.debug(f"Minted {amount} {self.symbol} base units to {key}")

    def restore(self, balances: dict[str, int]) -> None:
        """Replace all balances, recomputing total supply (used when loading state)."""
        restored = {normalize_address(addr): int(amount) for addr, amount in balances.items() if int(amount)}
        total = sum(restored.values())
        if self.max_supply is not None and total > self.max_supply:
            raise SupplyExhaustedError(
                message="restored balances exceed max supply",
                details={"total_supply": total, "max_supply": self.max_supply},
            )
        self._balances = restored
        self._total_supply = total
