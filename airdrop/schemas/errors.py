"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for the whitelist builder and claim ledger.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every rejection is an individual request failure, never process-fatal,
and each kind tells the caller which remedy applies: "not eligible",
"already used" or "not permitted".
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Builder Errors
    EMPTY_SET = "EMPTY_SET"
    NOT_IN_SET = "NOT_IN_SET"
    INVALID_ADDRESS = "INVALID_ADDRESS"

    # Claim Errors
    NOT_WHITELISTED = "NOT_WHITELISTED"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    SUPPLY_EXHAUSTED = "SUPPLY_EXHAUSTED"

    # Administration Errors
    UNAUTHORIZED = "UNAUTHORIZED"
    LEDGER_STATE = "LEDGER_STATE"

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Error model for structured error communication.

    Used to pass rejections across the CLI and HTTP boundaries without
    exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.NOT_WHITELISTED],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all airdrop errors.

    Carries structured error information and can be converted to an
    AirdropError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptySetError(AirdropException):
    """Raised when a tree is requested over an empty whitelist."""

    def __init__(
        self,
        message: str = "cannot build a tree over an empty whitelist",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_SET,
            details=details,
        )


class NotInSetError(AirdropException):
    """Raised when a proof is requested for an address outside the whitelist."""

    def __init__(
        self,
        message: str = "Leaf is not in tree",
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address:
            full_details["address"] = address
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_IN_SET,
            details=full_details,
        )


class InvalidAddressError(AirdropException):
    """Raised when a value is not a well-formed 20-byte address."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address is not None:
            full_details["address"] = address
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ADDRESS,
            details=full_details,
        )


class NotWhitelistedError(AirdropException):
    """Raised when a proof does not fold to the current root."""

    def __init__(
        self,
        message: str = "NOT WHITELISTED",
        address: str | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address:
            full_details["address"] = address
        if reason:
            full_details["reason"] = reason
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_WHITELISTED,
            details=full_details,
        )


class AlreadyClaimedError(AirdropException):
    """Raised when an address that already claimed tries again."""

    def __init__(
        self,
        message: str = "ALREADY MINTED",
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address:
            full_details["address"] = address
        super().__init__(
            message=message,
            code=ErrorCodes.ALREADY_CLAIMED,
            details=full_details,
        )


class UnauthorizedError(AirdropException):
    """Raised when a non-owner attempts an owner-only operation."""

    def __init__(
        self,
        message: str = "OwnableUnauthorizedAccount",
        account: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if account:
            full_details["account"] = account
        super().__init__(
            message=message,
            code=ErrorCodes.UNAUTHORIZED,
            details=full_details,
        )


class SupplyExhaustedError(AirdropException):
    """Raised when an issuance would exceed the fixed token supply."""

    def __init__(
        self,
        message: str = "fixed supply exhausted",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.SUPPLY_EXHAUSTED,
            details=details,
        )


class LedgerStateError(AirdropException):
    """Raised on lifecycle misuse or an unreadable ledger state file."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.LEDGER_STATE,
            details=details,
        )


class CanonicalizationException(AirdropException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )
