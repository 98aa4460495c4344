"""
Module 01 - Schemas
File: canonical.py

Purpose: Deterministic serialization for whitelist snapshots and ledger
state files. Two writes of the same logical content are byte-identical.
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        raise CanonicalizationException(
            message="Floats are not allowed in canonical output; use integer base units",
            details={"path": path, "value": str(value)},
        )

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        # Keys are sorted during JSON serialization
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, bytes):
        return "0x" + value.hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any, indent: int | None = None) -> str:
    """
    Serialize an object to canonical JSON string.

    Sorted keys, None fields excluded, bytes as 0x-hex. With ``indent``
    the output is pretty-printed but still key-sorted and stable.

    Example:
        >>> dumps_canonical({"b": 2, "a": b"\\x01"})
        '{"a":"0x01","b":2}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        if indent is not None:
            return json.dumps(canonicalized, sort_keys=True, indent=indent, ensure_ascii=False)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except Exception as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def loads_canonical(json_str: str) -> Any:
    """Parse a canonical JSON string."""
    return json.loads(json_str)
