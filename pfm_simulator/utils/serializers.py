"""Serialization helpers that shape responses like the vendor wire format.

The vendor API speaks snake_case JSON, encodes money as strings with two
decimal places and timestamps as ISO-8601. Internal code works with
camelCase-free dataclasses, :class:`~decimal.Decimal` and aware datetimes,
so every response goes through these helpers before it is returned.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

# Integers above this bound lose precision in JavaScript clients.
MAX_SAFE_INTEGER = 2**53 - 1

_CAMEL_BOUNDARY = re.compile(r"[A-Z]")
_TWO_PLACES = Decimal("0.01")


def to_snake_case(value: str) -> str:
    """Convert a camelCase identifier to snake_case."""

    return _CAMEL_BOUNDARY.sub(lambda match: f"_{match.group(0).lower()}", value)


def snake_case_keys(data: Any) -> Any:
    """Recursively convert mapping keys from camelCase to snake_case."""

    if isinstance(data, Mapping):
        return {to_snake_case(str(key)): snake_case_keys(value) for key, value in data.items()}
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        return [snake_case_keys(item) for item in data]
    return data


def serialize_special_types(data: Any) -> Any:
    """Make ``data`` JSON compatible.

    Decimals become floats, integers outside the JavaScript safe range become
    strings and datetimes are rendered as ISO strings.
    """

    if isinstance(data, bool) or data is None:
        return data
    if isinstance(data, int):
        return str(data) if abs(data) > MAX_SAFE_INTEGER else data
    if isinstance(data, Decimal):
        return float(data)
    if isinstance(data, datetime):
        return data.isoformat()
    if isinstance(data, date):
        return data.isoformat()
    if isinstance(data, Mapping):
        return {key: serialize_special_types(value) for key, value in data.items()}
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        return [serialize_special_types(item) for item in data]
    return data


def serialize(data: Any) -> Any:
    """Full pipeline: special types first, then snake_case keys."""

    return snake_case_keys(serialize_special_types(data))


def wrap_in_array(data: Any, key: str) -> dict[str, list[Any]]:
    """Wrap a single object in a list under ``key`` (``{key: []}`` when empty)."""

    return {key: [data] if data else []}


def serialize_decimal(value: Any) -> str:
    """Render money with exactly two decimal places."""

    if value is None or value == "":
        return "0.00"
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        return "0.00"
    return str(amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def serialize_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def serialize_date_only(value: date | datetime | None) -> str | None:
    """Render ``value`` as ``YYYY-MM-DD``."""

    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


__all__ = [
    "MAX_SAFE_INTEGER",
    "serialize",
    "serialize_date_only",
    "serialize_datetime",
    "serialize_decimal",
    "serialize_special_types",
    "snake_case_keys",
    "to_snake_case",
    "wrap_in_array",
]
