"""Coercion helpers for domain values."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union

Number = Union[Decimal, int, float, str]


def as_decimal(value: Number) -> Decimal:
    """Return ``value`` as a ``Decimal``, going through ``str`` for floats."""
    return value if isinstance(value, Decimal) else Decimal(str(value))


def as_optional_decimal(value: Optional[Number]) -> Optional[Decimal]:
    return None if value is None else as_decimal(value)


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
