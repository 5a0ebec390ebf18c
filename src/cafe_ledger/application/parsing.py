"""Input parsing at the presentation boundary.

Form fields and CLI options arrive as strings.  These helpers turn them
into the typed values the domain expects and reject anything that is not
a clean number with a typed error, instead of defaulting it to zero.
"""

from __future__ import annotations

import re
from datetime import date

from cafe_ledger.domain.exceptions import (
    InvalidAmountError,
    InvalidQuantityError,
    ValidationError,
)
from cafe_ledger.domain.model.value_objects import Money

_INTEGER = re.compile(r"[+-]?\d+")


def _parse_int(raw: str | int) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INTEGER.fullmatch(raw.strip()):
        return int(raw.strip())
    return None


def parse_quantity(raw: str | int) -> int:
    """Parse a sale quantity: a strictly positive integer."""
    value = _parse_int(raw)
    if value is None:
        raise InvalidQuantityError(f"Invalid quantity {raw!r}: expected a whole number")
    if value <= 0:
        raise InvalidQuantityError("Quantity must be positive")
    return value


def parse_amount(raw: str | int) -> int:
    """Parse a restock amount: a strictly positive integer."""
    value = _parse_int(raw)
    if value is None or value <= 0:
        raise InvalidAmountError(f"Invalid stock amount {raw!r}: expected a positive whole number")
    return value


def parse_non_negative_int(raw: str | int, label: str) -> int:
    value = _parse_int(raw)
    if value is None or value < 0:
        raise ValidationError(f"Invalid {label} {raw!r}: expected a non-negative whole number")
    return value


def parse_price(raw: str | int | Money) -> Money:
    if isinstance(raw, Money):
        return raw
    return Money.of(raw)


def parse_date(raw: str | date | None, default: date | None = None) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date; blank input falls back to ``default``."""
    if isinstance(raw, date):
        return raw
    if raw is None or not raw.strip():
        if default is None:
            raise ValidationError("Date is required")
        return default
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid date {raw!r}: expected YYYY-MM-DD") from exc


def parse_optional_date(raw: str | date | None) -> date | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return parse_date(raw)
