"""Normalization of nullable values coming from the budget API.

The API serializes optional numbers and dates either as bare values or as
Go ``sql.Null*`` wrappers::

    {"Float64": 95000, "Valid": true}
    {"Time": "2024-03-05T00:00:00Z", "Valid": true}

Some payloads use a generic ``{"value": ..., "isPresent": ...}`` wrapper
instead. Every model field that may carry such a value is declared with
``NullableAmount`` or ``NullableDate`` so the unwrapping happens in exactly
one place.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator

# (value key, presence key) pairs, checked in order
_WRAPPER_KEYS = (
    ("Float64", "Valid"),
    ("Time", "Valid"),
    ("value", "isPresent"),
    ("value", "is_present"),
)


class NullFloat64(BaseModel):
    """Go ``sql.NullFloat64`` as serialized by the API."""

    Float64: float = 0.0
    Valid: bool = False


class NullTime(BaseModel):
    """Go ``sql.NullTime`` as serialized by the API."""

    Time: str | None = None
    Valid: bool = False


def _unwrap(value: Any) -> Any:
    """Return the wrapped payload, or None if the wrapper marks it absent."""
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if not isinstance(value, dict):
        return value
    for value_key, flag_key in _WRAPPER_KEYS:
        if flag_key in value and value_key in value:
            return value.get(value_key) if value[flag_key] else None
    return None


def extract_amount(value: Any) -> Decimal | None:
    """Normalize an optional amount to ``Decimal`` or ``None``.

    Args:
        value: Bare number, numeric string, wrapper dict/model or None.

    Returns:
        The amount if present, otherwise None.
    """
    value = _unwrap(value)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # repr keeps the shortest form, so 0.1 stays Decimal("0.1")
        return Decimal(repr(value))
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def extract_date(value: Any) -> date | None:
    """Normalize an optional date to ``date`` or ``None``.

    Accepts ISO dates, ISO datetimes (``Z`` suffix included) and wrappers.
    Unparseable strings are treated as absent.
    """
    value = _unwrap(value)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def amount_or(value: Decimal | None, fallback: Decimal) -> Decimal:
    """``value ?? fallback`` for already-normalized amounts."""
    return fallback if value is None else value


NullableAmount = Annotated[Decimal | None, BeforeValidator(extract_amount)]
NullableDate = Annotated[date | None, BeforeValidator(extract_date)]
