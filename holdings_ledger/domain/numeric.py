"""Shared numeric and text normalization helpers for ledger inputs.

Ledger rows arrive from the application database with REAL/NUMERIC columns that
may be null. These helpers convert them into `Decimal` values without passing
through binary floating point formatting surprises.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation


def domain_parse_optional_decimal(value: object | None) -> Decimal | None:
    """Convert one optional numeric column value into `Decimal`.

    Args:
        value: Candidate numeric value (`Decimal`, `int`, `float`, `str`, or None).

    Returns:
        Decimal | None: Parsed value, or None when the value is missing or blank.

    Raises:
        ValueError: Raised when the value is present but not a finite number.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"unsupported numeric value={value!r}")
    if isinstance(value, Decimal):
        parsed_value = value
    elif isinstance(value, int):
        parsed_value = Decimal(value)
    elif isinstance(value, float):
        # repr keeps the shortest round-tripping digits, e.g. 0.1 -> "0.1".
        parsed_value = Decimal(repr(value))
    elif isinstance(value, str):
        normalized_value = value.strip()
        if not normalized_value:
            return None
        try:
            parsed_value = Decimal(normalized_value)
        except InvalidOperation as error:
            raise ValueError(f"invalid numeric value={value!r}") from error
    else:
        raise ValueError(f"unsupported numeric value={value!r}")

    # NaN and Infinity are storable in numeric columns but break ledger comparisons.
    if not parsed_value.is_finite():
        raise ValueError(f"non-finite numeric value={value!r}")
    return parsed_value


def domain_normalize_optional_text(value: object | None) -> str | None:
    """Normalize one optional text value, mapping blanks to None.

    Args:
        value: Candidate text value.

    Returns:
        str | None: Stripped text or None when missing/blank.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None or not isinstance(value, str):
        return None
    normalized_value = value.strip()
    return normalized_value or None


def domain_parse_ledger_date(value: object) -> date:
    """Parse a ledger calendar date from a date, datetime, or ISO text value.

    Args:
        value: Candidate date value from the ledger source.

    Returns:
        date: Parsed calendar date.

    Raises:
        ValueError: Raised when the value cannot be parsed as a date.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        normalized_value = value.strip()
        try:
            return date.fromisoformat(normalized_value[:10])
        except ValueError as error:
            raise ValueError(f"invalid ledger date={value!r}") from error
    raise ValueError(f"invalid ledger date={value!r}")


__all__ = [
    "domain_normalize_optional_text",
    "domain_parse_ledger_date",
    "domain_parse_optional_decimal",
]
