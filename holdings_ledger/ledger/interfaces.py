"""Typed contracts for the investment holdings aggregation engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

PositionKey = tuple[str, str]
"""Position grouping key: `(account_id, security_id)`."""

LEDGER_TRANSACTION_TYPES = frozenset({"buy", "sell", "cash", "fee", "transfer", "dividend", "interest", "other"})


class InvalidInputError(ValueError):
    """Raised when a ledger transaction cannot be grouped into a position key."""


@dataclass(frozen=True)
class InvestmentTransaction:
    """One immutable row of the investment ledger.

    Attributes:
        id: Opaque unique transaction identifier, used as the ordering tie-break.
        date: Calendar date of the transaction.
        account_id: Account grouping key; required.
        security_id: Provider security identifier; rows without it never form a position.
        type: Transaction type (`buy`, `sell`, `cash`, `fee`, `transfer`, `dividend`, `interest`, `other`).
        quantity: Signed unit count, when present.
        price: Unit price at transaction time, when present.
        fees: Transaction fee amount, when present.
        currency_code: ISO currency code of the transaction, when present.
        security_name: Security display name joined by the ledger source.
        security_ticker: Security ticker symbol joined by the ledger source.
        institution_name: Institution display name joined by the ledger source.
    """

    id: str
    date: date
    account_id: str | None
    security_id: str | None
    type: str
    quantity: Decimal | None = None
    price: Decimal | None = None
    fees: Decimal | None = None
    currency_code: str | None = None
    security_name: str | None = None
    security_ticker: str | None = None
    institution_name: str | None = None


@dataclass(frozen=True)
class Security:
    """Security price snapshot entry keyed by provider security id.

    Attributes:
        id: Provider security identifier.
        name: Security display name.
        ticker_symbol: Optional ticker symbol.
        close_price: Latest known close price; None when unknown.
        currency_code: Optional ISO currency code of the close price.
    """

    id: str
    name: str | None
    ticker_symbol: str | None
    close_price: Decimal | None
    currency_code: str | None


@dataclass(frozen=True)
class Position:
    """Open position state for one `(account_id, security_id)` key.

    A closed position is never represented; it is absent from the accumulator map.

    Attributes:
        account_id: Account grouping key.
        security_id: Security grouping key.
        quantity: Running unit count, strictly positive.
        cost_basis: Running total cost under average-cost accounting.
        currency_code: Currency of the most recently processed transaction.
        security_name: Security name carried from the most recent transaction.
        security_ticker: Ticker carried from the most recent transaction.
        institution_name: Institution carried from the most recent transaction.
    """

    account_id: str
    security_id: str
    quantity: Decimal
    cost_basis: Decimal
    currency_code: str
    security_name: str | None = None
    security_ticker: str | None = None
    institution_name: str | None = None

    @property
    def key(self) -> PositionKey:
        return (self.account_id, self.security_id)


@dataclass(frozen=True)
class Holding:
    """Valued, user-facing snapshot of one open position.

    Attributes:
        security_id: Provider security identifier.
        security_name: Security display name.
        security_ticker: Security ticker symbol.
        quantity: Open quantity, strictly positive.
        cost_basis: Open cost basis.
        current_price: Close price used for valuation, zero when unknown.
        current_value: `quantity * current_price`.
        gain_loss: `current_value - cost_basis`.
        gain_loss_percent: Gain/loss relative to cost basis in percent, zero when cost basis is not positive.
        institution_name: Institution display name.
        account_id: Account identifier.
        currency_code: Position currency code.
    """

    security_id: str
    security_name: str | None
    security_ticker: str | None
    quantity: Decimal
    cost_basis: Decimal
    current_price: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    institution_name: str | None
    account_id: str
    currency_code: str


def ledger_normalize_transaction_type(transaction_type: str | None) -> str:
    """Normalize a raw transaction type into one of the recognised ledger types.

    Args:
        transaction_type: Raw provider type value.

    Returns:
        str: Lower-case ledger type; unknown or missing values map to `other`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(transaction_type, str):
        return "other"
    normalized_type = transaction_type.strip().lower()
    if normalized_type not in LEDGER_TRANSACTION_TYPES:
        return "other"
    return normalized_type


__all__ = [
    "LEDGER_TRANSACTION_TYPES",
    "Holding",
    "InvalidInputError",
    "InvestmentTransaction",
    "Position",
    "PositionKey",
    "Security",
    "ledger_normalize_transaction_type",
]
