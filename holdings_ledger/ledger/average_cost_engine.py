"""Average-cost position accumulator for ordered ledger transactions.

Every unit of a security in one account shares a single blended unit cost.
There is no per-lot queue: sells reduce cost basis proportionally at the
pre-sell average cost. A position whose quantity drops to zero or below is
closed and forgotten; a later buy opens a fresh position with only its own cost.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal

from .interfaces import (
    InvalidInputError,
    InvestmentTransaction,
    Position,
    PositionKey,
    ledger_normalize_transaction_type,
)

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_INFLOW_TYPES = frozenset({"buy", "cash"})


def average_cost_apply_transaction(
    position: Position | None,
    transaction: InvestmentTransaction,
    default_currency_code: str = "USD",
) -> Position | None:
    """Apply one ledger transaction to the position state of its key.

    Args:
        position: Current open position for the key, or None when absent.
        transaction: Next transaction of the key in replay order.
        default_currency_code: Currency used when the transaction has none.

    Returns:
        Position | None: Updated open position, or None when the resulting
        quantity is zero or negative.

    Raises:
        InvalidInputError: Raised when a transaction opening a position has a
            blank grouping key.
    """

    quantity = position.quantity if position is not None else _ZERO
    cost_basis = position.cost_basis if position is not None else _ZERO
    transaction_type = ledger_normalize_transaction_type(transaction.type)
    transaction_quantity = transaction.quantity or _ZERO

    if transaction_type in _INFLOW_TYPES:
        quantity += transaction_quantity
        cost_basis += transaction_quantity * (transaction.price or _ZERO) + (transaction.fees or _ZERO)
    elif transaction_type == "sell":
        # Selling without inventory is a no-op, never a short position.
        if quantity > _ZERO:
            unit_cost = cost_basis / quantity
            quantity -= transaction_quantity
            cost_basis -= unit_cost * transaction_quantity
    elif transaction_type == "fee":
        if transaction.quantity:
            cost_basis += abs(transaction.fees or _ZERO)

    if quantity <= _ZERO:
        if position is not None:
            logger.debug("position closed by transaction id=%s type=%s", transaction.id, transaction_type)
        return None

    return Position(
        account_id=_ledger_required_text(transaction.account_id, position, "account_id", transaction.id),
        security_id=_ledger_required_text(transaction.security_id, position, "security_id", transaction.id),
        quantity=quantity,
        cost_basis=cost_basis,
        currency_code=(transaction.currency_code or "").strip() or default_currency_code,
        security_name=transaction.security_name,
        security_ticker=transaction.security_ticker,
        institution_name=transaction.institution_name,
    )


def average_cost_accumulate(
    grouped_transactions: Mapping[PositionKey, list[InvestmentTransaction]],
    default_currency_code: str = "USD",
) -> dict[PositionKey, Position]:
    """Replay ordered transaction groups into open positions.

    The accumulator map is owned by this call; nothing is shared across calls.

    Args:
        grouped_transactions: Replay-ordered transactions keyed by position key.
        default_currency_code: Currency used when a transaction has none.

    Returns:
        dict[PositionKey, Position]: Open positions with strictly positive quantity,
        in the key order of the input mapping.

    Raises:
        InvalidInputError: Raised when an opening transaction has a blank grouping key.
    """

    positions: dict[PositionKey, Position] = {}
    for position_key, transactions in grouped_transactions.items():
        for transaction in transactions:
            updated_position = average_cost_apply_transaction(
                positions.get(position_key),
                transaction,
                default_currency_code=default_currency_code,
            )
            if updated_position is None:
                positions.pop(position_key, None)
            else:
                positions[position_key] = updated_position

    return positions


def _ledger_required_text(
    value: str | None,
    position: Position | None,
    field_name: str,
    transaction_id: str,
) -> str:
    if value is not None and value.strip():
        return value.strip()
    if position is not None:
        return getattr(position, field_name)
    raise InvalidInputError(f"transaction id={transaction_id} {field_name} must not be blank")


__all__ = ["average_cost_accumulate", "average_cost_apply_transaction"]
