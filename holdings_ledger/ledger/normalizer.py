"""Deterministic grouping and ordering of raw ledger transactions."""

from __future__ import annotations

from collections.abc import Iterable

from .interfaces import InvalidInputError, InvestmentTransaction, PositionKey


def ledger_normalize_transactions(
    transactions: Iterable[InvestmentTransaction],
) -> dict[PositionKey, list[InvestmentTransaction]]:
    """Group ledger rows by position key and order each group for replay.

    Average-cost replay is order sensitive, so every group is sorted ascending by
    `(date, id)` regardless of input order. Groups are returned in ascending key
    order.

    Args:
        transactions: Ledger rows in any order.

    Returns:
        dict[PositionKey, list[InvestmentTransaction]]: Ordered rows keyed by
        `(account_id, security_id)`.

    Raises:
        InvalidInputError: Raised when any row lacks `account_id`; no partial
            grouping is returned.
    """

    grouped_transactions: dict[PositionKey, list[InvestmentTransaction]] = {}
    for transaction in transactions:
        account_id = _ledger_strip_optional(transaction.account_id)
        if account_id is None:
            raise InvalidInputError(f"transaction id={transaction.id} is missing account_id")

        security_id = _ledger_strip_optional(transaction.security_id)
        if security_id is None:
            continue

        grouped_transactions.setdefault((account_id, security_id), []).append(transaction)

    return {
        position_key: sorted(grouped_transactions[position_key], key=_ledger_replay_sort_key)
        for position_key in sorted(grouped_transactions)
    }


def _ledger_replay_sort_key(transaction: InvestmentTransaction) -> tuple:
    return (transaction.date, str(transaction.id))


def _ledger_strip_optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped_value = str(value).strip()
    return stripped_value or None


__all__ = ["ledger_normalize_transactions"]
