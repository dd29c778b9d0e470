"""Read-only SQLAlchemy access to the investment ledger and security snapshot.

The schema is owned by the surrounding application; this module only reads
`investment_transactions`, `securities`, and `plaid_items`.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from .interfaces import InvestmentLedgerSourcePort, InvestmentTransactionRecord, SecurityRecord


class SQLAlchemyInvestmentLedgerService(InvestmentLedgerSourcePort):
    """SQLAlchemy implementation of the ledger source and price source ports."""

    _TRANSACTION_LIST_QUERY = (
        "SELECT "
        "it.id, it.plaid_investment_transaction_id, it.plaid_item_id, it.account_id, it.security_id, "
        "it.date, it.name, it.amount, it.quantity, it.price, it.fees, it.type, it.subtype, "
        "it.iso_currency_code, it.unofficial_currency_code, "
        "s.name AS security_name, s.ticker_symbol AS security_ticker, pi.institution_name "
        "FROM investment_transactions it "
        "LEFT JOIN securities s ON it.security_id = s.plaid_security_id "
        "LEFT JOIN plaid_items pi ON it.plaid_item_id = pi.id "
        "ORDER BY it.date desc, it.id desc "
        "LIMIT :limit"
    )

    _SECURITY_LIST_QUERY = (
        "SELECT "
        "plaid_security_id, name, ticker_symbol, close_price, close_price_as_of, "
        "iso_currency_code, unofficial_currency_code "
        "FROM securities "
        "ORDER BY name asc, plaid_security_id asc"
    )

    def __init__(self, engine: Engine):
        """Initialize ledger source database service.

        Args:
            engine: SQLAlchemy engine used for reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_investment_transaction_list_enriched(self, limit: int) -> list[InvestmentTransactionRecord]:
        """List the most recent ledger rows with security and institution names.

        Args:
            limit: Maximum number of rows to read, newest first.

        Returns:
            list[InvestmentTransactionRecord]: Ledger rows ordered by date descending.

        Raises:
            ValueError: Raised when limit is not a positive integer.
            RuntimeError: Raised when database read fails.
        """

        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError("limit must be a positive integer")

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(text(self._TRANSACTION_LIST_QUERY), {"limit": limit}).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("investment transaction read failed") from error

        return [
            InvestmentTransactionRecord(
                investment_transaction_id=str(row["id"]),
                provider_transaction_id=row["plaid_investment_transaction_id"],
                item_id=row["plaid_item_id"],
                account_id=row["account_id"],
                security_id=row["security_id"],
                transaction_date=row["date"],
                name=row["name"],
                amount=_db_numeric_text(row["amount"]),
                quantity=_db_numeric_text(row["quantity"]),
                price=_db_numeric_text(row["price"]),
                fees=_db_numeric_text(row["fees"]),
                transaction_type=row["type"],
                subtype=row["subtype"],
                iso_currency_code=row["iso_currency_code"],
                unofficial_currency_code=row["unofficial_currency_code"],
                security_name=row["security_name"],
                security_ticker=row["security_ticker"],
                institution_name=row["institution_name"],
            )
            for row in rows
        ]

    def db_security_list(self) -> list[SecurityRecord]:
        """List the security price snapshot.

        Returns:
            list[SecurityRecord]: Security rows ordered by name.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(text(self._SECURITY_LIST_QUERY), {}).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("security snapshot read failed") from error

        return [
            SecurityRecord(
                provider_security_id=row["plaid_security_id"],
                name=row["name"],
                ticker_symbol=row["ticker_symbol"],
                close_price=_db_numeric_text(row["close_price"]),
                close_price_as_of=row["close_price_as_of"],
                iso_currency_code=row["iso_currency_code"],
                unofficial_currency_code=row["unofficial_currency_code"],
            )
            for row in rows
        ]


def _db_numeric_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


__all__ = ["SQLAlchemyInvestmentLedgerService"]
