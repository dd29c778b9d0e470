"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
"""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from holdings_ledger.domain import HealthStatus


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


@dataclass(frozen=True)
class InvestmentTransactionRecord:
    """Ledger row joined with security and institution display fields.

    Numeric columns are carried as text to avoid binary float drift before the
    ledger layer converts them to `Decimal`.

    Attributes:
        investment_transaction_id: Internal transaction identifier.
        provider_transaction_id: Aggregation-provider transaction identifier.
        item_id: Linked institution item identifier.
        account_id: Account identifier.
        security_id: Provider security identifier.
        transaction_date: Calendar date as stored (`date` or ISO text).
        name: Provider transaction description.
        amount: Signed cash amount.
        quantity: Signed unit count.
        price: Unit price.
        fees: Fee amount.
        transaction_type: Provider transaction type.
        subtype: Provider transaction subtype.
        iso_currency_code: ISO currency code.
        unofficial_currency_code: Non-ISO currency code.
        security_name: Joined security name.
        security_ticker: Joined security ticker symbol.
        institution_name: Joined institution name.
    """

    investment_transaction_id: str
    provider_transaction_id: str | None
    item_id: str | None
    account_id: str | None
    security_id: str | None
    transaction_date: date | str
    name: str | None
    amount: str | None
    quantity: str | None
    price: str | None
    fees: str | None
    transaction_type: str
    subtype: str | None
    iso_currency_code: str | None
    unofficial_currency_code: str | None
    security_name: str | None
    security_ticker: str | None
    institution_name: str | None


@dataclass(frozen=True)
class SecurityRecord:
    """Security price snapshot row.

    Attributes:
        provider_security_id: Aggregation-provider security identifier.
        name: Security name.
        ticker_symbol: Optional ticker symbol.
        close_price: Latest close price as text, or None.
        close_price_as_of: Optional close price date as stored.
        iso_currency_code: ISO currency code.
        unofficial_currency_code: Non-ISO currency code.
    """

    provider_security_id: str
    name: str | None
    ticker_symbol: str | None
    close_price: str | None
    close_price_as_of: date | str | None
    iso_currency_code: str | None
    unofficial_currency_code: str | None


class InvestmentLedgerSourcePort(Protocol):
    """Port definition for read-only ledger and security price snapshots."""

    def db_investment_transaction_list_enriched(self, limit: int) -> list[InvestmentTransactionRecord]:
        """List the most recent ledger rows with joined display fields.

        Args:
            limit: Maximum number of rows to read, newest first.

        Returns:
            list[InvestmentTransactionRecord]: Ledger rows.

        Raises:
            ValueError: Raised when limit is invalid.
            RuntimeError: Raised when database read fails.
        """

    def db_security_list(self) -> list[SecurityRecord]:
        """List the security price snapshot.

        Returns:
            list[SecurityRecord]: Security rows ordered by name.

        Raises:
            RuntimeError: Raised when database read fails.
        """
