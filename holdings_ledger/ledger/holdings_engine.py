"""Holdings aggregation pipeline and repository-backed calculation service."""
# pylint: disable=too-few-public-methods

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from holdings_ledger.db import InvestmentLedgerSourcePort, InvestmentTransactionRecord, SecurityRecord
from holdings_ledger.domain import (
    domain_normalize_optional_text,
    domain_parse_ledger_date,
    domain_parse_optional_decimal,
)

from .average_cost_engine import average_cost_accumulate
from .interfaces import Holding, InvestmentTransaction, Security
from .normalizer import ledger_normalize_transactions
from .valuation import valuation_build_security_map, valuation_enrich_positions

logger = logging.getLogger(__name__)


def ledger_aggregate_holdings(
    transactions: Iterable[InvestmentTransaction],
    securities: Mapping[str, Security] | Iterable[Security],
    default_currency_code: str = "USD",
) -> list[Holding]:
    """Reconstruct valued holdings from a full ledger and a price snapshot.

    Pure and stateless: every call recomputes from the full input, in one pass
    over the transactions.

    Args:
        transactions: Complete ledger rows in any order.
        securities: Security snapshot keyed by provider security id, or an
            iterable of securities.
        default_currency_code: Currency used when a ledger row has none.

    Returns:
        list[Holding]: One holding per open position, ordered by
        `(account_id, security_id)`.

    Raises:
        InvalidInputError: Raised when a ledger row lacks `account_id`.
    """

    security_map = securities if isinstance(securities, Mapping) else valuation_build_security_map(securities)
    grouped_transactions = ledger_normalize_transactions(transactions)
    positions = average_cost_accumulate(grouped_transactions, default_currency_code=default_currency_code)
    logger.debug("aggregated %d position keys into %d open positions", len(grouped_transactions), len(positions))
    return valuation_enrich_positions(positions, security_map)


def ledger_build_transaction_from_record(record: InvestmentTransactionRecord) -> InvestmentTransaction:
    """Convert one db-layer ledger row into an engine transaction.

    Args:
        record: Ledger row read from the database.

    Returns:
        InvestmentTransaction: Engine input with `Decimal` numerics.

    Raises:
        ValueError: Raised when the stored date or a numeric column is malformed.
    """

    return InvestmentTransaction(
        id=record.investment_transaction_id,
        date=domain_parse_ledger_date(record.transaction_date),
        account_id=domain_normalize_optional_text(record.account_id),
        security_id=domain_normalize_optional_text(record.security_id),
        type=record.transaction_type,
        quantity=domain_parse_optional_decimal(record.quantity),
        price=domain_parse_optional_decimal(record.price),
        fees=domain_parse_optional_decimal(record.fees),
        currency_code=domain_normalize_optional_text(record.iso_currency_code)
        or domain_normalize_optional_text(record.unofficial_currency_code),
        security_name=record.security_name,
        security_ticker=record.security_ticker,
        institution_name=record.institution_name,
    )


def ledger_build_security_from_record(record: SecurityRecord) -> Security:
    """Convert one db-layer security row into an engine price snapshot entry.

    Args:
        record: Security row read from the database.

    Returns:
        Security: Engine price snapshot entry.

    Raises:
        ValueError: Raised when the stored close price is malformed.
    """

    return Security(
        id=record.provider_security_id,
        name=record.name,
        ticker_symbol=record.ticker_symbol,
        close_price=domain_parse_optional_decimal(record.close_price),
        currency_code=domain_normalize_optional_text(record.iso_currency_code)
        or domain_normalize_optional_text(record.unofficial_currency_code),
    )


@dataclass(frozen=True)
class HoldingsCalculationResult:
    """Result payload for one holdings calculation.

    Attributes:
        holdings: Valued holdings.
        transaction_count: Number of ledger rows read.
        duration_ms: Wall-clock duration of read plus computation.
    """

    holdings: list[Holding]
    transaction_count: int
    duration_ms: int


class HoldingsCalculationService:
    """Read ledger and price snapshots and compute current holdings."""

    def __init__(
        self,
        repository: InvestmentLedgerSourcePort,
        transaction_limit: int = 10000,
        default_currency_code: str = "USD",
    ):
        """Initialize holdings calculation dependencies.

        Args:
            repository: Read-only ledger and price source.
            transaction_limit: Maximum ledger rows read per calculation.
            default_currency_code: Currency used when a ledger row has none.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies or limits are invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        if transaction_limit < 1:
            raise ValueError("transaction_limit must be positive")
        if not default_currency_code.strip():
            raise ValueError("default_currency_code must not be blank")
        self._repository = repository
        self._transaction_limit = transaction_limit
        self._default_currency_code = default_currency_code.strip().upper()

    def ledger_holdings_calculate(self) -> HoldingsCalculationResult:
        """Compute holdings from the current ledger and price snapshots.

        Returns:
            HoldingsCalculationResult: Holdings plus read/compute diagnostics.

        Raises:
            InvalidInputError: Raised when a ledger row lacks `account_id`.
            ValueError: Raised when stored ledger values are malformed.
            RuntimeError: Raised when a repository read fails.
        """

        started_at = time.perf_counter()
        transaction_records = self._repository.db_investment_transaction_list_enriched(limit=self._transaction_limit)
        security_records = self._repository.db_security_list()

        if len(transaction_records) >= self._transaction_limit:
            logger.warning(
                "ledger read reached transaction_limit=%d; older rows are excluded from holdings",
                self._transaction_limit,
            )

        holdings = ledger_aggregate_holdings(
            transactions=[ledger_build_transaction_from_record(record) for record in transaction_records],
            securities=[ledger_build_security_from_record(record) for record in security_records],
            default_currency_code=self._default_currency_code,
        )
        duration_ms = int((time.perf_counter() - started_at) * 1000)
        logger.info(
            "calculated %d holdings from %d investment transactions in %dms",
            len(holdings),
            len(transaction_records),
            duration_ms,
        )
        return HoldingsCalculationResult(
            holdings=holdings,
            transaction_count=len(transaction_records),
            duration_ms=duration_ms,
        )


__all__ = [
    "HoldingsCalculationResult",
    "HoldingsCalculationService",
    "ledger_aggregate_holdings",
    "ledger_build_security_from_record",
    "ledger_build_transaction_from_record",
]
