"""Database layer package for all SQL boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import (
    DatabaseHealthPort,
    InvestmentLedgerSourcePort,
    InvestmentTransactionRecord,
    SecurityRecord,
)
from .investment_ledger import SQLAlchemyInvestmentLedgerService
from .session import db_create_engine

__all__ = [
    "DatabaseHealthPort",
    "InvestmentLedgerSourcePort",
    "InvestmentTransactionRecord",
    "SecurityRecord",
    "SQLAlchemyDatabaseHealthService",
    "SQLAlchemyInvestmentLedgerService",
    "db_create_engine",
]
