"""Ledger layer package for investment position reconstruction and valuation."""

from .average_cost_engine import average_cost_accumulate, average_cost_apply_transaction
from .holdings_engine import (
    HoldingsCalculationResult,
    HoldingsCalculationService,
    ledger_aggregate_holdings,
    ledger_build_security_from_record,
    ledger_build_transaction_from_record,
)
from .interfaces import (
    LEDGER_TRANSACTION_TYPES,
    Holding,
    InvalidInputError,
    InvestmentTransaction,
    Position,
    PositionKey,
    Security,
    ledger_normalize_transaction_type,
)
from .normalizer import ledger_normalize_transactions
from .valuation import valuation_build_holding, valuation_build_security_map, valuation_enrich_positions

__all__ = [
    "LEDGER_TRANSACTION_TYPES",
    "Holding",
    "HoldingsCalculationResult",
    "HoldingsCalculationService",
    "InvalidInputError",
    "InvestmentTransaction",
    "Position",
    "PositionKey",
    "Security",
    "average_cost_accumulate",
    "average_cost_apply_transaction",
    "ledger_aggregate_holdings",
    "ledger_build_security_from_record",
    "ledger_build_transaction_from_record",
    "ledger_normalize_transaction_type",
    "ledger_normalize_transactions",
    "valuation_build_holding",
    "valuation_build_security_map",
    "valuation_enrich_positions",
]
