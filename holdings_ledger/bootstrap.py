"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from holdings_ledger.api import create_api_application
from holdings_ledger.config import AppSettings, config_configure_logging, config_load_settings
from holdings_ledger.db import SQLAlchemyDatabaseHealthService, SQLAlchemyInvestmentLedgerService, db_create_engine
from holdings_ledger.ledger import HoldingsCalculationService


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(level_name=resolved_settings.log_level, use_json=resolved_settings.log_json)
    engine = db_create_engine(database_url=resolved_settings.database_url)
    ledger_repository = SQLAlchemyInvestmentLedgerService(engine=engine)
    return create_api_application(
        settings=resolved_settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        holdings_service=_bootstrap_build_holdings_service(resolved_settings, ledger_repository),
        ledger_repository=ledger_repository,
    )


def bootstrap_create_holdings_service(settings: AppSettings | None = None) -> HoldingsCalculationService:
    """Build holdings calculation service for non-HTTP trigger surfaces.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        HoldingsCalculationService: Fully wired holdings service.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(level_name=resolved_settings.log_level, use_json=resolved_settings.log_json)
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return _bootstrap_build_holdings_service(resolved_settings, SQLAlchemyInvestmentLedgerService(engine=engine))


def _bootstrap_build_holdings_service(
    settings: AppSettings,
    ledger_repository: SQLAlchemyInvestmentLedgerService,
) -> HoldingsCalculationService:
    return HoldingsCalculationService(
        repository=ledger_repository,
        transaction_limit=settings.holdings_transaction_limit,
        default_currency_code=settings.default_currency_code,
    )
