"""FastAPI application factory for the holdings read service."""

from fastapi import FastAPI

from holdings_ledger.config import AppSettings
from holdings_ledger.db import DatabaseHealthPort, InvestmentLedgerSourcePort
from holdings_ledger.ledger import HoldingsCalculationService

from .routers import (
    api_create_health_router,
    api_create_holdings_router,
    api_create_investment_transactions_router,
)


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    holdings_service: HoldingsCalculationService,
    ledger_repository: InvestmentLedgerSourcePort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata and limits.
        db_health_service: Database health service used by health endpoints.
        holdings_service: Holdings calculation service used by `/holdings`.
        ledger_repository: Read-only ledger source used by `/investment-transactions`.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when a router dependency is invalid.
    """
    application = FastAPI(title="Holdings Ledger")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        return {
            "service": "holdings-ledger",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(api_create_holdings_router(holdings_service=holdings_service))
    application.include_router(
        api_create_investment_transactions_router(
            settings=settings,
            ledger_repository=ledger_repository,
        )
    )

    return application
