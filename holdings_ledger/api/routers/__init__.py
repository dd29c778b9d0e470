"""API router package for endpoint composition."""

from .health import api_create_health_router
from .holdings import api_create_holdings_router
from .investment_transactions import api_create_investment_transactions_router

__all__ = [
    "api_create_health_router",
    "api_create_holdings_router",
    "api_create_investment_transactions_router",
]
