"""Holdings API router composition for on-demand position reconstruction."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from holdings_ledger.ledger import Holding, HoldingsCalculationService

logger = logging.getLogger(__name__)


def api_create_holdings_router(holdings_service: HoldingsCalculationService) -> APIRouter:
    """Create holdings router recomputing positions from the full ledger per request.

    Args:
        holdings_service: Ledger-layer holdings calculation service.

    Returns:
        APIRouter: Router exposing `/holdings`.

    Raises:
        ValueError: Raised when holdings_service is invalid.
    """

    if holdings_service is None:
        raise ValueError("holdings_service must not be None")

    router = APIRouter(tags=["holdings"])

    @router.get("/holdings")
    def api_holdings_list() -> JSONResponse:
        """Return current holdings reconstructed from the investment ledger.

        Returns:
            JSONResponse: `{success, holdings, count}` envelope; HTTP 500 with
            `success=false` when the ledger cannot be read or aggregated.

        Raises:
            RuntimeError: This handler converts failures into error payloads.
        """

        try:
            calculation_result = holdings_service.ledger_holdings_calculate()
        except (ValueError, RuntimeError) as error:
            logger.exception("holdings calculation failed")
            payload = {
                "success": False,
                "error": str(error) or type(error).__name__,
                "holdings": [],
                "count": 0,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        payload = {
            "success": True,
            "holdings": [api_serialize_holding(holding) for holding in calculation_result.holdings],
            "count": len(calculation_result.holdings),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_holding(holding: Holding) -> dict[str, object]:
    """Serialize one holding to JSON payload with decimals rendered as text.

    Args:
        holding: Valued holding.

    Returns:
        dict[str, object]: JSON-serializable holding payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "security_id": holding.security_id,
        "security_name": holding.security_name,
        "security_ticker": holding.security_ticker,
        "quantity": str(holding.quantity),
        "cost_basis": str(holding.cost_basis),
        "current_price": str(holding.current_price),
        "current_value": str(holding.current_value),
        "gain_loss": str(holding.gain_loss),
        "gain_loss_percent": str(holding.gain_loss_percent),
        "institution_name": holding.institution_name,
        "account_id": holding.account_id,
        "currency_code": holding.currency_code,
    }


__all__ = ["api_create_holdings_router", "api_serialize_holding"]
