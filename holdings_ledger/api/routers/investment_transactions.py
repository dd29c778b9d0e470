"""Investment transaction list router over the enriched ledger read model."""
# pylint: disable=duplicate-code

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from holdings_ledger.config import AppSettings
from holdings_ledger.db import InvestmentLedgerSourcePort, InvestmentTransactionRecord

logger = logging.getLogger(__name__)


def api_create_investment_transactions_router(
    settings: AppSettings,
    ledger_repository: InvestmentLedgerSourcePort,
) -> APIRouter:
    """Create router listing enriched investment ledger rows.

    Args:
        settings: Runtime settings used for list limits.
        ledger_repository: Read-only ledger source.

    Returns:
        APIRouter: Router exposing `/investment-transactions`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if ledger_repository is None:
        raise ValueError("ledger_repository must not be None")

    router = APIRouter(tags=["investment-transactions"])

    @router.get("/investment-transactions")
    def api_investment_transaction_list(
        limit: int = Query(default=settings.api_default_limit, ge=1),
    ) -> JSONResponse:
        """List ledger rows newest first.

        Args:
            limit: Max rows to return, capped by `api_max_limit`.

        Returns:
            JSONResponse: `{success, transactions, count, applied_limit}` envelope.

        Raises:
            RuntimeError: This handler converts read failures into error payloads.
        """

        applied_limit = min(limit, settings.api_max_limit)
        try:
            records = ledger_repository.db_investment_transaction_list_enriched(limit=applied_limit)
        except RuntimeError as error:
            logger.exception("investment transaction list failed")
            payload = {
                "success": False,
                "error": str(error),
                "transactions": [],
                "count": 0,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        if not records:
            logger.warning("no investment transactions returned from ledger source")

        payload = {
            "success": True,
            "transactions": [api_serialize_investment_transaction(record) for record in records],
            "count": len(records),
            "applied_limit": applied_limit,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_investment_transaction(record: InvestmentTransactionRecord) -> dict[str, object]:
    """Serialize one enriched ledger row to JSON payload.

    Args:
        record: Enriched ledger row.

    Returns:
        dict[str, object]: JSON-serializable ledger row payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    transaction_date = record.transaction_date
    return {
        "id": record.investment_transaction_id,
        "plaid_investment_transaction_id": record.provider_transaction_id,
        "plaid_item_id": record.item_id,
        "account_id": record.account_id,
        "security_id": record.security_id,
        "date": transaction_date.isoformat() if isinstance(transaction_date, date) else transaction_date,
        "name": record.name,
        "amount": record.amount,
        "quantity": record.quantity,
        "price": record.price,
        "fees": record.fees,
        "type": record.transaction_type,
        "subtype": record.subtype,
        "iso_currency_code": record.iso_currency_code,
        "unofficial_currency_code": record.unofficial_currency_code,
        "security_name": record.security_name,
        "security_ticker": record.security_ticker,
        "institution_name": record.institution_name,
    }


__all__ = ["api_create_investment_transactions_router", "api_serialize_investment_transaction"]
