"""Market valuation of open positions against a security price snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal

from .interfaces import Holding, Position, PositionKey, Security

_ZERO = Decimal("0")
_ONE_HUNDRED = Decimal("100")


def valuation_build_security_map(securities: Iterable[Security]) -> dict[str, Security]:
    """Build provider-id keyed security snapshot map.

    Args:
        securities: Security snapshot rows.

    Returns:
        dict[str, Security]: Securities keyed by provider security id; later rows win.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {security.id: security for security in securities}


def valuation_enrich_positions(
    positions: Mapping[PositionKey, Position],
    securities: Mapping[str, Security],
) -> list[Holding]:
    """Value every open position and derive gain/loss metrics.

    A position whose security is missing from the snapshot, or whose close price
    is unknown, is valued at zero rather than dropped.

    Args:
        positions: Open positions keyed by position key.
        securities: Security snapshot keyed by provider security id.

    Returns:
        list[Holding]: One holding per position, in position map order.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    return [valuation_build_holding(position, securities.get(position.security_id)) for position in positions.values()]


def valuation_build_holding(position: Position, security: Security | None) -> Holding:
    """Build one valued holding from an open position.

    Args:
        position: Open position.
        security: Matching security snapshot entry, or None when unknown.

    Returns:
        Holding: Valued holding.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    current_price = _ZERO
    security_name = position.security_name
    security_ticker = position.security_ticker
    if security is not None:
        if security.close_price is not None:
            current_price = security.close_price
        security_name = security.name or security_name
        security_ticker = security.ticker_symbol or security_ticker

    current_value = position.quantity * current_price
    gain_loss = current_value - position.cost_basis
    if position.cost_basis > _ZERO:
        gain_loss_percent = gain_loss / position.cost_basis * _ONE_HUNDRED
    else:
        gain_loss_percent = _ZERO

    return Holding(
        security_id=position.security_id,
        security_name=security_name,
        security_ticker=security_ticker,
        quantity=position.quantity,
        cost_basis=position.cost_basis,
        current_price=current_price,
        current_value=current_value,
        gain_loss=gain_loss,
        gain_loss_percent=gain_loss_percent,
        institution_name=position.institution_name,
        account_id=position.account_id,
        currency_code=position.currency_code,
    )


__all__ = ["valuation_build_holding", "valuation_build_security_map", "valuation_enrich_positions"]
