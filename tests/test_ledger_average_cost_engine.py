"""Regression tests for average-cost position accumulation."""

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal

from holdings_ledger.ledger.average_cost_engine import average_cost_accumulate, average_cost_apply_transaction
from holdings_ledger.ledger.interfaces import InvestmentTransaction
from holdings_ledger.ledger.normalizer import ledger_normalize_transactions

_KEY = ("acct-1", "sec-1")


def _transaction(
    transaction_id: str,
    transaction_type: str,
    quantity: str | None = None,
    price: str | None = None,
    fees: str | None = None,
    transaction_date: date = date(2025, 1, 1),
    currency_code: str | None = "USD",
    security_id: str = "sec-1",
) -> InvestmentTransaction:
    return InvestmentTransaction(
        id=transaction_id,
        date=transaction_date,
        account_id="acct-1",
        security_id=security_id,
        type=transaction_type,
        quantity=None if quantity is None else Decimal(quantity),
        price=None if price is None else Decimal(price),
        fees=None if fees is None else Decimal(fees),
        currency_code=currency_code,
    )


def _replay(transactions: list[InvestmentTransaction]):
    return average_cost_accumulate(ledger_normalize_transactions(transactions))


def test_average_cost_partial_sell_keeps_unit_cost() -> None:
    """Reduce cost basis proportionally at the pre-sell average cost.

    Returns:
        None: Assertions validate average-cost reduction.

    Raises:
        AssertionError: Raised when partial sell miscomputes remaining basis.
    """

    positions = _replay(
        [
            _transaction("t-1", "buy", quantity="10", price="10", transaction_date=date(2025, 1, 1)),
            _transaction("t-2", "sell", quantity="5", price="30", transaction_date=date(2025, 1, 2)),
        ]
    )

    assert positions[_KEY].quantity == Decimal("5")
    assert positions[_KEY].cost_basis == Decimal("50")


def test_average_cost_blends_unit_cost_across_buys() -> None:
    """Blend two buys into one average unit cost before a sell.

    Returns:
        None: Assertions validate blended cost basis.

    Raises:
        AssertionError: Raised when buys are tracked as separate lots.
    """

    positions = _replay(
        [
            _transaction("t-1", "buy", quantity="10", price="10", transaction_date=date(2025, 1, 1)),
            _transaction("t-2", "buy", quantity="10", price="20", transaction_date=date(2025, 1, 2)),
            _transaction("t-3", "sell", quantity="10", transaction_date=date(2025, 1, 3)),
        ]
    )

    # Lot-level FIFO would leave 200 here.
    assert positions[_KEY].quantity == Decimal("10")
    assert positions[_KEY].cost_basis == Decimal("150")


def test_average_cost_buy_includes_fees_and_cash_folds_like_buy() -> None:
    """Add trade fees to cost basis and treat cash rows as buys.

    Returns:
        None: Assertions validate inflow handling.

    Raises:
        AssertionError: Raised when fees or cash rows are ignored.
    """

    positions = _replay(
        [
            _transaction("t-1", "buy", quantity="2", price="50", fees="1.5"),
            _transaction("t-2", "cash", quantity="3", price="1", transaction_date=date(2025, 1, 2)),
        ]
    )

    assert positions[_KEY].quantity == Decimal("5")
    assert positions[_KEY].cost_basis == Decimal("104.5")


def test_average_cost_buy_without_price_or_fees_adds_zero_cost() -> None:
    """Count missing price and fees on a buy as zero cost."""

    positions = _replay([_transaction("t-1", "buy", quantity="3")])

    assert positions[_KEY].quantity == Decimal("3")
    assert positions[_KEY].cost_basis == Decimal("0")

    topped_up = average_cost_apply_transaction(positions[_KEY], _transaction("t-2", "buy", quantity="2", price="5"))

    assert topped_up is not None
    assert topped_up.quantity == Decimal("5")
    assert topped_up.cost_basis == Decimal("10")


def test_average_cost_sell_without_inventory_is_noop() -> None:
    """Ignore sells for a key with no open position instead of going short.

    Returns:
        None: Assertions validate no-op sell semantics.

    Raises:
        AssertionError: Raised when a sell opens a position or raises.
    """

    assert _replay([_transaction("t-1", "sell", quantity="5", price="10")]) == {}
    assert average_cost_apply_transaction(None, _transaction("t-1", "sell", quantity="5")) is None


def test_average_cost_fee_without_quantity_is_inert() -> None:
    """Leave cost basis unchanged for fee rows without a quantity.

    Returns:
        None: Assertions validate fee asymmetry.

    Raises:
        AssertionError: Raised when quantity-less fee rows change cost basis.
    """

    positions = _replay(
        [
            _transaction("t-1", "buy", quantity="4", price="25"),
            _transaction("t-2", "fee", fees="7", transaction_date=date(2025, 1, 2)),
        ]
    )

    assert positions[_KEY].cost_basis == Decimal("100")


def test_average_cost_fee_with_quantity_adds_absolute_fee() -> None:
    """Add the absolute fee amount when the fee row carries a quantity.

    Returns:
        None: Assertions validate fee cost-basis adjustment.

    Raises:
        AssertionError: Raised when signed fees reduce cost basis.
    """

    positions = _replay(
        [
            _transaction("t-1", "buy", quantity="4", price="25"),
            _transaction("t-2", "fee", quantity="1", fees="-7", transaction_date=date(2025, 1, 2)),
        ]
    )

    assert positions[_KEY].quantity == Decimal("4")
    assert positions[_KEY].cost_basis == Decimal("107")


def test_average_cost_inert_types_do_not_change_position() -> None:
    """Keep quantity and cost basis for transfer, dividend, interest, and other rows.

    Returns:
        None: Assertions validate inert transaction types.

    Raises:
        AssertionError: Raised when inert rows change position state.
    """

    transactions = [_transaction("t-0", "buy", quantity="3", price="10")]
    for offset, transaction_type in enumerate(["transfer", "dividend", "interest", "other", "split"], start=1):
        transactions.append(
            _transaction(
                f"t-{offset}",
                transaction_type,
                quantity="100",
                price="99",
                fees="5",
                transaction_date=date(2025, 1, 1) + timedelta(days=offset),
            )
        )

    positions = _replay(transactions)

    assert positions[_KEY].quantity == Decimal("3")
    assert positions[_KEY].cost_basis == Decimal("30")


def test_average_cost_reopen_after_full_exit_starts_fresh() -> None:
    """Forget closed cost history when a later buy re-opens the key.

    Returns:
        None: Assertions validate close-then-reopen semantics.

    Raises:
        AssertionError: Raised when prior cost basis is resurrected.
    """

    closed = _replay(
        [
            _transaction("t-1", "buy", quantity="10", price="10", transaction_date=date(2025, 1, 1)),
            _transaction("t-2", "sell", quantity="10", transaction_date=date(2025, 1, 2)),
        ]
    )
    reopened = _replay(
        [
            _transaction("t-1", "buy", quantity="10", price="10", transaction_date=date(2025, 1, 1)),
            _transaction("t-2", "sell", quantity="10", transaction_date=date(2025, 1, 2)),
            _transaction("t-3", "buy", quantity="4", price="20", transaction_date=date(2025, 1, 3)),
        ]
    )

    assert closed == {}
    assert reopened[_KEY].quantity == Decimal("4")
    assert reopened[_KEY].cost_basis == Decimal("80")


def test_average_cost_oversell_closes_position_and_drops_basis() -> None:
    """Remove the key when a sell overshoots the open quantity.

    Returns:
        None: Assertions validate oversell removal.

    Raises:
        AssertionError: Raised when negative quantity survives.
    """

    positions = _replay(
        [
            _transaction("t-1", "buy", quantity="3", price="10", transaction_date=date(2025, 1, 1)),
            _transaction("t-2", "sell", quantity="5", transaction_date=date(2025, 1, 2)),
            _transaction("t-3", "fee", quantity="1", fees="2", transaction_date=date(2025, 1, 3)),
        ]
    )

    assert positions == {}


def test_average_cost_currency_refreshes_from_latest_transaction() -> None:
    """Take the currency of the most recently processed row, defaulting when absent.

    Returns:
        None: Assertions validate currency refresh.

    Raises:
        AssertionError: Raised when currency is fixed at position creation.
    """

    positions = _replay(
        [
            _transaction("t-1", "buy", quantity="1", price="10", currency_code="USD"),
            _transaction("t-2", "dividend", currency_code="CAD", transaction_date=date(2025, 1, 2)),
        ]
    )
    defaulted = average_cost_accumulate(
        ledger_normalize_transactions([_transaction("t-1", "buy", quantity="1", price="10", currency_code=None)]),
        default_currency_code="EUR",
    )

    assert positions[_KEY].currency_code == "CAD"
    assert defaulted[_KEY].currency_code == "EUR"


def test_average_cost_decimal_accumulation_has_no_float_drift() -> None:
    """Accumulate many fractional buys exactly.

    Returns:
        None: Assertions validate decimal precision.

    Raises:
        AssertionError: Raised when accumulation drifts.
    """

    transactions = [
        _transaction(f"t-{index:04d}", "buy", quantity="0.1", price="0.1", transaction_date=date(2025, 1, 1))
        for index in range(1000)
    ]

    positions = _replay(transactions)

    assert positions[_KEY].quantity == Decimal("100.0")
    assert positions[_KEY].cost_basis == Decimal("10.00")


def test_average_cost_randomized_ledgers_never_emit_non_positive_quantity() -> None:
    """Property: no replayed ledger leaves an open position with quantity <= 0.

    Returns:
        None: Assertions validate the positive-quantity invariant over seeded random ledgers.

    Raises:
        AssertionError: Raised when any open position has non-positive quantity.
    """

    generator = random.Random(20250101)
    transaction_types = ["buy", "sell", "cash", "fee", "transfer", "dividend", "interest", "other"]

    for _ in range(300):
        transactions = []
        for index in range(generator.randint(0, 40)):
            transactions.append(
                _transaction(
                    f"t-{index:03d}",
                    generator.choice(transaction_types),
                    quantity=generator.choice([None, "0", str(generator.randint(-5, 20)), "0.5"]),
                    price=generator.choice([None, str(generator.randint(0, 200))]),
                    fees=generator.choice([None, "0", "-1.25", "2"]),
                    transaction_date=date(2025, 1, 1) + timedelta(days=generator.randint(0, 30)),
                    security_id=generator.choice(["sec-1", "sec-2", "sec-3"]),
                )
            )

        positions = _replay(transactions)

        for position in positions.values():
            assert position.quantity > Decimal("0")


def test_average_cost_replay_is_independent_of_input_order() -> None:
    """Produce identical positions for shuffled copies of the same ledger.

    Returns:
        None: Assertions validate date-governed determinism.

    Raises:
        AssertionError: Raised when input order changes the result.
    """

    transactions = [
        _transaction("t-1", "buy", quantity="10", price="10", transaction_date=date(2025, 1, 1)),
        _transaction("t-2", "sell", quantity="4", transaction_date=date(2025, 1, 5)),
        _transaction("t-3", "buy", quantity="6", price="30", transaction_date=date(2025, 1, 5)),
        _transaction("t-4", "fee", quantity="1", fees="3", transaction_date=date(2025, 1, 9)),
        _transaction("t-5", "sell", quantity="7", transaction_date=date(2025, 1, 12)),
        _transaction("t-6", "buy", quantity="2", price="12", transaction_date=date(2025, 1, 2), security_id="sec-2"),
    ]
    expected = _replay(transactions)

    generator = random.Random(7)
    for _ in range(25):
        shuffled = list(transactions)
        generator.shuffle(shuffled)
        assert _replay(shuffled) == expected
