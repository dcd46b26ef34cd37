"""
Unit test suite for PostgresPricingConfigRepository.

Uses a mocked Session. Tests verify:
- Lookups go through session.get / session.execute
- Rows are converted to frozen domain objects (NUMERIC stays Decimal)
- Writes set the right column and flush inside a savepoint
- Database errors on a write surface as InternalError
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from unittest.mock import MagicMock, Mock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from phone_quote.adapters.postgres_pricing_config_repository import (
    PostgresPricingConfigRepository,
)
from phone_quote.domain.bulk_adjustment import AdjustmentTarget, EditableKind
from phone_quote.domain.errors import InternalError, ValidationError
from phone_quote.domain.rate_table import RateTable
from phone_quote.domain.trade_in import TradeInRange
from phone_quote.infra.db.models.pricing import (
    DamageDeductionRow,
    InstallmentRateRow,
    ProductPriceRow,
    RateTableRow,
    TradeInRangeRow,
)


@pytest.fixture()
def mock_session() -> Mock:
    """Mock SQLAlchemy session; begin_nested() works as a context manager."""
    session = Mock(spec=Session)
    session.begin_nested.return_value = MagicMock()
    return session


@pytest.fixture()
def stone_row() -> RateTableRow:
    return RateTableRow(
        id="stone-castanhal",
        name="Stone",
        store_ids=["castanhal"],
        max_installments=3,
        debit_rate=Decimal("1.20"),
        accepts_debit=True,
        accepts_credit=True,
        active=True,
        rates=[
            InstallmentRateRow(installments=2, fee_percent=Decimal("2.50")),
            InstallmentRateRow(installments=3, fee_percent=Decimal("3.50")),
        ],
    )


@pytest.fixture()
def trade_in_row() -> TradeInRangeRow:
    return TradeInRangeRow(
        id=uuid.UUID("00000000-0000-0000-0000-000000000008"),
        device_model_id="8",
        store_id="castanhal",
        name="iPhone 12 64GB",
        min_value_cents=180_000,
        max_value_cents=240_000,
        active=True,
    )


def scalars_result(rows: list) -> Mock:
    result = Mock()
    result.scalars.return_value.all.return_value = rows
    return result


# ==============================================================================
# Rate tables
# ==============================================================================


def test_get_rate_table_converts_row(mock_session: Mock, stone_row: RateTableRow) -> None:
    mock_session.get.return_value = stone_row
    repo = PostgresPricingConfigRepository(mock_session)

    table = repo.get_rate_table("stone-castanhal")

    mock_session.get.assert_called_once_with(RateTableRow, "stone-castanhal")
    assert isinstance(table, RateTable)
    assert table.store_ids == frozenset({"castanhal"})
    assert table.credit_rates == {2: Decimal("2.50"), 3: Decimal("3.50")}
    assert table.debit_rate == Decimal("1.20")
    assert table.fee_for(3) == Decimal("3.5")


def test_get_rate_table_missing(mock_session: Mock) -> None:
    mock_session.get.return_value = None

    assert PostgresPricingConfigRepository(mock_session).get_rate_table("nope") is None


def test_list_rate_tables_filters_store_and_active(
    mock_session: Mock, stone_row: RateTableRow
) -> None:
    mock_session.execute.return_value = scalars_result([stone_row])
    repo = PostgresPricingConfigRepository(mock_session)

    tables = repo.list_rate_tables("castanhal")

    assert [t.id for t in tables] == ["stone-castanhal"]
    query = str(mock_session.execute.call_args[0][0])
    assert "rate_tables.active IS" in query
    assert "rate_tables.store_ids @>" in query
    assert "ORDER BY rate_tables.name" in query


# ==============================================================================
# Prices, trade-ins and damages
# ==============================================================================


def test_get_product_price(mock_session: Mock) -> None:
    mock_session.get.return_value = ProductPriceRow(
        product_id="3", store_id="castanhal", price_cents=599_900
    )
    repo = PostgresPricingConfigRepository(mock_session)

    assert repo.get_product_price("3", "castanhal") == 599_900
    mock_session.get.assert_called_once_with(ProductPriceRow, ("3", "castanhal"))


def test_get_product_price_missing(mock_session: Mock) -> None:
    mock_session.get.return_value = None

    assert PostgresPricingConfigRepository(mock_session).get_product_price("3", "belem") is None


def test_get_trade_in_range(mock_session: Mock, trade_in_row: TradeInRangeRow) -> None:
    mock_session.execute.return_value.scalar_one_or_none.return_value = trade_in_row
    repo = PostgresPricingConfigRepository(mock_session)

    trade_in_range = repo.get_trade_in_range("8", "castanhal")

    assert trade_in_range == TradeInRange(
        device_model_id="8",
        store_id="castanhal",
        min_value_cents=180_000,
        max_value_cents=240_000,
        name="iPhone 12 64GB",
        active=True,
    )


def test_list_damage_deductions_by_ids(mock_session: Mock) -> None:
    mock_session.execute.return_value = scalars_result(
        [DamageDeductionRow(id="display-broken", name="Display Quebrado", discount_cents=45_000, position=0)]
    )
    repo = PostgresPricingConfigRepository(mock_session)

    deductions = repo.list_damage_deductions(["display-broken"])

    assert [(d.id, d.discount_cents) for d in deductions] == [("display-broken", 45_000)]
    query = str(mock_session.execute.call_args[0][0])
    assert "damage_deductions.id IN" in query
    assert "ORDER BY damage_deductions.position, damage_deductions.id" in query


def test_list_damage_deductions_empty_ids_skips_query(mock_session: Mock) -> None:
    assert PostgresPricingConfigRepository(mock_session).list_damage_deductions([]) == []
    mock_session.execute.assert_not_called()


# ==============================================================================
# Editable values
# ==============================================================================


def test_set_product_price_updates_column_and_flushes(mock_session: Mock) -> None:
    row = ProductPriceRow(product_id="1", store_id="castanhal", price_cents=100_000)
    mock_session.get.return_value = row
    repo = PostgresPricingConfigRepository(mock_session)
    target = AdjustmentTarget("1", "castanhal", "price")

    assert repo.get_value(EditableKind.PRODUCT, target) == 100_000
    repo.set_value(EditableKind.PRODUCT, target, 110_000)

    assert row.price_cents == 110_000
    mock_session.flush.assert_called_once()
    mock_session.begin_nested.assert_called_once()


def test_set_trade_in_max_value(mock_session: Mock, trade_in_row: TradeInRangeRow) -> None:
    mock_session.execute.return_value.scalar_one_or_none.return_value = trade_in_row
    repo = PostgresPricingConfigRepository(mock_session)
    target = AdjustmentTarget("8", "castanhal", "max_value")

    assert repo.get_value(EditableKind.TRADE_IN, target) == 240_000
    repo.set_value(EditableKind.TRADE_IN, target, 250_000)

    assert trade_in_row.max_value_cents == 250_000


def test_set_damage_discount(mock_session: Mock) -> None:
    row = DamageDeductionRow(id="display-broken", name="Display Quebrado", discount_cents=45_000, position=0)
    mock_session.get.return_value = row
    repo = PostgresPricingConfigRepository(mock_session)

    repo.set_value(EditableKind.DAMAGE, AdjustmentTarget("display-broken", None, "discount"), 40_000)

    assert row.discount_cents == 40_000
    mock_session.get.assert_called_once_with(DamageDeductionRow, "display-broken")


def test_set_value_unknown_target(mock_session: Mock) -> None:
    mock_session.get.return_value = None
    repo = PostgresPricingConfigRepository(mock_session)

    with pytest.raises(ValidationError, match="Unknown product target"):
        repo.set_value(EditableKind.PRODUCT, AdjustmentTarget("9", "castanhal", "price"), 1)

    mock_session.flush.assert_not_called()
    mock_session.begin_nested.assert_not_called()


def test_set_value_database_error_becomes_internal_error(mock_session: Mock) -> None:
    """A failed flush is raised as a domain error naming the target."""
    mock_session.get.return_value = ProductPriceRow(product_id="1", store_id="castanhal", price_cents=100_000)
    mock_session.flush.side_effect = IntegrityError(
        "UPDATE product_prices", {}, Exception("violates check constraint")
    )
    repo = PostgresPricingConfigRepository(mock_session)

    with pytest.raises(InternalError, match="Could not save product '1'") as exc_info:
        repo.set_value(EditableKind.PRODUCT, AdjustmentTarget("1", "castanhal", "price"), 1)

    assert exc_info.value.context["error_type"] == "IntegrityError"
    assert exc_info.value.context["store_id"] == "castanhal"


def test_set_value_failure_leaves_savepoint_to_roll_back(mock_session: Mock) -> None:
    """The savepoint context sees the error, so only this write is undone."""
    savepoint = MagicMock()
    mock_session.begin_nested.return_value = savepoint
    mock_session.get.return_value = DamageDeductionRow(
        id="display-broken", name="Display Quebrado", discount_cents=45_000, position=0
    )
    mock_session.flush.side_effect = OperationalError("UPDATE damage_deductions", {}, Exception("gone"))
    repo = PostgresPricingConfigRepository(mock_session)

    with pytest.raises(InternalError):
        repo.set_value(EditableKind.DAMAGE, AdjustmentTarget("display-broken", None, "discount"), 1)

    exit_args = savepoint.__exit__.call_args.args
    assert exit_args[0] is OperationalError
