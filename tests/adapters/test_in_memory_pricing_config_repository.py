"""Contract tests for InMemoryPricingConfigRepository."""

from __future__ import annotations

from decimal import Decimal

import pytest

from phone_quote.adapters.in_memory_pricing_config_repository import (
    InMemoryPricingConfigRepository,
)
from phone_quote.domain.bulk_adjustment import AdjustmentTarget, EditableKind
from phone_quote.domain.errors import ValidationError
from phone_quote.domain.rate_table import RateTable
from phone_quote.domain.trade_in import DamageDeduction, TradeInRange


@pytest.fixture
def repo() -> InMemoryPricingConfigRepository:
    return InMemoryPricingConfigRepository(
        rate_tables=[
            RateTable("stone-castanhal", "Stone", frozenset({"castanhal"}), 12, {2: Decimal("2.5")}),
            RateTable("rede-castanhal", "Rede", frozenset({"castanhal", "belem"}), 18),
        ],
        product_prices={("1", "castanhal"): 999_900},
        trade_in_ranges=[TradeInRange("1", "castanhal", 750_000, 850_000)],
        damage_deductions=[
            DamageDeduction("display-broken", "Display Quebrado", 45_000),
            DamageDeduction("battery-drain", "Bateria Vicia Rápido", 20_000),
        ],
    )


# ==============================================================================
# Reads
# ==============================================================================


def test_get_rate_table(repo: InMemoryPricingConfigRepository) -> None:
    assert repo.get_rate_table("stone-castanhal").name == "Stone"
    assert repo.get_rate_table("missing") is None


def test_list_rate_tables_filters_by_store(repo: InMemoryPricingConfigRepository) -> None:
    assert [t.id for t in repo.list_rate_tables("belem")] == ["rede-castanhal"]


def test_get_product_price(repo: InMemoryPricingConfigRepository) -> None:
    assert repo.get_product_price("1", "castanhal") == 999_900
    assert repo.get_product_price("1", "belem") is None


def test_get_trade_in_range(repo: InMemoryPricingConfigRepository) -> None:
    assert repo.get_trade_in_range("1", "castanhal").max_value_cents == 850_000
    assert repo.get_trade_in_range("1", "belem") is None


def test_list_damage_deductions_keeps_order(repo: InMemoryPricingConfigRepository) -> None:
    assert [d.id for d in repo.list_damage_deductions()] == ["display-broken", "battery-drain"]


def test_list_damage_deductions_by_ids(repo: InMemoryPricingConfigRepository) -> None:
    assert [d.id for d in repo.list_damage_deductions(["battery-drain", "nope"])] == ["battery-drain"]
    assert repo.list_damage_deductions([]) == []


# ==============================================================================
# Editable values
# ==============================================================================


def test_get_and_set_product_price(repo: InMemoryPricingConfigRepository) -> None:
    target = AdjustmentTarget("1", "castanhal", "price")

    repo.set_value(EditableKind.PRODUCT, target, 1_049_900)

    assert repo.get_value(EditableKind.PRODUCT, target) == 1_049_900
    assert repo.get_product_price("1", "castanhal") == 1_049_900


def test_set_trade_in_bound_replaces_frozen_range(repo: InMemoryPricingConfigRepository) -> None:
    original = repo.get_trade_in_range("1", "castanhal")
    target = AdjustmentTarget("1", "castanhal", "min_value")

    repo.set_value(EditableKind.TRADE_IN, target, 700_000)

    assert repo.get_trade_in_range("1", "castanhal").min_value_cents == 700_000
    assert original.min_value_cents == 750_000


def test_set_damage_discount(repo: InMemoryPricingConfigRepository) -> None:
    target = AdjustmentTarget("display-broken", None, "discount")

    repo.set_value(EditableKind.DAMAGE, target, 50_000)

    assert repo.get_value(EditableKind.DAMAGE, target) == 50_000


def test_get_value_of_unknown_target_is_none(repo: InMemoryPricingConfigRepository) -> None:
    assert repo.get_value(EditableKind.PRODUCT, AdjustmentTarget("9", "castanhal", "price")) is None
    assert repo.get_value(EditableKind.TRADE_IN, AdjustmentTarget("9", "castanhal", "max_value")) is None
    assert repo.get_value(EditableKind.DAMAGE, AdjustmentTarget("9", None, "discount")) is None


def test_set_value_of_unknown_target_raises(repo: InMemoryPricingConfigRepository) -> None:
    with pytest.raises(ValidationError, match="Unknown product target '9'"):
        repo.set_value(EditableKind.PRODUCT, AdjustmentTarget("9", "castanhal", "price"), 1)
