from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from phone_quote.domain.bulk_adjustment import AdjustmentTarget, EditableKind
from phone_quote.domain.errors import ValidationError
from phone_quote.domain.rate_table import RateTable
from phone_quote.domain.trade_in import DamageDeduction, TradeInRange
from phone_quote.ports.pricing_config_repository import (
    EditableValueRepository,
    PricingConfigRepository,
)

_TRADE_IN_FIELDS = {"min_value": "min_value_cents", "max_value": "max_value_cents"}


class InMemoryPricingConfigRepository(PricingConfigRepository, EditableValueRepository):
    """
    Canonical contract implementation for tests.

    - Rate tables and damage deductions keep insertion order
    - Product prices are keyed by (product_id, store_id)
    - Trade-in ranges are keyed by (device_model_id, store_id)
    - Writes replace frozen domain objects rather than mutating them
    """

    def __init__(
        self,
        rate_tables: list[RateTable] | None = None,
        product_prices: dict[tuple[str, str], int] | None = None,
        trade_in_ranges: list[TradeInRange] | None = None,
        damage_deductions: list[DamageDeduction] | None = None,
    ) -> None:
        self._rate_tables = {table.id: table for table in rate_tables or []}
        self._product_prices = dict(product_prices or {})
        self._trade_in_ranges = {
            (r.device_model_id, r.store_id): r for r in trade_in_ranges or []
        }
        self._damage_deductions = {d.id: d for d in damage_deductions or []}

    # ------------------------------------------------------------------
    # PricingConfigRepository
    # ------------------------------------------------------------------

    def get_rate_table(self, rate_table_id: str) -> RateTable | None:
        return self._rate_tables.get(rate_table_id)

    def list_rate_tables(self, store_id: str) -> list[RateTable]:
        tables = [
            table
            for table in self._rate_tables.values()
            if table.active and table.covers_store(store_id)
        ]
        return sorted(tables, key=lambda table: table.name)

    def get_product_price(self, product_id: str, store_id: str) -> int | None:
        return self._product_prices.get((product_id, store_id))

    def get_trade_in_range(self, device_model_id: str, store_id: str) -> TradeInRange | None:
        return self._trade_in_ranges.get((device_model_id, store_id))

    def list_damage_deductions(self, ids: Sequence[str] | None = None) -> list[DamageDeduction]:
        if ids is None:
            return list(self._damage_deductions.values())
        wanted = set(ids)
        return [d for d in self._damage_deductions.values() if d.id in wanted]

    # ------------------------------------------------------------------
    # EditableValueRepository
    # ------------------------------------------------------------------

    def get_value(self, kind: EditableKind, target: AdjustmentTarget) -> int | None:
        if kind is EditableKind.PRODUCT:
            return self._product_prices.get((target.entity_id, target.store_id or ""))

        if kind is EditableKind.TRADE_IN:
            trade_in_range = self._trade_in_ranges.get((target.entity_id, target.store_id or ""))
            if trade_in_range is None:
                return None
            return getattr(trade_in_range, _TRADE_IN_FIELDS[target.field])

        deduction = self._damage_deductions.get(target.entity_id)
        return deduction.discount_cents if deduction else None

    def set_value(self, kind: EditableKind, target: AdjustmentTarget, value_cents: int) -> None:
        if self.get_value(kind, target) is None:
            raise ValidationError(f"Unknown {kind.value} target '{target.entity_id}'")

        if kind is EditableKind.PRODUCT:
            self._product_prices[(target.entity_id, target.store_id or "")] = value_cents
        elif kind is EditableKind.TRADE_IN:
            key = (target.entity_id, target.store_id or "")
            self._trade_in_ranges[key] = replace(
                self._trade_in_ranges[key], **{_TRADE_IN_FIELDS[target.field]: value_cents}
            )
        else:
            self._damage_deductions[target.entity_id] = replace(
                self._damage_deductions[target.entity_id], discount_cents=value_cents
            )
