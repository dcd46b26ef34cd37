"""PostgreSQL implementation of the pricing configuration ports."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from phone_quote.domain.bulk_adjustment import AdjustmentTarget, EditableKind
from phone_quote.domain.errors import InternalError, ValidationError
from phone_quote.domain.rate_table import RateTable
from phone_quote.domain.trade_in import DamageDeduction, TradeInRange
from phone_quote.infra.db.models.pricing import (
    DamageDeductionRow,
    ProductPriceRow,
    RateTableRow,
    TradeInRangeRow,
)
from phone_quote.ports.pricing_config_repository import (
    EditableValueRepository,
    PricingConfigRepository,
)

_TRADE_IN_COLUMNS = {"min_value": "min_value_cents", "max_value": "max_value_cents"}


class PostgresPricingConfigRepository(PricingConfigRepository, EditableValueRepository):
    """
    PostgreSQL implementation of the pricing configuration ports.

    - Uses SQLAlchemy ORM for database access
    - Converts rows (infrastructure) to frozen domain objects
    - Writes go through the session; commit/rollback is owned by the
      session scope (``get_session``)
    - Each write runs in its own savepoint; database errors on a write
      surface as ``InternalError`` so a bulk batch can record and move on
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # PricingConfigRepository
    # ------------------------------------------------------------------

    def get_rate_table(self, rate_table_id: str) -> RateTable | None:
        row = self._session.get(RateTableRow, rate_table_id)
        return self._rate_table_to_domain(row) if row else None

    def list_rate_tables(self, store_id: str) -> list[RateTable]:
        query = (
            select(RateTableRow)
            .where(RateTableRow.active.is_(True))
            .where(RateTableRow.store_ids.contains([store_id]))
            .order_by(RateTableRow.name)
        )
        rows = self._session.execute(query).scalars().all()
        return [self._rate_table_to_domain(row) for row in rows]

    def get_product_price(self, product_id: str, store_id: str) -> int | None:
        row = self._session.get(ProductPriceRow, (product_id, store_id))
        return row.price_cents if row else None

    def get_trade_in_range(self, device_model_id: str, store_id: str) -> TradeInRange | None:
        row = self._find_trade_in_row(device_model_id, store_id)
        return self._trade_in_to_domain(row) if row else None

    def list_damage_deductions(self, ids: Sequence[str] | None = None) -> list[DamageDeduction]:
        query = select(DamageDeductionRow).order_by(DamageDeductionRow.position, DamageDeductionRow.id)
        if ids is not None:
            if not ids:
                return []
            query = query.where(DamageDeductionRow.id.in_(list(ids)))
        rows = self._session.execute(query).scalars().all()
        return [
            DamageDeduction(id=row.id, name=row.name, discount_cents=row.discount_cents)
            for row in rows
        ]

    # ------------------------------------------------------------------
    # EditableValueRepository
    # ------------------------------------------------------------------

    def get_value(self, kind: EditableKind, target: AdjustmentTarget) -> int | None:
        if kind is EditableKind.PRODUCT:
            row = self._session.get(ProductPriceRow, (target.entity_id, target.store_id))
            return row.price_cents if row else None

        if kind is EditableKind.TRADE_IN:
            trade_in_row = self._find_trade_in_row(target.entity_id, target.store_id or "")
            if trade_in_row is None:
                return None
            return getattr(trade_in_row, _TRADE_IN_COLUMNS[target.field])

        damage_row = self._session.get(DamageDeductionRow, target.entity_id)
        return damage_row.discount_cents if damage_row else None

    def set_value(self, kind: EditableKind, target: AdjustmentTarget, value_cents: int) -> None:
        row: ProductPriceRow | TradeInRangeRow | DamageDeductionRow | None
        if kind is EditableKind.PRODUCT:
            row = self._session.get(ProductPriceRow, (target.entity_id, target.store_id))
            column = "price_cents"
        elif kind is EditableKind.TRADE_IN:
            row = self._find_trade_in_row(target.entity_id, target.store_id or "")
            column = _TRADE_IN_COLUMNS[target.field]
        else:
            row = self._session.get(DamageDeductionRow, target.entity_id)
            column = "discount_cents"

        if row is None:
            raise ValidationError(f"Unknown {kind.value} target '{target.entity_id}'")

        # One savepoint per target
        try:
            with self._session.begin_nested():
                setattr(row, column, value_cents)
                self._session.flush()
        except SQLAlchemyError as exc:
            raise InternalError(
                f"Could not save {kind.value} '{target.entity_id}'",
                store_id=target.store_id,
                field=target.field,
                error_type=type(exc).__name__,
            )

    # ------------------------------------------------------------------
    # Row conversion
    # ------------------------------------------------------------------

    def _find_trade_in_row(self, device_model_id: str, store_id: str) -> TradeInRangeRow | None:
        query = select(TradeInRangeRow).where(
            TradeInRangeRow.device_model_id == device_model_id,
            TradeInRangeRow.store_id == store_id,
        )
        return self._session.execute(query).scalar_one_or_none()

    def _rate_table_to_domain(self, row: RateTableRow) -> RateTable:
        return RateTable(
            id=row.id,
            name=row.name,
            store_ids=frozenset(row.store_ids),
            max_installments=row.max_installments,
            credit_rates={rate.installments: rate.fee_percent for rate in row.rates},
            debit_rate=row.debit_rate,  # Already Decimal from NUMERIC column
            accepts_debit=row.accepts_debit,
            accepts_credit=row.accepts_credit,
            active=row.active,
        )

    def _trade_in_to_domain(self, row: TradeInRangeRow) -> TradeInRange:
        return TradeInRange(
            device_model_id=row.device_model_id,
            store_id=row.store_id,
            min_value_cents=row.min_value_cents,
            max_value_cents=row.max_value_cents,
            name=row.name,
            active=row.active,
        )
