from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from phone_quote.domain.bulk_adjustment import AdjustmentTarget, EditableKind
from phone_quote.domain.rate_table import RateTable
from phone_quote.domain.trade_in import DamageDeduction, TradeInRange


class PricingConfigRepository(ABC):
    """
    Port for the store configuration the engine reads.

    The engine itself never reaches into this store; callers (use cases that
    assemble a quote) look objects up here and pass them in explicitly.

    Contract:
        - Lookups return None when the record does not exist; callers decide
          whether that is a NotFoundError
        - Returned objects are not validated; the engine validates them on use
    """

    @abstractmethod
    def get_rate_table(self, rate_table_id: str) -> RateTable | None: ...

    @abstractmethod
    def list_rate_tables(self, store_id: str) -> list[RateTable]:
        """Active rate tables that cover a store, ordered by name."""
        ...

    @abstractmethod
    def get_product_price(self, product_id: str, store_id: str) -> int | None: ...

    @abstractmethod
    def get_trade_in_range(self, device_model_id: str, store_id: str) -> TradeInRange | None: ...

    @abstractmethod
    def list_damage_deductions(self, ids: Sequence[str] | None = None) -> list[DamageDeduction]:
        """
        Damage deductions, in catalog order.

        Args:
            ids: Restrict to these ids (unknown ids are skipped); None returns all
        """
        ...


class EditableValueRepository(ABC):
    """
    Port for the numeric fields a bulk adjustment reads and writes.

    Each (entity, store, field) target is read and written on its own; the
    underlying store offers no transaction across targets.
    """

    @abstractmethod
    def get_value(self, kind: EditableKind, target: AdjustmentTarget) -> int | None:
        """Current value in cents, or None if the target does not exist."""
        ...

    @abstractmethod
    def set_value(self, kind: EditableKind, target: AdjustmentTarget, value_cents: int) -> None:
        """
        Raises:
            DomainError: If the target is unknown or the write fails; storage
                errors are translated so the caller can record them per target
        """
        ...
