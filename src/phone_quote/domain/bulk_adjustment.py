from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping

from phone_quote.domain.errors import ValidationError
from phone_quote.domain.money import Money


class BulkAdjustmentRejected(ValidationError):
    """Raised when a batch is rejected before any value is touched."""

    pass


class AdjustmentMode(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    CUSTOM_OVERRIDE = "custom_override"


class EditableKind(str, Enum):
    PRODUCT = "product"
    TRADE_IN = "trade_in"
    DAMAGE = "damage"


EDITABLE_FIELDS: dict[EditableKind, tuple[str, ...]] = {
    EditableKind.PRODUCT: ("price",),
    EditableKind.TRADE_IN: ("min_value", "max_value"),
    EditableKind.DAMAGE: ("discount",),
}

# Damage discounts are global; everything else is priced per store
STORE_SCOPED_KINDS = frozenset({EditableKind.PRODUCT, EditableKind.TRADE_IN})


@dataclass(frozen=True, slots=True)
class AdjustmentTarget:
    entity_id: str
    store_id: str | None
    field: str


@dataclass(frozen=True, slots=True)
class BulkAdjustmentSpec:
    """
    One bulk edit: a mode, the fields to touch, and the entity x store selection.

    ``deltas`` holds one value per targeted field:
    - percentage mode: percent as Decimal (``Decimal("-10")`` is a 10% discount)
    - fixed mode: signed cents as int

    ``overrides`` (custom mode only) maps each target to its literal new value.
    """

    kind: EditableKind
    mode: AdjustmentMode
    entity_ids: tuple[str, ...]
    fields: tuple[str, ...] = ()
    store_ids: tuple[str, ...] = ()
    deltas: Mapping[str, Decimal | int] = field(default_factory=dict)
    overrides: Mapping[AdjustmentTarget, int] = field(default_factory=dict)

    @property
    def is_store_scoped(self) -> bool:
        return self.kind in STORE_SCOPED_KINDS

    def validate(self) -> None:
        """
        Validate the selection before any value is read or written.

        Raises:
            BulkAdjustmentRejected: If the selection is empty or inconsistent
        """
        errors: list[dict[str, str]] = []
        allowed = EDITABLE_FIELDS[self.kind]

        if not self.entity_ids:
            errors.append(
                {"field": "entity_ids", "message": "Select at least one item", "code": "EMPTY_SELECTION"}
            )
        if self.is_store_scoped and not self.store_ids:
            errors.append(
                {"field": "store_ids", "message": "Select at least one store", "code": "EMPTY_SELECTION"}
            )

        unknown = [f for f in self.fields if f not in allowed]
        if unknown:
            errors.append(
                {
                    "field": "fields",
                    "message": f"Fields {unknown} cannot be edited on {self.kind.value}; "
                    f"allowed: {list(allowed)}",
                    "code": "INVALID_FIELD",
                }
            )

        if self.mode is AdjustmentMode.CUSTOM_OVERRIDE:
            if not self.overrides:
                errors.append(
                    {"field": "overrides", "message": "Provide at least one value", "code": "EMPTY_SELECTION"}
                )
        else:
            if not self.fields:
                errors.append(
                    {"field": "fields", "message": "Select at least one field", "code": "EMPTY_SELECTION"}
                )
            missing = [f for f in self.fields if f in allowed and f not in self.deltas]
            if missing:
                errors.append(
                    {
                        "field": "deltas",
                        "message": f"Provide a value for fields {missing}",
                        "code": "MISSING_DELTA",
                    }
                )

        if errors:
            raise BulkAdjustmentRejected(errors=errors)

    def targets(self) -> list[AdjustmentTarget]:
        """
        Expand the selection into independent (entity, store, field) targets.

        Order: entity, then store, then field, as selected. In custom mode only
        targets that carry an override are returned.
        """
        stores: tuple[str | None, ...] = self.store_ids if self.is_store_scoped else (None,)
        if self.mode is AdjustmentMode.CUSTOM_OVERRIDE:
            return [t for t in self.overrides if self._selects(t)]
        return [
            AdjustmentTarget(entity_id=entity_id, store_id=store_id, field=field_name)
            for entity_id in self.entity_ids
            for store_id in stores
            for field_name in self.fields
        ]

    def _selects(self, target: AdjustmentTarget) -> bool:
        if target.entity_id not in self.entity_ids:
            return False
        if self.fields and target.field not in self.fields:
            return False
        if target.field not in EDITABLE_FIELDS[self.kind]:
            return False
        if self.is_store_scoped:
            return target.store_id in self.store_ids
        return True


@dataclass(frozen=True, slots=True)
class AdjustmentOutcome:
    target: AdjustmentTarget
    ok: bool
    previous_value_cents: Money | None = None
    new_value_cents: Money | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class BulkAdjustmentReport:
    outcomes: tuple[AdjustmentOutcome, ...]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def summary(self) -> str:
        return f"{self.succeeded} of {self.total} succeeded"
