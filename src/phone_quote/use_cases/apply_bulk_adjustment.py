from __future__ import annotations

import logging
from decimal import Decimal, DecimalException

from phone_quote.domain.bulk_adjustment import (
    AdjustmentMode,
    AdjustmentOutcome,
    AdjustmentTarget,
    BulkAdjustmentReport,
    BulkAdjustmentSpec,
)
from phone_quote.domain.errors import DomainError, InvalidNumericInput
from phone_quote.domain.money import Money, ensure_money, round_cents
from phone_quote.domain.rate_table import HUNDRED
from phone_quote.ports.pricing_config_repository import EditableValueRepository

logger = logging.getLogger(__name__)


def apply_adjustment(
    spec: BulkAdjustmentSpec, current_value: Money, target: AdjustmentTarget
) -> Money:
    """
    Compute the new value for one target. Pure; never touches storage.

    - percentage: max(0, current * (1 + delta/100)), rounded half-up to cents
    - fixed:      max(0, current + delta)
    - custom:     max(0, override)

    Raises:
        InvalidNumericInput: If the current value or delta is not usable
    """
    current = ensure_money(current_value, "current_value")

    if spec.mode is AdjustmentMode.CUSTOM_OVERRIDE:
        override = spec.overrides.get(target)
        if override is None:
            raise InvalidNumericInput("No override supplied for target", field=target.field)
        if isinstance(override, bool) or not isinstance(override, int):
            raise InvalidNumericInput("override must be an integer number of cents", field=target.field)
        return max(0, override)

    delta = spec.deltas[target.field]

    if spec.mode is AdjustmentMode.PERCENTAGE:
        percent = delta if isinstance(delta, Decimal) else Decimal(str(delta))
        if not percent.is_finite():
            raise InvalidNumericInput("percentage must be finite", field=target.field)
        try:
            adjusted = Decimal(current) * (Decimal("1") + percent / HUNDRED)
        except DecimalException:
            raise InvalidNumericInput("percentage is out of range", field=target.field)
        return max(0, round_cents(adjusted, target.field))

    if isinstance(delta, bool) or not isinstance(delta, int):
        raise InvalidNumericInput("fixed delta must be an integer number of cents", field=target.field)
    return max(0, current + delta)


class ApplyBulkAdjustment:
    """
    Apply one bulk edit across every selected (entity, store, field) target.

    - The whole batch is validated before any value is read
    - Targets are processed independently; a failure on one target is
      recorded and the batch moves on
    - Nothing is rolled back: targets written before a failure stay written
    """

    def __init__(self, repository: EditableValueRepository) -> None:
        self._repository = repository

    def execute(self, spec: BulkAdjustmentSpec) -> BulkAdjustmentReport:
        """
        Raises:
            BulkAdjustmentRejected: If the selection is empty or inconsistent
        """
        spec.validate()

        outcomes = [self._apply_one(spec, target) for target in spec.targets()]
        report = BulkAdjustmentReport(outcomes=tuple(outcomes))

        logger.info(
            "Bulk adjustment applied",
            extra={
                "kind": spec.kind.value,
                "mode": spec.mode.value,
                "succeeded": report.succeeded,
                "total": report.total,
            },
        )
        return report

    def _apply_one(self, spec: BulkAdjustmentSpec, target: AdjustmentTarget) -> AdjustmentOutcome:
        try:
            current = self._repository.get_value(spec.kind, target)
            if current is None:
                reason = f"{spec.kind.value} '{target.entity_id}' has no {target.field}"
                if target.store_id is not None:
                    reason += f" at store '{target.store_id}'"
                return self._failed(target, reason)

            new_value = apply_adjustment(spec, current, target)
            self._repository.set_value(spec.kind, target, new_value)
        except DomainError as exc:
            return self._failed(target, exc.message)

        return AdjustmentOutcome(
            target=target,
            ok=True,
            previous_value_cents=current,
            new_value_cents=new_value,
        )

    def _failed(self, target: AdjustmentTarget, reason: str) -> AdjustmentOutcome:
        logger.warning(
            "Bulk adjustment item failed",
            extra={
                "entity_id": target.entity_id,
                "store_id": target.store_id,
                "field": target.field,
                "reason": reason,
            },
        )
        return AdjustmentOutcome(target=target, ok=False, error=reason)
