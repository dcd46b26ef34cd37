from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from phone_quote.domain.bulk_adjustment import (
    AdjustmentMode,
    AdjustmentTarget,
    BulkAdjustmentReport,
    BulkAdjustmentSpec,
    EditableKind,
)
from phone_quote.domain.errors import ValidationError
from phone_quote.entrypoints.http.dtos.bulk_adjustment import (
    AdjustmentOutcomeDTO,
    BulkAdjustmentRequestDTO,
    BulkAdjustmentResponseDTO,
)

_SIGNED_INT = re.compile(r"^[+-]?\d+$")


class BulkAdjustmentMapper:
    """Maps between REST DTOs and domain models for bulk adjustments."""

    @staticmethod
    def to_domain_spec(dto: BulkAdjustmentRequestDTO) -> BulkAdjustmentSpec:
        """
        Converts the request DTO to a BulkAdjustmentSpec.

        Handles delta string conversion at the boundary:
        - percentage: string -> Decimal
        - fixed: string -> int cents

        Raises:
            ValidationError: If a delta cannot be converted
        """
        mode = AdjustmentMode(dto.mode)
        errors: list[dict[str, str]] = []
        deltas: dict[str, Decimal | int] = {}

        if mode is not AdjustmentMode.CUSTOM_OVERRIDE:
            for field, raw in dto.deltas.items():
                raw = raw.strip()
                if mode is AdjustmentMode.PERCENTAGE:
                    try:
                        percent = Decimal(raw)
                    except (InvalidOperation, ValueError):
                        percent = None
                    if percent is None or not percent.is_finite():
                        errors.append(
                            {
                                "field": f"deltas.{field}",
                                "message": f"Must be a valid decimal: {raw}",
                                "code": "INVALID_DECIMAL",
                            }
                        )
                        continue
                    deltas[field] = percent
                elif _SIGNED_INT.match(raw):
                    deltas[field] = int(raw)
                else:
                    errors.append(
                        {
                            "field": f"deltas.{field}",
                            "message": f"Must be a signed integer number of cents: {raw}",
                            "code": "INVALID_INTEGER",
                        }
                    )

        if errors:
            raise ValidationError(errors=errors)

        overrides = {
            AdjustmentTarget(entity_id=o.entity_id, store_id=o.store_id, field=o.field): o.value_cents
            for o in dto.overrides
        }

        return BulkAdjustmentSpec(
            kind=EditableKind(dto.kind),
            mode=mode,
            entity_ids=tuple(dto.entity_ids),
            fields=tuple(dto.fields),
            store_ids=tuple(dto.store_ids),
            deltas=deltas,
            overrides=overrides,
        )

    @staticmethod
    def to_response(report: BulkAdjustmentReport) -> BulkAdjustmentResponseDTO:
        return BulkAdjustmentResponseDTO(
            total=report.total,
            succeeded=report.succeeded,
            failed=report.failed,
            summary=report.summary(),
            outcomes=[
                AdjustmentOutcomeDTO(
                    entity_id=outcome.target.entity_id,
                    store_id=outcome.target.store_id,
                    field=outcome.target.field,
                    ok=outcome.ok,
                    previous_value_cents=outcome.previous_value_cents,
                    new_value_cents=outcome.new_value_cents,
                    error=outcome.error,
                )
                for outcome in report.outcomes
            ],
        )
