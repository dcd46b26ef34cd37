from fastapi import APIRouter, Depends

from phone_quote.entrypoints.http.dependencies import get_apply_bulk_adjustment_use_case
from phone_quote.entrypoints.http.dtos.bulk_adjustment import (
    BulkAdjustmentRequestDTO,
    BulkAdjustmentResponseDTO,
)
from phone_quote.entrypoints.http.mappers.bulk_adjustment_mapper import BulkAdjustmentMapper
from phone_quote.use_cases.apply_bulk_adjustment import ApplyBulkAdjustment


router = APIRouter(tags=["Bulk adjustments"])


@router.post(
    "/bulk-adjustments",
    response_model=BulkAdjustmentResponseDTO,
    summary="Adjust many prices, trade-in bounds or damage deductions at once",
    description="""
    Apply one adjustment to every selected (item × store × field).

    ## Modes
    - `percentage`: new = round_half_up(current × (1 + delta / 100)), floored at 0
    - `fixed`: new = current + delta (cents), floored at 0
    - `custom_override`: new = the value given in `overrides`, floored at 0

    ## Failure Semantics
    - The request as a whole is validated first; an empty selection, an
      unknown field or a missing delta rejects it with 422 and nothing changes
    - Each item is then applied independently; a failing item does not stop
      or roll back the others
    - The response reports every item and a summary such as "3 of 4 succeeded"

    Damage deductions are global and ignore `store_ids`.
    """,
    responses={
        200: {
            "description": "Adjustment applied (possibly with per-item failures)",
            "content": {
                "application/json": {
                    "example": {
                        "total": 2,
                        "succeeded": 1,
                        "failed": 1,
                        "summary": "1 of 2 succeeded",
                        "outcomes": [
                            {
                                "entity_id": "1",
                                "store_id": "castanhal",
                                "field": "price",
                                "ok": True,
                                "previous_value_cents": 100000,
                                "new_value_cents": 110000,
                                "error": None,
                            },
                            {
                                "entity_id": "2",
                                "store_id": "castanhal",
                                "field": "price",
                                "ok": False,
                                "previous_value_cents": None,
                                "new_value_cents": None,
                                "error": "product '2' has no price at store 'castanhal'",
                            },
                        ],
                    }
                }
            },
        },
        422: {
            "description": "Adjustment rejected before any change",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Validation failed",
                        "code": "VALIDATION_ERROR",
                        "errors": [
                            {
                                "field": "entity_ids",
                                "message": "Select at least one item",
                                "code": "EMPTY_SELECTION",
                            }
                        ],
                    }
                }
            },
        },
    },
)
def apply_bulk_adjustment(
    payload: BulkAdjustmentRequestDTO,
    use_case: ApplyBulkAdjustment = Depends(get_apply_bulk_adjustment_use_case),
) -> BulkAdjustmentResponseDTO:
    spec = BulkAdjustmentMapper.to_domain_spec(payload)

    report = use_case.execute(spec)

    return BulkAdjustmentMapper.to_response(report)
