from fastapi import APIRouter, Depends

from phone_quote.entrypoints.http.dependencies import get_assess_store_trade_in_use_case
from phone_quote.entrypoints.http.dtos.trade_in import (
    TradeInValuationRequestDTO,
    TradeInValuationResponseDTO,
)
from phone_quote.entrypoints.http.mappers.trade_in_mapper import TradeInMapper
from phone_quote.use_cases.assess_store_trade_in import AssessStoreTradeIn


router = APIRouter(tags=["Trade-ins"])


@router.post(
    "/trade-ins/valuation",
    response_model=TradeInValuationResponseDTO,
    summary="Value a used device taken as trade-in",
    description="""
    Suggest a credit range for a used phone and judge the credit the seller proposes.

    ## Suggested Range
    - min = max(0, store minimum - total damage deductions)
    - max = max(0, store maximum - total damage deductions)

    ## Rules (first failing rule wins)
    1. Value must not be negative (`INVALID_VALUE`)
    2. Value must not exceed the store maximum (`EXCEEDS_STORE_MAXIMUM`)
    3. Value must not exceed the damage-adjusted maximum (`EXCEEDS_ADJUSTED_MAXIMUM`)
    4. A positive value must reach the store minimum (`BELOW_STORE_MINIMUM`)

    A value of 0 means "no trade-in" and always passes. A rejected value is
    a normal 200 response with `ok: false`, not an error.
    """,
    responses={
        200: {
            "description": "Assessment computed",
            "content": {
                "application/json": {
                    "example": {
                        "device_model_id": "8",
                        "store_id": "castanhal",
                        "min_value_cents": 150000,
                        "max_value_cents": 250000,
                        "total_deduction_cents": 45000,
                        "suggested_min_cents": 105000,
                        "suggested_max_cents": 205000,
                        "ok": False,
                        "violation": "EXCEEDS_ADJUSTED_MAXIMUM",
                        "message": "Com os descontos selecionados, o valor máximo permitido é R$ 2.050,00",
                        "limit_cents": 205000,
                    }
                }
            },
        },
        404: {
            "description": "No trade-in range for the device at the store, or unknown damage",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "TradeInRange with identifier '8' not found",
                        "code": "NOT_FOUND",
                    }
                }
            },
        },
    },
)
def value_trade_in(
    payload: TradeInValuationRequestDTO,
    use_case: AssessStoreTradeIn = Depends(get_assess_store_trade_in_use_case),
) -> TradeInValuationResponseDTO:
    selection = TradeInMapper.to_selection(payload)

    assessment = use_case.execute(payload.store_id, selection)

    return TradeInMapper.to_response(assessment)
