from fastapi import APIRouter, Depends

from phone_quote.entrypoints.http.dependencies import (
    get_build_store_quote_use_case,
    get_calculate_quote_use_case,
    get_list_rate_tables_use_case,
    get_quote_label,
)
from phone_quote.entrypoints.http.dtos.quote import (
    QuoteRequestDTO,
    QuoteResponseDTO,
    RateTableListResponseDTO,
    StoreQuoteRequestDTO,
    StoreQuoteResponseDTO,
)
from phone_quote.entrypoints.http.mappers.quote_mapper import QuoteMapper
from phone_quote.use_cases.build_store_quote import BuildStoreQuote
from phone_quote.use_cases.calculate_quote import CalculateQuote
from phone_quote.use_cases.list_store_rate_tables import ListStoreRateTables


router = APIRouter(tags=["Quotes"])


@router.post(
    "/quotes",
    response_model=QuoteResponseDTO,
    summary="Calculate an installment quote",
    description="""
    Calculate the full installment schedule for a phone sale.

    ## Monetary Values
    - Amounts are integer cents (`price_cents: 600000` is R$ 6.000,00)
    - Or seller-typed text (`price_text: "6.000,00"`), parsed on the server
    - Fees are percent decimal strings (`"3.5"` is 3.5%)

    ## Calculation
    - Base = max(0, price - down_payment - trade_in_credit)
    - Each credit option grosses the base up so the store nets the base:
      total = base / (1 - fee / 100)
    - Per-installment value = total / installments, rounded half-up to cents
    - Débito is always first and never carries a fee

    ## Example
    ```
    POST /v1/quotes
    {
        "price_cents": 600000,
        "rate_table": {"max_installments": 3, "credit_rates": {"3": "3.5"}},
        "product_name": "iPhone 15 128GB"
    }
    ```
    """,
    responses={
        200: {
            "description": "Quote computed",
            "content": {
                "application/json": {
                    "example": {
                        "price_cents": 600000,
                        "down_payment_cents": 0,
                        "trade_in_credit_cents": 0,
                        "base_value_cents": 600000,
                        "options": [
                            {
                                "label": "3x",
                                "installment_count": 3,
                                "fee_percent": "3.5",
                                "per_installment_value_cents": 207254,
                                "total_financed_value_cents": 621762,
                                "includes_down_payment": False,
                                "value_text": "R$ 2.072,54",
                                "total_text": "R$ 6.217,62",
                                "payment_text": "3x de R$ 2.072,54",
                            }
                        ],
                        "summary": {
                            "total_product_cents": 600000,
                            "total_discount_cents": 0,
                            "total_to_finance_cents": 600000,
                            "best_installment_label": "Débito",
                        },
                        "quotes": {"basic": "iPhone 15 128GB está R$ 6.000,00."},
                    }
                }
            },
        },
        422: {
            "description": "Invalid amount or malformed rate table",
            "content": {
                "application/json": {
                    "examples": {
                        "invalid_amount": {
                            "summary": "Unparseable money text",
                            "value": {
                                "detail": "Validation failed",
                                "code": "VALIDATION_ERROR",
                                "errors": [
                                    {
                                        "field": "price",
                                        "message": "price is not a valid amount: 'abc'",
                                        "code": "INVALID_AMOUNT",
                                    }
                                ],
                            },
                        },
                        "fee_too_high": {
                            "summary": "Fee of 100% or more",
                            "value": {
                                "detail": "credit rate for 12x must be < 100",
                                "code": "CONFIGURATION_ERROR",
                            },
                        },
                        "negative_amount": {
                            "summary": "Negative amount",
                            "value": {
                                "detail": "price_cents cannot be negative",
                                "code": "INVALID_NUMERIC_INPUT",
                            },
                        },
                    }
                }
            },
        },
    },
)
def calculate_quote(
    payload: QuoteRequestDTO,
    use_case: CalculateQuote = Depends(get_calculate_quote_use_case),
    default_label: str = Depends(get_quote_label),
) -> QuoteResponseDTO:
    """
    Parse → map → execute → map:
    1. Map the DTO to a QuoteInput (text amounts and fee strings parsed here)
    2. Execute the calculator (domain validation happens there)
    3. Map the schedule, summary and copyable texts to the response
    """
    quote_input = QuoteMapper.to_quote_input(payload)

    quote = use_case.execute(quote_input)
    summary = use_case.summarize(quote)

    return QuoteMapper.to_response(
        quote, summary, payload.product_name, payload.quote_label or default_label
    )


@router.post(
    "/stores/{store_id}/quotes",
    response_model=StoreQuoteResponseDTO,
    summary="Calculate a quote from store configuration",
    description="""
    Same calculation as `POST /v1/quotes`, with the rate table, product price
    and trade-in range read from the store's configuration.

    - `price_cents`/`price_text` wins over `product_id`
    - A trade-in whose proposed value breaks a rule is reported in `trade_in`
      and contributes no credit; the quote still succeeds with a warning
    """,
    responses={
        404: {
            "description": "Unknown rate table, product price or trade-in range",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "RateTable with identifier 'stone-belem' not found",
                        "code": "NOT_FOUND",
                    }
                }
            },
        },
        422: {
            "description": "Rate table does not serve the store, or price missing",
        },
    },
)
def calculate_store_quote(
    store_id: str,
    payload: StoreQuoteRequestDTO,
    use_case: BuildStoreQuote = Depends(get_build_store_quote_use_case),
    calculator: CalculateQuote = Depends(get_calculate_quote_use_case),
    default_label: str = Depends(get_quote_label),
) -> StoreQuoteResponseDTO:
    request = QuoteMapper.to_store_request(store_id, payload)

    response = use_case.execute(request)
    summary = calculator.summarize(response.quote)

    return QuoteMapper.to_store_response(
        response, summary, payload.product_name, payload.quote_label or default_label
    )


@router.get(
    "/stores/{store_id}/rate-tables",
    response_model=RateTableListResponseDTO,
    summary="List the active rate tables of a store",
)
def list_rate_tables(
    store_id: str,
    use_case: ListStoreRateTables = Depends(get_list_rate_tables_use_case),
) -> RateTableListResponseDTO:
    rate_tables = use_case.execute(store_id)
    return RateTableListResponseDTO(
        rate_tables=[QuoteMapper.rate_table_to_dto(table) for table in rate_tables]
    )
