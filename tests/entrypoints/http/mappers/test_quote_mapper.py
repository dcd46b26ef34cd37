"""
Test suite for QuoteMapper.

The mapper translates between REST DTOs and domain models:
- Resolves money sent as cents or seller-typed text
- Converts fee strings to Decimal
- Collects every parse error into one ValidationError
- Renders domain quotes back to DTOs with display texts
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from phone_quote.domain.errors import ValidationError
from phone_quote.domain.quote import QuoteInput
from phone_quote.domain.rate_table import RateTable
from phone_quote.entrypoints.http.dtos.quote import (
    QuoteRequestDTO,
    RateTableDTO,
    StoreQuoteRequestDTO,
    TradeInSelectionDTO,
)
from phone_quote.entrypoints.http.mappers.quote_mapper import QuoteMapper, money_field
from phone_quote.use_cases.calculate_quote import CalculateQuote


def rate_table_dto(**overrides) -> RateTableDTO:
    values = {"max_installments": 3, "credit_rates": {2: "2.5", 3: "3.5"}}
    values.update(overrides)
    return RateTableDTO(**values)


# ==============================================================================
# money_field()
# ==============================================================================


def test_money_field_passes_cents_through() -> None:
    errors: list[dict[str, str]] = []

    assert money_field(600000, None, "price", errors) == 600000
    assert errors == []


def test_money_field_text_wins_over_cents() -> None:
    errors: list[dict[str, str]] = []

    assert money_field(1, "1.200,50", "price", errors) == 120050


def test_money_field_keeps_negative_cents_for_the_domain() -> None:
    assert money_field(-5, None, "price", []) == -5


def test_money_field_records_parse_error() -> None:
    errors: list[dict[str, str]] = []

    assert money_field(None, "12,3,4", "price", errors) is None
    assert errors == [
        {
            "field": "price",
            "message": "price is not a valid amount: '12,3,4'",
            "code": "INVALID_AMOUNT",
        }
    ]


# ==============================================================================
# to_quote_input() - DTO → Domain
# ==============================================================================


def test_to_quote_input_with_cents() -> None:
    dto = QuoteRequestDTO(
        price_cents=600000,
        down_payment_cents=100000,
        trade_in_credit_cents=50000,
        rate_table=rate_table_dto(),
    )

    result = QuoteMapper.to_quote_input(dto)

    assert isinstance(result, QuoteInput)
    assert result.price_cents == 600000
    assert result.down_payment_cents == 100000
    assert result.trade_in_credit_cents == 50000
    assert result.rate_table.credit_rates == {2: Decimal("2.5"), 3: Decimal("3.5")}
    assert result.rate_table.max_installments == 3


def test_to_quote_input_defaults_optional_amounts_to_zero() -> None:
    result = QuoteMapper.to_quote_input(QuoteRequestDTO(price_text="999", rate_table=rate_table_dto()))

    assert result.price_cents == 99900
    assert result.down_payment_cents == 0
    assert result.trade_in_credit_cents == 0


def test_to_quote_input_converts_debit_rate() -> None:
    result = QuoteMapper.to_quote_input(
        QuoteRequestDTO(price_cents=1, rate_table=rate_table_dto(debit_rate="1.2", accepts_debit=False))
    )

    assert result.rate_table.debit_rate == Decimal("1.2")
    assert result.rate_table.accepts_debit is False


def test_to_quote_input_collects_all_errors() -> None:
    dto = QuoteRequestDTO(
        price_text="abc",
        down_payment_text="1,2,3",
        rate_table=rate_table_dto(credit_rates={2: "x"}),
    )

    with pytest.raises(ValidationError) as exc_info:
        QuoteMapper.to_quote_input(dto)

    fields = [e["field"] for e in exc_info.value.errors]
    assert fields == ["price", "down_payment", "rate_table.credit_rates.2"]


def test_to_quote_input_missing_price() -> None:
    with pytest.raises(ValidationError) as exc_info:
        QuoteMapper.to_quote_input(QuoteRequestDTO(rate_table=rate_table_dto()))

    assert exc_info.value.errors[0]["code"] == "MISSING_PRICE"


def test_to_quote_input_leaves_range_checks_to_domain() -> None:
    result = QuoteMapper.to_quote_input(
        QuoteRequestDTO(price_cents=1, rate_table=rate_table_dto(credit_rates={2: "150"}))
    )

    assert result.rate_table.credit_rates[2] == Decimal("150")


# ==============================================================================
# to_store_request()
# ==============================================================================


def test_to_store_request_with_trade_in() -> None:
    dto = StoreQuoteRequestDTO(
        rate_table_id="stone-castanhal",
        product_id="3",
        down_payment_text="500",
        trade_in=TradeInSelectionDTO(
            device_model_id="8", damage_ids=["display-broken"], proposed_value_text="1.900"
        ),
    )

    result = QuoteMapper.to_store_request("castanhal", dto)

    assert result.store_id == "castanhal"
    assert result.rate_table_id == "stone-castanhal"
    assert result.product_id == "3"
    assert result.price_cents is None
    assert result.down_payment_cents == 50000
    assert result.trade_in.device_model_id == "8"
    assert result.trade_in.damage_ids == ("display-broken",)
    assert result.trade_in.proposed_value_cents == 190000


def test_to_store_request_bad_trade_in_text() -> None:
    dto = StoreQuoteRequestDTO(
        rate_table_id="stone-castanhal",
        price_cents=1000,
        trade_in=TradeInSelectionDTO(device_model_id="8", proposed_value_text="muito"),
    )

    with pytest.raises(ValidationError) as exc_info:
        QuoteMapper.to_store_request("castanhal", dto)

    assert exc_info.value.errors[0]["field"] == "trade_in.proposed_value"


# ==============================================================================
# Domain → DTO
# ==============================================================================


def test_rate_table_to_dto_sorts_and_stringifies() -> None:
    table = RateTable(
        id="rede-castanhal",
        name="Rede",
        store_ids=frozenset({"castanhal", "belem"}),
        max_installments=3,
        credit_rates={3: Decimal("3.8"), 2: Decimal("2.8")},
    )

    dto = QuoteMapper.rate_table_to_dto(table)

    assert dto.store_ids == ["belem", "castanhal"]
    assert list(dto.credit_rates.items()) == [(2, "2.8"), (3, "3.8")]
    assert dto.debit_rate is None


def test_to_response_renders_texts() -> None:
    calculator = CalculateQuote()
    quote = calculator.execute(
        QuoteMapper.to_quote_input(
            QuoteRequestDTO(price_cents=600000, down_payment_cents=100000, rate_table=rate_table_dto())
        )
    )

    dto = QuoteMapper.to_response(quote, calculator.summarize(quote), "iPhone 15", "2x")

    debit = dto.options[0]
    assert debit.label == "Débito"
    assert debit.fee_percent == "0"
    assert debit.payment_text == "R$ 1.000,00 + Débito de R$ 5.000,00"
    assert dto.summary.total_discount_cents == 100000
    assert dto.quotes["basic"] == "iPhone 15 está R$ 6.000,00."
    assert "trade_in" not in dto.quotes


def test_to_response_without_product_name() -> None:
    calculator = CalculateQuote()
    quote = calculator.execute(
        QuoteMapper.to_quote_input(QuoteRequestDTO(price_cents=0, rate_table=rate_table_dto()))
    )

    dto = QuoteMapper.to_response(quote, calculator.summarize(quote), None, "12x")

    assert dto.quotes == {}
    assert dto.summary.best_installment_label == "1x"
