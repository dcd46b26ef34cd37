from __future__ import annotations

from decimal import Decimal, InvalidOperation

from phone_quote.domain.errors import InvalidNumericInput, ValidationError
from phone_quote.domain.money import format_brl, parse_money
from phone_quote.domain.quote import InstallmentOption, PaymentSummary, Quote, QuoteInput
from phone_quote.domain.rate_table import RateTable
from phone_quote.domain.trade_in import TradeInAssessment
from phone_quote.entrypoints.http.dtos.quote import (
    InstallmentOptionDTO,
    PaymentSummaryDTO,
    QuoteRequestDTO,
    QuoteResponseDTO,
    RateTableDTO,
    StoreQuoteRequestDTO,
    StoreQuoteResponseDTO,
    TradeInAssessmentDTO,
    TradeInSelectionDTO,
)
from phone_quote.use_cases.assess_store_trade_in import TradeInSelection
from phone_quote.use_cases.build_store_quote import BuildStoreQuoteRequest, BuildStoreQuoteResponse
from phone_quote.use_cases.format_quote import available_quotes, format_payment_text


def money_field(
    cents: int | None,
    text: str | None,
    field: str,
    errors: list[dict[str, str]],
) -> int | None:
    """
    Resolve a monetary field sent either as cents or as seller-typed text.

    Text is parsed here, once; cents are passed through untouched so the
    domain can reject negative values with its own error.
    """
    if text is not None:
        try:
            return parse_money(text, field)
        except InvalidNumericInput as exc:
            errors.append({"field": field, "message": exc.message, "code": "INVALID_AMOUNT"})
            return None
    return cents


class QuoteMapper:
    """Maps between REST DTOs and domain models for quotes."""

    @staticmethod
    def to_rate_table(dto: RateTableDTO, errors: list[dict[str, str]]) -> RateTable:
        """
        Converts a rate table DTO to the domain RateTable.

        Handles string -> Decimal conversion of fees at the boundary. Range
        checks (fee < 100, max_installments >= 1) are left to the domain.
        """
        credit_rates: dict[int, Decimal] = {}
        for installments, fee in dto.credit_rates.items():
            try:
                credit_rates[installments] = Decimal(fee)
            except (InvalidOperation, ValueError):
                errors.append(
                    {
                        "field": f"rate_table.credit_rates.{installments}",
                        "message": f"Must be a valid decimal: {fee}",
                        "code": "INVALID_DECIMAL",
                    }
                )

        return RateTable(
            id=dto.id,
            name=dto.name,
            store_ids=frozenset(dto.store_ids),
            max_installments=dto.max_installments,
            credit_rates=credit_rates,
            debit_rate=Decimal(dto.debit_rate) if dto.debit_rate is not None else None,
            accepts_debit=dto.accepts_debit,
            accepts_credit=dto.accepts_credit,
            active=dto.active,
        )

    @staticmethod
    def rate_table_to_dto(rate_table: RateTable) -> RateTableDTO:
        return RateTableDTO(
            id=rate_table.id,
            name=rate_table.name,
            store_ids=sorted(rate_table.store_ids),
            max_installments=rate_table.max_installments,
            credit_rates={k: str(v) for k, v in sorted(rate_table.credit_rates.items())},
            debit_rate=str(rate_table.debit_rate) if rate_table.debit_rate is not None else None,
            accepts_debit=rate_table.accepts_debit,
            accepts_credit=rate_table.accepts_credit,
            active=rate_table.active,
        )

    @staticmethod
    def to_quote_input(dto: QuoteRequestDTO) -> QuoteInput:
        """
        Raises:
            ValidationError: If amounts or fees cannot be parsed, or price is missing
        """
        errors: list[dict[str, str]] = []

        price = money_field(dto.price_cents, dto.price_text, "price", errors)
        down_payment = money_field(dto.down_payment_cents, dto.down_payment_text, "down_payment", errors)
        trade_in = money_field(
            dto.trade_in_credit_cents, dto.trade_in_credit_text, "trade_in_credit", errors
        )
        rate_table = QuoteMapper.to_rate_table(dto.rate_table, errors)

        if price is None and not any(e["field"] == "price" for e in errors):
            errors.append(
                {"field": "price", "message": "Provide price_cents or price_text", "code": "MISSING_PRICE"}
            )

        if errors:
            raise ValidationError(errors=errors)

        return QuoteInput(
            price_cents=price,  # type: ignore[arg-type]
            down_payment_cents=down_payment or 0,
            trade_in_credit_cents=trade_in or 0,
            rate_table=rate_table,
        )

    @staticmethod
    def to_store_request(store_id: str, dto: StoreQuoteRequestDTO) -> BuildStoreQuoteRequest:
        errors: list[dict[str, str]] = []

        price = money_field(dto.price_cents, dto.price_text, "price", errors)
        down_payment = money_field(dto.down_payment_cents, dto.down_payment_text, "down_payment", errors)
        trade_in = QuoteMapper._to_trade_in_selection(dto.trade_in, errors) if dto.trade_in else None

        if errors:
            raise ValidationError(errors=errors)

        return BuildStoreQuoteRequest(
            store_id=store_id,
            rate_table_id=dto.rate_table_id,
            product_id=dto.product_id,
            price_cents=price,
            down_payment_cents=down_payment or 0,
            trade_in=trade_in,
        )

    @staticmethod
    def _to_trade_in_selection(
        dto: TradeInSelectionDTO, errors: list[dict[str, str]]
    ) -> TradeInSelection:
        proposed = money_field(
            dto.proposed_value_cents, dto.proposed_value_text, "trade_in.proposed_value", errors
        )
        return TradeInSelection(
            device_model_id=dto.device_model_id,
            proposed_value_cents=proposed or 0,
            damage_ids=tuple(dto.damage_ids),
        )

    @staticmethod
    def option_to_dto(option: InstallmentOption, down_payment_cents: int) -> InstallmentOptionDTO:
        return InstallmentOptionDTO(
            label=option.label,
            installment_count=option.installment_count,
            fee_percent=str(option.fee_percent),
            per_installment_value_cents=option.per_installment_value_cents,
            total_financed_value_cents=option.total_financed_value_cents,
            includes_down_payment=option.includes_down_payment,
            value_text=format_brl(option.per_installment_value_cents),
            total_text=format_brl(option.total_financed_value_cents),
            payment_text=format_payment_text(option, down_payment_cents),
        )

    @staticmethod
    def summary_to_dto(summary: PaymentSummary) -> PaymentSummaryDTO:
        best = summary.best_installment_option
        return PaymentSummaryDTO(
            total_product_cents=summary.total_product_cents,
            total_discount_cents=summary.total_discount_cents,
            total_to_finance_cents=summary.total_to_finance_cents,
            best_installment_label=best.label if best else None,
        )

    @staticmethod
    def to_response(
        quote: Quote,
        summary: PaymentSummary,
        product_name: str | None,
        quote_label: str,
    ) -> QuoteResponseDTO:
        return QuoteResponseDTO(**QuoteMapper._quote_fields(quote, summary, product_name, quote_label))

    @staticmethod
    def assessment_to_dto(assessment: TradeInAssessment) -> TradeInAssessmentDTO:
        result = assessment.result
        return TradeInAssessmentDTO(
            total_deduction_cents=assessment.total_deduction_cents,
            suggested_min_cents=assessment.suggested.min_cents,
            suggested_max_cents=assessment.suggested.max_cents,
            ok=result.ok,
            violation=result.violation.value if result.violation else None,
            message=result.message,
            limit_cents=result.limit_cents,
        )

    @staticmethod
    def to_store_response(
        response: BuildStoreQuoteResponse,
        summary: PaymentSummary,
        product_name: str | None,
        quote_label: str,
    ) -> StoreQuoteResponseDTO:
        return StoreQuoteResponseDTO(
            **QuoteMapper._quote_fields(response.quote, summary, product_name, quote_label),
            trade_in=QuoteMapper.assessment_to_dto(response.trade_in) if response.trade_in else None,
            warnings=list(response.warnings),
        )

    @staticmethod
    def _quote_fields(
        quote: Quote,
        summary: PaymentSummary,
        product_name: str | None,
        quote_label: str,
    ) -> dict:
        return {
            "price_cents": quote.price_cents,
            "down_payment_cents": quote.down_payment_cents,
            "trade_in_credit_cents": quote.trade_in_credit_cents,
            "base_value_cents": quote.base_value_cents,
            "options": [QuoteMapper.option_to_dto(o, quote.down_payment_cents) for o in quote.options],
            "summary": QuoteMapper.summary_to_dto(summary),
            "quotes": available_quotes(product_name, quote, quote_label) if product_name else {},
        }
