"""Build a quote from store configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from phone_quote.domain.errors import NotFoundError, ValidationError
from phone_quote.domain.money import ensure_money
from phone_quote.domain.quote import Quote, QuoteInput
from phone_quote.domain.trade_in import TradeInAssessment
from phone_quote.ports.pricing_config_repository import PricingConfigRepository
from phone_quote.use_cases.assess_store_trade_in import AssessStoreTradeIn, TradeInSelection
from phone_quote.use_cases.calculate_quote import CalculateQuote


@dataclass(frozen=True, slots=True)
class BuildStoreQuoteRequest:
    store_id: str
    rate_table_id: str
    product_id: str | None = None
    price_cents: int | None = None
    down_payment_cents: int = 0
    trade_in: TradeInSelection | None = None


@dataclass(frozen=True, slots=True)
class BuildStoreQuoteResponse:
    quote: Quote
    trade_in: TradeInAssessment | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)


class BuildStoreQuote:
    """
    Resolve configuration for a store, then run the pure engine.

    Responsibilities:
    - Resolve the product price (explicit price wins over product lookup)
    - Resolve the rate table and check it serves the store
    - Value the trade-in, applying its credit only when the value is accepted
    - Compute the quote

    A rejected trade-in is not an error: the assessment is returned and the
    quote is computed without trade-in credit.
    """

    def __init__(
        self,
        repository: PricingConfigRepository,
        calculator: CalculateQuote | None = None,
        trade_in_assessor: AssessStoreTradeIn | None = None,
    ) -> None:
        self._repository = repository
        self._calculator = calculator or CalculateQuote()
        self._trade_in_assessor = trade_in_assessor or AssessStoreTradeIn(repository)

    def execute(self, request: BuildStoreQuoteRequest) -> BuildStoreQuoteResponse:
        """
        Raises:
            ValidationError: If neither price nor product is given, or the
                rate table does not serve the store
            NotFoundError: If a referenced rate table, price or trade-in range is missing
            ConfigurationError: If stored configuration is malformed
            InvalidNumericInput: If a monetary input is invalid
        """
        price_cents = self._resolve_price(request)
        rate_table = self._repository.get_rate_table(request.rate_table_id)
        if rate_table is None:
            raise NotFoundError(resource="RateTable", identifier=request.rate_table_id)
        if not rate_table.covers_store(request.store_id):
            raise ValidationError(
                errors=[
                    {
                        "field": "rate_table_id",
                        "message": f"Rate table does not serve store '{request.store_id}'",
                        "code": "STORE_MISMATCH",
                    }
                ]
            )

        assessment: TradeInAssessment | None = None
        trade_in_credit_cents = 0
        warnings: list[str] = []
        if request.trade_in is not None:
            assessment = self._trade_in_assessor.execute(request.store_id, request.trade_in)
            if assessment.result.ok:
                trade_in_credit_cents = request.trade_in.proposed_value_cents
            else:
                warnings.append(assessment.result.message or "Trade-in value rejected")

        quote = self._calculator.execute(
            QuoteInput(
                price_cents=price_cents,
                down_payment_cents=request.down_payment_cents,
                trade_in_credit_cents=trade_in_credit_cents,
                rate_table=rate_table,
            )
        )

        return BuildStoreQuoteResponse(quote=quote, trade_in=assessment, warnings=tuple(warnings))

    def _resolve_price(self, request: BuildStoreQuoteRequest) -> int:
        if request.price_cents is not None:
            return ensure_money(request.price_cents, "price_cents")
        if request.product_id is None:
            raise ValidationError(
                errors=[
                    {
                        "field": "product_id",
                        "message": "Provide either product_id or price_cents",
                        "code": "MISSING_PRICE",
                    }
                ]
            )

        price_cents = self._repository.get_product_price(request.product_id, request.store_id)
        if price_cents is None:
            raise NotFoundError(
                resource="ProductPrice",
                identifier=request.product_id,
                store_id=request.store_id,
            )
        return price_cents
