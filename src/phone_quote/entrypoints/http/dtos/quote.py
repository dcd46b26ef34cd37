from pydantic import BaseModel, ConfigDict, Field

FEE_PATTERN = r"^\d+(\.\d{1,4})?$"


class RateTableDTO(BaseModel):
    """Card machine fee table (inline or as stored)."""

    id: str = Field(default="inline", description="Rate table identifier", examples=["stone-castanhal"])
    name: str = Field(default="", description="Payment device name", examples=["Stone"])
    store_ids: list[str] = Field(default_factory=list, examples=[["castanhal"]])
    max_installments: int = Field(description="Highest installment count offered", examples=[12])
    credit_rates: dict[int, str] = Field(
        default_factory=dict,
        description="Installment count -> percent fee as decimal string",
        examples=[{"1": "0", "2": "2.5", "3": "3.5"}],
    )
    debit_rate: str | None = Field(
        default=None,
        description="Configured debit fee (percent). Not applied to the debit option.",
        pattern=FEE_PATTERN,
        examples=["1.2"],
    )
    accepts_debit: bool = True
    accepts_credit: bool = True
    active: bool = True


class QuoteRequestDTO(BaseModel):
    """Request payload for an ad hoc quote.

    Monetary values may be sent as integer cents (``*_cents``) or as text typed
    by the seller (``*_text``, e.g. "1.200,50"). Text wins when both are sent.
    """

    price_cents: int | None = Field(default=None, examples=[600000])
    price_text: str | None = Field(default=None, examples=["6.000,00"])
    down_payment_cents: int | None = Field(default=None, examples=[0])
    down_payment_text: str | None = None
    trade_in_credit_cents: int | None = Field(default=None, examples=[0])
    trade_in_credit_text: str | None = None
    rate_table: RateTableDTO
    product_name: str | None = Field(
        default=None,
        description="When set, copyable quote texts are included in the response",
        examples=["iPhone 15 128GB"],
    )
    quote_label: str | None = Field(
        default=None,
        description="Installment label used in the installment quote text (default from settings)",
        examples=["12x"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "price_cents": 600000,
                "down_payment_cents": 0,
                "trade_in_credit_cents": 0,
                "rate_table": {
                    "max_installments": 3,
                    "credit_rates": {"1": "0", "2": "2.5", "3": "3.5"},
                },
                "product_name": "iPhone 15 128GB",
            }
        }
    )


class InstallmentOptionDTO(BaseModel):
    label: str = Field(examples=["3x"])
    installment_count: int = Field(examples=[3])
    fee_percent: str = Field(examples=["3.5"])
    per_installment_value_cents: int = Field(examples=[207254])
    total_financed_value_cents: int = Field(examples=[621762])
    includes_down_payment: bool
    value_text: str = Field(examples=["R$ 2.072,54"])
    total_text: str = Field(examples=["R$ 6.217,62"])
    payment_text: str = Field(
        description="Copyable payment line", examples=["3x de R$ 2.072,54"]
    )


class PaymentSummaryDTO(BaseModel):
    total_product_cents: int
    total_discount_cents: int
    total_to_finance_cents: int
    best_installment_label: str | None = None


class QuoteResponseDTO(BaseModel):
    """Computed installment schedule. Options are ordered: Débito, 1x..Nx."""

    price_cents: int
    down_payment_cents: int
    trade_in_credit_cents: int
    base_value_cents: int
    options: list[InstallmentOptionDTO]
    summary: PaymentSummaryDTO
    quotes: dict[str, str] = Field(
        default_factory=dict,
        description="Copyable quote texts keyed by kind (basic, installment, trade_in)",
    )


class TradeInSelectionDTO(BaseModel):
    device_model_id: str = Field(examples=["8"])
    damage_ids: list[str] = Field(default_factory=list, examples=[["display-broken"]])
    proposed_value_cents: int | None = Field(default=None, examples=[190000])
    proposed_value_text: str | None = None


class StoreQuoteRequestDTO(BaseModel):
    """Quote priced from stored configuration for one store."""

    rate_table_id: str = Field(examples=["stone-castanhal"])
    product_id: str | None = Field(default=None, examples=["3"])
    product_name: str | None = None
    price_cents: int | None = None
    price_text: str | None = None
    down_payment_cents: int | None = None
    down_payment_text: str | None = None
    trade_in: TradeInSelectionDTO | None = None
    quote_label: str | None = None


class TradeInAssessmentDTO(BaseModel):
    total_deduction_cents: int
    suggested_min_cents: int
    suggested_max_cents: int
    ok: bool
    violation: str | None = None
    message: str | None = None
    limit_cents: int | None = None


class StoreQuoteResponseDTO(QuoteResponseDTO):
    trade_in: TradeInAssessmentDTO | None = None
    warnings: list[str] = Field(default_factory=list)


class RateTableListResponseDTO(BaseModel):
    rate_tables: list[RateTableDTO]
