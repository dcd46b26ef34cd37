from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from phone_quote.domain.money import Money, ensure_money
from phone_quote.domain.rate_table import RateTable

DEBIT_LABEL = "Débito"


@dataclass(frozen=True, slots=True)
class QuoteInput:
    price_cents: Money
    down_payment_cents: Money
    trade_in_credit_cents: Money
    rate_table: RateTable

    def validate(self) -> None:
        """
        Validate monetary inputs.

        Down payment plus trade-in may exceed the price; the financed base
        is clamped at zero by the calculator, not rejected here.

        Raises:
            InvalidNumericInput: If any amount is negative, non-finite or fractional
            ConfigurationError: If the rate table is malformed
        """
        ensure_money(self.price_cents, "price_cents")
        ensure_money(self.down_payment_cents, "down_payment_cents")
        ensure_money(self.trade_in_credit_cents, "trade_in_credit_cents")
        self.rate_table.validate()


@dataclass(frozen=True, slots=True)
class InstallmentOption:
    label: str
    per_installment_value_cents: Money
    total_financed_value_cents: Money
    includes_down_payment: bool
    installment_count: int
    fee_percent: Decimal

    @property
    def is_debit(self) -> bool:
        return self.label == DEBIT_LABEL


@dataclass(frozen=True, slots=True)
class Quote:
    price_cents: Money
    down_payment_cents: Money
    trade_in_credit_cents: Money
    base_value_cents: Money
    options: tuple[InstallmentOption, ...]

    @property
    def credit_options(self) -> tuple[InstallmentOption, ...]:
        return tuple(option for option in self.options if not option.is_debit)

    def option_for(self, installments: int) -> InstallmentOption | None:
        """
        Look up an option by installment count.

        A count of 1 resolves to the debit option, which is what sellers
        mean by "à vista" at the counter.
        """
        if installments == 1:
            return next((o for o in self.options if o.is_debit), None)
        return next(
            (o for o in self.credit_options if o.installment_count == installments),
            None,
        )

    def option_labeled(self, label: str) -> InstallmentOption | None:
        return next((o for o in self.options if o.label == label), None)


@dataclass(frozen=True, slots=True)
class PaymentSummary:
    total_product_cents: Money
    total_discount_cents: Money
    total_to_finance_cents: Money
    best_installment_option: InstallmentOption | None
