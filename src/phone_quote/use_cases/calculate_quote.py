from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from phone_quote.domain.errors import ConfigurationError
from phone_quote.domain.money import Money, round_cents
from phone_quote.domain.quote import (
    DEBIT_LABEL,
    InstallmentOption,
    PaymentSummary,
    Quote,
    QuoteInput,
)
from phone_quote.domain.rate_table import HUNDRED, to_fee_percent

logger = logging.getLogger(__name__)

ONE = Decimal("1")


def total_with_fee(base_value_cents: Money, fee_percent: Decimal) -> Decimal:
    """
    Gross up the base so that, after the card fee is withheld, the store
    still receives the base:

        total = base / (1 - fee/100)

    Callers guarantee ``fee_percent`` is in [0, 100).
    """
    return Decimal(base_value_cents) / (ONE - fee_percent / HUNDRED)


def build_installment_option(
    base_value_cents: Money,
    installments: int,
    fee_percent: Decimal,
    includes_down_payment: bool,
) -> InstallmentOption:
    precise_total = total_with_fee(base_value_cents, fee_percent)

    return InstallmentOption(
        label=f"{installments}x",
        per_installment_value_cents=round_cents(precise_total / Decimal(installments)),
        total_financed_value_cents=round_cents(precise_total),
        includes_down_payment=includes_down_payment,
        installment_count=installments,
        fee_percent=fee_percent,
    )


@dataclass(frozen=True, slots=True)
class CalculateQuote:
    """
    Compute the financed base and the full installment schedule.

    Rounding policy:
    - Intermediate values use full precision Decimal
    - The grossed-up total is rounded to whole cents using ROUND_HALF_UP
    - The per-installment value is derived from the UNROUNDED total, then
      rounded to whole cents using ROUND_HALF_UP
    - So per_installment * count may differ from total by a few cents

    Schedule order is fixed: Débito first, then 1x..max_installments.
    The debit option never carries a fee, even when the rate table has a
    debit_rate configured.
    """

    def execute(self, quote_input: QuoteInput) -> Quote:
        quote_input.validate()

        base_value_cents = max(
            0,
            quote_input.price_cents
            - quote_input.down_payment_cents
            - quote_input.trade_in_credit_cents,
        )
        includes_down_payment = quote_input.down_payment_cents > 0
        rate_table = quote_input.rate_table

        options = [
            InstallmentOption(
                label=DEBIT_LABEL,
                per_installment_value_cents=base_value_cents,
                total_financed_value_cents=base_value_cents,
                includes_down_payment=includes_down_payment,
                installment_count=1,
                fee_percent=Decimal("0"),
            )
        ]
        for installments in range(1, rate_table.max_installments + 1):
            options.append(
                build_installment_option(
                    base_value_cents,
                    installments,
                    rate_table.fee_for(installments),
                    includes_down_payment,
                )
            )

        logger.debug(
            "Quote computed",
            extra={
                "rate_table_id": rate_table.id,
                "base_value_cents": base_value_cents,
                "option_count": len(options),
            },
        )

        return Quote(
            price_cents=quote_input.price_cents,
            down_payment_cents=quote_input.down_payment_cents,
            trade_in_credit_cents=quote_input.trade_in_credit_cents,
            base_value_cents=base_value_cents,
            options=tuple(options),
        )

    def custom_installment(
        self, quote: Quote, installments: int, fee_percent: object = 0
    ) -> InstallmentOption | None:
        """
        Price a single ad hoc installment option at a seller-supplied rate.

        Returns:
            The option, or None when nothing is left to finance

        Raises:
            ConfigurationError: If installments < 1 or the fee is outside [0, 100)
        """
        if isinstance(installments, bool) or not isinstance(installments, int) or installments < 1:
            raise ConfigurationError("installments must be >= 1", installments=str(installments))
        fee = to_fee_percent(fee_percent, label="custom rate")

        if quote.base_value_cents <= 0:
            return None

        return build_installment_option(
            quote.base_value_cents,
            installments,
            fee,
            quote.down_payment_cents > 0,
        )

    def summarize(self, quote: Quote) -> PaymentSummary:
        """Totals for the quote plus the credit option with the lowest total."""
        best: InstallmentOption | None = None
        for option in quote.credit_options:
            # Strict comparison keeps the first option on ties
            if best is None or option.total_financed_value_cents < best.total_financed_value_cents:
                best = option

        return PaymentSummary(
            total_product_cents=quote.price_cents,
            total_discount_cents=quote.down_payment_cents + quote.trade_in_credit_cents,
            total_to_finance_cents=quote.base_value_cents,
            best_installment_option=best,
        )
