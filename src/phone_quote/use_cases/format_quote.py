"""Copy-pasteable quote texts.

Pure rendering over already-computed values; no arithmetic beyond the
price minus trade-in difference shown in the trade-in quote.
"""

from __future__ import annotations

from phone_quote.domain.money import format_brl
from phone_quote.domain.quote import InstallmentOption, Quote

DEFAULT_QUOTE_LABEL = "12x"


def format_basic_quote(product_name: str, price_cents: int) -> str:
    return f"{product_name} está {format_brl(price_cents)}."


def format_installment_quote(
    product_name: str, quote: Quote, label: str = DEFAULT_QUOTE_LABEL
) -> str:
    """A label missing from the schedule renders as R$ 0,00."""
    option = quote.option_labeled(label)
    value = option.per_installment_value_cents if option else 0
    return f"{product_name} está {label} {format_brl(value)}."


def format_trade_in_quote(product_name: str, price_cents: int, trade_in_cents: int) -> str:
    # Not clamped: a credit above the price shows the negative difference
    return f"A volta para o {product_name} é de {format_brl(price_cents - trade_in_cents)}."


def format_payment_text(option: InstallmentOption, down_payment_cents: int) -> str:
    prefix = f"{format_brl(down_payment_cents)} + " if option.includes_down_payment else ""
    return f"{prefix}{option.label} de {format_brl(option.per_installment_value_cents)}"


def available_quotes(
    product_name: str, quote: Quote, label: str = DEFAULT_QUOTE_LABEL
) -> dict[str, str]:
    """Quotes a seller can copy, in display order. Trade-in only when credit was applied."""
    quotes = {
        "basic": format_basic_quote(product_name, quote.price_cents),
        "installment": format_installment_quote(product_name, quote, label),
    }
    if quote.trade_in_credit_cents > 0:
        quotes["trade_in"] = format_trade_in_quote(
            product_name, quote.price_cents, quote.trade_in_credit_cents
        )
    return quotes
