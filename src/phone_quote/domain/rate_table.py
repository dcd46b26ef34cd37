from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Mapping

from phone_quote.domain.errors import ConfigurationError

# The store configuration screen accepts 1..24 installments
MAX_INSTALLMENTS_LIMIT = 24
HUNDRED = Decimal("100")


def to_fee_percent(value: object, label: str = "fee") -> Decimal:
    """
    Convert a configured fee percentage to Decimal.

    Floats are routed through ``str`` so that ``2.5`` becomes ``Decimal("2.5")``
    rather than its binary expansion.

    Raises:
        ConfigurationError: If the fee is not a finite number in [0, 100)
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"{label} must be a number", fee=str(value))
    try:
        fee = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ConfigurationError(f"{label} must be a number", fee=str(value))

    if not fee.is_finite():
        raise ConfigurationError(f"{label} must be finite", fee=str(value))
    if fee < 0:
        raise ConfigurationError(f"{label} must be >= 0", fee=str(value))
    if fee >= HUNDRED:
        raise ConfigurationError(f"{label} must be < 100", fee=str(value))
    return fee


@dataclass(frozen=True, slots=True)
class RateTable:
    """
    Fee table for one payment device (card machine), scoped to one or more stores.

    ``credit_rates`` maps installment count -> percent fee. Counts without an
    entry carry no fee (1x is conventionally absent or 0).
    """

    id: str
    name: str
    store_ids: frozenset[str]
    max_installments: int
    credit_rates: Mapping[int, Decimal] = field(default_factory=dict)
    debit_rate: Decimal | None = None
    accepts_debit: bool = True
    accepts_credit: bool = True
    active: bool = True

    def validate(self) -> None:
        """
        Validate the fee table before any computation uses it.

        Raises:
            ConfigurationError: If max_installments or any fee is out of range
        """
        if isinstance(self.max_installments, bool) or not isinstance(self.max_installments, int):
            raise ConfigurationError(
                "max_installments must be an integer", rate_table_id=self.id
            )
        if self.max_installments < 1:
            raise ConfigurationError("max_installments must be >= 1", rate_table_id=self.id)
        if self.max_installments > MAX_INSTALLMENTS_LIMIT:
            raise ConfigurationError(
                f"max_installments must be <= {MAX_INSTALLMENTS_LIMIT}", rate_table_id=self.id
            )

        for count, fee in self.credit_rates.items():
            to_fee_percent(fee, label=f"credit rate for {count}x")
        if self.debit_rate is not None:
            to_fee_percent(self.debit_rate, label="debit rate")

    def fee_for(self, installments: int) -> Decimal:
        """Percent fee for an installment count (0 when unset)."""
        fee = self.credit_rates.get(installments)
        if fee is None:
            return Decimal("0")
        return to_fee_percent(fee, label=f"credit rate for {installments}x")

    def covers_store(self, store_id: str) -> bool:
        return store_id in self.store_ids
