from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from phone_quote.domain.errors import ConfigurationError
from phone_quote.domain.money import Money, ensure_money


class TradeInViolation(str, Enum):
    """Reason a proposed trade-in credit was rejected. First failing rule wins."""

    INVALID_VALUE = "INVALID_VALUE"
    EXCEEDS_STORE_MAXIMUM = "EXCEEDS_STORE_MAXIMUM"
    EXCEEDS_ADJUSTED_MAXIMUM = "EXCEEDS_ADJUSTED_MAXIMUM"
    BELOW_STORE_MINIMUM = "BELOW_STORE_MINIMUM"


@dataclass(frozen=True, slots=True)
class TradeInRange:
    device_model_id: str
    store_id: str
    min_value_cents: Money
    max_value_cents: Money
    name: str = ""
    active: bool = True

    def validate(self) -> None:
        """
        Validate the configured range.

        Raises:
            ConfigurationError: If bounds are not positive or not strictly ordered
        """
        for label, value in (
            ("min_value_cents", self.min_value_cents),
            ("max_value_cents", self.max_value_cents),
        ):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(
                    f"{label} must be a positive integer",
                    device_model_id=self.device_model_id,
                    store_id=self.store_id,
                )
        if self.min_value_cents >= self.max_value_cents:
            raise ConfigurationError(
                "min_value_cents must be < max_value_cents",
                device_model_id=self.device_model_id,
                store_id=self.store_id,
            )


@dataclass(frozen=True, slots=True)
class DamageDeduction:
    id: str
    name: str
    discount_cents: Money

    def validate(self) -> None:
        ensure_money(self.discount_cents, f"discount_cents[{self.id}]")


@dataclass(frozen=True, slots=True)
class SuggestedRange:
    min_cents: Money
    max_cents: Money


@dataclass(frozen=True, slots=True)
class ValidationResult:
    ok: bool
    violation: TradeInViolation | None = None
    message: str | None = None
    limit_cents: Money | None = None

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(ok=True)

    @classmethod
    def failure(
        cls, violation: TradeInViolation, message: str, limit_cents: Money | None = None
    ) -> ValidationResult:
        return cls(ok=False, violation=violation, message=message, limit_cents=limit_cents)


@dataclass(frozen=True, slots=True)
class TradeInAssessment:
    trade_in_range: TradeInRange
    total_deduction_cents: Money
    suggested: SuggestedRange
    result: ValidationResult
