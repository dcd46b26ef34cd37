from __future__ import annotations

import logging
from typing import Sequence

from phone_quote.domain.errors import InvalidNumericInput
from phone_quote.domain.money import Money, format_brl
from phone_quote.domain.trade_in import (
    DamageDeduction,
    SuggestedRange,
    TradeInAssessment,
    TradeInRange,
    TradeInViolation,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def total_deduction(deductions: Sequence[DamageDeduction]) -> Money:
    return sum(deduction.discount_cents for deduction in deductions)


class ValueTradeIn:
    """
    Trade-in valuation for a used device at a store.

    Responsibilities:
    - Suggest a credit range after itemized damage deductions
    - Judge a seller-proposed credit against that range

    The valuator never proposes a value on its own; a proposed value of 0
    means "trade-in declined" and is always accepted.
    """

    def suggested_range(
        self, trade_in_range: TradeInRange, deductions: Sequence[DamageDeduction]
    ) -> SuggestedRange:
        """
        Raises:
            ConfigurationError: If the range is malformed
            InvalidNumericInput: If a deduction amount is invalid
        """
        trade_in_range.validate()
        for deduction in deductions:
            deduction.validate()

        deducted = total_deduction(deductions)
        return SuggestedRange(
            min_cents=max(0, trade_in_range.min_value_cents - deducted),
            max_cents=max(0, trade_in_range.max_value_cents - deducted),
        )

    def validate(
        self,
        trade_in_range: TradeInRange,
        deductions: Sequence[DamageDeduction],
        proposed_value_cents: int,
    ) -> ValidationResult:
        """
        Judge a proposed credit. Rules run in order; the first failure wins.

        1. negative                              -> INVALID_VALUE
        2. above the store maximum               -> EXCEEDS_STORE_MAXIMUM
        3. above the maximum after deductions    -> EXCEEDS_ADJUSTED_MAXIMUM
        4. positive but below the store minimum  -> BELOW_STORE_MINIMUM

        Raises:
            ConfigurationError: If the range is malformed
            InvalidNumericInput: If the proposed value is not whole cents
        """
        if isinstance(proposed_value_cents, bool) or not isinstance(proposed_value_cents, int):
            raise InvalidNumericInput(
                "proposed_value_cents must be an integer number of cents",
                field="proposed_value_cents",
            )
        suggested = self.suggested_range(trade_in_range, deductions)

        if proposed_value_cents < 0:
            return ValidationResult.failure(
                TradeInViolation.INVALID_VALUE,
                "O valor não pode ser negativo",
            )

        if proposed_value_cents > trade_in_range.max_value_cents:
            return ValidationResult.failure(
                TradeInViolation.EXCEEDS_STORE_MAXIMUM,
                "O valor final não pode ser maior que o valor máximo "
                f"({format_brl(trade_in_range.max_value_cents)})",
                limit_cents=trade_in_range.max_value_cents,
            )

        if proposed_value_cents > suggested.max_cents:
            return ValidationResult.failure(
                TradeInViolation.EXCEEDS_ADJUSTED_MAXIMUM,
                "Com os descontos selecionados, o valor máximo permitido é "
                f"{format_brl(suggested.max_cents)}",
                limit_cents=suggested.max_cents,
            )

        if 0 < proposed_value_cents < trade_in_range.min_value_cents:
            return ValidationResult.failure(
                TradeInViolation.BELOW_STORE_MINIMUM,
                "O valor mínimo para este aparelho é "
                f"{format_brl(trade_in_range.min_value_cents)}",
                limit_cents=trade_in_range.min_value_cents,
            )

        return ValidationResult.success()

    def assess(
        self,
        trade_in_range: TradeInRange,
        deductions: Sequence[DamageDeduction],
        proposed_value_cents: int,
    ) -> TradeInAssessment:
        result = self.validate(trade_in_range, deductions, proposed_value_cents)

        if not result.ok:
            logger.info(
                "Trade-in value rejected",
                extra={
                    "device_model_id": trade_in_range.device_model_id,
                    "store_id": trade_in_range.store_id,
                    "violation": result.violation.value if result.violation else None,
                    "proposed_value_cents": proposed_value_cents,
                },
            )

        return TradeInAssessment(
            trade_in_range=trade_in_range,
            total_deduction_cents=total_deduction(deductions),
            suggested=self.suggested_range(trade_in_range, deductions),
            result=result,
        )

    def reset_value(self, trade_in_range: TradeInRange) -> Money:
        """Starting value offered by the "reset" action: the store maximum."""
        trade_in_range.validate()
        return trade_in_range.max_value_cents
