from __future__ import annotations

from phone_quote.domain.errors import ValidationError
from phone_quote.domain.trade_in import TradeInAssessment
from phone_quote.entrypoints.http.dtos.trade_in import (
    TradeInValuationRequestDTO,
    TradeInValuationResponseDTO,
)
from phone_quote.entrypoints.http.mappers.quote_mapper import QuoteMapper, money_field
from phone_quote.use_cases.assess_store_trade_in import TradeInSelection


class TradeInMapper:
    """Maps between REST DTOs and domain models for trade-in valuation."""

    @staticmethod
    def to_selection(dto: TradeInValuationRequestDTO) -> TradeInSelection:
        """
        Raises:
            ValidationError: If the proposed value text cannot be parsed
        """
        errors: list[dict[str, str]] = []
        proposed = money_field(dto.proposed_value_cents, dto.proposed_value_text, "proposed_value", errors)
        if errors:
            raise ValidationError(errors=errors)

        return TradeInSelection(
            device_model_id=dto.device_model_id,
            proposed_value_cents=proposed or 0,
            damage_ids=tuple(dto.damage_ids),
        )

    @staticmethod
    def to_response(assessment: TradeInAssessment) -> TradeInValuationResponseDTO:
        trade_in_range = assessment.trade_in_range
        return TradeInValuationResponseDTO(
            **QuoteMapper.assessment_to_dto(assessment).model_dump(),
            device_model_id=trade_in_range.device_model_id,
            store_id=trade_in_range.store_id,
            min_value_cents=trade_in_range.min_value_cents,
            max_value_cents=trade_in_range.max_value_cents,
        )
