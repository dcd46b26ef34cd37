from __future__ import annotations

from dataclasses import dataclass

from phone_quote.domain.errors import NotFoundError
from phone_quote.domain.trade_in import TradeInAssessment
from phone_quote.ports.pricing_config_repository import PricingConfigRepository
from phone_quote.use_cases.value_trade_in import ValueTradeIn


@dataclass(frozen=True, slots=True)
class TradeInSelection:
    device_model_id: str
    proposed_value_cents: int
    damage_ids: tuple[str, ...] = ()


class AssessStoreTradeIn:
    """
    Look up a device's trade-in range and damage deductions for a store,
    then judge the proposed credit.
    """

    def __init__(
        self, repository: PricingConfigRepository, valuator: ValueTradeIn | None = None
    ) -> None:
        self._repository = repository
        self._valuator = valuator or ValueTradeIn()

    def execute(self, store_id: str, selection: TradeInSelection) -> TradeInAssessment:
        """
        Raises:
            NotFoundError: If the range or any selected damage is unknown
            ConfigurationError: If the stored range is malformed
        """
        trade_in_range = self._repository.get_trade_in_range(selection.device_model_id, store_id)
        if trade_in_range is None:
            raise NotFoundError(
                resource="TradeInRange",
                identifier=selection.device_model_id,
                store_id=store_id,
            )

        deductions = self._repository.list_damage_deductions(selection.damage_ids)
        unknown = set(selection.damage_ids) - {d.id for d in deductions}
        if unknown:
            raise NotFoundError(resource="DamageDeduction", identifier=", ".join(sorted(unknown)))

        return self._valuator.assess(trade_in_range, deductions, selection.proposed_value_cents)
