from __future__ import annotations

from phone_quote.domain.rate_table import RateTable
from phone_quote.ports.pricing_config_repository import PricingConfigRepository


class ListStoreRateTables:
    """Active rate tables a store can quote with, ordered by name."""

    def __init__(self, repository: PricingConfigRepository) -> None:
        self._repository = repository

    def execute(self, store_id: str) -> list[RateTable]:
        return self._repository.list_rate_tables(store_id)
