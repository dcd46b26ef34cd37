from phone_quote.infra.db.models.base import Base
from phone_quote.infra.db.models.pricing import (
    DamageDeductionRow,
    InstallmentRateRow,
    ProductPriceRow,
    RateTableRow,
    TradeInRangeRow,
)

__all__ = [
    "Base",
    "DamageDeductionRow",
    "InstallmentRateRow",
    "ProductPriceRow",
    "RateTableRow",
    "TradeInRangeRow",
]
