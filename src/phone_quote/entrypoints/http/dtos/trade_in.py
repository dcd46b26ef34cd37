from pydantic import BaseModel, ConfigDict, Field

from phone_quote.entrypoints.http.dtos.quote import TradeInAssessmentDTO


class TradeInValuationRequestDTO(BaseModel):
    """Request payload for valuing a used device at a store."""

    store_id: str = Field(examples=["castanhal"])
    device_model_id: str = Field(examples=["8"])
    damage_ids: list[str] = Field(default_factory=list, examples=[["display-broken"]])
    proposed_value_cents: int | None = Field(
        default=None,
        description="Credit the seller wants to grant. 0 or absent means no credit.",
        examples=[200000],
    )
    proposed_value_text: str | None = Field(default=None, examples=["2.000,00"])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "store_id": "castanhal",
                "device_model_id": "8",
                "damage_ids": ["display-broken"],
                "proposed_value_cents": 200000,
            }
        }
    )


class TradeInValuationResponseDTO(TradeInAssessmentDTO):
    """Suggested range after deductions plus the verdict on the proposed value."""

    device_model_id: str
    store_id: str
    min_value_cents: int
    max_value_cents: int
