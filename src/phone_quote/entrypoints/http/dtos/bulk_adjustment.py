from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class OverrideDTO(BaseModel):
    entity_id: str
    store_id: str | None = None
    field: str = Field(examples=["price"])
    value_cents: int = Field(examples=[549900])


class BulkAdjustmentRequestDTO(BaseModel):
    """Request payload for a bulk edit.

    ``deltas`` values are strings:
    - percentage mode: signed decimal percent ("10", "-9.09")
    - fixed mode: signed integer cents ("-5000")
    """

    kind: Literal["product", "trade_in", "damage"]
    mode: Literal["percentage", "fixed", "custom_override"]
    entity_ids: list[str] = Field(default_factory=list, examples=[["1", "2"]])
    fields: list[str] = Field(default_factory=list, examples=[["price"]])
    store_ids: list[str] = Field(default_factory=list, examples=[["castanhal", "belem"]])
    deltas: dict[str, str] = Field(default_factory=dict, examples=[{"price": "10"}])
    overrides: list[OverrideDTO] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "kind": "product",
                "mode": "percentage",
                "entity_ids": ["1", "2"],
                "fields": ["price"],
                "store_ids": ["castanhal"],
                "deltas": {"price": "10"},
            }
        }
    )


class AdjustmentOutcomeDTO(BaseModel):
    entity_id: str
    store_id: str | None
    field: str
    ok: bool
    previous_value_cents: int | None = None
    new_value_cents: int | None = None
    error: str | None = None


class BulkAdjustmentResponseDTO(BaseModel):
    total: int
    succeeded: int
    failed: int
    summary: str = Field(examples=["4 of 4 succeeded"])
    outcomes: list[AdjustmentOutcomeDTO]
