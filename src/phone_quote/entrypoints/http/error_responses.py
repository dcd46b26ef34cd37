"""REST API error response models.

Every non-2xx response from the quote API uses this body.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One field-level problem inside a validation error."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "price",
                "message": "price is not a valid amount: '12,3,4'",
                "code": "INVALID_AMOUNT",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    ``code`` is stable and can be used as a translation key; ``errors``
    is only present for multi-field validation failures.

    Examples:
        Missing configuration:
            {
                "detail": "RateTable with identifier 'stone' not found",
                "code": "NOT_FOUND"
            }

        Rejected bulk adjustment:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "entity_ids",
                        "message": "Select at least one item",
                        "code": "EMPTY_SELECTION"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "RateTable with identifier 'stone' not found", "code": "NOT_FOUND"},
                {
                    "detail": "credit rate for 12x must be < 100",
                    "code": "CONFIGURATION_ERROR",
                },
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "entity_ids",
                            "message": "Select at least one item",
                            "code": "EMPTY_SELECTION",
                        },
                        {
                            "field": "deltas.price",
                            "message": "Must be a valid decimal: abc",
                            "code": "INVALID_DECIMAL",
                        },
                    ],
                },
            ]
        }
    )
