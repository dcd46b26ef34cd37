"""Domain error classes.

Protocol-agnostic errors that represent business failures.
These errors are translated to appropriate formats (HTTP, CLI, etc.) by protocol adapters.

Trade-in valuation outcomes are NOT errors: they are returned as
``ValidationResult`` values (see ``phone_quote.domain.trade_in``).
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains business error information that
    can be translated to HTTP or other formats.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error.

    Used for request-shape and cross-field validation.

    Examples:
        - Bulk adjustment with no selected entities
        - Bulk adjustment field that does not belong to the edited kind

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "price", "message": "Must be a valid amount"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class ConfigurationError(DomainError):
    """Malformed store configuration. Fatal to the call, not retryable.

    Examples:
        - Credit fee of 100% or more (the fee formula divides by ``1 - fee``)
        - ``max_installments`` below 1
        - Trade-in range with ``min >= max``

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "CONFIGURATION_ERROR"


class InvalidNumericInput(DomainError):
    """A monetary input is negative, NaN, non-finite or not whole cents.

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "INVALID_NUMERIC_INPUT"

    def __init__(self, message: str, field: str | None = None, **context: Any) -> None:
        if field is not None:
            context["field"] = field
        super().__init__(message, **context)


class NotFoundError(DomainError):
    """Resource not found.

    Examples:
        - Rate table with ID not found
        - No trade-in range for a device model at a store

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "RateTable", "TradeInRange")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"
