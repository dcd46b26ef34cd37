"""Tests for domain error classes."""

from phone_quote.domain.bulk_adjustment import BulkAdjustmentRejected
from phone_quote.domain.errors import (
    ConfigurationError,
    DomainError,
    InternalError,
    InvalidNumericInput,
    NotFoundError,
    ValidationError,
)


class TestDomainError:
    """Tests for base DomainError class."""

    def test_creates_error_with_message(self) -> None:
        """Message is kept on the error."""
        error = DomainError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.error_code == "DOMAIN_ERROR"
        assert error.context == {}

    def test_creates_error_with_context(self) -> None:
        """Keyword arguments become context."""
        error = DomainError("Error occurred", resource="RateTable", action="load")

        assert error.context == {"resource": "RateTable", "action": "load"}

    def test_to_dict_returns_structured_format(self) -> None:
        """to_dict merges message, code and context."""
        error = DomainError("Test error", field="price", value=123)

        assert error.to_dict() == {
            "message": "Test error",
            "code": "DOMAIN_ERROR",
            "field": "price",
            "value": 123,
        }

    def test_str_representation(self) -> None:
        """str() is the message."""
        assert str(DomainError("Test message")) == "Test message"


class TestValidationError:
    """Tests for ValidationError class."""

    def test_creates_simple_validation_error(self) -> None:
        """A plain message needs no field errors."""
        error = ValidationError("Invalid input")

        assert error.message == "Invalid input"
        assert error.error_code == "VALIDATION_ERROR"
        assert error.errors is None

    def test_default_message_without_errors(self) -> None:
        """A bare ValidationError has a default message."""
        assert ValidationError().message == "Validation error"

    def test_field_errors_set_default_message(self) -> None:
        """Field errors alone get a summary message."""
        errors = [{"field": "price", "message": "Required", "code": "MISSING_PRICE"}]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.errors == errors

    def test_to_dict_includes_field_errors(self) -> None:
        """Field errors appear in to_dict."""
        errors = [{"field": "price", "message": "Required"}]

        result = ValidationError("Bad request", errors=errors).to_dict()

        assert result == {
            "message": "Bad request",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }

    def test_to_dict_without_errors_has_no_errors_key(self) -> None:
        """No errors key when there are no field errors."""
        assert "errors" not in ValidationError("Bad").to_dict()


class TestConfigurationError:
    def test_has_configuration_error_code(self) -> None:
        """Configuration errors carry their code and context."""
        error = ConfigurationError("fee must be < 100", rate_table_id="stone")

        assert error.error_code == "CONFIGURATION_ERROR"
        assert error.to_dict()["rate_table_id"] == "stone"

    def test_is_a_domain_error(self) -> None:
        """ConfigurationError is a DomainError."""
        assert isinstance(ConfigurationError("x"), DomainError)


class TestInvalidNumericInput:
    def test_field_goes_into_context(self) -> None:
        """The field is stored in context."""
        error = InvalidNumericInput("price cannot be negative", field="price")

        assert error.error_code == "INVALID_NUMERIC_INPUT"
        assert error.context == {"field": "price"}

    def test_field_is_optional(self) -> None:
        """No field means empty context."""
        assert InvalidNumericInput("bad").context == {}


class TestNotFoundError:
    def test_message_with_identifier(self) -> None:
        """The message names the resource and identifier."""
        error = NotFoundError("RateTable", "stone-castanhal")

        assert error.message == "RateTable with identifier 'stone-castanhal' not found"
        assert error.error_code == "NOT_FOUND"
        assert error.context["resource"] == "RateTable"
        assert error.context["identifier"] == "stone-castanhal"

    def test_message_without_identifier(self) -> None:
        """The identifier is optional."""
        assert NotFoundError("TradeInRange").message == "TradeInRange not found"

    def test_extra_context_is_kept(self) -> None:
        """Extra keyword arguments are kept."""
        error = NotFoundError("ProductPrice", "3", store_id="belem")

        assert error.context["store_id"] == "belem"


class TestInternalError:
    def test_has_internal_error_code(self) -> None:
        """InternalError has its own code."""
        assert InternalError("boom").error_code == "INTERNAL_ERROR"


class TestBulkAdjustmentRejected:
    def test_is_a_validation_error(self) -> None:
        """Rejected batches are validation errors."""
        error = BulkAdjustmentRejected(errors=[{"field": "entity_ids", "message": "x"}])

        assert isinstance(error, ValidationError)
        assert error.error_code == "VALIDATION_ERROR"
