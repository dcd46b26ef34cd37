import pytest

from phone_quote.domain.errors import ConfigurationError, InvalidNumericInput
from phone_quote.domain.trade_in import (
    DamageDeduction,
    TradeInRange,
    TradeInViolation,
    ValidationResult,
)


def test_valid_range_passes():
    """A proper range validates."""
    TradeInRange("8", "castanhal", 180_000, 240_000).validate()


def test_min_equal_to_max_is_rejected():
    """Min must be strictly below max."""
    with pytest.raises(ConfigurationError, match="min_value_cents must be < max_value_cents"):
        TradeInRange("8", "castanhal", 200_000, 200_000).validate()


def test_min_above_max_is_rejected():
    """Inverted ranges are rejected."""
    with pytest.raises(ConfigurationError):
        TradeInRange("8", "castanhal", 250_000, 200_000).validate()


@pytest.mark.parametrize(("min_value", "max_value"), [(0, 100), (-1, 100), (100, 0)])
def test_bounds_must_be_positive(min_value, max_value):
    """Both bounds must be positive."""
    with pytest.raises(ConfigurationError, match="must be a positive integer"):
        TradeInRange("8", "castanhal", min_value, max_value).validate()


def test_error_context_names_the_device_and_store():
    """The error names the device and store."""
    with pytest.raises(ConfigurationError) as exc_info:
        TradeInRange("8", "belem", 300, 200).validate()

    assert exc_info.value.context == {"device_model_id": "8", "store_id": "belem"}


def test_negative_damage_discount_is_rejected():
    """Damage discounts cannot be negative."""
    with pytest.raises(InvalidNumericInput, match=r"discount_cents\[display-broken\]"):
        DamageDeduction("display-broken", "Display Quebrado", -1).validate()


def test_validation_result_factories():
    """success() and failure() build the expected results."""
    ok = ValidationResult.success()
    failed = ValidationResult.failure(TradeInViolation.INVALID_VALUE, "O valor não pode ser negativo")

    assert ok.ok and ok.violation is None
    assert not failed.ok
    assert failed.violation is TradeInViolation.INVALID_VALUE
    assert failed.limit_cents is None
