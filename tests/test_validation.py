"""Tests for input validation module."""

import pytest

from spring_embedder.validation import (
    EngineDisposedError,
    InvalidTickRateError,
    InvalidWeightError,
    ValidationError,
    validate_spring_constant,
    validate_tick_rate,
    validate_weight,
)
from spring_embedder import SpringNode


class TestWeightValidation:
    """Tests for weight validation."""

    def test_valid_weight(self):
        assert validate_weight(17) == 17.0

    def test_negative_weight_allowed(self):
        assert validate_weight(-5.0) == -5.0

    def test_nan_raises(self):
        with pytest.raises(InvalidWeightError, match="must be a finite number"):
            validate_weight(float("nan"))

    @pytest.mark.parametrize("value", [None, "far", object()])
    def test_non_numeric_raises(self, value):
        with pytest.raises(InvalidWeightError, match="must be a finite number"):
            validate_weight(value)

    def test_message_names_nodes(self):
        with pytest.raises(InvalidWeightError, match="node 1 and node 2"):
            validate_weight(float("inf"), SpringNode(index=1), SpringNode(index=2))

    def test_spring_constant(self):
        assert validate_spring_constant(0.75) == 0.75
        with pytest.raises(InvalidWeightError):
            validate_spring_constant(float("-inf"))
        with pytest.raises(InvalidWeightError):
            validate_spring_constant(None)


class TestTickRateValidation:
    """Tests for tick rate validation."""

    def test_valid(self):
        assert validate_tick_rate(60) == 60.0

    def test_zero_raises(self):
        with pytest.raises(InvalidTickRateError, match="positive"):
            validate_tick_rate(0)

    def test_non_numeric_raises(self):
        with pytest.raises(InvalidTickRateError):
            validate_tick_rate("fast")


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    def test_validation_errors_are_value_errors(self):
        assert issubclass(InvalidWeightError, ValidationError)
        assert issubclass(InvalidTickRateError, ValidationError)
        assert issubclass(ValidationError, ValueError)

    def test_disposed_is_runtime_error(self):
        assert issubclass(EngineDisposedError, RuntimeError)
