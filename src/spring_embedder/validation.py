"""
Input validation utilities for the spring embedder.

Provides the exception hierarchy and the boundary checks applied to values
supplied by weight functions and engine configuration. Raises descriptive
exceptions on invalid input instead of letting NaN reach node positions.
"""

from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """Base exception for embedder validation errors."""

    pass


class InvalidWeightError(ValidationError):
    """Raised when a weight function returns a non-finite value."""

    pass


class InvalidTickRateError(ValidationError):
    """Raised when the scheduler tick rate is not a positive finite number."""

    pass


class EngineDisposedError(RuntimeError):
    """Raised when a disposed engine is asked to accept new observers."""

    pass


def validate_weight(value: Any, source: Any = None, target: Any = None) -> float:
    """
    Validate an ideal distance returned by ``WeightFunction.weight``.

    Args:
        value: Returned weight
        source: Node the weight was requested for (for the message)
        target: Other node of the pair (for the message)

    Returns:
        The weight as float

    Raises:
        InvalidWeightError: If the weight is not a number, NaN or infinite
    """
    try:
        weight = float(value)
    except (TypeError, ValueError):
        weight = math.nan
    if not math.isfinite(weight):
        raise InvalidWeightError(
            f"Weight between {_describe(source)} and {_describe(target)} "
            f"must be a finite number, got {value!r}"
        )
    return weight


def validate_spring_constant(value: Any) -> float:
    """
    Validate the global scale factor returned by ``spring_constant()``.

    Raises:
        InvalidWeightError: If the spring constant is not a number, NaN or infinite
    """
    try:
        constant = float(value)
    except (TypeError, ValueError):
        constant = math.nan
    if not math.isfinite(constant):
        raise InvalidWeightError(f"Spring constant must be a finite number, got {value!r}")
    return constant


def validate_tick_rate(rate: float) -> float:
    """
    Validate the scheduler tick rate (ticks per second).

    Raises:
        InvalidTickRateError: If rate is not positive or not finite
    """
    try:
        value = float(rate)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value) or value <= 0:
        raise InvalidTickRateError(f"tick_rate must be positive and finite, got {rate!r}")
    return value


def _describe(node: Any) -> str:
    if node is None:
        return "?"
    index = getattr(node, "index", None)
    return f"node {index}" if index is not None else repr(node)


__all__ = [
    "ValidationError",
    "InvalidWeightError",
    "InvalidTickRateError",
    "EngineDisposedError",
    "validate_weight",
    "validate_spring_constant",
    "validate_tick_rate",
]
