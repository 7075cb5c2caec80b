# src/chaosdispatch/contracts/errors.py
"""Exceptions raised while building or growing a chaos dispatcher.

All of these are raised eagerly, at construction or ``add`` time. The
dispatch path itself never raises on its own account: anything a dispatched
variant raises reaches the caller untouched.

Hierarchy:
    ChaosArgumentError (ValueError)
        InvalidWeightError   - weight is NaN, infinite, zero or negative
        RangeOverflowError   - cumulative weight would become infinite
        NoVariantsError      - nothing left to dispatch to
    MissingFunctionError (TypeError)
                             - a required function or variant is None
"""

from __future__ import annotations


class ChaosArgumentError(ValueError):
    """Base class for malformed dispatcher arguments."""


class InvalidWeightError(ChaosArgumentError):
    """Raised when a variant weight is not a positive, finite number.

    Attributes:
        weight: The rejected weight value.
    """

    def __init__(self, weight: float, reason: str) -> None:
        self.weight = weight
        super().__init__(f"Invalid weight {weight!r}: {reason}")


class RangeOverflowError(ChaosArgumentError):
    """Raised when the summed weights of a dispatcher would overflow to infinity.

    Attributes:
        current_range: Range accumulated before the rejected weight.
        weight: The weight that pushed the range over.
    """

    def __init__(self, weight: float, current_range: float) -> None:
        self.weight = weight
        self.current_range = current_range
        super().__init__("Bad weights: range is infinite")


class NoVariantsError(ChaosArgumentError):
    """Raised when a dispatcher would be built with no usable variants."""

    def __init__(self) -> None:
        super().__init__("Must provide at least one valid function")


class MissingFunctionError(TypeError):
    """Raised when a function or variant argument is None."""
