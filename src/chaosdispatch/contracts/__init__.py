"""Shared contracts for chaosdispatch: the exception taxonomy."""

from chaosdispatch.contracts.errors import (
    ChaosArgumentError,
    InvalidWeightError,
    MissingFunctionError,
    NoVariantsError,
    RangeOverflowError,
)

__all__ = [
    "ChaosArgumentError",
    "InvalidWeightError",
    "MissingFunctionError",
    "NoVariantsError",
    "RangeOverflowError",
]
