# src/chaosdispatch/engine/variant.py
"""Weighted variant: one candidate function plus its selection weight.

ChaosVariant is the currency between callers and a ChaosDispatcher. The
weight is relative, not a percentage: a dispatcher picks each variant with
probability ``weight / range`` where range is the sum of all its weights.

Usage:
    fail = ChaosVariant(lambda req: raise_timeout(req), 0.05)
    ok = ChaosVariant(send_request, 0.95)
    dispatcher = ChaosDispatcher(ok, fail)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from chaosdispatch.contracts.errors import InvalidWeightError, MissingFunctionError


def validate_weight(weight: float) -> None:
    """Reject weights that are NaN, infinite, zero or negative.

    Raises:
        InvalidWeightError: If the weight is not a positive finite number.
    """
    try:
        finite = math.isfinite(weight)
    except OverflowError:
        # ints too large for a float
        raise InvalidWeightError(weight, "weight is too large to represent as a float") from None
    if not finite:
        raise InvalidWeightError(weight, "weight cannot be Infinity or NaN")
    if weight <= 0:
        raise InvalidWeightError(weight, "weight must be greater than 0")


@dataclass(frozen=True, slots=True)
class ChaosVariant[**P, R]:
    """An immutable pairing of a function and its selection weight.

    Attributes:
        function: The function to invoke when this variant is selected.
        weight: Relative selection weight (> 0, finite).

    Raises:
        InvalidWeightError: If weight is NaN, infinite or <= 0.
        MissingFunctionError: If function is None.
        TypeError: If function is not callable.
    """

    function: Callable[P, R]
    weight: float

    def __post_init__(self) -> None:
        validate_weight(self.weight)
        if self.function is None:
            raise MissingFunctionError("Need to specify a function")
        if not callable(self.function):
            raise TypeError(f"Variant function must be callable, got {type(self.function).__name__}")

    def invoke(self, *args: P.args, **kwargs: P.kwargs) -> R:
        """Call the wrapped function, propagating its result and any exception."""
        return self.function(*args, **kwargs)
