# src/chaosdispatch/engine/dispatcher.py
"""Weighted dispatch core shared by every call-shape adapter.

A ChaosDispatcher holds an ordered list of ChaosVariants. The first variant
is the baseline: it runs whenever chaos is disabled, either for the whole
process (see global_switch) or for this dispatcher alone. With chaos enabled
each call picks one variant with probability proportional to its weight.

Usage:
    dispatcher = ChaosDispatcher(
        ChaosVariant(fetch, 0.9),
        ChaosVariant(raise_timeout, 0.1),
    )
    result = dispatcher.dispatch(url)

    # Equal weights from bare functions
    dispatcher = ChaosDispatcher.from_functions(fetch, raise_timeout)

The call-shape adapters in ``runners`` subclass this with fixed signatures;
they add no selection logic of their own.
"""

from __future__ import annotations

import math
import random as random_module
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Self

from chaosdispatch.contracts.errors import (
    MissingFunctionError,
    NoVariantsError,
    RangeOverflowError,
)
from chaosdispatch.core.logging import get_logger
from chaosdispatch.engine.global_switch import is_global_chaos_enabled
from chaosdispatch.engine.rng import default_rng
from chaosdispatch.engine.variant import ChaosVariant

logger = get_logger(__name__)


def equal_weight_variants[**P, R](
    functions: Sequence[Callable[P, R] | None],
) -> list[ChaosVariant[P, R]]:
    """Wrap bare functions as variants sharing the weight equally.

    Each function gets weight ``1 / len(functions)``. None entries are skipped
    but still count towards the divisor, so the resulting range is only ~1.0
    when every entry is present.

    Raises:
        NoVariantsError: If ``functions`` is empty.
    """
    if not functions:
        raise NoVariantsError()
    weight = 1.0 / len(functions)
    return [ChaosVariant(function, weight) for function in functions if function is not None]


class ChaosDispatcher[**P, R]:
    """Weighted random selection over an ordered set of variants.

    Chaos runs only when both the global switch and this dispatcher's local
    switch are on. Otherwise ``dispatch`` always invokes variant 0.

    Thread Safety:
        NOT thread-safe for mutation. ``add``/``add_variant`` must not run
        concurrently with each other or with ``dispatch`` on the same
        instance; callers serialise those themselves. Concurrent ``dispatch``
        calls on a fully built dispatcher are fine. The global switch is the
        only state shared across instances and is safe from any thread.
    """

    def __init__(
        self,
        *variants: ChaosVariant[P, R] | None,
        rng: random_module.Random | None = None,
    ) -> None:
        """Build a dispatcher from weighted variants.

        Args:
            *variants: Variants in priority order; the first is the baseline.
                None entries are ignored.
            rng: Random instance for testing (default: the shared process RNG).

        Raises:
            NoVariantsError: If no non-None variants remain.
            RangeOverflowError: If the summed weights overflow to infinity.
            TypeError: If an entry is not a ChaosVariant.
        """
        self._variants: list[ChaosVariant[P, R]] = [v for v in variants if v is not None]
        if not self._variants:
            raise NoVariantsError()
        for variant in self._variants:
            if not isinstance(variant, ChaosVariant):
                raise TypeError(
                    f"Expected ChaosVariant, got {type(variant).__name__}; "
                    "use from_functions() to build from bare functions"
                )

        total = 0.0
        for variant in self._variants:
            running = total + variant.weight
            if math.isinf(running):
                raise RangeOverflowError(variant.weight, current_range=total)
            total = running

        self._range = total
        self._chaos_enabled = True
        self._rng = rng if rng is not None else default_rng()
        logger.debug("Chaos dispatcher created", num_functions=len(self._variants), range=total)

    @classmethod
    def from_functions(
        cls,
        *functions: Callable[P, R] | None,
        rng: random_module.Random | None = None,
    ) -> Self:
        """Build a dispatcher giving every function the same weight.

        None entries are skipped. The first non-None function is the baseline.

        Raises:
            NoVariantsError: If no functions, or only None, are given.
        """
        return cls(*equal_weight_variants(functions), rng=rng)

    # -- Selection ---------------------------------------------------------

    def dispatch(self, *args: P.args, **kwargs: P.kwargs) -> R:
        """Invoke a variant, randomly when chaos is enabled, else the baseline."""
        if not self.will_run_with_chaos():
            return self.dispatch_baseline(*args, **kwargs)
        return self.dispatch_forced(*args, **kwargs)

    def dispatch_baseline(self, *args: P.args, **kwargs: P.kwargs) -> R:
        """Invoke the baseline variant regardless of chaos settings."""
        return self._variants[0].invoke(*args, **kwargs)

    def dispatch_forced(self, *args: P.args, **kwargs: P.kwargs) -> R:
        """Invoke a randomly selected variant regardless of chaos settings."""
        return self._select().invoke(*args, **kwargs)

    def _select(self) -> ChaosVariant[P, R]:
        """Walk the variants subtracting weights until the draw falls inside one.

        ``roll < range`` holds by construction, but accumulated rounding can
        leave a sliver past the last variant; the baseline covers that case.
        """
        roll = self._rng.random() * self._range
        for variant in self._variants:
            if roll < variant.weight:
                return variant
            roll -= variant.weight
        logger.warning(
            "Weighted selection exhausted variants, using baseline",
            range=self._range,
            remainder=roll,
        )
        return self._variants[0]

    # -- Mutation ----------------------------------------------------------

    def add(self, function: Callable[P, R], weight: float) -> Self:
        """Append a new (non-baseline) variant.

        Raises:
            InvalidWeightError: If weight is NaN, infinite or <= 0.
            MissingFunctionError: If function is None.
            RangeOverflowError: If the new range would be infinite.
        """
        return self.add_variant(ChaosVariant(function, weight))

    def add_variant(self, variant: ChaosVariant[P, R]) -> Self:
        """Append a pre-built variant.

        State is left untouched when this raises.

        Raises:
            MissingFunctionError: If variant is None.
            RangeOverflowError: If the new range would be infinite.
        """
        if variant is None:
            raise MissingFunctionError("Chaos variant cannot be None")
        new_range = self._range + variant.weight
        if math.isinf(new_range):
            raise RangeOverflowError(variant.weight, current_range=self._range)
        self._variants.append(variant)
        self._range = new_range
        logger.debug(
            "Chaos variant added",
            weight=variant.weight,
            num_functions=len(self._variants),
            range=new_range,
        )
        return self

    # -- Local chaos switch ------------------------------------------------

    def enable_chaos(self) -> bool:
        """Enable chaos for this dispatcher, returning the previous local setting."""
        previous = self._chaos_enabled
        self._chaos_enabled = True
        logger.debug("Local chaos enabled", previous=previous)
        return previous

    def disable_chaos(self) -> bool:
        """Disable chaos for this dispatcher, returning the previous local setting."""
        previous = self._chaos_enabled
        self._chaos_enabled = False
        logger.debug("Local chaos disabled", previous=previous)
        return previous

    def will_run_with_chaos(self) -> bool:
        """Whether ``dispatch`` will currently select at random.

        True only when both global and local chaos are enabled.
        """
        return is_global_chaos_enabled() and self._chaos_enabled

    @contextmanager
    def local_chaos(self, enabled: bool) -> Iterator[Self]:
        """Temporarily set the local switch, restoring the prior value on exit."""
        previous = self.enable_chaos() if enabled else self.disable_chaos()
        try:
            yield self
        finally:
            self._chaos_enabled = previous

    # -- Introspection -----------------------------------------------------

    @property
    def range(self) -> float:
        """Cached sum of all variant weights."""
        return self._range

    def get_range(self) -> float:
        return self._range

    def num_functions(self) -> int:
        return len(self._variants)

    @property
    def variants(self) -> tuple[ChaosVariant[P, R], ...]:
        """Snapshot of the registered variants, baseline first."""
        return tuple(self._variants)

    def probabilities(self) -> list[float]:
        """Selection probability of each variant while chaos is running."""
        return [variant.weight / self._range for variant in self._variants]

    def __len__(self) -> int:
        return len(self._variants)

    def __iter__(self) -> Iterator[ChaosVariant[P, R]]:
        return iter(tuple(self._variants))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_functions={len(self._variants)}, "
            f"range={self._range!r}, chaos_enabled={self._chaos_enabled})"
        )
