# src/chaosdispatch/engine/rng.py
"""Shared random source for dispatchers built without an explicit ``rng``.

``random.Random.random()`` is implemented in C and safe to call from many
threads at once, so one instance serves the whole process. Reseeding happens
in place, which means dispatchers created before a reseed pick it up too.
"""

from __future__ import annotations

import random

_DEFAULT_RNG = random.Random()


def default_rng() -> random.Random:
    """Return the process-wide default Random instance."""
    return _DEFAULT_RNG


def seed_default_rng(seed: int | None) -> None:
    """Reseed the default Random instance (None reseeds from system entropy)."""
    _DEFAULT_RNG.seed(seed)
