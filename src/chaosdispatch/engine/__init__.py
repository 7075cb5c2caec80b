# src/chaosdispatch/engine/__init__.py
"""Dispatch engine: weighted variants, the dispatcher core and its switches.

- ChaosVariant: immutable (function, weight) pair
- ChaosDispatcher: weighted selection with baseline fallback
- Runners: fixed call-shape front ends (supplier, runner, consumer, ...)
- Global switch: process-wide chaos on/off with test-and-set semantics
"""

from chaosdispatch.engine.dispatcher import ChaosDispatcher, equal_weight_variants
from chaosdispatch.engine.global_switch import (
    ChaosSwitch,
    disable_global_chaos,
    enable_global_chaos,
    global_chaos,
    is_global_chaos_enabled,
    set_global_chaos,
)
from chaosdispatch.engine.rng import default_rng, seed_default_rng
from chaosdispatch.engine.runners import (
    ChaosAction,
    ChaosBiConsumer,
    ChaosBiRunner,
    ChaosConsumer,
    ChaosRunner,
    ChaosSupplier,
)
from chaosdispatch.engine.variant import ChaosVariant, validate_weight

__all__ = [
    "ChaosAction",
    "ChaosBiConsumer",
    "ChaosBiRunner",
    "ChaosConsumer",
    "ChaosDispatcher",
    "ChaosRunner",
    "ChaosSupplier",
    "ChaosSwitch",
    "ChaosVariant",
    "default_rng",
    "disable_global_chaos",
    "enable_global_chaos",
    "equal_weight_variants",
    "global_chaos",
    "is_global_chaos_enabled",
    "seed_default_rng",
    "set_global_chaos",
    "validate_weight",
]
