"""
chaosdispatch: weighted random function dispatch for chaos testing.

A dispatcher holds several variants of one operation (the normal path plus
failure modes such as timeouts or errors), each with a weight, and runs one
of them per call. Chaos can be switched off per dispatcher or for the whole
process, in which case the first variant always runs.
"""

import logging

from chaosdispatch.contracts.errors import (
    ChaosArgumentError,
    InvalidWeightError,
    MissingFunctionError,
    NoVariantsError,
    RangeOverflowError,
)
from chaosdispatch.engine import (
    ChaosAction,
    ChaosBiConsumer,
    ChaosBiRunner,
    ChaosConsumer,
    ChaosDispatcher,
    ChaosRunner,
    ChaosSupplier,
    ChaosVariant,
    disable_global_chaos,
    enable_global_chaos,
    global_chaos,
    is_global_chaos_enabled,
    set_global_chaos,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ChaosAction",
    "ChaosArgumentError",
    "ChaosBiConsumer",
    "ChaosBiRunner",
    "ChaosConsumer",
    "ChaosDispatcher",
    "ChaosRunner",
    "ChaosSupplier",
    "ChaosVariant",
    "InvalidWeightError",
    "MissingFunctionError",
    "NoVariantsError",
    "RangeOverflowError",
    "__version__",
    "disable_global_chaos",
    "enable_global_chaos",
    "global_chaos",
    "is_global_chaos_enabled",
    "set_global_chaos",
]
