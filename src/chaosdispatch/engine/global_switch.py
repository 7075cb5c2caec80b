# src/chaosdispatch/engine/global_switch.py
"""Process-wide chaos switch shared by every dispatcher.

Every ChaosDispatcher consults this switch before weighted selection; when it
is off, all dispatchers in the process run their baseline variant regardless
of their local setting.

The switch state lives inside a ChaosSwitch instance rather than a bare
module global, so the only ways to change it are the functions below.

Usage:
    previous = disable_global_chaos()
    try:
        run_smoke_tests()
    finally:
        if previous:
            enable_global_chaos()

    # or, equivalently
    with global_chaos(False):
        run_smoke_tests()
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from chaosdispatch.core.logging import get_logger

logger = get_logger(__name__)


class ChaosSwitch:
    """A boolean cell with atomic test-and-set.

    Thread Safety:
        Safe for concurrent use. Reads are a single attribute load; writes
        are serialised by a lock so each caller sees the exact value it
        replaced.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._lock = threading.Lock()
        self._enabled = enabled

    def set(self, enabled: bool) -> bool:
        """Set the switch and return the value it held before."""
        with self._lock:
            previous = self._enabled
            self._enabled = enabled
        return previous

    def enable(self) -> bool:
        """Turn the switch on, returning the previous value."""
        return self.set(True)

    def disable(self) -> bool:
        """Turn the switch off, returning the previous value."""
        return self.set(False)

    def is_enabled(self) -> bool:
        return self._enabled

    def __repr__(self) -> str:
        return f"ChaosSwitch(enabled={self._enabled})"


_GLOBAL_SWITCH = ChaosSwitch(enabled=True)


def enable_global_chaos() -> bool:
    """Atomically enable chaos for the whole process.

    Returns:
        Whether global chaos was enabled before this call.
    """
    previous = _GLOBAL_SWITCH.enable()
    logger.debug("Global chaos enabled", previous=previous)
    return previous


def disable_global_chaos() -> bool:
    """Atomically disable chaos for the whole process.

    Returns:
        Whether global chaos was enabled before this call.
    """
    previous = _GLOBAL_SWITCH.disable()
    logger.debug("Global chaos disabled", previous=previous)
    return previous


def set_global_chaos(enabled: bool) -> bool:
    """Atomically set the process-wide chaos switch.

    Returns:
        Whether global chaos was enabled before this call.
    """
    previous = _GLOBAL_SWITCH.set(enabled)
    logger.debug("Global chaos set", enabled=enabled, previous=previous)
    return previous


def is_global_chaos_enabled() -> bool:
    """Return the current process-wide chaos setting."""
    return _GLOBAL_SWITCH.is_enabled()


@contextmanager
def global_chaos(enabled: bool) -> Iterator[None]:
    """Temporarily force the global switch, restoring the prior value on exit."""
    previous = _GLOBAL_SWITCH.set(enabled)
    try:
        yield
    finally:
        _GLOBAL_SWITCH.set(previous)
