"""Ambient services for chaosdispatch: logging and layered configuration."""

from chaosdispatch.core.config import (
    ChaosDispatchConfig,
    LoggingConfig,
    apply_config,
    list_presets,
    load_config,
    load_preset,
)
from chaosdispatch.core.logging import configure_logging, get_logger, reset_logging

__all__ = [
    "ChaosDispatchConfig",
    "LoggingConfig",
    "apply_config",
    "configure_logging",
    "get_logger",
    "list_presets",
    "load_config",
    "load_preset",
    "reset_logging",
]
