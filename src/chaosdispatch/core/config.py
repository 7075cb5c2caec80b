# src/chaosdispatch/core/config.py
"""Process-level chaos settings.

A dispatcher itself needs no configuration beyond its variants. What an
application does want to set once, usually from a YAML file, is:

- whether chaos starts enabled for the whole process,
- a seed for the shared random source, for reproducible runs,
- how chaosdispatch's log events are rendered.

Uses Pydantic for validation with frozen (immutable) models.
Configuration precedence: CLI > YAML file > preset > defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from chaosdispatch.core.config_loader import list_presets as _list_presets
from chaosdispatch.core.config_loader import load_config as _load_config
from chaosdispatch.core.config_loader import load_preset as _load_preset
from chaosdispatch.core.logging import configure_logging, get_logger
from chaosdispatch.engine.global_switch import set_global_chaos
from chaosdispatch.engine.rng import seed_default_rng

logger = get_logger(__name__)


class LoggingConfig(BaseModel):
    """Log rendering configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Render JSON lines instead of console output",
    )


class ChaosDispatchConfig(BaseModel):
    """Top-level chaosdispatch configuration.

    Configuration precedence (highest to lowest):
    1. CLI flags
    2. YAML config file
    3. Preset defaults
    4. Built-in defaults
    """

    model_config = {"frozen": True, "extra": "forbid"}

    enabled: bool = Field(
        default=True,
        description="Initial state of the process-wide chaos switch",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the shared random source (None = system entropy)",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Log rendering configuration",
    )
    preset_name: str | None = Field(
        default=None,
        description="Preset name used to build this config (if any)",
    )


def apply_config(config: ChaosDispatchConfig, *, configure_logs: bool = True) -> bool:
    """Apply settings to the running process.

    Sets the global chaos switch, reseeds the shared random source when a seed
    is given and (optionally) configures logging.

    Returns:
        The global chaos setting that was in effect before this call.
    """
    if configure_logs:
        configure_logging(json_output=config.logging.json_output, level=config.logging.level)
    previous = set_global_chaos(config.enabled)
    if config.seed is not None:
        seed_default_rng(config.seed)
    logger.info(
        "Chaos configuration applied",
        enabled=config.enabled,
        seed=config.seed,
        preset=config.preset_name,
        previous_enabled=previous,
    )
    return previous


# === Preset Loading ===


def _get_presets_dir() -> Path:
    """Get the presets directory path."""
    return Path(__file__).parent / "presets"


def list_presets() -> list[str]:
    """List available preset names."""
    return _list_presets(_get_presets_dir())


def load_preset(preset_name: str) -> dict[str, Any]:
    """Load a preset configuration by name."""
    return _load_preset(_get_presets_dir(), preset_name)


def load_config(
    *,
    preset: str | None = None,
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ChaosDispatchConfig:
    """Load chaosdispatch configuration with precedence handling.

    Precedence (highest to lowest):
    1. cli_overrides - Direct overrides from CLI flags
    2. config_file - User's YAML configuration file
    3. preset - Named preset configuration
    4. defaults - Built-in Pydantic defaults
    """
    return _load_config(
        ChaosDispatchConfig,
        _get_presets_dir(),
        preset=preset,
        config_file=config_file,
        cli_overrides=cli_overrides,
    )
