# src/chaosdispatch/core/config_loader.py
"""Layered YAML configuration loading.

Settings are assembled from up to three sources and validated once through
a Pydantic model:

    cli_overrides  >  config_file  >  preset  >  model defaults

Presets are plain YAML mappings stored one per file in a presets directory
and addressed by file stem.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Nested mappings are merged key by key; any other value in ``override``
    replaces the one in ``base``. Neither input is mutated.
    """
    merged = dict(base)
    for key, value in override.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


def list_presets(presets_dir: Path) -> list[str]:
    """Sorted preset names (YAML file stems) found in ``presets_dir``."""
    if not presets_dir.is_dir():
        return []
    return sorted(path.stem for path in presets_dir.glob("*.yaml") if path.is_file())


def _read_mapping(path: Path, label: str) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{label} must be a YAML mapping, got {type(loaded).__name__}")
    return loaded


def load_preset(presets_dir: Path, preset_name: str) -> dict[str, Any]:
    """Load the raw mapping for a named preset.

    Raises:
        FileNotFoundError: If no such preset exists.
        yaml.YAMLError: If the preset YAML is malformed.
        ValueError: If the preset is not a YAML mapping.
    """
    preset_path = presets_dir / f"{preset_name}.yaml"
    if not preset_path.exists():
        available = list_presets(presets_dir)
        raise FileNotFoundError(f"Preset '{preset_name}' not found. Available presets: {available}")
    return _read_mapping(preset_path, f"Preset '{preset_name}'")


def load_config[ConfigT: BaseModel](
    config_cls: type[ConfigT],
    presets_dir: Path,
    *,
    preset: str | None = None,
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ConfigT:
    """Assemble and validate a configuration model.

    Args:
        config_cls: Pydantic model class to validate into. Must accept a
            ``preset_name`` field.
        presets_dir: Directory holding preset YAML files.
        preset: Optional preset name used as the base layer.
        config_file: Optional YAML file layered over the preset.
        cli_overrides: Optional mapping layered over everything else.

    Raises:
        FileNotFoundError: If the preset or config file does not exist.
        yaml.YAMLError: If any YAML is malformed.
        ValueError: If a YAML document is not a mapping.
        pydantic.ValidationError: If the merged result fails validation.
    """
    layers: dict[str, Any] = {}

    if preset is not None:
        layers = load_preset(presets_dir, preset)

    if config_file is not None:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        layers = deep_merge(layers, _read_mapping(config_file, f"Config file {config_file}"))

    if cli_overrides is not None:
        layers = deep_merge(layers, cli_overrides)

    layers["preset_name"] = preset
    return config_cls(**layers)
