# tests/unit/core/test_config_loader.py
"""Unit tests for layered YAML configuration loading.

Tests deep_merge, list_presets, load_preset and the generic load_config
precedence chain against a throwaway Pydantic model.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import BaseModel, ValidationError

from chaosdispatch.core.config_loader import deep_merge, list_presets, load_config, load_preset


class _Inner(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    level: str = "INFO"
    verbose: bool = False


class _Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    enabled: bool = True
    seed: int | None = None
    inner: _Inner = _Inner()
    preset_name: str | None = None


# =============================================================================
# deep_merge
# =============================================================================


class TestDeepMerge:
    """Tests for deep_merge utility."""

    def test_empty_override(self) -> None:
        assert deep_merge({"a": 1}, {}) == {"a": 1}

    def test_flat_override(self) -> None:
        assert deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self) -> None:
        base = {"inner": {"level": "INFO", "verbose": True}, "seed": 1}
        override = {"inner": {"level": "DEBUG"}}
        assert deep_merge(base, override) == {"inner": {"level": "DEBUG", "verbose": True}, "seed": 1}

    def test_scalar_replaces_mapping(self) -> None:
        assert deep_merge({"a": {"nested": True}}, {"a": None}) == {"a": None}

    def test_mapping_replaces_scalar(self) -> None:
        assert deep_merge({"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}

    def test_does_not_mutate_inputs(self) -> None:
        base = {"a": {"b": 1}}
        override = {"a": {"c": 2}}
        deep_merge(base, override)
        assert base == {"a": {"b": 1}}
        assert override == {"a": {"c": 2}}


# =============================================================================
# list_presets / load_preset
# =============================================================================


class TestListPresets:
    """Tests for list_presets utility."""

    def test_nonexistent_directory(self, tmp_path: Path) -> None:
        assert list_presets(tmp_path / "missing") == []

    def test_lists_yaml_stems_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "zeta.yaml").write_text("enabled: true")
        (tmp_path / "alpha.yaml").write_text("enabled: false")
        (tmp_path / "notes.txt").write_text("ignored")
        assert list_presets(tmp_path) == ["alpha", "zeta"]

    def test_ignores_directories(self, tmp_path: Path) -> None:
        (tmp_path / "looks_like.yaml").mkdir()
        (tmp_path / "real.yaml").write_text("enabled: true")
        assert list_presets(tmp_path) == ["real"]


class TestLoadPreset:
    """Tests for load_preset utility."""

    def test_loads_mapping(self, tmp_path: Path) -> None:
        data = {"enabled": False, "inner": {"level": "WARNING"}}
        (tmp_path / "quiet.yaml").write_text(yaml.safe_dump(data))
        assert load_preset(tmp_path, "quiet") == data

    def test_missing_lists_available(self, tmp_path: Path) -> None:
        (tmp_path / "exists.yaml").write_text("enabled: true")
        with pytest.raises(FileNotFoundError, match=r"not found.*exists"):
            load_preset(tmp_path, "missing")

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        (tmp_path / "list.yaml").write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="must be a YAML mapping"):
            load_preset(tmp_path, "list")

    def test_empty_preset_is_empty_mapping(self, tmp_path: Path) -> None:
        (tmp_path / "empty.yaml").write_text("")
        assert load_preset(tmp_path, "empty") == {}

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "broken.yaml").write_text("enabled: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_preset(tmp_path, "broken")


# =============================================================================
# load_config precedence
# =============================================================================


class TestLoadConfig:
    """Tests for the preset < file < CLI precedence chain."""

    def test_defaults_only(self, tmp_path: Path) -> None:
        settings = load_config(_Settings, tmp_path)
        assert settings == _Settings()

    def test_preset_layer(self, tmp_path: Path) -> None:
        (tmp_path / "off.yaml").write_text("enabled: false\nseed: 3\n")
        settings = load_config(_Settings, tmp_path, preset="off")
        assert settings.enabled is False
        assert settings.seed == 3
        assert settings.preset_name == "off"

    def test_file_overrides_preset(self, tmp_path: Path) -> None:
        (tmp_path / "base.yaml").write_text("seed: 1\ninner:\n  level: INFO\n  verbose: true\n")
        config_file = tmp_path / "mine.yaml"
        config_file.write_text("seed: 2\ninner:\n  level: DEBUG\n")
        settings = load_config(_Settings, tmp_path, preset="base", config_file=config_file)
        assert settings.seed == 2
        assert settings.inner == _Inner(level="DEBUG", verbose=True)

    def test_cli_overrides_everything(self, tmp_path: Path) -> None:
        (tmp_path / "base.yaml").write_text("seed: 1\n")
        config_file = tmp_path / "mine.yaml"
        config_file.write_text("seed: 2\n")
        settings = load_config(
            _Settings,
            tmp_path,
            preset="base",
            config_file=config_file,
            cli_overrides={"seed": 3, "inner": {"verbose": True}},
        )
        assert settings.seed == 3
        assert settings.inner.verbose is True

    def test_missing_config_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(_Settings, tmp_path, config_file=tmp_path / "nope.yaml")

    def test_empty_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(_Settings, tmp_path, config_file=config_file) == _Settings()

    def test_unknown_key_fails_validation(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            load_config(_Settings, tmp_path, cli_overrides={"bogus": 1})
