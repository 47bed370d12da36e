"""Tests for settings loading and validation."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest
import yaml

from zonepulse.config import Settings, load_defaults, load_settings, settings_from_mapping
from zonepulse.errors import ConfigurationError, UnknownZoneError


def _write_yaml(data) -> Path:
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8") as f:
        yaml.dump(data, f)
        return Path(f.name)


def test_bundled_defaults_match_dataclass():
    assert settings_from_mapping(load_defaults()) == Settings()


def test_defaults_without_a_file():
    settings = load_settings()

    assert settings.step_minutes == 30
    assert settings.slot_count == 48
    assert settings.highlight_duration_seconds == 60
    assert settings.night_hours == (20, 6)
    assert settings.business_hours == (9, 17)
    assert settings.reference_zone is None


def test_overrides_are_overlaid_on_defaults():
    path = _write_yaml({"step_minutes": 15, "slot_count": 96, "time_format": "24h"})
    try:
        settings = load_settings(path)
    finally:
        path.unlink()

    assert settings.step_minutes == 15
    assert settings.slot_count == 96
    assert settings.time_format == "24h"
    assert settings.highlight_duration_seconds == 60


def test_nested_section_is_used():
    path = _write_yaml({"zonepulse": {"reference_zone": "Asia/Tokyo", "max_zones": 3}})
    try:
        settings = load_settings(path)
    finally:
        path.unlink()

    assert settings.reference_zone == "Asia/Tokyo"
    assert settings.max_zones == 3


def test_missing_file_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="zonepulse.config.loader"):
        settings = load_settings("/nonexistent/zonepulse.yaml")

    assert settings == Settings()
    assert "using defaults" in caplog.text


def test_malformed_yaml_falls_back(tmp_path, caplog):
    path = tmp_path / "broken.yaml"
    path.write_text("step_minutes: [30\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        assert load_settings(path) == Settings()


@pytest.mark.parametrize("overrides", [
    {"step_minutes": 7},
    {"time_format": "36h"},
    {"night_hours_start": 24},
    {"business_hours_end": -1},
    {"highlight_duration_seconds": 0},
    {"scroll_settle_ms": -5},
    {"scroll_alignment": "middle"},
    {"show_seconds": "yes"},
    {"slot_count": True},
    {"colour": "blue"},
])
def test_invalid_values_raise(overrides):
    path = _write_yaml(overrides)
    try:
        with pytest.raises(ConfigurationError):
            load_settings(path)
    finally:
        path.unlink()


def test_unknown_reference_zone_raises():
    with pytest.raises(UnknownZoneError):
        Settings(reference_zone="Mars/Jezero").validate()


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_reduced_motion_forces_start_alignment():
    assert Settings(reduced_motion=True).effective_alignment == "start"
    assert Settings().effective_alignment == "center"
