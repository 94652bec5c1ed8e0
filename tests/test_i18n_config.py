"""Tests for translation lookup and environment configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from moonphase import config
from moonphase.i18n import phase_name, t
from moonphase.models import MoonPhase
from moonphase.phase import display_name


def test_t_falls_back_to_english_then_key() -> None:
    assert t("header_current", "ko") == "현재 달의 위상"
    assert t("header_current", "fr") == "Current Moon Phase"
    assert t("no_such_key", "ko") == "no_such_key"


@pytest.mark.parametrize("phase", list(MoonPhase))
def test_phase_names_cover_every_phase(phase: MoonPhase) -> None:
    assert phase_name(phase, "en") == display_name(phase)
    assert phase_name(phase, "ko") != f"phase_{phase.value}"


def test_resources_path_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("MOONPHASE_RESOURCES", str(tmp_path))
    assert config.get_resources_path() == tmp_path

    monkeypatch.delenv("MOONPHASE_RESOURCES")
    assert config.get_resources_path().name == "resources"


def test_ephemeris_name_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MOONPHASE_EPHEMERIS", raising=False)
    assert config.get_ephemeris_name() == "de421.bsp"

    monkeypatch.setenv("MOONPHASE_EPHEMERIS", "de440s.bsp")
    assert config.get_ephemeris_name() == "de440s.bsp"


def test_default_location_ignores_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOONPHASE_DEFAULT_LAT", "51.5")
    monkeypatch.setenv("MOONPHASE_DEFAULT_LNG", "-0.12")
    assert config.get_default_location() == (51.5, -0.12)

    monkeypatch.setenv("MOONPHASE_DEFAULT_LAT", "north")
    assert config.get_default_location() == (config.DEFAULT_LAT, config.DEFAULT_LNG)
