"""Tests for the moonphase command-line entry point."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from pytz import utc

from moonphase import cli
from moonphase.compute import GeocodingError
from moonphase.models import MoonData, MoonPhase, ObserverContext, QueryInput


def test_phase_option_skips_computation(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _run(query: QueryInput) -> MoonData:
        raise AssertionError("run must not be called with --phase")

    monkeypatch.setattr(cli, "run", _run)

    assert cli.main(["--phase", "first quarter"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["First Quarter", "Illumination: 50%"]


def test_phase_option_in_korean(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--phase", "full", "--lang", "ko"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["보름달", "밝기: 100%"]


def test_unknown_phase_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--phase", "blue moon"])
    assert excinfo.value.code == 2


def test_phase_option_saves_png(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    target = tmp_path / "out" / "crescent.png"

    assert cli.main(["--phase", "wax c", "--save", str(target)]) == 0
    assert target.exists()
    assert f"Saved: {target}" in capsys.readouterr().out


def test_computed_moon_is_printed(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    ctx = ObserverContext(
        lat=48.8584,
        lng=2.2945,
        utc_dt=datetime(1999, 7, 6, 20, 0, tzinfo=utc),
        address_display="Tour Eiffel, Paris",
    )
    moon = MoonData(
        context=ctx,
        phase=MoonPhase.WANING_CRESCENT,
        cycle_fraction=0.861,
        illuminated_fraction=0.2,
        moonrise=datetime(1999, 7, 7, 1, 12, tzinfo=utc),
    )
    queries: list[QueryInput] = []

    def _run(query: QueryInput) -> MoonData:
        queries.append(query)
        return moon

    monkeypatch.setattr(cli, "run", _run)

    argv = ["--address", "Eiffel Tower, Paris", "--when", "1999-07-06 22:00"]
    assert cli.main(argv) == 0
    out = capsys.readouterr().out.splitlines()

    assert queries == [
        QueryInput(address="Eiffel Tower, Paris", when="1999-07-06 22:00")
    ]
    assert out == [
        "Tour Eiffel, Paris @ 1999-07-06 20:00 UTC",
        "Waning Crescent",
        "Illumination: 25%",
        "Cycle: 0.861",
        "Moonrise 01:12 UTC",
    ]


def test_geocoding_failure_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _run(query: QueryInput) -> MoonData:
        raise GeocodingError("Address not found: atlantis")

    monkeypatch.setattr(cli, "run", _run)

    assert cli.main(["--address", "atlantis"]) == 1
    assert "error: Address not found: atlantis" in capsys.readouterr().err


def test_ambiguous_local_time_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """01:30 occurs twice when San Francisco falls back from PDT to PST."""

    monkeypatch.delenv("MOONPHASE_DEFAULT_LAT", raising=False)
    monkeypatch.delenv("MOONPHASE_DEFAULT_LNG", raising=False)

    assert cli.main(["--when", "2024-11-03 01:30"]) == 1
    assert "ambiguous" in capsys.readouterr().err
