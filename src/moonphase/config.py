"""Configuration: ephemeris location and default observer from environment."""

import os
from pathlib import Path

_ROOT = Path(__file__).parent.parent.parent

DEFAULT_EPHEMERIS = "de421.bsp"
# San Francisco, used when no address is given
DEFAULT_LAT = 37.7749
DEFAULT_LNG = -122.4194
DEFAULT_USER_AGENT = "MoonPhase/1.0"


def get_resources_path() -> Path:
    """Return the directory skyfield downloads and reads ephemeris files from.

    Returns:
        MOONPHASE_RESOURCES env var, or ``resources/`` at the repository root.
    """
    path = os.environ.get("MOONPHASE_RESOURCES", "").strip()
    if path:
        return Path(path)
    return _ROOT / "resources"


def get_ephemeris_name() -> str:
    """Return the JPL ephemeris file name (MOONPHASE_EPHEMERIS env var or de421.bsp)."""
    return os.environ.get("MOONPHASE_EPHEMERIS", "").strip() or DEFAULT_EPHEMERIS


def get_default_location() -> tuple[float, float]:
    """Return the fallback observer (lat, lng).

    Reads MOONPHASE_DEFAULT_LAT / MOONPHASE_DEFAULT_LNG; a missing or
    unparseable value falls back to San Francisco.
    """
    try:
        lat = float(os.environ.get("MOONPHASE_DEFAULT_LAT", DEFAULT_LAT))
        lng = float(os.environ.get("MOONPHASE_DEFAULT_LNG", DEFAULT_LNG))
    except ValueError:
        return DEFAULT_LAT, DEFAULT_LNG
    return lat, lng


def get_user_agent() -> str:
    return os.environ.get("MOONPHASE_USER_AGENT", DEFAULT_USER_AGENT)
