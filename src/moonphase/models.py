"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MoonPhase(Enum):
    """The eight named phases, declared in cycle order starting at New."""

    NEW = "new"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL = "full"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"

    @property
    def index(self) -> int:
        """Position in the cycle (New = 0 ... WaningCrescent = 7)."""
        return _CYCLE.index(self)


_CYCLE: tuple[MoonPhase, ...] = tuple(MoonPhase)


@dataclass(frozen=True)
class PhaseAttributes:
    """Values derived from a MoonPhase. Consumed by renderers and the UI."""

    display_name: str  # "First Quarter"
    illumination_fraction: float  # Lit share of the disk, 0.0 to 1.0
    light_angle_radians: float  # Light position around the moon, [0, 2π)

    @property
    def illumination_percent(self) -> int:
        return round(self.illumination_fraction * 100)


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-form address; empty string = default location
    when: str  # "YYYY-MM-DD HH:MM" local time; empty string = now


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone conversion. Input to moon computation."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    utc_dt: datetime  # UTC datetime (with tzinfo=utc)
    address_display: str  # Normalized address returned by geocoder (for display)


@dataclass(frozen=True)
class MoonData:
    """The sole input to renderers and view state. Fully computed state."""

    context: ObserverContext
    phase: MoonPhase
    cycle_fraction: float  # Progress through the lunation, 0 = new, 0.5 = full
    illuminated_fraction: float  # Photometric lit fraction from skyfield
    moonrise: datetime | None = None  # First rising within a day of utc_dt
    moonset: datetime | None = None  # First setting within a day of utc_dt
