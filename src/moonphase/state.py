"""Presentation state for one moon display. Owned by the caller, one instance per view."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from moonphase.compute import EphemerisError, GeocodingError, run
from moonphase.models import MoonData, MoonPhase, QueryInput
from moonphase.phase import display_name, illumination_fraction

logger = logging.getLogger(__name__)


def error_message_for(exc: Exception) -> str:
    """Translate a compute-layer failure into a user-facing message."""
    if isinstance(exc, GeocodingError):
        if isinstance(exc.__cause__, httpx.HTTPError):
            return "Network error. Please check your connection."
        return "Location not available or invalid."
    if isinstance(exc, EphemerisError):
        return "Moon data not available. Please check your connection."
    return f"Error fetching moon data: {exc}"


@dataclass
class MoonViewState:
    """Mutable view model behind the moon page.

    Starts out showing a waxing gibbous placeholder until data arrives.
    """

    moon_phase: MoonPhase = MoonPhase.WAXING_GIBBOUS
    phase_name: str = "Loading..."
    illumination: float = 0.0
    coordinates: str = ""
    is_loading: bool = False
    error_message: str | None = None

    @property
    def illumination_percent(self) -> int:
        return round(self.illumination * 100)

    def begin_loading(self) -> None:
        self.is_loading = True
        self.error_message = None

    def apply(self, moon_data: MoonData) -> None:
        """Show a freshly computed moon."""
        ctx = moon_data.context
        self.coordinates = f"{ctx.lat}, {ctx.lng}"
        self.moon_phase = moon_data.phase
        self.phase_name = display_name(moon_data.phase)
        self.illumination = illumination_fraction(moon_data.phase)
        self.error_message = None
        self.is_loading = False

    def set_test_phase(self, phase: MoonPhase) -> None:
        """Show a phase picked by hand, without touching coordinates."""
        self.moon_phase = phase
        self.phase_name = display_name(phase)
        self.illumination = illumination_fraction(phase)
        self.error_message = None

    def fail(self, message: str) -> None:
        self.error_message = message
        self.phase_name = "Error"
        self.is_loading = False


def load_moon(
    view: MoonViewState,
    query: QueryInput,
    fetch: Callable[[QueryInput], MoonData] = run,
) -> MoonData | None:
    """Fetch the moon for query into view.

    Every failure ends up in ``view.error_message``; the loading flag is
    always cleared.

    Returns:
        The fetched MoonData, or None if the fetch failed.
    """
    view.begin_loading()
    try:
        moon_data = fetch(query)
    except Exception as e:
        logger.warning("Moon fetch failed: %s", e, exc_info=True)
        view.fail(error_message_for(e))
        return None
    view.apply(moon_data)
    return moon_data
