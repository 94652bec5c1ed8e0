"""Astronomy computation layer — geocoding, timezone conversion, and skyfield moon calculations."""

import logging
from datetime import datetime, timedelta
from functools import lru_cache

import httpx
from pytz import timezone, utc
from pytz.exceptions import AmbiguousTimeError, NonExistentTimeError
from skyfield import almanac
from skyfield.api import Loader, wgs84
from timezonefinder import TimezoneFinder

from moonphase.config import (
    get_default_location,
    get_ephemeris_name,
    get_resources_path,
    get_user_agent,
)
from moonphase.models import MoonData, ObserverContext, QueryInput
from moonphase.phase import illumination_percent, phase_from_cycle

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()


class GeocodingError(Exception):
    """Geocoder call failure."""


class EphemerisError(Exception):
    """Ephemeris file could not be opened or downloaded."""


@lru_cache(maxsize=1)
def _loader() -> Loader:
    return Loader(str(get_resources_path()))


@lru_cache(maxsize=1)
def _ephemeris():
    """Load the JPL ephemeris once per process."""
    name = get_ephemeris_name()
    try:
        return _loader()(name)
    except (OSError, ValueError) as e:
        raise EphemerisError(f"Cannot load ephemeris {name}: {e}") from e


def _geocode_nominatim(address: str) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": get_user_agent()}
    resp = httpx.get(
        "https://nominatim.openstreetmap.org/search",
        params=params,
        headers=headers,
        timeout=10,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def geocode_address(address: str, when: str = "") -> ObserverContext:
    """Resolve an address string and time string to an ObserverContext.

    An empty address resolves to the configured default location.

    Args:
        address: Address string in any language.
        when: Local time string in "YYYY-MM-DD HH:MM" format. Empty means now.

    Returns:
        ObserverContext containing lat/lng, UTC datetime, and normalized address.

    Raises:
        GeocodingError: On HTTP error, malformed geocoder reply, unknown
            address, unknown timezone, malformed time string, or a local
            time skipped or repeated by a DST change.
    """
    if address.strip():
        try:
            result = _geocode_nominatim(address)
        except httpx.HTTPError as e:
            raise GeocodingError(f"Geocoder request failed: {e}") from e
        except (ValueError, KeyError) as e:
            raise GeocodingError(f"Unexpected geocoder response: {e!r}") from e
        if result is None:
            raise GeocodingError(f"Address not found: {address}")
        lat, lng, address_display = result
    else:
        lat, lng = get_default_location()
        address_display = f"{lat}, {lng}"

    if not when.strip():
        utc_dt = datetime.now(utc)
    else:
        try:
            dt = datetime.strptime(when, "%Y-%m-%d %H:%M")
        except ValueError as e:
            raise GeocodingError(f"Invalid time: {when}") from e
        tz_str = _tf.timezone_at(lat=lat, lng=lng)
        if tz_str is None:
            raise GeocodingError(f"Timezone not found: lat={lat}, lng={lng}")
        local_tz = timezone(tz_str)
        try:
            utc_dt = local_tz.localize(dt, is_dst=None).astimezone(utc)
        except NonExistentTimeError as e:
            raise GeocodingError(f"Time does not exist in {tz_str}: {when}") from e
        except AmbiguousTimeError as e:
            raise GeocodingError(f"Time is ambiguous in {tz_str}: {when}") from e

    return ObserverContext(
        lat=lat, lng=lng, utc_dt=utc_dt, address_display=address_display
    )


def compute_moon_data(context: ObserverContext) -> MoonData:
    """Compute the moon's phase and rise/set times using skyfield.

    Args:
        context: Geocoding result (lat/lng, UTC datetime).

    Returns:
        MoonData for the observer at context.utc_dt.

    Raises:
        EphemerisError: If the ephemeris cannot be loaded.
    """
    eph = _ephemeris()
    ts = _loader().timescale()
    t = ts.from_datetime(context.utc_dt)

    # Sun–Moon ecliptic longitude difference: 0° new, 180° full
    cycle = float(almanac.moon_phase(eph, t).degrees) / 360.0 % 1.0
    phase = phase_from_cycle(cycle)

    topos = wgs84.latlon(latitude_degrees=context.lat, longitude_degrees=context.lng)
    ground = eph["earth"] + topos
    apparent = ground.at(t).observe(eph["moon"]).apparent()
    illuminated = float(apparent.fraction_illuminated(eph["sun"]))

    moonrise, moonset = _rise_and_set(eph, ts, topos, context.utc_dt)

    logger.info("Moon phase computed: %s", phase.value)
    logger.info("Moon phase fraction: %.3f", cycle)
    logger.info("Illumination: %d%%", illumination_percent(phase))
    if moonrise is not None:
        logger.debug("Moonrise: %s", moonrise)
    if moonset is not None:
        logger.debug("Moonset: %s", moonset)

    return MoonData(
        context=context,
        phase=phase,
        cycle_fraction=cycle,
        illuminated_fraction=illuminated,
        moonrise=moonrise,
        moonset=moonset,
    )


def _rise_and_set(
    eph, ts, topos, utc_dt: datetime
) -> tuple[datetime | None, datetime | None]:
    """First moonrise and moonset in the 24 hours from utc_dt."""
    t0 = ts.from_datetime(utc_dt)
    t1 = ts.from_datetime(utc_dt + timedelta(days=1))
    f = almanac.risings_and_settings(eph, eph["moon"], topos)
    times, events = almanac.find_discrete(t0, t1, f)

    moonrise: datetime | None = None
    moonset: datetime | None = None
    for ti, event in zip(times, events):
        if event == 1 and moonrise is None:
            moonrise = ti.utc_datetime()
        elif event == 0 and moonset is None:
            moonset = ti.utc_datetime()
    return moonrise, moonset


def run(query: QueryInput) -> MoonData:
    """Top-level entry point: takes a QueryInput and returns a MoonData.

    Args:
        query: User input (address, time string).

    Returns:
        Fully computed MoonData.
    """
    context = geocode_address(query.address, query.when)
    return compute_moon_data(context)
