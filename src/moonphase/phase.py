"""Moon phase model — pure mappings from a phase category to display and lighting values.

Two angle conventions are in play:

* Light angle (``light_angle_radians``, ``light_angle_from_fraction``):
  0 = new moon, π = full moon. Used to position the light in a renderer.
* Photometric phase angle (``phase_angle``): the Sun–Moon–observer angle,
  π = new moon, 0 = full moon.
"""

import math
import re

from moonphase.models import MoonPhase, PhaseAttributes

_PHASE_COUNT = len(MoonPhase)
_CYCLE = tuple(MoonPhase)

_DISPLAY_NAMES: dict[MoonPhase, str] = {
    MoonPhase.NEW: "New Moon",
    MoonPhase.WAXING_CRESCENT: "Waxing Crescent",
    MoonPhase.FIRST_QUARTER: "First Quarter",
    MoonPhase.WAXING_GIBBOUS: "Waxing Gibbous",
    MoonPhase.FULL: "Full Moon",
    MoonPhase.WANING_GIBBOUS: "Waning Gibbous",
    MoonPhase.LAST_QUARTER: "Last Quarter",
    MoonPhase.WANING_CRESCENT: "Waning Crescent",
}

# Compact labels for the phase picker buttons
SHORT_LABELS: dict[MoonPhase, str] = {
    MoonPhase.NEW: "New",
    MoonPhase.WAXING_CRESCENT: "Wax C",
    MoonPhase.FIRST_QUARTER: "1st Q",
    MoonPhase.WAXING_GIBBOUS: "Wax G",
    MoonPhase.FULL: "Full",
    MoonPhase.WANING_GIBBOUS: "Wan G",
    MoonPhase.LAST_QUARTER: "Last Q",
    MoonPhase.WANING_CRESCENT: "Wan C",
}


def display_name(phase: MoonPhase) -> str:
    return _DISPLAY_NAMES[phase]


def cycle_fraction(phase: MoonPhase) -> float:
    """Nominal progress through the lunation for a phase (0.0, 0.125, ... 0.875)."""
    return phase.index / _PHASE_COUNT


def illumination_from_cycle(fraction: float) -> float:
    """Fold a cycle fraction into a lit fraction: 0 at new, 1 at full, 0 again at new.

    Args:
        fraction: Progress through the lunation, 0.0 to 1.0.

    Returns:
        Linear illumination estimate in [0, 1].
    """
    fraction = min(max(fraction, 0.0), 1.0)
    if fraction <= 0.5:
        return fraction * 2.0
    return 2.0 - fraction * 2.0


def illumination_fraction(phase: MoonPhase) -> float:
    return illumination_from_cycle(cycle_fraction(phase))


def illumination_percent(phase: MoonPhase) -> int:
    return round(illumination_fraction(phase) * 100)


def light_angle_radians(phase: MoonPhase) -> float:
    """Angle for the simulated light source, π/4 apart around the cycle.

    New = 0, First Quarter = π/2, Full = π, Waning Crescent = 7π/4.
    """
    return phase.index * math.pi / 4


def phase_angle(illumination: float) -> float:
    """Photometric phase angle for a continuous illumination fraction.

    Inverts k = (1 + cos α) / 2. The input is clamped to [0, 1] so acos never
    leaves its domain.

    Args:
        illumination: Lit fraction of the disk.

    Returns:
        α in radians: π for an unlit disk, 0 for a fully lit one.
    """
    k = min(max(illumination, 0.0), 1.0)
    return math.acos(2.0 * k - 1.0)


def light_angle_from_fraction(illumination: float) -> float:
    """``phase_angle`` re-expressed in the light-angle convention (0 = new, π = full)."""
    return math.pi - phase_angle(illumination)


def phase_from_cycle(fraction: float) -> MoonPhase:
    """Classify a continuous cycle fraction into the nearest named phase.

    Each phase owns a bin of width 1/8 centred on its nominal cycle fraction,
    so New covers [0.9375, 1) and [0, 0.0625).
    """
    index = math.floor((fraction % 1.0) * _PHASE_COUNT + 0.5) % _PHASE_COUNT
    return _CYCLE[index]


def next_phase(phase: MoonPhase) -> MoonPhase:
    return _CYCLE[(phase.index + 1) % _PHASE_COUNT]


def previous_phase(phase: MoonPhase) -> MoonPhase:
    return _CYCLE[(phase.index - 1) % _PHASE_COUNT]


def phase_attributes(phase: MoonPhase) -> PhaseAttributes:
    return PhaseAttributes(
        display_name=display_name(phase),
        illumination_fraction=illumination_fraction(phase),
        light_angle_radians=light_angle_radians(phase),
    )


def light_position(angle: float, distance: float = 2.0) -> tuple[float, float, float]:
    """Place a light around a moon at the origin, seen by a camera on the +z axis.

    Angle 0 puts the light straight behind the moon (dark disk), π/2 to the
    right (right half lit), π behind the camera (full disk).

    Args:
        angle: Light angle in radians, 0 = new, π = full.
        distance: Distance from the moon's centre.

    Returns:
        (x, y, z) position of the light.
    """
    return (
        math.sin(angle) * distance,
        0.0,
        -math.cos(angle) * distance,
    )


def _normalize_label(text: str) -> str:
    return re.sub(r"[\s_\-]+", " ", text.strip().lower())


_LOOKUP: dict[str, MoonPhase] = {}
for _phase in MoonPhase:
    _LOOKUP[_normalize_label(_phase.value)] = _phase
    _LOOKUP[_normalize_label(_DISPLAY_NAMES[_phase])] = _phase
    _LOOKUP[_normalize_label(SHORT_LABELS[_phase])] = _phase


def parse_phase(text: str) -> MoonPhase:
    """Resolve a phase from its enum value, display name, or short label.

    Matching ignores case and treats spaces, hyphens, and underscores alike,
    so "waxing_crescent", "Waxing Crescent", and "wax-c" all resolve.

    Raises:
        ValueError: If the text names no phase.
    """
    phase = _LOOKUP.get(_normalize_label(text))
    if phase is None:
        raise ValueError(f"Unknown moon phase: {text!r}")
    return phase
