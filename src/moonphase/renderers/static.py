"""Matplotlib static PNG renderer — a Lambert-shaded moon lit from the phase's light angle."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from moonphase.models import MoonData, MoonPhase
from moonphase.phase import light_angle_radians, light_position

_ROOT = Path(__file__).parent.parent.parent.parent

_RESOLUTION = 512
_AMBIENT = 0.04  # Earthshine, keeps the dark limb faintly visible


def shade_disk(angle: float, resolution: int = _RESOLUTION) -> np.ndarray:
    """Brightness of a unit sphere seen from +z, lit from ``light_position(angle)``.

    Args:
        angle: Light angle in radians, 0 = new, π = full.
        resolution: Output is a resolution x resolution grid.

    Returns:
        2D array in [0, 1]; row 0 is the bottom of the disk. Pixels outside
        the disk are 0.
    """
    axis = np.linspace(-1.0, 1.0, resolution)
    x, y = np.meshgrid(axis, axis)
    r2 = x**2 + y**2
    inside = r2 <= 1.0
    z = np.sqrt(np.clip(1.0 - r2, 0.0, None))

    light = np.array(light_position(angle))
    light /= np.linalg.norm(light)
    lambert = np.clip(x * light[0] + y * light[1] + z * light[2], 0.0, None)

    shaded = np.clip(_AMBIENT + (1.0 - _AMBIENT) * lambert, 0.0, 1.0)
    return np.where(inside, shaded, 0.0)


def render_moon(angle: float, size: int = 6) -> Figure:
    """Render the moon lit from the given light angle.

    Args:
        angle: Light angle in radians, 0 = new, π = full.
        size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(size, size))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    ax.imshow(
        shade_disk(angle),
        cmap="gray",
        vmin=0.0,
        vmax=1.0,
        origin="lower",
        extent=(-1, 1, -1, 1),
        interpolation="bilinear",
    )

    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    ax.axis("off")

    return fig


def render_phase(phase: MoonPhase, size: int = 6) -> Figure:
    return render_moon(light_angle_radians(phase), size=size)


def save_moon_chart(moon_data: MoonData, output_path: Path | None = None) -> Path:
    """Save MoonData as a PNG file.

    Args:
        moon_data: Fully computed moon data.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        when_str = moon_data.context.utc_dt.strftime("%Y_%m_%d_%H_%M")
        filename = f"{moon_data.phase.value}__{when_str}.png"
        output_path = _ROOT / "results" / filename

    return save_phase_chart(moon_data.phase, output_path)


def save_phase_chart(phase: MoonPhase, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_phase(phase)
    fig.savefig(output_path, facecolor="black")
    plt.close(fig)
    return output_path
