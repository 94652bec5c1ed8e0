"""CLI entry point: print the moon phase for a place and time, optionally saving a PNG.

    uv run moonphase --address "Eiffel Tower, Paris" --when "1999-07-06 22:00"
    uv run moonphase --phase "first quarter" --save first_quarter.png
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from moonphase.compute import EphemerisError, GeocodingError, run
from moonphase.i18n import phase_name, t
from moonphase.models import QueryInput
from moonphase.phase import illumination_percent, parse_phase
from moonphase.renderers.static import save_moon_chart, save_phase_chart

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or MOONPHASE_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get("MOONPHASE_LOG", "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moonphase", description="Show the moon phase for a place and time."
    )
    parser.add_argument(
        "--address", default="", help="Observer address (default location if empty)"
    )
    parser.add_argument(
        "--when", default="", help='Local time "YYYY-MM-DD HH:MM" (default now)'
    )
    parser.add_argument("--phase", help="Skip computation and show this phase")
    parser.add_argument("--lang", default="en", choices=("en", "ko"))
    parser.add_argument(
        "--save",
        type=Path,
        nargs="?",
        const=True,
        help="Save a PNG (optional path)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.phase is not None:
        try:
            phase = parse_phase(args.phase)
        except ValueError as e:
            parser.error(str(e))
        print(phase_name(phase, args.lang))
        print(t("illumination", args.lang).format(percent=illumination_percent(phase)))
        if isinstance(args.save, Path):
            print(f"Saved: {save_phase_chart(phase, args.save)}")
        elif args.save:
            parser.error("--save needs a path when used with --phase")
        return 0

    try:
        moon_data = run(QueryInput(address=args.address, when=args.when))
    except (GeocodingError, EphemerisError) as e:
        logger.debug("Moon computation failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    ctx = moon_data.context
    print(f"{ctx.address_display} @ {ctx.utc_dt:%Y-%m-%d %H:%M} UTC")
    print(phase_name(moon_data.phase, args.lang))
    percent = illumination_percent(moon_data.phase)
    print(t("illumination", args.lang).format(percent=percent))
    print(f"Cycle: {moon_data.cycle_fraction:.3f}")
    if moon_data.moonrise is not None:
        print(t("moonrise", args.lang).format(time=f"{moon_data.moonrise:%H:%M} UTC"))
    if moon_data.moonset is not None:
        print(t("moonset", args.lang).format(time=f"{moon_data.moonset:%H:%M} UTC"))

    if args.save:
        output = args.save if isinstance(args.save, Path) else None
        print(f"Saved: {save_moon_chart(moon_data, output)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
