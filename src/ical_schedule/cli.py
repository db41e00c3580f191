"""Command line entry point for ``ical-schedule``."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from pathlib import Path

from .builder import ScheduleBuilder
from .errors import ScheduleError
from .schedule import Track

logger = logging.getLogger(__name__)


def parse_track(value: str) -> Track:
    """Parse a ``NAME=URL`` command line value into a :class:`Track`."""
    name, sep, url = value.partition("=")
    if not sep or not name.strip() or not url.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=URL, got {value!r}")
    return Track(name.strip(), url.strip())


def load_tracks(path: str | Path) -> list[Track]:
    """Read the ordered ``[tracks]`` table of a TOML config file.

    Example::

        [tracks]
        "Primary Track" = "https://example.com/primary.ics"
        "Secondary Track" = "https://example.com/secondary.ics"
    """
    with open(path, "rb") as f:
        config = tomllib.load(f)
    return [Track(name, str(url)) for name, url in config.get("tracks", {}).items()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ical-schedule",
        description="Render an event schedule from iCalendar feeds.",
    )
    parser.add_argument(
        "-t",
        "--track",
        dest="tracks",
        action="append",
        type=parse_track,
        default=[],
        metavar="NAME=URL",
        help="Track name and feed URL; repeat for more tracks",
    )
    parser.add_argument(
        "-c", "--config", help="TOML file with a [tracks] table of name = URL"
    )
    parser.add_argument(
        "--text", action="store_true", help="Print plain text instead of HTML"
    )
    parser.add_argument("--pretty", action="store_true", help="Indent HTML output")
    parser.add_argument(
        "--timeout", type=float, default=30, help="HTTP timeout in seconds"
    )
    parser.add_argument("-o", "--output", help="Write to this file, not stdout")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    tracks = []
    if args.config:
        try:
            tracks.extend(load_tracks(args.config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            parser.error(f"cannot read config {args.config}: {e}")
    tracks.extend(args.tracks)
    if not tracks:
        parser.error("no tracks configured, use --track or --config")

    builder = ScheduleBuilder(tracks, timeout=args.timeout)
    try:
        if args.text:
            output = builder.get_text()
        else:
            output = builder.get_html(pretty=args.pretty)
    except ScheduleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info("Wrote schedule to %s", args.output)
    else:
        sys.stdout.write(output)
    return 0
