"""Command-line entry point: print one day of the grid as a text table."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QCoreApplication

from zonepulse.app import GridEngine
from zonepulse.config import load_settings
from zonepulse.errors import ZonePulseError
from zonepulse.models import Classification, SlotRow
from zonepulse.utils import format_date_heading, format_offset, format_time_difference, load_civil_zone

CELL_WIDTH = 26

ROW_MARKERS = (
    ("is_current", ">"),
    ("is_highlighted", "*"),
)
CELL_MARKERS = (
    ("is_date_boundary", "|"),
    ("is_night", "n"),
    ("is_weekend", "w"),
    ("is_near_dst", "~"),
)
LEGEND = "> current  * selected  | new day  n night  w weekend  ~ DST change within a day"


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def _parse_time(value: str) -> time:
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected HH:MM, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zonepulse",
        description="Show one day of time slots across several civil and Mars zones",
    )
    parser.add_argument("--date", type=_parse_date, help="Day to show in the reference zone (default: today)")
    parser.add_argument("--at", type=_parse_time, help="Reference time of day, HH:MM (default: now)")
    parser.add_argument(
        "--zone",
        dest="zones",
        action="append",
        default=[],
        metavar="ID",
        help="Zone to add, e.g. Europe/Berlin or Mars/Jezero (repeatable)",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--select", type=_parse_time, metavar="HH:MM", help="Highlight the slot at this time")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return parser


def _markers(classification: Classification, markers) -> str:
    return "".join(symbol for field, symbol in markers if getattr(classification, field))


def _cell(row: SlotRow) -> str:
    flags = _markers(row.classification, CELL_MARKERS)
    return f"{row.label} {flags}".rstrip()


def render_grid(engine: GridEngine) -> str:
    """Text table of every displayed zone's rows."""
    grid = engine.grid()
    zones = engine.registry.zones
    reference = engine.reference_instant

    header = ["    "] + [f"{zone.name} ({format_offset(zone, reference)})"[:CELL_WIDTH] for zone in zones]
    lines = [" ".join(h.ljust(CELL_WIDTH) if i else h for i, h in enumerate(header)).rstrip()]
    lines.append("-" * len(lines[0]))

    local_rows = grid[engine.reference_zone]
    for index, local_row in enumerate(local_rows):
        marker = _markers(local_row.classification, ROW_MARKERS).ljust(2)
        cells = [_cell(grid[zone.id][index]).ljust(CELL_WIDTH) for zone in zones]
        lines.append(f"{index:02d}{marker} " + " ".join(cells).rstrip())
    lines.append("")
    lines.append(LEGEND)
    return "\n".join(lines)


def _resolve_reference(args, tz) -> datetime:
    now = datetime.now(timezone.utc).astimezone(tz)
    day = args.date or now.date()
    at = args.at or now.time().replace(microsecond=0)
    return datetime.combine(day, at, tzinfo=tz)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

    try:
        settings = load_settings(args.config)
        engine = GridEngine(settings, parent=app)
        for zone_id in args.zones:
            engine.add_zone(zone_id)
    except ZonePulseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    tz = load_civil_zone(engine.reference_zone)
    reference = _resolve_reference(args, tz)
    engine.on_reference_tick(reference)

    if args.select is not None:
        selected = datetime.combine(reference.date(), args.select, tzinfo=tz)
        engine.select(selected)

    print(f"{format_date_heading(reference, engine.registry.local_zone)} ({engine.reference_zone})")
    if engine.highlight_state.is_active:
        print(f"Selected {args.select:%H:%M}: {format_time_difference(selected, reference)}")
    print()
    print(render_grid(engine))

    engine.dispose()
    return 0
