"""
CLI (Command Line Interface).

This module provides the terminal commands, e.g.:

    syllabuscal extract syllabus.txt --year 2025 --out events.json
    syllabuscal export events.json course.ics

Note:
- The text file is the plain-text rendering of a syllabus (PDF-to-text is done elsewhere)
- This CLI prints plain text; diagnostics go through logging (use --verbose for details)
- The current year is only read here, never inside the parser
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from syllabuscal.config import ConfigError, load_settings
from syllabuscal.export_ics import export_events_to_ics
from syllabuscal.model import ExtractionResult, Outcome
from syllabuscal.parse import extract_events
from syllabuscal.storage import load_events, save_result


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_DATA = 3

_NO_DATA_MESSAGES = {
    Outcome.EMPTY_DOCUMENT: "The document is empty.",
    Outcome.NO_TABLES: "No tables found in the document.",
    Outcome.NO_EVENTS: "Tables were found, but no events could be extracted.",
}


def _setup_logging(verbose: bool) -> None:
    """
    Labelled 'LEVEL message' lines on stderr.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _print_result(result: ExtractionResult) -> None:
    print(f"Course: {result.course_title}")

    for ev in result.events:
        start = ev.start_time.strftime("%Y-%m-%d %H:%M")
        # Sessions running past midnight show their end date too
        end_format = "%H:%M" if ev.end_time.date() == ev.start_time.date() else "%Y-%m-%d %H:%M"
        end = ev.end_time.strftime(end_format)
        print(f"- {start}-{end} {ev.summary}")

    for d in result.diagnostics:
        where = f"table {d.table_index}" if d.row_index < 0 else f"table {d.table_index}, row {d.row_index}"
        print(f"  skipped ({where}): {d.reason}")

    print(f"Events: {len(result.events)} | Tables: {result.tables_found} | Skipped: {len(result.diagnostics)}")


def _cmd_extract(args: argparse.Namespace) -> int:
    """
    Extract events from a text dump, print them and optionally save them as JSON.
    """
    try:
        settings = load_settings(args.config).with_overrides(
            timezone=args.timezone,
            reference_year=args.year,
        )
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return EXIT_ERROR

    year = settings.reference_year if settings.reference_year is not None else date.today().year

    try:
        text = Path(args.text_file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read {args.text_file}: {e}")
        return EXIT_ERROR

    result = extract_events(text, year, settings.tzinfo(), settings.start_hour)
    _print_result(result)

    if args.out:
        out = save_result(result, args.out)
        print(f"Saved to: {out}")

    if not result.has_data:
        print(_NO_DATA_MESSAGES[result.outcome])
        return EXIT_NO_DATA

    return EXIT_OK


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Export the events of a saved result file into an iCalendar (.ics) file.
    """
    src = (args.events_file or "").strip()
    out_path = (args.out or "").strip()
    if not src or not out_path:
        print("Please provide an events .json file and an output .ics path.")
        return EXIT_ERROR

    events = load_events(src)
    if not events:
        print("No events to export.")
        return EXIT_OK

    n = export_events_to_ics(events, out_path)
    print(f"Exported {n} events to: {out_path}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="syllabuscal", description="Syllabus text to calendar events")
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="Extract events from a syllabus text dump")
    p_extract.add_argument("text_file", type=str, help="Plain-text rendering of the syllabus")
    p_extract.add_argument("--year", type=int, default=None, help="Reference year (default: current year)")
    p_extract.add_argument("--timezone", type=str, default=None, help="IANA zone (e.g. Asia/Singapore)")
    p_extract.add_argument("--config", type=str, default=None, help="YAML settings file")
    p_extract.add_argument("--out", type=str, default=None, help="Write the result as JSON (e.g. events.json)")
    p_extract.add_argument("--verbose", action="store_true", help="Log every skipped table and row")

    p_export = sub.add_parser("export", help="Export saved events to .ics")
    p_export.add_argument("events_file", type=str, help="Result file written by 'extract --out'")
    p_export.add_argument("out", type=str, help="Output file path (e.g. course.ics)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    _setup_logging(getattr(args, "verbose", False))

    if args.command == "extract":
        raise SystemExit(_cmd_extract(args))
    if args.command == "export":
        raise SystemExit(_cmd_export(args))

    raise SystemExit(2)
