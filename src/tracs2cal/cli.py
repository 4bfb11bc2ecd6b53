"""Command-line interface for converting TRACS roster exports to ICS files."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from . import session
from .config import CALENDAR_NAME, ICS_FILENAME, LOG_LEVEL, PREVIEW_ROWS
from .filters import FilterMode
from .session import ConverterState


def _write_json(path: Path, state: ConverterState) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps([event.to_dict() for event in state.filtered], ensure_ascii=False, indent=2),
        encoding="utf-8",
        newline="\n",
    )


def roster_csv_to_ics(
    csv_path: Path,
    *,
    ics_output: Path,
    json_output: Optional[Path] = None,
    filter_mode: FilterMode | str = FilterMode.ALL,
    calendar_name: str = CALENDAR_NAME,
) -> ConverterState:
    """Run the full pipeline: CSV -> events -> filter -> ICS.

    Returns the final state; nothing is written when its status is an error.
    """
    try:
        content = csv_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        return session.failed(
            csv_path.name,
            "Error Reading File",
            f"There was a problem reading your file: it is not UTF-8 encoded ({exc.reason} at byte {exc.start}).",
        )
    state = session.upload(ConverterState(), csv_path.name, content)
    if state.status and state.status.is_error:
        return state

    state = session.choose_filter(state, filter_mode)
    if json_output:
        _write_json(json_output, state)

    state, ics_content = session.export(state, calendar_name=calendar_name)
    if ics_content is None:
        return state

    ics_output.parent.mkdir(parents=True, exist_ok=True)
    # CRLF is already in the content
    ics_output.write_text(ics_content, encoding="utf-8", newline="")
    return state


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a TRACS Enterprise CSV roster export into an ICS calendar file.",
    )
    parser.add_argument("roster", type=Path, help="Path to a TRACS CSV export.")
    parser.add_argument(
        "-o",
        "--ics-output",
        type=Path,
        help=f"Where to write the resulting .ics file (defaults to {ICS_FILENAME} next to the roster).",
    )
    parser.add_argument(
        "--filter",
        dest="filter_mode",
        choices=[mode.value for mode in FilterMode],
        default=FilterMode.ALL.value,
        help="Which events to include (default: all).",
    )
    parser.add_argument(
        "--json-output",
        type=Path,
        help="Optional path to save the filtered events as JSON.",
    )
    parser.add_argument(
        "--calendar-name",
        default=CALENDAR_NAME,
        help="ICS PRODID name.",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help=f"Print the first {PREVIEW_ROWS} events that will be exported.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    roster_path: Path = args.roster
    if not roster_path.exists():
        parser.error(f"Roster not found: {roster_path}")

    ics_output = args.ics_output or roster_path.with_name(ICS_FILENAME)

    state = roster_csv_to_ics(
        roster_path,
        ics_output=ics_output,
        json_output=args.json_output,
        filter_mode=args.filter_mode,
        calendar_name=args.calendar_name,
    )
    if state.status and state.status.is_error:
        parser.error(f"{state.status.title}: {state.status.message}")

    if args.preview:
        shown = session.preview(state)
        print(f"Showing preview of {len(shown)} of {len(state.filtered)} events:")
        for event in shown:
            row = event.to_dict()
            times = "all day" if event.all_day else f"{row['start_time']} - {row['end_date']} {row['end_time']}"
            print(f"- {row['subject']}: {row['start_date']} {times}")

    print(state.status.message)
    print(f"ICS saved to: {ics_output}")


if __name__ == "__main__":
    main()
