"""
CLI (Command Line Interface).

    maischedule validate <group>
    maischedule day {today,tomorrow} <group> [--json]
    maischedule week <mode> <group> [--json] [--ics FILE]
    maischedule session <group> [--json] [--ics FILE]

Week modes: thisweeknum, thisweek, nextweek, <N>week (e.g. 5week).

Exit status is 0 on success, otherwise the error code of the failure.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from maischedule.config import ScheduleConfig
from maischedule.errors import ScheduleError, UnresolvedWeekError
from maischedule.export_ics import export_schedule_to_ics, schedule_to_json
from maischedule.model import Day, Schedule
from maischedule.schedule import ScheduleClient

console = Console()
# errors go to stderr so --json output stays parseable
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """
    Configure the root logger once for CLI use.
    """
    level = logging.INFO if verbose else logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(handler)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _day_table(day: Day) -> Table:
    table = Table(title=f"{day.date} {day.weekday}".strip(), box=box.SIMPLE)
    table.add_column("Time", no_wrap=True)
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Lecturer")
    table.add_column("Location")
    for p in day.periods:
        table.add_row(p.time, p.kind, p.title, p.instructor, p.location)
    return table


def _print_weeks(schedule: Schedule) -> None:
    table = Table(title=f"Weeks ({schedule.group})", box=box.SIMPLE)
    table.add_column("Week", justify="right")
    table.add_column("Dates")
    for w in schedule.weeks:
        marker = " *" if w.number == schedule.current_week else ""
        table.add_row(f"{w.number}{marker}", w.label)
    console.print(table)


def _print_schedule(schedule: Schedule, args: argparse.Namespace) -> None:
    if getattr(args, "json", False):
        # plain print keeps the output machine-readable
        print(schedule_to_json(schedule))
        return

    if schedule.current_week:
        console.print(f"Current week: {schedule.current_week}")
    if not schedule.days and schedule.weeks:
        _print_weeks(schedule)
    if not schedule.days and not schedule.weeks:
        console.print("No classes.")
    for day in schedule.days:
        console.print(_day_table(day))


def _maybe_export(schedule: Schedule, args: argparse.Namespace, client: ScheduleClient) -> None:
    out_path = getattr(args, "ics", None)
    if not out_path:
        return
    n = export_schedule_to_ics(schedule, client.clock().year, out_path)
    err_console.print(f"Exported {n} events to: {out_path}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_validate(args: argparse.Namespace, client: ScheduleClient) -> int:
    code, err = client.validate_group(args.group)
    if err is not None:
        err_console.print(str(err), markup=False)
        return code
    console.print("OK")
    return 0


def _cmd_day(args: argparse.Namespace, client: ScheduleClient) -> int:
    schedule = client.get_day_schedule(args.mode, args.group)
    _print_schedule(schedule, args)
    return 0


def _cmd_week(args: argparse.Namespace, client: ScheduleClient) -> int:
    try:
        schedule = client.get_week_schedule(args.mode, args.group)
    except UnresolvedWeekError as exc:
        # show the week list anyway, it is what the user needs to pick one
        _print_schedule(exc.schedule, args)
        raise
    _print_schedule(schedule, args)
    _maybe_export(schedule, args, client)
    return 0


def _cmd_session(args: argparse.Namespace, client: ScheduleClient) -> int:
    schedule = client.get_session_schedule(args.group)
    _print_schedule(schedule, args)
    _maybe_export(schedule, args, client)
    return 0


COMMANDS = {
    "validate": _cmd_validate,
    "day": _cmd_day,
    "week": _cmd_week,
    "session": _cmd_session,
}


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="maischedule", description="MAI class schedule")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable more verbose output")
    parser.add_argument("--base-url", type=str, default=None, help="schedule site base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Check that a group exists")
    p_validate.add_argument("group", type=str, help="Group code (e.g. М8О-406Б-19)")

    p_day = sub.add_parser("day", help="Schedule for today or tomorrow")
    p_day.add_argument("mode", choices=["today", "tomorrow"])
    p_day.add_argument("group", type=str)
    p_day.add_argument("--json", action="store_true", help="print JSON")

    p_week = sub.add_parser("week", help="Schedule for a week")
    p_week.add_argument("mode", type=str, help="thisweeknum, thisweek, nextweek or <N>week")
    p_week.add_argument("group", type=str)
    p_week.add_argument("--json", action="store_true", help="print JSON")
    p_week.add_argument("--ics", type=str, default=None, help="also export to this .ics file")

    p_session = sub.add_parser("session", help="Exam session schedule")
    p_session.add_argument("group", type=str)
    p_session.add_argument("--json", action="store_true", help="print JSON")
    p_session.add_argument("--ics", type=str, default=None, help="also export to this .ics file")

    return parser


def main(argv: list[str] | None = None, client: ScheduleClient | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    owned = client is None
    if client is None:
        client = ScheduleClient(ScheduleConfig.from_env(args.base_url))

    try:
        raise SystemExit(COMMANDS[args.command](args, client))
    except ScheduleError as exc:
        err_console.print(str(exc), style="red", markup=False)
        raise SystemExit(exc.code) from None
    finally:
        if owned:
            client.close()
