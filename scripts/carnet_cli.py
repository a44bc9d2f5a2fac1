#!/usr/bin/env python3
"""
Terminal front-end for the Carnet API.

Shows the week containing --date (today by default), starts a new week,
ticks exercises and writes reflections. Every change is saved immediately.

Usage examples:
  - Mint a development token (uses CARNET_AUTH_SECRET_KEY):
      python scripts/carnet_cli.py token user_123
  - Show the current week as a grid:
      python scripts/carnet_cli.py --base-url http://localhost:8000 --token <TOKEN> show --weekly
  - Tick Tuesday's rosary of the week of 2024-02-12:
      python scripts/carnet_cli.py --token <TOKEN> check 1 rosary --date 2024-02-12
  - Write this week's comments:
      python scripts/carnet_cli.py --token <TOKEN> note comments "Bonne semaine"
"""

from __future__ import annotations

import argparse
import datetime as dt
import os
import sys

from carnet.client.api import EntriesClient
from carnet.core.auth import create_access_token
from carnet.core.constants import DAY_LABELS, TEXT_FIELDS
from carnet.ui.dashboard import Dashboard
from carnet.ui.tracker import WeeklyTracker


def box(checked: bool, disabled: bool) -> str:
    if disabled:
        return " - "
    return "[x]" if checked else "[ ]"


def print_daily(tracker: WeeklyTracker) -> None:
    print(f"Jour : {tracker.day_label}")
    for cell in tracker.daily_view():
        print(f"  {box(cell.checked, cell.disabled)} {cell.label}")


def print_weekly(tracker: WeeklyTracker) -> None:
    width = max(len(row.label) for row in tracker.weekly_view()) + 2
    print(" " * width + " ".join(label[:3] for label in DAY_LABELS))
    for row in tracker.weekly_view():
        cells = " ".join(box(c.checked, c.disabled) for c in row.cells)
        print(f"{row.label:<{width}}{cells}")


def print_reflections(tracker: WeeklyTracker) -> None:
    for field in TEXT_FIELDS:
        value = tracker.text(field)
        if value:
            print(f"{field}: {value}")


def open_dashboard(args) -> Dashboard:
    api = EntriesClient(base_url=args.base_url, token=args.token)
    day = dt.date.fromisoformat(args.date) if args.date else None
    dashboard = Dashboard(api, today=day)
    dashboard.load()
    if dashboard.last_error:
        raise SystemExit(dashboard.last_error)
    return dashboard


def require_tracker(dashboard: Dashboard) -> WeeklyTracker:
    if dashboard.tracker is None:
        raise SystemExit(f"No entry for {dashboard.week_label}. Run 'new-week' first.")
    return dashboard.tracker


def save_or_exit(tracker: WeeklyTracker) -> None:
    if not tracker.save():
        raise SystemExit(f"Save failed: {tracker.last_error}")
    print("Saved.")


def cmd_show(args) -> None:
    dashboard = open_dashboard(args)
    print(dashboard.week_label)
    tracker = require_tracker(dashboard)
    if args.day is not None:
        tracker.select_day(args.day)
    if args.weekly:
        print_weekly(tracker)
    else:
        print_daily(tracker)
    print_reflections(tracker)


def cmd_new_week(args) -> None:
    dashboard = open_dashboard(args)
    if not dashboard.can_create_week:
        raise SystemExit(f"{dashboard.week_label} already exists.")
    if not dashboard.create_new_week():
        raise SystemExit(f"Could not create week: {dashboard.last_error}")
    print(f"Created {dashboard.week_label}.")


def cmd_check(args) -> None:
    tracker = require_tracker(open_dashboard(args))
    if not tracker.toggle(args.day, args.exercise, not args.off):
        raise SystemExit(f"'{args.exercise}' is not available on {DAY_LABELS[args.day]}.")
    save_or_exit(tracker)


def cmd_note(args) -> None:
    tracker = require_tracker(open_dashboard(args))
    tracker.set_text(args.field, args.text)
    save_or_exit(tracker)


def cmd_token(args) -> None:
    print(create_access_token(args.user_id))


def main() -> None:
    ap = argparse.ArgumentParser(description="Track spiritual exercises week by week")
    ap.add_argument("--base-url", default=os.environ.get("CARNET_API_URL", "http://localhost:8000"), help="API base URL")
    ap.add_argument("--token", default=os.environ.get("CARNET_TOKEN"), help="Bearer token (or CARNET_TOKEN)")
    sub = ap.add_subparsers(dest="command", required=True)

    date_help = "Any day of the target week (YYYY-MM-DD), default today"

    p = sub.add_parser("show", help="Show the week")
    p.add_argument("--date", help=date_help)
    p.add_argument("--weekly", action="store_true", help="Show the 7-day grid")
    p.add_argument("--day", type=int, choices=range(7), help="Day index for the daily view (0 = Monday)")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("new-week", help="Start the week")
    p.add_argument("--date", help=date_help)
    p.set_defaults(func=cmd_new_week)

    p = sub.add_parser("check", help="Tick an exercise")
    p.add_argument("day", type=int, choices=range(7), help="Day index (0 = Monday)")
    p.add_argument("exercise", help="Exercise id, e.g. rosary")
    p.add_argument("--off", action="store_true", help="Untick instead")
    p.add_argument("--date", help=date_help)
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("note", help="Write a reflection")
    p.add_argument("field", choices=TEXT_FIELDS)
    p.add_argument("text")
    p.add_argument("--date", help=date_help)
    p.set_defaults(func=cmd_note)

    p = sub.add_parser("token", help="Mint a development token")
    p.add_argument("user_id")
    p.set_defaults(func=cmd_token)

    args = ap.parse_args()
    if args.command != "token" and not args.token:
        print("A token is required (--token or CARNET_TOKEN).", file=sys.stderr)
        sys.exit(2)
    args.func(args)


if __name__ == "__main__":
    main()
