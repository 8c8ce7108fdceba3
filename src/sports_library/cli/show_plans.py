#!/usr/bin/env python3
"""
Show the running plans of the sports library.

For every plan the progress, the total duration and the start date are
printed. With --week the days of that week are listed as well.
"""

import argparse

from sports_library.cli.common import add_library_arguments, open_library
from sports_library.models import RunningPlan
from sports_library.utils.dates import plan_date
from sports_library.utils.formatting import format_duration


def print_plan(plan: RunningPlan, active: bool) -> None:
    """Print a one line overview of a plan."""
    marker = "*" if active else " "
    template = " (template)" if plan.is_template else ""
    print(
        f"{marker} {plan.order_number:>3}  {plan.name:<30} {plan.percent_completed():>3}%  "
        f"{format_duration(plan.duration):>10}  {plan.start_date.isoformat()}{template}"
    )


def print_week(plan: RunningPlan, week: int) -> None:
    """Print the days of one week of a plan."""
    entries = plan.entries_for_week(week)
    if not entries:
        print(f"       No runs in week {week}")
        return
    for entry in entries:
        units = ", ".join(str(unit) for unit in entry.running_units)
        status = "done" if entry.is_completed() else "open"
        day = plan_date(plan.start_date, entry.week, entry.day)
        print(f"       {day.isoformat()}  day {entry.day}  {format_duration(entry.duration):>8}  [{status}]  {units}")


def main(argv: list[str] | None = None) -> int:
    """Main function to list the running plans."""
    parser = argparse.ArgumentParser(description="Show the running plans of the sports library")
    parser.add_argument(
        "--week",
        type=int,
        help="Show the runs of this week for every plan",
    )
    add_library_arguments(parser)

    args = parser.parse_args(argv)

    library = open_library(args)
    try:
        plans = library.get_running_plans()
        active_plan = library.get_active_running_plan()
    finally:
        library.close()

    if not plans:
        print("No running plans found.")
        return 0

    print("=" * 80)
    print("RUNNING PLANS")
    print("=" * 80)
    for plan in plans:
        print_plan(plan, active_plan is not None and plan.uuid == active_plan.uuid)
        if args.week:
            print_week(plan, args.week)
    print("=" * 80)

    return 0


if __name__ == "__main__":
    exit(main())
