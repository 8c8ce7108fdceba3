"""
Import and export of running plans as iCAL calendars.

Every event of a calendar is one day of the plan. The summary names week and
day ("Lauftraining: Woche 1 - Lauf Nummer: 2"), the description carries the
details of the day:

    10-km-Trainingsplan Flex10 (lauftipps.ch/LT273)
    Lauf #2: > Intervalltraining: 10 min EL, IV, 10 min laDL
    Dauer: 37 min
    Puls: 2a: 115 bis 121
    Tempo 2a: 08:59 min|km
    Distanz: 4.6 km

The first line of the first event names the plan, each "Lauf #" line is one
running unit. The n-th pulse and pace lines belong to the n-th unit.
"""

import logging
import os
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

from icalendar import Calendar, Event
from pydantic import ValidationError

from sports_library.constants import UNDEFINED_MOVEMENT_TYPE_KEY, ICALPattern
from sports_library.exceptions import ICALError
from sports_library.models import MovementType, RunningPlan, RunningPlanEntry, RunningUnit
from sports_library.utils.dates import plan_date
from sports_library.utils.formatting import format_pace, parse_pace

logger = logging.getLogger(__name__)

IMPORTED_PLAN_ORDER_NUMBER = 99
DEFAULT_PLAN_NAME = "Imported running plan"
PRODUCT_ID = "-//Sports Library//Running Plan//EN"

SUMMARY_RE = re.compile(
    rf"{re.escape(ICALPattern.WEEK)}\s*(\d+)\s*{re.escape(ICALPattern.DAY)}\s*(\d+)"
)
MINUTES_RE = re.compile(r"(\d+)\s*min")
DISTANCE_RE = re.compile(rf"{re.escape(ICALPattern.DISTANCE)}\s*(\d+(?:[.,]\d+)?)\s*km")
PULSE_RE = re.compile(rf"(\d+)\s*{re.escape(ICALPattern.PULSE_SEPARATOR)}\s*(\d+)")
PACE_RE = re.compile(rf"(\d{{1,2}}:\d{{2}})\s*{re.escape(ICALPattern.PACE_UNIT)}")


def load_running_plan_from_ical(library: Any, ical_file: str | Path) -> RunningPlan:
    """
    Create a running plan from an iCAL file.

    Args:
        library: Library used to look up the movement type of the units
        ical_file: Path to the calendar

    Returns:
        The running plan, not yet added to the library
    """
    path = Path(ical_file)
    if not path.is_file():
        raise ICALError(f"The file {path} does not exist or is not a file", {"path": str(path)})
    try:
        calendar = Calendar.from_ical(path.read_bytes())
    except (OSError, ValueError) as err:
        raise ICALError(f"Could not read {path}: {err}", {"path": str(path)}) from err

    events = calendar.walk("VEVENT")
    if not events:
        raise ICALError(f"The calendar {path} contains no events", {"path": str(path)})

    movement_type = library.find_by_uuid(MovementType, UNDEFINED_MOVEMENT_TYPE_KEY)
    if movement_type is None:
        movement_type = MovementType(key=UNDEFINED_MOVEMENT_TYPE_KEY)

    name, remarks = _parse_plan_title(str(events[0].get("DESCRIPTION", "")))
    try:
        entries = [_parse_event(event, movement_type) for event in events]
    except ValidationError as err:
        raise ICALError(f"Invalid running plan data in {path}: {err}", {"path": str(path)}) from err

    running_dates = [entry.running_date for entry in entries if entry.running_date]
    plan = RunningPlan(
        name=name,
        remarks=remarks,
        order_number=IMPORTED_PLAN_ORDER_NUMBER,
        entries=entries,
        is_template=False,
    )
    if running_dates:
        plan.set_start_date(min(running_dates))
    logger.debug("Loaded running plan %s with %d entries from %s", plan.name, len(entries), path)
    return plan


def import_ical(library: Any, ical_file: str | Path) -> RunningPlan:
    """Create a running plan from an iCAL file and add it to the library."""
    plan = load_running_plan_from_ical(library, ical_file)
    library.add(plan)
    return plan


def export_ical(plan: RunningPlan, ical_file: str | Path) -> None:
    """
    Write a running plan as iCAL file, one event per day of the plan.

    Args:
        plan: The running plan to export
        ical_file: Target file, its directory must exist and be writable
    """
    path = Path(ical_file)
    parent = path.parent
    if not parent.is_dir() or not os.access(parent, os.W_OK):
        raise ICALError(f"The directory {parent} does not exist or is not writable", {"path": str(path)})

    calendar = Calendar()
    calendar.add("prodid", PRODUCT_ID)
    calendar.add("version", "2.0")
    stamp = datetime.now(timezone.utc)
    for entry in sorted(plan.entries):
        event = Event()
        event.add("uid", entry.uuid)
        event.add("dtstamp", stamp)
        event.add("dtstart", plan_date(plan.start_date, entry.week, entry.day))
        event.add("summary", f"{ICALPattern.WEEK} {entry.week} {ICALPattern.DAY} {entry.day}")
        event.add("description", _build_description(plan, entry))
        calendar.add_component(event)

    try:
        path.write_bytes(calendar.to_ical())
    except OSError as err:
        raise ICALError(f"Could not write {path}: {err}", {"path": str(path)}) from err


def _parse_plan_title(description: str) -> tuple[str, str]:
    lines = description.strip().splitlines()
    title = lines[0].strip() if lines else ""
    if not title:
        return DEFAULT_PLAN_NAME, ""
    name, separator, rest = title.partition(" (")
    if not separator:
        return title, ""
    return name.strip(), rest.rsplit(")", 1)[0].strip()


def _parse_event(event: Any, movement_type: MovementType) -> RunningPlanEntry:
    summary = str(event.get("SUMMARY", ""))
    description = str(event.get("DESCRIPTION", ""))
    lines = [line.strip() for line in description.splitlines()]

    week, day = 1, 1
    match = SUMMARY_RE.search(summary)
    if match:
        week, day = int(match.group(1)), int(match.group(2))
    else:
        logger.debug("Could not parse week and day from %r, using defaults", summary)

    duration = 0
    distance = 0.0
    for line in lines:
        if line.startswith(ICALPattern.DURATION) and not duration:
            duration = sum(int(minutes) for minutes in MINUTES_RE.findall(line))
        elif line.startswith(ICALPattern.DISTANCE) and not distance:
            distance_match = DISTANCE_RE.search(line)
            if distance_match:
                distance = float(distance_match.group(1).replace(",", "."))

    pulses = [
        (int(m.group(1)), int(m.group(2)))
        for line in lines
        if line.startswith(ICALPattern.PULSE)
        for m in [PULSE_RE.search(line)]
        if m
    ]
    paces = [
        parse_pace(m.group(1))
        for line in lines
        if line.startswith(ICALPattern.PACE)
        for m in [PACE_RE.search(line)]
        if m
    ]

    units = []
    for index, line in enumerate(line for line in lines if line.startswith(ICALPattern.TYPE_OF_RUNNING)):
        lower, upper = pulses[index] if index < len(pulses) else (0, 0)
        units.append(
            RunningUnit(
                movement_type=movement_type,
                running_infos=line,
                lower_pulse_limit=lower,
                upper_pulse_limit=upper,
                pace=paces[index] if index < len(paces) else 0,
            )
        )
    if len(units) == 1:
        units[0].duration = duration

    return RunningPlanEntry(
        week=week,
        day=day,
        running_date=_event_date(event),
        fixed_duration=duration,
        distance=distance,
        remarks=description,
        running_units=units,
    )


def _event_date(event: Any) -> Optional[date]:
    start = event.get("DTSTART")
    if start is None:
        return None
    value = start.dt
    if isinstance(value, datetime):
        return value.date()
    return value


def _build_description(plan: RunningPlan, entry: RunningPlanEntry) -> str:
    title = f"{plan.name} ({plan.remarks})" if plan.remarks else plan.name
    lines = [title]
    for number, unit in enumerate(entry.running_units, start=1):
        if unit.running_infos.startswith(ICALPattern.TYPE_OF_RUNNING):
            lines.append(unit.running_infos)
        else:
            lines.append(
                f"{ICALPattern.TYPE_OF_RUNNING}{number}: {unit.duration} min {unit.movement_type.name}"
            )
    lines.append(f"{ICALPattern.DURATION} {entry.duration} min")
    for number, unit in enumerate(entry.running_units, start=1):
        if unit.lower_pulse_limit > 0 and unit.upper_pulse_limit > 0:
            lines.append(
                f"{ICALPattern.PULSE} {number}: {unit.lower_pulse_limit} "
                f"{ICALPattern.PULSE_SEPARATOR} {unit.upper_pulse_limit}"
            )
    for number, unit in enumerate(entry.running_units, start=1):
        if unit.pace > 0:
            lines.append(f"{ICALPattern.PACE} {number}: {format_pace(unit.pace)} {ICALPattern.PACE_UNIT}")
    if entry.distance > 0:
        lines.append(f"{ICALPattern.DISTANCE} {entry.distance} km")
    return "\n".join(lines)
