"""Pydantic models for running plans."""

from datetime import date
from typing import Any, ClassVar, Optional

from pydantic import Field, ValidationInfo, field_validator, model_validator

from sports_library.models.base import PersistentObject
from sports_library.models.movement import MovementType
from sports_library.utils.dates import next_monday, today


class RunningUnit(PersistentObject):
    """
    A single block of a running day, e.g. 20 minutes of running.

    The movement type is shared reference data and is stored by its key only.
    Units imported from calendars may carry a pulse range, a pace and the
    original description text.
    """

    collection_name: ClassVar[str] = "running_units"

    duration: int = 0  # minutes
    movement_type: MovementType = Field(exclude=True)
    is_completed: bool = False
    lower_pulse_limit: int = 0
    upper_pulse_limit: int = 0
    pace: int = 0  # seconds per km
    running_infos: str = ""

    class Config:
        validate_assignment = True

    @model_validator(mode="after")
    def _check_pulse_range(self) -> "RunningUnit":
        if self.lower_pulse_limit > 0 and self.upper_pulse_limit > 0:
            if self.lower_pulse_limit > self.upper_pulse_limit:
                raise ValueError(
                    f"Lower pulse limit {self.lower_pulse_limit} exceeds "
                    f"upper pulse limit {self.upper_pulse_limit}"
                )
        return self

    def to_document(self) -> dict[str, Any]:
        document = super().to_document()
        document["movement_type_key"] = self.movement_type.key
        return document

    def __str__(self) -> str:
        return f"{self.duration} {self.movement_type.key}"


class RunningPlanEntry(PersistentObject):
    """One training day of a running plan, addressed by week and day."""

    collection_name: ClassVar[str] = "running_plan_entries"

    week: int = 1
    day: int = 1
    running_date: Optional[date] = None
    fixed_duration: int = 0  # minutes, set by calendar imports
    distance: float = 0.0  # km
    remarks: str = ""
    running_units: list[RunningUnit] = Field(default_factory=list, exclude=True)

    class Config:
        validate_assignment = True

    @field_validator("week")
    @classmethod
    def _check_week(cls, value: int) -> int:
        return value if 1 <= value <= 52 else 1

    @field_validator("day")
    @classmethod
    def _check_day(cls, value: int) -> int:
        return value if 1 <= value <= 7 else 1

    @property
    def duration(self) -> int:
        """Total duration in minutes."""
        calculated = sum(unit.duration for unit in self.running_units)
        if self.fixed_duration > calculated:
            return self.fixed_duration
        return calculated

    def add_running_unit(self, unit: RunningUnit) -> None:
        self.running_units.append(unit)

    def is_completed(self) -> bool:
        """True if every unit of the day is completed."""
        return all(unit.is_completed for unit in self.running_units)

    def is_partially_completed(self) -> bool:
        return any(unit.is_completed for unit in self.running_units)

    def percent_completed(self) -> int:
        if not self.running_units:
            return 0
        completed = sum(1 for unit in self.running_units if unit.is_completed)
        return completed * 100 // len(self.running_units)

    def to_document(self) -> dict[str, Any]:
        document = super().to_document()
        document["running_unit_uuids"] = [unit.uuid for unit in self.running_units]
        return document

    def __lt__(self, other: "RunningPlanEntry") -> bool:
        return (self.week, self.day) < (other.week, other.day)

    def __str__(self) -> str:
        return f"Week {self.week}, day {self.day}"


class RunningPlan(PersistentObject):
    """
    A running plan made of daily entries.

    A plan is active as soon as one unit of any entry is completed. While a
    plan is not active its start date is always moved forward to a Monday
    that is not in the past.
    """

    collection_name: ClassVar[str] = "running_plans"

    name: str = ""
    remarks: str = "No description available."
    order_number: int = 0
    start_date: date = Field(default_factory=today)
    is_template: bool = False
    entries: list[RunningPlanEntry] = Field(default_factory=list, exclude=True)

    @model_validator(mode="after")
    def _correct_start_date(self, info: ValidationInfo) -> "RunningPlan":
        # Stored plans keep the start date they were saved with
        if info.context and info.context.get("restore"):
            return self
        if not self.is_active():
            self.adjust_start_date()
        return self

    def set_start_date(self, start_date: date) -> None:
        """Set the start date; it is only corrected while the plan is not active."""
        self.start_date = start_date
        if not self.is_active():
            self.adjust_start_date()

    def adjust_start_date(self) -> None:
        """Move a past start date to today, then forward to the next Monday."""
        start = max(self.start_date, today())
        self.start_date = next_monday(start)

    def add_entry(self, entry: RunningPlanEntry) -> None:
        self.entries.append(entry)

    @property
    def duration(self) -> int:
        """Total duration of all entries in minutes."""
        return sum(entry.duration for entry in self.entries)

    def is_active(self) -> bool:
        return any(entry.is_partially_completed() for entry in self.entries)

    def is_completed(self) -> bool:
        return all(entry.is_completed() for entry in self.entries)

    def percent_completed(self) -> int:
        """Share of completed units over the whole plan."""
        units = [unit for entry in self.entries for unit in entry.running_units]
        if not units:
            return 0
        completed = sum(1 for unit in units if unit.is_completed)
        return completed * 100 // len(units)

    def entries_for_week(self, week: int) -> list[RunningPlanEntry]:
        return sorted(entry for entry in self.entries if entry.week == week)

    def number_of_weeks(self) -> int:
        return max((entry.week for entry in self.entries), default=0)

    def to_document(self) -> dict[str, Any]:
        document = super().to_document()
        document["entry_uuids"] = [entry.uuid for entry in self.entries]
        return document

    def __lt__(self, other: "RunningPlan") -> bool:
        return self.order_number < other.order_number

    def __str__(self) -> str:
        return self.name
