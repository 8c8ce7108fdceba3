"""Pydantic model for the user of the library."""

from datetime import date
from typing import ClassVar, Optional

from pydantic import field_validator

from sports_library.constants import GENDER_VALUES, MAX_PULSE_BASE_VALUES, TRAINING_LEVELS
from sports_library.models.base import UUID, PersistentObject
from sports_library.models.running_plan import RunningPlan
from sports_library.utils.dates import age_in_years


class User(PersistentObject):
    """The athlete using the library. One user is expected per library."""

    collection_name: ClassVar[str] = "users"

    first_name: str = ""
    last_name: str = "Athlete"
    email_address: str = ""
    birthday: Optional[date] = None
    gender: int = 0
    training_level: int = 0
    max_pulse: int = 0
    active_running_plan_uuid: Optional[str] = None

    class Config:
        validate_assignment = True

    @field_validator("gender")
    @classmethod
    def _check_gender(cls, value: int) -> int:
        return value if value in GENDER_VALUES else 0

    @field_validator("training_level")
    @classmethod
    def _check_training_level(cls, value: int) -> int:
        return value if value in TRAINING_LEVELS else 0

    def set_active_running_plan(self, plan: Optional[RunningPlan]) -> None:
        self.active_running_plan_uuid = plan.uuid if plan is not None else None

    def get_active_running_plan_uuid(self) -> Optional[UUID]:
        if not self.active_running_plan_uuid:
            return None
        return UUID(self.active_running_plan_uuid)

    def calculate_max_pulse(self) -> int:
        """
        Estimate the maximum pulse from gender and age.

        Returns:
            226 - age for women, 220 - age for men, 0 if unknown
        """
        base = MAX_PULSE_BASE_VALUES.get(self.gender)
        if base is None or self.birthday is None:
            return 0
        return base - age_in_years(self.birthday)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
