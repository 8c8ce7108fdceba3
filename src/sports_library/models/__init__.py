"""Pydantic models for the sports library."""

from sports_library.models.base import (
    UUID,
    PersistentObject,
    generate_uuid,
)
from sports_library.models.movement import (
    MovementType,
    TrainingType,
)
from sports_library.models.running_plan import (
    RunningPlan,
    RunningPlanEntry,
    RunningUnit,
)
from sports_library.models.training import (
    LocationData,
    Track,
    Training,
)
from sports_library.models.user import User

__all__ = [
    # Base types
    "UUID",
    "PersistentObject",
    "generate_uuid",
    # Reference data
    "MovementType",
    "TrainingType",
    # Running plan models
    "RunningUnit",
    "RunningPlanEntry",
    "RunningPlan",
    # Training models
    "LocationData",
    "Track",
    "Training",
    # User
    "User",
]
