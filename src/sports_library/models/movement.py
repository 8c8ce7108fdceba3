"""Pydantic models for shared reference data: movement types and training types."""

from typing import ClassVar

from pydantic import Field

from sports_library.constants import (
    DEFAULT_MOVEMENT_TYPE_COLOR,
    MOVEMENT_TYPE_NAMES,
    TRAINING_DEFAULT_IMAGE_NAME,
)
from sports_library.models.base import PersistentObject


class MovementType(PersistentObject):
    """
    A kind of movement inside a running unit (e.g. "L" for running, "P" for pause).

    Movement types are keyed by their short business key, so two movement
    types with the same key are the same record.
    """

    identity_field: ClassVar[str] = "key"
    collection_name: ClassVar[str] = "movement_types"

    key: str
    color_key: str = DEFAULT_MOVEMENT_TYPE_COLOR
    speed: float = 0.0  # km/h
    pace: float = 0.0  # min/km

    @property
    def name(self) -> str:
        """Human readable name of the movement type."""
        return MOVEMENT_TYPE_NAMES.get(self.key, self.key)

    def __str__(self) -> str:
        return self.key


class TrainingType(PersistentObject):
    """A category of training such as running, cycling or hiking."""

    collection_name: ClassVar[str] = "training_types"

    name: str = "Training"
    remarks: str = ""
    image_name: str = TRAINING_DEFAULT_IMAGE_NAME
    speed: float = Field(default=0.0, ge=0.0)

    def __str__(self) -> str:
        return self.name
