"""Pydantic models for recorded trainings, GPS tracks and track points."""

from datetime import date
from typing import Any, ClassVar, Optional

from pydantic import Field, model_validator

from sports_library.constants import LATITUDE_RANGE, LONGITUDE_RANGE
from sports_library.models.base import PersistentObject
from sports_library.models.movement import TrainingType
from sports_library.utils.dates import timestamp_now, today


class LocationData(PersistentObject):
    """A single GPS point of a track."""

    collection_name: ClassVar[str] = "location_data"

    timestamp: int = Field(default_factory=timestamp_now)  # epoch milliseconds
    gps_fix: int = 0
    latitude: float = Field(default=0.0, ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1])
    longitude: float = Field(default=0.0, ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1])
    elevation: float = 0.0  # meters
    speed: float = 0.0  # m/s


class Track(PersistentObject):
    """
    A recorded GPS track.

    Times are epoch milliseconds and -1 marks unknown values. When start and
    stop time are known the duration (minutes) and average speed (km/h) are
    derived on construction.
    """

    collection_name: ClassVar[str] = "tracks"

    name: str = ""
    description: str = ""
    remarks: str = ""
    import_date: date = Field(default_factory=today)
    start_time: int = -1
    stop_time: int = -1
    duration: int = -1
    distance: float = 0.0  # meters
    average_speed: float = -1.0
    elevation_difference: float = 0.0
    locations: list[LocationData] = Field(default_factory=list, exclude=True)

    @model_validator(mode="after")
    def _calculate_values(self) -> "Track":
        if self.duration < 0 and self.start_time > 0 and self.stop_time > self.start_time:
            self.duration = calculate_duration(self.start_time, self.stop_time)
        if self.average_speed < 0 and self.duration > 0 and self.distance > 0:
            self.average_speed = calculate_average_speed(self.distance, self.duration)
        return self

    def add_location(self, location: LocationData) -> None:
        self.locations.append(location)

    def to_document(self) -> dict[str, Any]:
        document = super().to_document()
        document["location_uuids"] = [location.uuid for location in self.locations]
        return document

    def __str__(self) -> str:
        return self.name


def calculate_duration(start_time: int, stop_time: int) -> int:
    """Duration in whole minutes between two epoch millisecond timestamps, at least 1."""
    seconds = (stop_time - start_time) // 1000
    if seconds < 60:
        return 1
    return seconds // 60


def calculate_average_speed(distance: float, duration: int) -> float:
    """Average speed in km/h for a distance in meters and a duration in minutes."""
    return distance / duration / 60 * 3.6


class Training(PersistentObject):
    """
    A performed training.

    The training type and the track are referenced by identifier. The objects
    themselves may be attached in memory (they are resolved again on read) but
    they are never part of the stored record.
    """

    collection_name: ClassVar[str] = "trainings"

    name: str = "Training"
    remarks: str = ""
    duration: int = -1  # minutes
    distance: float = -1.0  # meters
    altitude_difference: float = -1.0
    average_speed: float = -1.0  # km/h
    training_date: date = Field(default_factory=today)
    training_type_uuid: Optional[str] = None
    track_uuid: Optional[str] = None
    training_type: Optional[TrainingType] = Field(default=None, exclude=True)
    track: Optional[Track] = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _link_references(self) -> "Training":
        if self.training_type is not None:
            self.training_type_uuid = self.training_type.uuid
        if self.track is not None:
            self.track_uuid = self.track.uuid
            if self.duration < 0:
                self.duration = self.track.duration
            if self.distance < 0:
                self.distance = self.track.distance
            if self.altitude_difference < 0:
                self.altitude_difference = self.track.elevation_difference
            if self.average_speed < 0:
                self.average_speed = self.track.average_speed
        return self

    def to_document(self) -> dict[str, Any]:
        # The related objects may have been assigned after construction
        if self.training_type is not None:
            self.training_type_uuid = self.training_type.uuid
        if self.track is not None:
            self.track_uuid = self.track.uuid
        return super().to_document()

    def __lt__(self, other: "Training") -> bool:
        return self.training_date < other.training_date

    def __str__(self) -> str:
        return self.name
