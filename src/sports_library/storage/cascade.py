"""
Cascade policies for the repository.

Each persistent type has one policy describing how an object graph of that
type is saved, removed and loaded again:

- save: upsert the owned children, then the object itself. Shared reference
  data (movement types, training types) is only inserted when missing and is
  never overwritten.
- remove: remove the owned children that exist, then the object itself.
  Referenced objects (movement types, training types, the track of a
  training) are never removed.
- save and remove both drop owned children that the stored record still lists
  but the in-memory graph no longer holds.
- load: rebuild the object from its document, resolving the identifiers of
  related records.

Policies are looked up by type in CASCADE_POLICIES.
"""

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Optional, TypeVar

from sports_library.constants import UNDEFINED_MOVEMENT_TYPE_KEY
from sports_library.models import (
    LocationData,
    MovementType,
    PersistentObject,
    RunningPlan,
    RunningPlanEntry,
    RunningUnit,
    Track,
    Training,
    TrainingType,
    User,
)

if TYPE_CHECKING:
    from sports_library.storage.repository import DataRepository

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PersistentObject)


class CascadePolicy(Generic[P]):
    """Direct persistence without any cascade."""

    entity_type: ClassVar[type[PersistentObject]]

    def __init__(self, repository: "DataRepository"):
        self.repository = repository

    def exists(self, entity: PersistentObject) -> bool:
        return self.repository.store(type(entity)).contains(entity.get_key())

    def upsert(self, entity: PersistentObject) -> None:
        """Insert the record if its key is absent, else replace it."""
        store = self.repository.store(type(entity))
        if store.contains(entity.get_key()):
            store.update(entity)
        else:
            store.insert(entity)

    def insert_if_absent(self, entity: PersistentObject) -> None:
        if not self.exists(entity):
            self.repository.store(type(entity)).insert(entity)

    def remove_if_present(self, entity: PersistentObject) -> None:
        if self.exists(entity):
            self.repository.store(type(entity)).remove(entity)

    def save(self, entity: P) -> None:
        self.upsert(entity)

    def remove(self, entity: P) -> None:
        self.repository.store(type(entity)).remove(entity)

    def load(self, document: dict[str, Any]) -> P:
        return self.entity_type.from_document(document)

    def _stored_child_keys(self, entity: PersistentObject, field: str) -> list[str]:
        document = self.repository.store(type(entity)).find_document(entity.get_key())
        return list(document.get(field, [])) if document else []

    def _dropped_children(
        self, entity: PersistentObject, field: str, children: list[PersistentObject]
    ) -> list[str]:
        """Keys listed in the stored record that are no longer in the in-memory graph."""
        kept = {child.get_key() for child in children}
        return [key for key in self._stored_child_keys(entity, field) if key not in kept]

    def _remove_keys(self, entity_type: type[PersistentObject], keys: list[str]) -> None:
        store = self.repository.store(entity_type)
        for key in keys:
            if store.contains(key):
                store.remove_key(key)

    def _load_related(self, entity_type: type[P], keys: list[str], owner: str) -> list[P]:
        """Resolve a list of identifiers, skipping dangling ones."""
        related = []
        for key in keys:
            entity = self.repository.find_by_uuid(entity_type, key)
            if entity is None:
                logger.warning("%s references missing %s %s", owner, entity_type.__name__, key)
                continue
            related.append(entity)
        return related


class MovementTypePolicy(CascadePolicy[MovementType]):
    entity_type = MovementType


class TrainingTypePolicy(CascadePolicy[TrainingType]):
    entity_type = TrainingType


class UserPolicy(CascadePolicy[User]):
    entity_type = User


class LocationDataPolicy(CascadePolicy[LocationData]):
    entity_type = LocationData


class RunningUnitPolicy(CascadePolicy[RunningUnit]):
    """Units are saved directly; their movement type is resolved by key on load."""

    entity_type = RunningUnit

    def load(self, document: dict[str, Any]) -> RunningUnit:
        key = document.pop("movement_type_key", None) or UNDEFINED_MOVEMENT_TYPE_KEY
        movement_type = self.repository.find_by_uuid(MovementType, key)
        if movement_type is None:
            logger.warning(
                "RunningUnit %s references missing MovementType %s", document.get("uuid"), key
            )
            movement_type = MovementType(key=key)
        return RunningUnit.from_document(document, movement_type=movement_type)


class RunningPlanEntryPolicy(CascadePolicy[RunningPlanEntry]):
    """An entry owns its running units and references their movement types."""

    entity_type = RunningPlanEntry

    def save(self, entity: RunningPlanEntry) -> None:
        self._remove_keys(
            RunningUnit, self._dropped_children(entity, "running_unit_uuids", entity.running_units)
        )
        for unit in entity.running_units:
            self.upsert(unit)
            self.insert_if_absent(unit.movement_type)
        self.upsert(entity)

    def remove(self, entity: RunningPlanEntry) -> None:
        self._remove_keys(
            RunningUnit, self._dropped_children(entity, "running_unit_uuids", entity.running_units)
        )
        for unit in entity.running_units:
            self.remove_if_present(unit)
        self.repository.store(RunningPlanEntry).remove(entity)

    def remove_stored(self, key: str) -> None:
        """Remove an entry record and the units it lists, if it is still stored."""
        store = self.repository.store(RunningPlanEntry)
        document = store.find_document(key)
        if document is None:
            return
        self._remove_keys(RunningUnit, document.get("running_unit_uuids", []))
        store.remove_key(key)

    def load(self, document: dict[str, Any]) -> RunningPlanEntry:
        unit_uuids = document.pop("running_unit_uuids", [])
        units = self._load_related(RunningUnit, unit_uuids, f"RunningPlanEntry {document.get('uuid')}")
        return RunningPlanEntry.from_document(document, running_units=units)


class RunningPlanPolicy(CascadePolicy[RunningPlan]):
    """A plan owns its entries, which own their units."""

    entity_type = RunningPlan

    @property
    def entry_policy(self) -> RunningPlanEntryPolicy:
        return self.repository.policy_for(RunningPlanEntry)

    def _remove_dropped_entries(self, entity: RunningPlan) -> None:
        for key in self._dropped_children(entity, "entry_uuids", entity.entries):
            self.entry_policy.remove_stored(key)

    def save(self, entity: RunningPlan) -> None:
        self._remove_dropped_entries(entity)
        for entry in entity.entries:
            self.entry_policy.save(entry)
        self.upsert(entity)

    def remove(self, entity: RunningPlan) -> None:
        self._remove_dropped_entries(entity)
        for entry in entity.entries:
            if self.exists(entry):
                self.entry_policy.remove(entry)
        self.repository.store(RunningPlan).remove(entity)

    def load(self, document: dict[str, Any]) -> RunningPlan:
        entry_uuids = document.pop("entry_uuids", [])
        entries = self._load_related(RunningPlanEntry, entry_uuids, f"RunningPlan {document.get('uuid')}")
        return RunningPlan.from_document(document, entries=entries)


class TrackPolicy(CascadePolicy[Track]):
    """A track owns its location data."""

    entity_type = Track

    def save(self, entity: Track) -> None:
        self._remove_keys(LocationData, self._dropped_children(entity, "location_uuids", entity.locations))
        for location in entity.locations:
            self.upsert(location)
        self.upsert(entity)

    def remove(self, entity: Track) -> None:
        self._remove_keys(LocationData, self._dropped_children(entity, "location_uuids", entity.locations))
        for location in entity.locations:
            self.remove_if_present(location)
        self.repository.store(Track).remove(entity)

    def load(self, document: dict[str, Any]) -> Track:
        location_uuids = document.pop("location_uuids", [])
        locations = self._load_related(LocationData, location_uuids, f"Track {document.get('uuid')}")
        return Track.from_document(document, locations=locations)


class TrainingPolicy(CascadePolicy[Training]):
    """A training references a training type and a track; it owns neither."""

    entity_type = Training

    def save(self, entity: Training) -> None:
        if entity.training_type is not None:
            self.insert_if_absent(entity.training_type)
        if entity.track is not None and not self.exists(entity.track):
            self.repository.policy_for(Track).save(entity.track)
        self.upsert(entity)

    def remove(self, entity: Training) -> None:
        self.repository.store(Training).remove(entity)

    def load(self, document: dict[str, Any]) -> Training:
        training_type: Optional[TrainingType] = None
        track: Optional[Track] = None
        if document.get("training_type_uuid"):
            training_type = self.repository.find_by_uuid(TrainingType, document["training_type_uuid"])
            if training_type is None:
                logger.warning(
                    "Training %s references missing TrainingType %s",
                    document.get("uuid"), document["training_type_uuid"],
                )
        if document.get("track_uuid"):
            track = self.repository.find_by_uuid(Track, document["track_uuid"])
            if track is None:
                logger.warning(
                    "Training %s references missing Track %s",
                    document.get("uuid"), document["track_uuid"],
                )
        return Training.from_document(document, training_type=training_type, track=track)


CASCADE_POLICIES: dict[type[PersistentObject], type[CascadePolicy]] = {
    policy.entity_type: policy
    for policy in (
        MovementTypePolicy,
        TrainingTypePolicy,
        UserPolicy,
        LocationDataPolicy,
        RunningUnitPolicy,
        RunningPlanEntryPolicy,
        RunningPlanPolicy,
        TrackPolicy,
        TrainingPolicy,
    )
}
