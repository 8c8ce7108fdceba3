"""
Repository for persistent object graphs.

The repository is the only way objects get into and out of the datastore.
It dispatches every call to the cascade policy of the object's type, so a
running plan is stored together with its entries and units, and a track
together with its location data.

Lookups on a closed datastore return None or an empty list. Mutations on a
closed datastore raise StoreUnavailableError. Cascades are not
transactional: when a step fails, the records written before it remain.
"""

import logging
from typing import Any, Optional, TypeVar

from sports_library.exceptions import (
    CascadeError,
    NotFoundError,
    SportsLibraryError,
    StoreUnavailableError,
    UnsupportedTypeError,
)
from sports_library.models.base import UUID, PersistentObject
from sports_library.storage.cascade import CASCADE_POLICIES, CascadePolicy
from sports_library.storage.collection import EntityStore
from sports_library.storage.database import DatabaseManager

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PersistentObject)


class DatastoreDelegate:
    """Observer notified after objects were added, updated or removed."""

    def did_object_added(self, entity: PersistentObject) -> None:
        pass

    def did_object_updated(self, entity: PersistentObject) -> None:
        pass

    def did_object_removed(self, entity: PersistentObject) -> None:
        pass


class DataRepository:
    """Adds, updates, deletes and finds persistent objects with their related records."""

    def __init__(
        self,
        datastore: DatabaseManager,
        delegates: Optional[list[DatastoreDelegate]] = None,
    ):
        self.datastore = datastore
        self.delegates = delegates if delegates is not None else []
        self._stores: dict[type[PersistentObject], EntityStore] = {}
        self._policies: dict[type[PersistentObject], CascadePolicy] = {
            entity_type: policy(self) for entity_type, policy in CASCADE_POLICIES.items()
        }

    @property
    def supported_types(self) -> list[type[PersistentObject]]:
        return list(self._policies)

    def policy_for(self, entity_type: type[P]) -> CascadePolicy:
        try:
            return self._policies[entity_type]
        except KeyError:
            raise UnsupportedTypeError(entity_type.__name__) from None

    def store(self, entity_type: type[P]) -> EntityStore:
        if entity_type not in self._policies:
            raise UnsupportedTypeError(entity_type.__name__)
        if entity_type not in self._stores:
            self._stores[entity_type] = EntityStore(self.datastore, entity_type)
        return self._stores[entity_type]

    def is_open(self) -> bool:
        return self.datastore.is_open()

    def is_empty(self) -> bool:
        return self.datastore.is_empty()

    def add(self, entity: PersistentObject) -> None:
        """
        Add an object with all its owned children.

        If a record with the object's key already exists, the object is
        updated instead.

        Args:
            entity: The object to add

        Raises:
            UnsupportedTypeError: If the object's type is not registered
            StoreUnavailableError: If the datastore is not open
            CascadeError: If a step of the cascade fails
        """
        policy = self._prepare("add", entity)
        if policy.exists(entity):
            self.update(entity)
            return
        self._run_cascade("add", entity, policy.save)
        self._notify("did_object_added", entity)

    def update(self, entity: PersistentObject) -> None:
        """
        Update an object and upsert its owned children.

        Raises:
            NotFoundError: If the object itself is not stored
        """
        policy = self._prepare("update", entity)
        if not policy.exists(entity):
            logger.debug("Could not update missing %s %s", type(entity).__name__, entity.get_key())
            raise NotFoundError(type(entity).__name__, entity.get_key())
        self._run_cascade("update", entity, policy.save)
        self._notify("did_object_updated", entity)

    def delete(self, entity: PersistentObject) -> None:
        """
        Delete an object and the owned children that exist.

        Raises:
            NotFoundError: If the object itself is not stored
        """
        policy = self._prepare("delete", entity)
        if not policy.exists(entity):
            logger.debug("Could not delete missing %s %s", type(entity).__name__, entity.get_key())
            raise NotFoundError(type(entity).__name__, entity.get_key())
        self._run_cascade("delete", entity, policy.remove)
        self._notify("did_object_removed", entity)

    def find_by_uuid(self, entity_type: type[P], uuid: UUID | str) -> Optional[P]:
        """Find an object by its key, or None."""
        if not self.is_open():
            return None
        document = self.store(entity_type).find_document(str(uuid))
        if document is None:
            return None
        return self.policy_for(entity_type).load(document)

    def find_all(self, entity_type: type[P]) -> list[P]:
        if not self.is_open():
            return []
        policy = self.policy_for(entity_type)
        return [policy.load(document) for document in self.store(entity_type).find_documents()]

    def find_by_attribute(self, name: str, value: Any, entity_type: type[P]) -> list[P]:
        """Find all objects whose stored field equals the value."""
        if not self.is_open():
            return []
        policy = self.policy_for(entity_type)
        documents = self.store(entity_type).find_documents_by_attribute(name, value)
        return [policy.load(document) for document in documents]

    def find_unique_by_attribute(self, name: str, value: Any, entity_type: type[P]) -> Optional[P]:
        """Find the single object whose stored field equals the value, or None if absent or ambiguous."""
        if not self.is_open():
            return None
        document = self.store(entity_type).find_document_by_attribute(name, value)
        if document is None:
            return None
        return self.policy_for(entity_type).load(document)

    def clear_all(self) -> None:
        """Remove every record of every type. Failures are logged, not raised."""
        if not self.is_open():
            return
        with self.datastore.batch():
            for entity_type in self._policies:
                try:
                    self.store(entity_type).clear()
                except SportsLibraryError as err:
                    logger.warning("Could not clear %s records: %s", entity_type.__name__, err)

    def _prepare(self, action: str, entity: PersistentObject) -> CascadePolicy:
        policy = self.policy_for(type(entity))
        if not self.is_open():
            logger.debug("Could not %s %s %s, datastore is not open",
                         action, type(entity).__name__, entity.get_key())
            raise StoreUnavailableError(
                f"Could not {action} {type(entity).__name__}, datastore is not open",
                {"entity_type": type(entity).__name__, "entity_id": entity.get_key()},
            )
        return policy

    def _run_cascade(self, action: str, entity: PersistentObject, operation) -> None:
        entity_type = type(entity).__name__
        try:
            with self.datastore.batch():
                operation(entity)
        except Exception as exc:
            logger.debug("Could not %s %s %s: %s", action, entity_type, entity.get_key(), exc)
            raise CascadeError(action, entity_type, entity.get_key(), str(exc)) from exc
        logger.debug("%s %s %s", action, entity_type, entity.get_key())

    def _notify(self, event: str, entity: PersistentObject) -> None:
        for delegate in list(self.delegates):
            getattr(delegate, event)(entity)
