"""Per-type document collections of the datastore."""

import copy
import logging
from typing import Any, Generic, Optional, TypeVar

from sports_library.exceptions import DuplicateKeyError, NotFoundError
from sports_library.models.base import PersistentObject
from sports_library.storage.database import DatabaseManager

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PersistentObject)


class EntityStore(Generic[P]):
    """
    Stores the flat documents of one entity type, keyed by the type's identity field.

    The store works on documents only. Turning documents back into object
    graphs is the job of the repository.
    """

    def __init__(self, database: DatabaseManager, entity_type: type[P]):
        self.database = database
        self.entity_type = entity_type

    @property
    def type_name(self) -> str:
        return self.entity_type.__name__

    @property
    def _records(self) -> dict[str, dict[str, Any]]:
        return self.database.get_collection(self.entity_type.collection_name)

    def contains(self, key: str) -> bool:
        return key in self._records

    def insert(self, entity: P) -> None:
        key = entity.get_key()
        records = self._records
        if key in records:
            raise DuplicateKeyError(self.type_name, key)
        records[key] = entity.to_document()
        self.database.mark_changed()

    def update(self, entity: P) -> None:
        key = entity.get_key()
        records = self._records
        if key not in records:
            raise NotFoundError(self.type_name, key)
        records[key] = entity.to_document()
        self.database.mark_changed()

    def remove(self, entity: P) -> None:
        self.remove_key(entity.get_key())

    def remove_key(self, key: str) -> None:
        records = self._records
        if key not in records:
            raise NotFoundError(self.type_name, key)
        del records[key]
        self.database.mark_changed()

    def clear(self) -> None:
        self._records.clear()
        self.database.mark_changed()

    def count(self) -> int:
        return len(self._records)

    def find_document(self, key: str) -> Optional[dict[str, Any]]:
        """Get a copy of the document stored under a key, or None."""
        document = self._records.get(key)
        return copy.deepcopy(document) if document is not None else None

    def find_documents(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(document) for document in self._records.values()]

    def find_documents_by_attribute(self, name: str, value: Any) -> list[dict[str, Any]]:
        """Get copies of all documents whose field equals the value."""
        return [
            copy.deepcopy(document)
            for document in self._records.values()
            if document.get(name) == value
        ]

    def find_document_by_attribute(self, name: str, value: Any) -> Optional[dict[str, Any]]:
        """
        Get the single document whose field equals the value.

        Several matches are a data integrity problem: a warning is logged and
        None is returned.
        """
        documents = self.find_documents_by_attribute(name, value)
        if len(documents) > 1:
            logger.warning(
                "Found %d %s records with %s=%r, expected one",
                len(documents), self.type_name, name, value,
            )
            return None
        return documents[0] if documents else None
