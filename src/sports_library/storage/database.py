"""
JSON document datastore.

The whole library is kept in one JSON file holding one collection per entity
type. Each collection maps the key of a record to its flat document:

    {"running_plans": {"<uuid>": {...}}, "movement_types": {"L": {...}}}

Every change is written through to the file, unless it happens inside a
batch, in which case the file is written once when the batch ends.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from sports_library.constants import LIBRARY_PACKAGE_NAME
from sports_library.exceptions import StoreUnavailableError
from sports_library.storage.base import BaseStorage, build_database_path

logger = logging.getLogger(__name__)


class DatabaseManager(BaseStorage):
    """Owns the datastore file and its open/close lifecycle."""

    _instance: Optional["DatabaseManager"] = None

    def __init__(self, library_dir: str | Path, package_name: str = LIBRARY_PACKAGE_NAME):
        super().__init__(library_dir)
        self.database_path = build_database_path(self.data_dir, package_name)
        self._collections: Optional[dict[str, dict[str, dict[str, Any]]]] = None
        self._batch_depth = 0

    @classmethod
    def get_instance(
        cls, library_dir: str | Path, package_name: str = LIBRARY_PACKAGE_NAME
    ) -> "DatabaseManager":
        """Get the process-wide datastore, opening it on first access."""
        if cls._instance is None:
            cls._instance = cls(library_dir, package_name)
        if not cls._instance.is_open():
            cls._instance.open()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Close and forget the process-wide datastore."""
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None

    def open(self) -> None:
        """Load the datastore file; a missing file starts an empty datastore."""
        if self.is_open():
            return
        data = self._load_json(self.database_path)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise StoreUnavailableError(
                f"Datastore {self.database_path} is not a collection map",
                {"path": str(self.database_path)},
            )
        self._collections = data
        logger.debug("Opened datastore %s", self.database_path)

    def close(self) -> None:
        if not self.is_open():
            return
        self.commit()
        self._collections = None
        logger.debug("Closed datastore %s", self.database_path)

    def is_open(self) -> bool:
        return self._collections is not None

    def is_empty(self) -> bool:
        """True if no collection holds a record."""
        if not self.is_open():
            return True
        return not any(self._collections.values())

    def get_collection(self, name: str) -> dict[str, dict[str, Any]]:
        """
        Get the records of a collection, creating the collection if needed.

        Args:
            name: Collection name

        Returns:
            Mapping of record key to document
        """
        if not self.is_open():
            raise StoreUnavailableError(
                "Datastore is not open", {"path": str(self.database_path)}
            )
        return self._collections.setdefault(name, {})

    def collection_names(self) -> list[str]:
        if not self.is_open():
            return []
        return list(self._collections)

    @contextmanager
    def batch(self) -> Iterator["DatabaseManager"]:
        """Defer writing the file until the outermost batch ends."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self.is_open():
                self.commit()

    def mark_changed(self) -> None:
        """Write the datastore unless a batch is running."""
        if self._batch_depth == 0:
            self.commit()

    def commit(self) -> None:
        if not self.is_open():
            raise StoreUnavailableError(
                "Datastore is not open", {"path": str(self.database_path)}
            )
        self._save_json(self.database_path, self._collections)

    def __enter__(self) -> "DatabaseManager":
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
