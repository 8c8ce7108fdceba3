"""Storage modules for the sports library."""

from sports_library.storage.base import (
    BaseStorage,
    build_database_path,
    get_data_dir,
    initialize_library_directory,
)
from sports_library.storage.database import DatabaseManager
from sports_library.storage.collection import EntityStore
from sports_library.storage.cascade import CASCADE_POLICIES, CascadePolicy
from sports_library.storage.repository import DataRepository, DatastoreDelegate

__all__ = [
    "BaseStorage",
    "get_data_dir",
    "initialize_library_directory",
    "build_database_path",
    "DatabaseManager",
    "EntityStore",
    "CascadePolicy",
    "CASCADE_POLICIES",
    "DataRepository",
    "DatastoreDelegate",
]
