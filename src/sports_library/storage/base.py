"""Base storage class with library directory configuration."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from sports_library.constants import DATA_DIR_ENV_VAR, LIBRARY_PACKAGE_NAME
from sports_library.exceptions import SportsLibraryError, StoreUnavailableError

logger = logging.getLogger(__name__)


def get_data_dir(package_name: str = LIBRARY_PACKAGE_NAME) -> Path:
    """
    Get the library directory for storing local files.

    Uses SPORTS_LIBRARY_DATA_DIR environment variable if set, otherwise
    defaults to a directory named after the package in the home directory.

    Args:
        package_name: Name of the package owning the library

    Returns:
        Path to the library directory
    """
    env_dir = os.environ.get(DATA_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir)
    return Path.home() / package_name


def initialize_library_directory(
    package_name: str = LIBRARY_PACKAGE_NAME,
    library_dir: str | Path | None = None,
) -> Path:
    """
    Create the library directory if it does not exist yet.

    Args:
        package_name: Name of the package owning the library
        library_dir: Explicit directory, overrides the configured one

    Returns:
        Path to the library directory
    """
    path = Path(library_dir) if library_dir else get_data_dir(package_name)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise SportsLibraryError(
            f"Could not create library directory {path}", {"path": str(path)}
        ) from err
    logger.debug("Library directory is %s", path)
    return path


def build_database_path(library_dir: Path, package_name: str = LIBRARY_PACKAGE_NAME) -> Path:
    """Build the database file path from the last segment of the package name."""
    return Path(library_dir) / f"{package_name.split('.')[-1]}.json"


class BaseStorage:
    """Base class for storage implementations."""

    def __init__(self, data_dir: str | Path):
        """
        Initialize storage in a directory.

        Args:
            data_dir: Directory holding the storage files
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load_json(self, file_path: Path) -> dict[str, Any] | list[Any] | None:
        """Load JSON from a file, returning None if it doesn't exist."""
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as err:
            raise StoreUnavailableError(
                f"Could not read {file_path}", {"path": str(file_path), "reason": str(err)}
            ) from err

    def _save_json(self, file_path: Path, data: dict[str, Any] | list[Any]) -> None:
        """Save data as JSON to a file."""
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)
        except OSError as err:
            raise StoreUnavailableError(
                f"Could not write {file_path}", {"path": str(file_path), "reason": str(err)}
            ) from err
