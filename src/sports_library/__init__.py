"""Personal sports library: running plans, trainings and tracks in a local datastore."""

from sports_library.exceptions import (
    CascadeError,
    DuplicateKeyError,
    GPXError,
    ICALError,
    NotFoundError,
    SportsLibraryError,
    StoreUnavailableError,
    TemplateError,
    UnsupportedTypeError,
)
from sports_library.library import SportsLibrary
from sports_library.storage import DatastoreDelegate

__version__ = "0.1.0"

__all__ = [
    "SportsLibrary",
    "DatastoreDelegate",
    "SportsLibraryError",
    "StoreUnavailableError",
    "NotFoundError",
    "DuplicateKeyError",
    "UnsupportedTypeError",
    "CascadeError",
    "TemplateError",
    "GPXError",
    "ICALError",
]
