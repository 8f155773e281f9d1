"""Per-profile application state stored as JSON files.

A ``ProfileSession`` selects one profile out of a save directory, exposes
dotted-path reads and writes over its document tree, and writes it back on a
background thread, reporting progress through events.
"""

from .application import ProfileSession, SaveCoordinator
from .domain import (
    DEFAULT_SAVE_DIR,
    DEFAULT_SAVE_EXTENSION,
    LEGACY_SAVE_EXTENSION,
    NOT_FOUND,
    ErrorCode,
    EventType,
    SaveSettings,
    resolve_path,
)
from .infrastructure import FileStore, FileStoreError, JsonCodec, JsonCodecError, LocalFileStore, ProfileCatalog
from .log_utils import configure_logging

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SAVE_DIR",
    "DEFAULT_SAVE_EXTENSION",
    "ErrorCode",
    "EventType",
    "FileStore",
    "FileStoreError",
    "JsonCodec",
    "JsonCodecError",
    "LEGACY_SAVE_EXTENSION",
    "LocalFileStore",
    "NOT_FOUND",
    "ProfileCatalog",
    "ProfileSession",
    "SaveCoordinator",
    "SaveSettings",
    "configure_logging",
    "resolve_path",
]
