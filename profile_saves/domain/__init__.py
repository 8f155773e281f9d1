from .models import (
    DEFAULT_SAVE_DIR,
    DEFAULT_SAVE_EXTENSION,
    LEGACY_SAVE_EXTENSION,
    NOT_FOUND,
    DocumentTree,
    ErrorCode,
    SaveSettings,
    SaveTask,
    Value,
)
from .events import Event, EventBus, EventType, Listener
from .paths import is_valid_profile_name, normalize_profile_name, resolve_path
from .state_machine import InvalidTransitionError, SaveState, SaveStateMachine
from .tree import read_path, write_path

__all__ = [
    "DEFAULT_SAVE_DIR",
    "DEFAULT_SAVE_EXTENSION",
    "DocumentTree",
    "ErrorCode",
    "Event",
    "EventBus",
    "EventType",
    "InvalidTransitionError",
    "LEGACY_SAVE_EXTENSION",
    "Listener",
    "NOT_FOUND",
    "SaveSettings",
    "SaveState",
    "SaveTask",
    "SaveStateMachine",
    "Value",
    "is_valid_profile_name",
    "normalize_profile_name",
    "read_path",
    "resolve_path",
    "write_path",
]
