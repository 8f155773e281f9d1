from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union


Value = Union[None, bool, int, float, str, List["Value"], Dict[str, "Value"]]
DocumentTree = Dict[str, Value]

DEFAULT_SAVE_DIR = "user://saves"
DEFAULT_SAVE_EXTENSION = "save"
# Older save folders were written with the short extension.
LEGACY_SAVE_EXTENSION = "sav"


class _NotFound:
    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


class ErrorCode(str, Enum):
    OK = "ok"
    NO_PROFILE_SELECTED = "no_profile_selected"
    PATH_NOT_FOUND = "path_not_found"
    ALREADY_EXISTS = "already_exists"
    CANT_OPEN = "cant_open"
    CANT_RESOLVE = "cant_resolve"
    FILE_NOT_FOUND = "file_not_found"
    DECODE_ERROR = "decode_error"
    INVALID_NAME = "invalid_name"


@dataclass(frozen=True)
class SaveSettings:
    save_dir: str = DEFAULT_SAVE_DIR
    extension: str = DEFAULT_SAVE_EXTENSION
    indent: str = "\t"
    event_queue_size: int = 5000

    @classmethod
    def legacy(cls, save_dir: str = DEFAULT_SAVE_DIR) -> SaveSettings:
        return cls(save_dir=save_dir, extension=LEGACY_SAVE_EXTENSION)

    @property
    def suffix(self) -> str:
        return "." + self.extension.lstrip(".")


@dataclass(frozen=True)
class SaveTask:
    profile_name: str
    payload: bytes
