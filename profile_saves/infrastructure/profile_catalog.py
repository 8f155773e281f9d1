from __future__ import annotations

import logging
from pathlib import Path
import threading

from profile_saves.domain.events import EventBus, EventType
from profile_saves.domain.models import DocumentTree, ErrorCode, SaveSettings
from profile_saves.domain.paths import is_valid_profile_name, normalize_profile_name

from .file_store import FileStore, FileStoreError, LocalFileStore
from .json_codec import JsonCodec, JsonCodecError
from .storage_paths import resolve_user_path


logger = logging.getLogger(__name__)


class ProfileCatalog:
    """Profiles stored as ``{save_dir}/{name}.{extension}`` files.

    ``write_lock`` serializes every write into the save directory, including
    the ones made by the background save worker.
    """

    def __init__(
        self,
        settings: SaveSettings | None = None,
        file_store: FileStore | None = None,
        codec: JsonCodec | None = None,
        events: EventBus | None = None,
        user_root: Path | None = None,
    ) -> None:
        self.settings = settings or SaveSettings()
        self.save_dir = resolve_user_path(self.settings.save_dir, user_root)
        self.file_store: FileStore = file_store or LocalFileStore()
        self.codec = codec or JsonCodec(indent=self.settings.indent)
        self.events = events or EventBus(maxsize=self.settings.event_queue_size)
        self.write_lock = threading.Lock()

    def path_for_name(self, name: str) -> Path:
        return self.save_dir / f"{normalize_profile_name(name)}{self.settings.suffix}"

    def name_for_path(self, path: Path) -> str:
        return path.name[: -len(self.settings.suffix)]

    def list_save_files(self) -> list[Path]:
        try:
            self.file_store.ensure_dir(self.save_dir)
        except FileStoreError as exc:
            logger.error("Cannot create save directory %s: %s", self.save_dir, exc)
            return []
        try:
            return self.file_store.list_files(self.save_dir, self.settings.suffix)
        except FileStoreError as exc:
            logger.error("Cannot list save directory %s: %s", self.save_dir, exc)
            return []

    def list_named_saves(self) -> dict[str, Path]:
        named: dict[str, Path] = {}
        for path in self.list_save_files():
            named[self.name_for_path(path)] = path
        return named

    def list_names(self) -> list[str]:
        return sorted(self.list_named_saves())

    def exists(self, name: str) -> bool:
        return normalize_profile_name(name) in self.list_named_saves()

    def lookup(self, name: str) -> Path | None:
        return self.list_named_saves().get(normalize_profile_name(name))

    def create(self, name: str, seed_data: DocumentTree | None = None) -> ErrorCode:
        name = normalize_profile_name(name)
        if not is_valid_profile_name(name):
            logger.error("Invalid profile name: %r", name)
            return ErrorCode.INVALID_NAME

        data = seed_data or {}
        try:
            payload = self.codec.encode_bytes(data)
        except JsonCodecError as exc:
            logger.error("Cannot encode seed data for profile %r: %s", name, exc)
            return ErrorCode.DECODE_ERROR

        with self.write_lock:
            if self.exists(name):
                logger.error("Profile %r already exists", name)
                return ErrorCode.ALREADY_EXISTS
            path = self.path_for_name(name)
            try:
                self.file_store.write_all(path, payload)
            except FileStoreError as exc:
                logger.error("Cannot create profile %r: %s", name, exc)
                return exc.code

        logger.info("Created profile %r at %s", name, path)
        self.events.emit(EventType.PROFILE_CREATED, name=name)
        if data:
            self.events.emit(EventType.PROFILE_SAVED, name=name)
        return ErrorCode.OK

    def delete(self, name: str) -> ErrorCode:
        name = normalize_profile_name(name)
        with self.write_lock:
            path = self.lookup(name)
            if path is None:
                logger.error("Cannot delete unknown profile %r", name)
                return ErrorCode.FILE_NOT_FOUND
            try:
                self.file_store.remove(path)
            except FileStoreError as exc:
                logger.error("Cannot delete profile %r: %s", name, exc)
                return exc.code

        logger.info("Deleted profile %r", name)
        self.events.emit(EventType.PROFILE_DELETED, name=name)
        return ErrorCode.OK
