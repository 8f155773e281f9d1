from __future__ import annotations

from collections.abc import Callable
import copy
import logging
from pathlib import Path
import threading
import time

from profile_saves.domain import (
    NOT_FOUND,
    DocumentTree,
    ErrorCode,
    Event,
    EventType,
    Listener,
    SaveSettings,
    SaveTask,
    Value,
    normalize_profile_name,
    read_path,
    resolve_path,
    write_path,
)
from profile_saves.infrastructure import (
    FileStore,
    FileStoreError,
    JsonCodec,
    JsonCodecError,
    ProfileCatalog,
)

from .save_coordinator import SaveCoordinator


logger = logging.getLogger(__name__)


class ProfileSession:
    """The selected profile and its document tree.

    Query and mutation errors are logged, recorded in ``last_error`` and
    answered with ``None``/``False``/an ``ErrorCode``; nothing here raises
    for a missing profile or path. Save outcomes are only reported through
    ``profile_save_failed``/``profile_saved`` events.
    """

    def __init__(
        self,
        settings: SaveSettings | None = None,
        *,
        file_store: FileStore | None = None,
        codec: JsonCodec | None = None,
        user_root: Path | None = None,
    ) -> None:
        self.settings = settings or SaveSettings()
        self.catalog = ProfileCatalog(self.settings, file_store=file_store, codec=codec, user_root=user_root)
        self.events = self.catalog.events
        self.last_error: ErrorCode | None = None
        self._coordinator = SaveCoordinator(self.catalog)
        self._lock = threading.RLock()
        self._selected_name = ""
        self._tree: DocumentTree = {}

    @property
    def selected_name(self) -> str:
        with self._lock:
            return self._selected_name

    @property
    def is_saving(self) -> bool:
        return self._coordinator.is_saving

    def is_selected(self) -> bool:
        with self._lock:
            return bool(self._selected_name.strip())

    def list_profiles(self) -> list[str]:
        return self.catalog.list_names()

    def create_profile(self, name: str, seed_data: DocumentTree | None = None) -> ErrorCode:
        code = self.catalog.create(name, seed_data)
        if code != ErrorCode.OK:
            self._set_last_error(code)
        return code

    def delete_profile(self, name: str) -> ErrorCode:
        name = normalize_profile_name(name)
        code = self.catalog.delete(name)
        if code != ErrorCode.OK:
            self._set_last_error(code)
            return code

        with self._lock:
            was_selected = self._selected_name == name
            if was_selected:
                self._selected_name = ""
                self._tree = {}
        if was_selected:
            self.events.emit(EventType.PROFILE_CHANGED, old_name=name, new_name="")
        return code

    def select_profile(self, name: str) -> bool:
        name = normalize_profile_name(name)
        path = self.catalog.lookup(name)
        if path is None:
            self._report(ErrorCode.FILE_NOT_FOUND, "Profile %r does not exist", name)
            return False

        try:
            raw = self.catalog.file_store.read_all(path)
        except FileStoreError as exc:
            self._report(exc.code, "Cannot read profile %r: %s", name, exc)
            return False

        tree = self._decode(path, raw)
        with self._lock:
            old_name = self._selected_name
            self._selected_name = name
            self._tree = tree
        logger.info("Selected profile %r", name)
        self.events.emit(EventType.PROFILE_CHANGED, old_name=old_name, new_name=name)
        return True

    def get_current_profile(self) -> DocumentTree | None:
        with self._lock:
            if not self.is_selected():
                self._report(ErrorCode.NO_PROFILE_SELECTED, "No profile selected")
                return None
            return copy.deepcopy(self._tree)

    def get_property(self, key: str) -> Value:
        with self._lock:
            if not self.is_selected():
                self._report(ErrorCode.NO_PROFILE_SELECTED, "Cannot read %r: no profile selected", key)
                return None
            value = read_path(self._tree, resolve_path(key))
            if value is NOT_FOUND:
                self._report(ErrorCode.PATH_NOT_FOUND, "Path %r not found in profile %r", key, self._selected_name)
                return None
            return copy.deepcopy(value)

    def get_property_or_default(self, key: str, default: Value = None) -> Value:
        with self._lock:
            if not self.is_selected():
                return default
            value = read_path(self._tree, resolve_path(key))
            if value is NOT_FOUND:
                return default
            return copy.deepcopy(value)

    def set_property(self, key: str, value: Value) -> Value:
        with self._lock:
            if not self.is_selected():
                self._report(ErrorCode.NO_PROFILE_SELECTED, "Cannot set %r: no profile selected", key)
                return None
            old_value = self.get_property_or_default(key, None)
            write_path(self._tree, resolve_path(key), copy.deepcopy(value))
        self.events.emit(EventType.SAVES_CHANGED, key=key, old_value=old_value, new_value=value)
        return value

    def save(self) -> ErrorCode:
        with self._lock:
            if not self.is_selected():
                self._report(ErrorCode.CANT_RESOLVE, "Cannot save: no profile selected")
                return ErrorCode.CANT_RESOLVE
            name = self._selected_name
            try:
                payload = self.catalog.codec.encode_bytes(self._tree)
            except JsonCodecError as exc:
                logger.error("Cannot encode profile %r: %s", name, exc)
                self._coordinator.report_failure(ErrorCode.DECODE_ERROR)
                return ErrorCode.OK
        return self._coordinator.submit(SaveTask(profile_name=name, payload=payload))

    def wait_for_saves(self, timeout: float | None = None) -> bool:
        return self._coordinator.wait(timeout)

    def shutdown(self, timeout: float | None = 5.0) -> None:
        if not self._coordinator.wait(timeout):
            logger.warning("Save still running at shutdown; pending: %s", self._coordinator.pending_profiles())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.events.subscribe(listener)

    def poll_events(self) -> list[Event]:
        return self.events.poll_events()

    def _decode(self, path: Path, raw: bytes) -> DocumentTree:
        if not raw.strip():
            return {}
        try:
            return self.catalog.codec.decode_bytes(raw)
        except JsonCodecError as exc:
            self._report(ErrorCode.DECODE_ERROR, "Profile file %s is corrupt, loading it empty: %s", path, exc)
            self._backup(path, raw)
            return {}

    def _backup(self, path: Path, raw: bytes) -> None:
        backup = path.with_name(f"{path.name}.bak.{time.strftime('%Y%m%d_%H%M%S')}")
        with self.catalog.write_lock:
            try:
                self.catalog.file_store.write_all(backup, raw)
            except FileStoreError as exc:
                logger.error("Cannot back up corrupt profile %s: %s", path, exc)
                return
        logger.info("Backed up corrupt profile to %s", backup)

    def _set_last_error(self, code: ErrorCode) -> None:
        with self._lock:
            self.last_error = code

    def _report(self, code: ErrorCode, message: str, *args: object) -> None:
        self._set_last_error(code)
        logger.warning(message, *args)
