from __future__ import annotations

from collections import OrderedDict
import logging
import threading

from profile_saves.domain import ErrorCode, EventType, SaveState, SaveStateMachine, SaveTask
from profile_saves.infrastructure import FileStoreError, ProfileCatalog, SaveWorker


logger = logging.getLogger(__name__)


class SaveCoordinator:
    """Single-flight background writer for profile snapshots.

    At most one worker thread runs at a time. Tasks submitted while it is busy
    wait in a one-slot-per-profile queue; a newer snapshot of the same profile
    replaces the waiting one instead of queueing a second write.
    """

    def __init__(self, catalog: ProfileCatalog) -> None:
        self._catalog = catalog
        self._events = catalog.events
        self._state_machine = SaveStateMachine()
        self._lock = threading.RLock()
        self._pending: OrderedDict[str, SaveTask] = OrderedDict()
        self._worker: SaveWorker | None = None
        self._idle = threading.Event()
        self._idle.set()

    @property
    def state(self) -> SaveState:
        return self._state_machine.state

    @property
    def is_saving(self) -> bool:
        return self.state == SaveState.SAVING

    def pending_profiles(self) -> list[str]:
        with self._lock:
            return list(self._pending)

    def submit(self, task: SaveTask) -> ErrorCode:
        with self._lock:
            accepted = task.profile_name not in self._pending
            self._pending[task.profile_name] = task
            if accepted:
                self._events.emit(EventType.PROFILE_SAVE_START)
            else:
                logger.debug("Coalesced save of %r into the waiting task", task.profile_name)

            if self._worker is not None and self._worker.is_alive():
                return ErrorCode.OK

            self._state_machine.begin()
            self._idle.clear()
            self._worker = SaveWorker(next_task=self._next_task, run_task=self._run_task)
            self._worker.start()
        return ErrorCode.OK

    def report_failure(self, error: ErrorCode) -> None:
        """Publish a save that failed before it could be queued."""
        self._events.emit(EventType.PROFILE_SAVE_START)
        self._events.emit(EventType.PROFILE_SAVE_FAILED, error=error)

    def wait(self, timeout: float | None = None) -> bool:
        return self._idle.wait(timeout)

    def _next_task(self) -> SaveTask | None:
        with self._lock:
            if self._pending:
                _, task = self._pending.popitem(last=False)
                return task
            self._worker = None
            self._state_machine.finish()
            self._idle.set()
            return None

    def _run_task(self, task: SaveTask) -> None:
        error: ErrorCode | None = None
        with self._catalog.write_lock:
            path = self._catalog.lookup(task.profile_name)
            if path is None:
                logger.error("Cannot resolve save file for profile %r", task.profile_name)
                error = ErrorCode.CANT_RESOLVE
            else:
                try:
                    self._catalog.file_store.write_all(path, task.payload)
                except FileStoreError as exc:
                    logger.error("Saving profile %r failed: %s", task.profile_name, exc)
                    error = exc.code
                except Exception:
                    logger.exception("Saving profile %r failed unexpectedly", task.profile_name)
                    error = ErrorCode.CANT_OPEN

        if error is not None:
            self._events.emit(EventType.PROFILE_SAVE_FAILED, error=error)
            return
        logger.info("Saved profile %r (%d bytes)", task.profile_name, len(task.payload))
        self._events.emit(EventType.PROFILE_SAVED, name=task.profile_name)
