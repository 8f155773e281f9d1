from __future__ import annotations

from pathlib import Path
import threading

from profile_saves.domain import ErrorCode
from profile_saves.infrastructure import FileStoreError, LocalFileStore


class EventRecorder:
    def __init__(self) -> None:
        self.events: list[dict] = []

    def __call__(self, event: dict) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> list[dict]:
        return [event for event in self.events if event["type"] == event_type]


class ControlledFileStore(LocalFileStore):
    """Local store whose writes can be held back or made to fail."""

    def __init__(self) -> None:
        self.hold_writes = False
        self.fail_writes = False
        self.fail_reads = False
        self.raise_unwrapped: Exception | None = None
        self.write_started = threading.Event()
        self.release = threading.Event()
        self.writes: list[tuple[Path, bytes]] = []

    def write_all(self, path: Path, data: bytes) -> None:
        if self.raise_unwrapped is not None:
            raise self.raise_unwrapped
        if self.fail_writes:
            raise FileStoreError(ErrorCode.CANT_OPEN, path, "disk full")
        if self.hold_writes:
            self.write_started.set()
            self.release.wait(5.0)
        self.writes.append((path, data))
        super().write_all(path, data)

    def read_all(self, path: Path) -> bytes:
        if self.fail_reads:
            raise FileStoreError(ErrorCode.CANT_OPEN, path, "permission denied")
        return super().read_all(path)
