from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from profile_saves.domain.models import ErrorCode


class FileStoreError(OSError):
    def __init__(self, code: ErrorCode, path: Path, detail: str = "") -> None:
        message = f"{code.value}: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.code = code
        self.path = path


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        # the write error is raised by the caller
        return


class FileStore(Protocol):
    def read_all(self, path: Path) -> bytes: ...

    def write_all(self, path: Path, data: bytes) -> None: ...

    def ensure_dir(self, path: Path) -> None: ...

    def list_files(self, directory: Path, suffix: str) -> list[Path]: ...

    def remove(self, path: Path) -> None: ...


class LocalFileStore:
    """Whole-file access to the local disk.

    Writes go to a sibling ``.tmp`` file first and are moved into place, so a
    crash never leaves a half-written save behind.
    """

    def read_all(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise FileStoreError(ErrorCode.FILE_NOT_FOUND, path) from exc
        except OSError as exc:
            raise FileStoreError(ErrorCode.CANT_OPEN, path, exc.strerror or str(exc)) from exc

    def write_all(self, path: Path, data: bytes) -> None:
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, path)
        except OSError as exc:
            _discard(tmp)
            raise FileStoreError(ErrorCode.CANT_OPEN, path, exc.strerror or str(exc)) from exc

    def ensure_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileStoreError(ErrorCode.CANT_OPEN, path, exc.strerror or str(exc)) from exc

    def list_files(self, directory: Path, suffix: str) -> list[Path]:
        try:
            return [p for p in directory.iterdir() if p.suffix == suffix and p.is_file()]
        except OSError as exc:
            raise FileStoreError(ErrorCode.CANT_OPEN, directory, exc.strerror or str(exc)) from exc

    def remove(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise FileStoreError(ErrorCode.FILE_NOT_FOUND, path) from exc
        except OSError as exc:
            raise FileStoreError(ErrorCode.CANT_OPEN, path, exc.strerror or str(exc)) from exc
