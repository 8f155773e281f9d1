from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QStandardPaths


APP_DIR_NAME = "profile_saves"
USER_SCHEME = "user://"


def get_app_data_dir() -> Path:
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
    root = Path(location) if location else Path.home()
    return root / APP_DIR_NAME


def resolve_user_path(path: str | Path, user_root: Path | None = None) -> Path:
    """Map ``user://`` locations onto the application data directory."""
    text = str(path)
    if not text.startswith(USER_SCHEME):
        return Path(text)
    root = user_root if user_root is not None else get_app_data_dir()
    relative = text[len(USER_SCHEME):].strip("/")
    return root / relative if relative else root
