from .file_store import FileStore, FileStoreError, LocalFileStore
from .json_codec import JsonCodec, JsonCodecError
from .profile_catalog import ProfileCatalog
from .save_worker import SaveWorker
from .storage_paths import get_app_data_dir, resolve_user_path

__all__ = [
    "FileStore",
    "FileStoreError",
    "JsonCodec",
    "JsonCodecError",
    "LocalFileStore",
    "ProfileCatalog",
    "SaveWorker",
    "get_app_data_dir",
    "resolve_user_path",
]
