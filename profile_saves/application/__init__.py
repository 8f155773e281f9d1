from .save_coordinator import SaveCoordinator
from .session import ProfileSession

__all__ = [
    "ProfileSession",
    "SaveCoordinator",
]
