"""Logging setup for applications embedding the profile store.

Library modules only create ``logging.getLogger(__name__)`` loggers; the host
decides where records go. ``configure_logging`` is a convenience for hosts
without their own configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path
import sys
import threading


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, log_path: Path | None = None) -> bool:
    """Install stdout (and optionally file) handlers on the root logger.

    Does nothing if the root logger is already configured (e.g. when
    embedded). Returns True when handlers were installed.
    """

    root = logging.getLogger()
    if root.handlers:
        return False

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_path), mode="a", encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    # Save workers are plain threads; make their crashes visible in the log.
    # A hook installed by the host is left in place.
    if threading.excepthook is not threading.__excepthook__:
        return True

    def _thread_excepthook(args: threading.ExceptHookArgs) -> None:
        logging.getLogger("profile_saves").error(
            "Unhandled exception in thread %s",
            args.thread.name if args.thread else "?",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    threading.excepthook = _thread_excepthook
    return True
