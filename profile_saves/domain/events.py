from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import logging
import queue
import threading
from typing import Any


logger = logging.getLogger(__name__)


class EventType(str, Enum):
    SAVES_CHANGED = "saves_changed"
    PROFILE_CHANGED = "profile_changed"
    PROFILE_CREATED = "profile_created"
    PROFILE_DELETED = "profile_deleted"
    PROFILE_SAVE_START = "profile_save_start"
    PROFILE_SAVE_FAILED = "profile_save_failed"
    PROFILE_SAVED = "profile_saved"


Event = dict[str, Any]
Listener = Callable[[Event], None]


class EventBus:
    """Fan-out for profile notifications.

    Every event is queued for ``poll_events`` and handed to subscribed
    listeners on the emitting thread. Save results are emitted from the
    save worker thread.
    """

    def __init__(self, maxsize: int = 5000) -> None:
        self._events: queue.Queue[Event] = queue.Queue(maxsize=maxsize)
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()
        self.dropped_events = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event_type: EventType, **payload: Any) -> Event:
        event: Event = {"type": event_type, **payload}
        try:
            self._events.put_nowait(event)
        except queue.Full:
            with self._lock:
                self.dropped_events += 1
                dropped = self.dropped_events
            if dropped == 1:
                logger.warning("Event queue is full; dropping %s and later events until polled", event_type.value)

        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener failed while handling %s", event_type.value)
        return event

    def poll_events(self) -> list[Event]:
        events: list[Event] = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except queue.Empty:
                break
        return events
