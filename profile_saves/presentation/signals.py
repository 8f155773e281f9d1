from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

from profile_saves.application import ProfileSession
from profile_saves.domain import Event, EventType


class ProfileSignals(QObject):
    """Re-emits session events as Qt signals on the GUI thread.

    Events raised by the save worker are queued by the session and only
    delivered here when ``pump`` runs, either manually or from the timer.
    """

    saves_changed = Signal(str, object, object)
    profile_changed = Signal(str, str)
    profile_created = Signal(str)
    profile_deleted = Signal(str)
    profile_save_start = Signal()
    profile_save_failed = Signal(str)
    profile_saved = Signal(str)

    def __init__(self, session: ProfileSession, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session = session
        self._timer: QTimer | None = None

    def start(self, interval_ms: int = 100) -> None:
        if self._timer is None:
            self._timer = QTimer(self)
            self._timer.timeout.connect(self.pump)
        self._timer.setInterval(interval_ms)
        self._timer.start()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def pump(self) -> int:
        events = self._session.poll_events()
        for event in events:
            self._dispatch(event)
        return len(events)

    def _dispatch(self, event: Event) -> None:
        event_type = event.get("type")
        if event_type == EventType.SAVES_CHANGED:
            self.saves_changed.emit(str(event["key"]), event["old_value"], event["new_value"])
        elif event_type == EventType.PROFILE_CHANGED:
            self.profile_changed.emit(event["old_name"], event["new_name"])
        elif event_type == EventType.PROFILE_CREATED:
            self.profile_created.emit(event["name"])
        elif event_type == EventType.PROFILE_DELETED:
            self.profile_deleted.emit(event["name"])
        elif event_type == EventType.PROFILE_SAVE_START:
            self.profile_save_start.emit()
        elif event_type == EventType.PROFILE_SAVE_FAILED:
            self.profile_save_failed.emit(event["error"].value)
        elif event_type == EventType.PROFILE_SAVED:
            self.profile_saved.emit(event["name"])
