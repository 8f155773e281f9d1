from __future__ import annotations

from collections.abc import Callable
import threading

from profile_saves.domain.models import SaveTask


class SaveWorker(threading.Thread):
    """Drains save tasks until ``next_task`` reports there are none left."""

    def __init__(
        self,
        next_task: Callable[[], SaveTask | None],
        run_task: Callable[[SaveTask], None],
    ) -> None:
        super().__init__(name="profile-save", daemon=False)
        self._next_task = next_task
        self._run_task = run_task

    def run(self) -> None:
        task = self._next_task()
        while task is not None:
            self._run_task(task)
            task = self._next_task()
