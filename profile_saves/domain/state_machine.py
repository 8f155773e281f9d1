from __future__ import annotations

from enum import Enum


class SaveState(str, Enum):
    IDLE = "IDLE"
    SAVING = "SAVING"


_TRANSITIONS: dict[SaveState, set[SaveState]] = {
    SaveState.IDLE: {SaveState.SAVING},
    SaveState.SAVING: {SaveState.IDLE},
}


class InvalidTransitionError(RuntimeError):
    pass


class SaveStateMachine:
    """Tracks whether a save worker is running.

    ``begin`` and ``finish`` tolerate being called in the state they lead
    to, so a worker that died mid-save can be replaced without a reset.
    """

    def __init__(self) -> None:
        self._state = SaveState.IDLE

    @property
    def state(self) -> SaveState:
        return self._state

    def can_transition(self, to_state: SaveState) -> bool:
        return to_state in _TRANSITIONS[self._state]

    def transition(self, to_state: SaveState) -> None:
        if not self.can_transition(to_state):
            raise InvalidTransitionError(f"Invalid save transition: {self._state.value} -> {to_state.value}")
        self._state = to_state

    def begin(self) -> None:
        if self._state != SaveState.SAVING:
            self.transition(SaveState.SAVING)

    def finish(self) -> None:
        if self._state != SaveState.IDLE:
            self.transition(SaveState.IDLE)
