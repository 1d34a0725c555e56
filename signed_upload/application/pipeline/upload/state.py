from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, FrozenSet, Optional

from signed_upload.application.interfaces.progress import IProgressObserver
from signed_upload.core.exceptions import InvalidStateTransition
from signed_upload.core.pyd_schemas import ProgressEvent

logger = logging.getLogger(__name__)


class UploadState(str, Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    SIGNING = "signing"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATES: FrozenSet[UploadState] = frozenset(
    {UploadState.SUCCEEDED, UploadState.FAILED}
)

_TRANSITIONS: Dict[UploadState, FrozenSet[UploadState]] = {
    UploadState.IDLE: frozenset({UploadState.PREPARING, UploadState.FAILED}),
    UploadState.PREPARING: frozenset({UploadState.SIGNING, UploadState.FAILED}),
    UploadState.SIGNING: frozenset({UploadState.UPLOADING, UploadState.FAILED}),
    UploadState.UPLOADING: frozenset({UploadState.SUCCEEDED, UploadState.FAILED}),
    UploadState.SUCCEEDED: frozenset(),
    UploadState.FAILED: frozenset(),
}


class UploadStateMachine:
    """State of one upload attempt and the only writer to its observer.

    ``idle -> preparing -> signing -> uploading -> succeeded``, with ``failed``
    reachable from every non-terminal state. Exactly one terminal event
    (``url`` or ``error``) reaches the observer; status messages are only
    forwarded while the upload is still running.
    """

    def __init__(
        self, observer: IProgressObserver, *, run_id: Optional[str] = None
    ) -> None:
        self._observer = observer
        self._state = UploadState.IDLE
        self.run_id = run_id

    @property
    def state(self) -> UploadState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return self._state in TERMINAL_STATES

    def can_transition(self, target: UploadState) -> bool:
        return target in _TRANSITIONS[self._state]

    def _transition(self, target: UploadState) -> None:
        if not self.can_transition(target):
            raise InvalidStateTransition(self._state.value, target.value)
        logger.debug(
            "[run_id=%s] upload state %s -> %s",
            self.run_id,
            self._state.value,
            target.value,
        )
        self._state = target

    def advance(self, target: UploadState, message: Optional[str] = None) -> None:
        """Move to a non-terminal state, optionally narrating it."""
        if target in TERMINAL_STATES:
            raise InvalidStateTransition(self._state.value, target.value)
        self._transition(target)
        if message:
            self.report(message)

    def report(self, message: str) -> None:
        if self.is_terminal:
            logger.debug("[run_id=%s] dropping late progress: %s", self.run_id, message)
            return
        self._notify(ProgressEvent.status(message))

    def succeed(self, url: str) -> None:
        self._transition(UploadState.SUCCEEDED)
        self._notify(ProgressEvent.done(url))

    def fail(self, error: str) -> bool:
        """Enter ``failed`` and emit the error; no-op once terminal."""
        if self.is_terminal:
            logger.warning(
                "[run_id=%s] ignoring failure after terminal state %s: %s",
                self.run_id,
                self._state.value,
                error,
            )
            return False
        self._transition(UploadState.FAILED)
        self._notify(ProgressEvent.failure(error))
        return True

    def _notify(self, event: ProgressEvent) -> None:
        try:
            self._observer.notify(event)
        except Exception:  # noqa: BLE001
            logger.warning(
                "[run_id=%s] progress observer raised on %s",
                self.run_id,
                event.to_dict(),
                exc_info=True,
            )
