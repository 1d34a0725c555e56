from __future__ import annotations

from typing import Callable

from signed_upload.application.interfaces.uploader import ProgressTarget
from signed_upload.core.pyd_schemas import ProgressEvent


class CallbackProgressObserver:
    """Adapts a plain ``callback(event)`` function to IProgressObserver."""

    def __init__(self, callback: Callable[[ProgressEvent], None]) -> None:
        self._callback = callback

    def notify(self, event: ProgressEvent) -> None:
        self._callback(event)


class NullProgressObserver:
    def notify(self, event: ProgressEvent) -> None:
        return None


def as_observer(target: ProgressTarget):
    """Accept an observer, a callable, or None."""
    if target is None:
        return NullProgressObserver()
    if hasattr(target, "notify"):
        return target
    if callable(target):
        return CallbackProgressObserver(target)
    raise TypeError(f"Unsupported progress target: {type(target).__name__}")
