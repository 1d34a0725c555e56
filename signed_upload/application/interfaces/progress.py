from __future__ import annotations

from typing import Protocol

from signed_upload.core.pyd_schemas import ProgressEvent


class IProgressObserver(Protocol):
    """Receives progress, failure and success notifications for one upload.

    Fire-and-forget: return values are ignored.
    """

    def notify(self, event: ProgressEvent) -> None: ...
