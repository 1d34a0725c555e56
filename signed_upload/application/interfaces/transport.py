from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

# (bytes_sent, total_bytes)
ProgressHook = Callable[[int, int], None]


@dataclass(frozen=True, slots=True)
class TransportResponse:
    status: int
    reason: str
    body: str


class IUploadTransport(Protocol):
    """Sends one multipart/form-data POST carrying a single file field."""

    async def post_file(
        self,
        url: str,
        *,
        field_name: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None,
        on_progress: Optional[ProgressHook] = None,
    ) -> TransportResponse:
        """Return the server response, whatever its status.

        Raises TransportError when no response was received at all.
        ``on_progress`` is called zero or more times while the body is sent.
        """
        ...
