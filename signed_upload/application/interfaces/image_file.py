from __future__ import annotations

from typing import Optional, Protocol


class IImageFile(Protocol):
    """Read-only handle to the binary content of an image."""

    name: str
    size: int
    content_type: Optional[str]

    async def read(self) -> bytes:
        """Return the full content of the file."""
        ...
