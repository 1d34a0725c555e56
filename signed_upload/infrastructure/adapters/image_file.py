from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles

from signed_upload.application.interfaces import IImageFile


class LocalImageFile(IImageFile):
    """Image on the local filesystem, read without blocking the event loop."""

    def __init__(self, path: str | Path, *, content_type: Optional[str] = None):
        self.path = Path(path)
        self.name = self.path.name
        self.content_type = content_type or mimetypes.guess_type(self.path.name)[0]

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    async def read(self) -> bytes:
        async with aiofiles.open(self.path, "rb") as f:
            return await f.read()


@dataclass(frozen=True)
class InMemoryImageFile(IImageFile):
    """Image whose bytes are already loaded."""

    name: str
    data: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)

    async def read(self) -> bytes:
        return self.data
