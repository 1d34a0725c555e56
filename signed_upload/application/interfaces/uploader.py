from __future__ import annotations

from typing import Callable, Optional, Protocol, Union

from signed_upload.core.pyd_schemas import ProgressEvent, UploadResult

from .image_file import IImageFile
from .progress import IProgressObserver

ProgressTarget = Union[IProgressObserver, Callable[[ProgressEvent], None], None]


class IImageUploader(Protocol):
    """Uploads one image to the image host and returns its public URL."""

    async def execute(
        self, image: IImageFile, progress: ProgressTarget = None
    ) -> UploadResult:
        """Run one upload attempt and return its outcome without raising."""
        ...

    async def upload_image(
        self, image: IImageFile, progress: ProgressTarget = None
    ) -> str:
        """Return the hosted URL or raise ImageUploadError."""
        ...
