from __future__ import annotations

import logging

from signed_upload.application.interfaces import IImageFile
from signed_upload.application.pipeline.base import PipelineContext, BaseStep
from signed_upload.application.pipeline.upload.state import (
    UploadState,
    UploadStateMachine,
)
from signed_upload.core.exceptions import ImageReadError

logger = logging.getLogger(__name__)


class ReadImageStep(BaseStep):
    """Input:  image, state, identity
    Output: image_bytes
    """

    name = "read_image"
    required_keys = ["identity"]

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        state: UploadStateMachine = context.input["state"]
        image: IImageFile = context.input["image"]
        file_name = getattr(image, "name", None)

        try:
            data = await image.read()
        except OSError as e:
            logger.error("Failed to read image %s: %s", file_name, e)
            raise ImageReadError(file_name=file_name) from e

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise ImageReadError(file_name=file_name)

        data = bytes(data)
        if not data:
            logger.warning("Image %s is empty; signing the challenge only", file_name)
        logger.debug("Read %d bytes from %s", len(data), file_name)

        context.set("image_bytes", data)
        state.advance(UploadState.SIGNING)
