from __future__ import annotations

import logging
import math

from signed_upload.application.interfaces import IImageFile, IUploadTransport, Identity
from signed_upload.application.pipeline.base import PipelineContext, BaseStep
from signed_upload.application.pipeline.upload.request import build_upload_request
from signed_upload.application.pipeline.upload.response import resolve_hosted_url
from signed_upload.application.pipeline.upload.state import (
    UploadState,
    UploadStateMachine,
)
from signed_upload.core.exceptions import NetworkError, TransportError

logger = logging.getLogger(__name__)


def upload_percent(sent: int, total: int) -> int:
    """Percentage of the body sent, rounded half up."""
    return int(math.floor(sent / total * 100 + 0.5))


class TransferImageStep(BaseStep):
    """Assemble the signed request, send it and interpret the response.

    Input:  image, state, identity, signature, image_bytes
    Output: upload_url, image_url
    """

    name = "transfer_image"
    required_keys = ["identity", "signature", "image_bytes"]

    def __init__(
        self, transport: IUploadTransport, *, endpoint: str, field_name: str = "file"
    ):
        self.transport = transport
        self.endpoint = endpoint
        self.field_name = field_name

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        state: UploadStateMachine = context.input["state"]
        image: IImageFile = context.input["image"]
        identity: Identity = context.get("identity")

        request = build_upload_request(
            self.endpoint,
            identity.user_id,
            context.get("signature"),
            filename=getattr(image, "name", "") or "",
            content=context.get("image_bytes"),
            content_type=getattr(image, "content_type", None),
            field_name=self.field_name,
        )
        context.set("upload_url", request.url)

        def _on_progress(sent: int, total: int) -> None:
            if total > 0:
                state.report(f"Uploading {upload_percent(sent, total)}%")

        state.advance(UploadState.UPLOADING)
        logger.info("Uploading %s for %s", request.filename, identity.user_id)
        try:
            response = await self.transport.post_file(
                request.url,
                field_name=request.field_name,
                filename=request.filename,
                content=request.content,
                content_type=request.content_type,
                on_progress=_on_progress,
            )
        except TransportError as e:
            logger.error("Network error uploading %s: %s", request.filename, e)
            raise NetworkError() from e

        url = resolve_hosted_url(response)
        context.set("image_url", url)
        logger.info("Image uploaded: %s", url)
