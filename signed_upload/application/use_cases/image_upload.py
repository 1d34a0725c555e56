from __future__ import annotations

import asyncio
import logging
from typing import Optional

from signed_upload.application.interfaces import (
    IImageFile,
    IImageUploadAdapters,
    IImageUploader,
    ProgressTarget,
)
from signed_upload.application.pipeline.base import PipelineContext
from signed_upload.application.pipeline.upload.builder import (
    build_image_upload_pipeline,
)
from signed_upload.application.pipeline.upload.observers import as_observer
from signed_upload.application.pipeline.upload.state import UploadStateMachine
from signed_upload.core.config import settings
from signed_upload.core.exceptions import (
    ConfigurationError,
    ImageUploadError,
    UploadCancelledError,
)
from signed_upload.core.pyd_schemas import UploadResult

logger = logging.getLogger(__name__)


class UploadImageUseCase(IImageUploader):
    """Upload one image to the image host, signed with the user's posting key.

    Every call builds its own pipeline, context and state machine, so
    concurrent uploads share no mutable state. The observer receives any
    number of status messages followed by exactly one ``url`` or ``error``.
    """

    def __init__(
        self,
        adapters: IImageUploadAdapters,
        *,
        endpoint: Optional[str] = None,
        field_name: Optional[str] = None,
        enable_logging_middleware: bool = True,
    ) -> None:
        base = endpoint if endpoint is not None else settings.image_upload_endpoint
        base = (base or "").strip().rstrip("/")
        if not base:
            raise ConfigurationError(
                "Image upload endpoint is not configured",
                config_key="image_upload_endpoint",
            )
        self._adapters = adapters
        self._endpoint = base
        self._field_name = field_name or settings.upload_field_name
        self._enable_logging_middleware = enable_logging_middleware

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def upload_image(
        self, image: IImageFile, progress: ProgressTarget = None
    ) -> str:
        """Return the hosted URL, or raise the ImageUploadError that ended the attempt."""
        state = UploadStateMachine(as_observer(progress))
        url, _ = await self._run(image, state)
        return url

    async def execute(
        self, image: IImageFile, progress: ProgressTarget = None
    ) -> UploadResult:
        """Same as upload_image, but failures come back as an UploadResult."""
        state = UploadStateMachine(as_observer(progress))
        try:
            url, run_id = await self._run(image, state)
        except ImageUploadError as e:
            return UploadResult.failed(e.message, e.error_code, run_id=state.run_id)
        return UploadResult.ok(url, run_id=run_id)

    async def _run(
        self, image: IImageFile, state: UploadStateMachine
    ) -> tuple[str, str]:
        ctx = PipelineContext(input={"image": image, "state": state})
        run_id = ctx.ensure_run_id()
        state.run_id = run_id

        pipeline = build_image_upload_pipeline(
            self._adapters,
            endpoint=self._endpoint,
            field_name=self._field_name,
            enable_logging_middleware=self._enable_logging_middleware,
        )
        try:
            result = await pipeline.execute(ctx)
        except ImageUploadError as e:
            logger.warning(
                "[run_id=%s] upload failed (%s): %s", run_id, e.error_code, e.message
            )
            state.fail(e.message)
            raise
        except asyncio.CancelledError:
            logger.info("[run_id=%s] upload cancelled", run_id)
            state.fail(UploadCancelledError().message)
            raise
        except Exception as e:  # noqa: BLE001
            logger.exception("[run_id=%s] unexpected upload failure", run_id)
            err = ImageUploadError("Unexpected error during upload.")
            state.fail(err.message)
            raise err from e

        url = result["context"].get("image_url")
        state.succeed(url)
        return url, run_id
