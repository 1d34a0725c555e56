from __future__ import annotations

from signed_upload.application.pipeline.base import Pipeline, make_logging_middleware
from signed_upload.application.pipeline.factory import PipelineFactory
from signed_upload.application.pipeline.upload.steps.check_identity import (
    CheckIdentityStep,
)
from signed_upload.application.pipeline.upload.steps.read_image import ReadImageStep
from signed_upload.application.pipeline.upload.steps.sign_payload import (
    SignPayloadStep,
)
from signed_upload.application.pipeline.upload.steps.transfer_image import (
    TransferImageStep,
)
from signed_upload.application.interfaces import IImageUploadAdapters


def build_image_upload_pipeline(
    adapters: IImageUploadAdapters,
    *,
    endpoint: str,
    field_name: str = "file",
    enable_logging_middleware: bool = True,
) -> Pipeline:

    middlewares = [make_logging_middleware()] if enable_logging_middleware else []
    factory = PipelineFactory(middlewares=middlewares)
    factory.extend(
        [
            CheckIdentityStep(adapters.identity),
            ReadImageStep(),
            SignPayloadStep(adapters.signer),
            TransferImageStep(
                adapters.transport, endpoint=endpoint, field_name=field_name
            ),
        ]
    )

    return factory.build()
