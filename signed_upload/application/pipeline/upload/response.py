from __future__ import annotations

import logging

from pydantic import ValidationError

from signed_upload.application.interfaces.transport import TransportResponse
from signed_upload.core.exceptions import (
    HttpFailureError,
    MalformedResponseError,
    ServerError,
)
from signed_upload.core.pyd_schemas import UploadResponse

logger = logging.getLogger(__name__)


def _parse_body(body: str) -> UploadResponse | None:
    try:
        return UploadResponse.model_validate_json(body)
    except ValidationError:
        return None


def resolve_hosted_url(response: TransportResponse) -> str:
    """Return the hosted image URL or raise the matching upload error.

    - 200 + ``url``            -> the URL
    - 200 + ``error`` only     -> ServerError(error)
    - 200 + anything else      -> MalformedResponseError
    - any other status         -> HttpFailureError("Upload failed: <reason>")
    """
    if response.status != 200:
        parsed = _parse_body(response.body)
        detail = parsed.error if parsed and parsed.error else None
        logger.warning(
            "Image host answered %s %s (detail=%s)",
            response.status,
            response.reason,
            detail,
        )
        raise HttpFailureError(
            response.status, response.reason or str(response.status), detail=detail
        )

    parsed = _parse_body(response.body)
    if parsed is None:
        logger.warning("Unparseable image host response: %.200r", response.body)
        raise MalformedResponseError(body=response.body)
    if parsed.url:
        return parsed.url
    if parsed.error:
        raise ServerError(parsed.error)
    raise MalformedResponseError(body=response.body)
