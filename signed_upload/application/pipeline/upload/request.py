from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote


@dataclass(frozen=True, slots=True)
class UploadRequest:
    """POST target and multipart form content for one upload."""

    url: str
    field_name: str
    filename: str
    content: bytes
    content_type: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"UploadRequest(url={self.url!r}, field_name={self.field_name!r}, "
            f"filename={self.filename!r}, size={len(self.content)})"
        )


def build_upload_request(
    endpoint: str,
    user_id: str,
    signature: str,
    *,
    filename: str,
    content: bytes,
    content_type: Optional[str] = None,
    field_name: str = "file",
) -> UploadRequest:
    """Build ``<endpoint>/<user_id>/<signature>`` and the single-file form.

    Both path segments are percent-escaped so a ``/`` or ``?`` in either value
    cannot change the path structure.
    """
    base = endpoint.strip().rstrip("/")
    url = f"{base}/{quote(user_id, safe='')}/{quote(signature, safe='')}"
    return UploadRequest(
        url=url,
        field_name=field_name,
        filename=filename or "image",
        content=content,
        content_type=content_type,
    )
