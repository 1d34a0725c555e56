from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, List, Optional, Tuple

import aiohttp

from signed_upload.application.interfaces import (
    IUploadTransport,
    ProgressHook,
    TransportResponse,
)
from signed_upload.core.config import settings
from signed_upload.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class _BodyBuffer:
    """Sink for aiohttp's multipart writer."""

    def __init__(self) -> None:
        self._chunks: List[bytes] = []

    async def write(self, chunk: bytes) -> None:
        self._chunks.append(bytes(chunk))

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


def decode_body(raw: bytes, charset: Optional[str]) -> str:
    """Decode a response body, falling back to UTF-8 for unknown charsets."""
    try:
        return raw.decode(charset or "utf-8", errors="replace")
    except LookupError:
        logger.warning("Unknown response charset %r; decoding as utf-8", charset)
        return raw.decode("utf-8", errors="replace")


async def encode_multipart(
    field_name: str, filename: str, content: bytes, content_type: Optional[str]
) -> Tuple[bytes, str]:
    """Return (body, content-type header) for a form with one file field."""
    form = aiohttp.FormData()
    form.add_field(
        field_name,
        content,
        filename=filename,
        content_type=content_type or "application/octet-stream",
    )
    writer = form()
    buffer = _BodyBuffer()
    await writer.write(buffer)
    return buffer.getvalue(), writer.content_type


class AiohttpUploadTransport(IUploadTransport):
    """multipart/form-data POST over aiohttp with upload progress.

    The encoded body is streamed in ``chunk_size`` pieces; ``on_progress`` is
    called with ``(bytes_sent, total_bytes)`` after each piece is handed to
    the connection.
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        chunk_size: Optional[int] = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.upload_timeout
        self.chunk_size = chunk_size or settings.upload_chunk_size

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
        body, form_content_type = await encode_multipart(
            field_name, filename, content, content_type
        )
        total = len(body)
        headers = {
            "Content-Type": form_content_type,
            "Content-Length": str(total),
        }

        async def _stream() -> AsyncIterator[bytes]:
            sent = 0
            for offset in range(0, total, self.chunk_size):
                chunk = body[offset : offset + self.chunk_size]
                yield chunk
                sent += len(chunk)
                if on_progress:
                    on_progress(sent, total)

        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, data=_stream(), headers=headers) as resp:
                    raw = await resp.read()
                    text = decode_body(raw, resp.charset)
                    logger.debug("POST %s -> %s %s", url, resp.status, resp.reason)
                    return TransportResponse(
                        status=resp.status, reason=resp.reason or "", body=text
                    )
        except aiohttp.ClientError as e:
            logger.error("Upload request to %s failed: %s", url, e)
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e
        except asyncio.TimeoutError as e:
            logger.error("Upload request to %s timed out after %ss", url, self.timeout)
            raise TransportError(f"Request to {url} timed out", url=url) from e
