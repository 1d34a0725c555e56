from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

from signed_upload.application.interfaces import IIdentityProvider
from signed_upload.application.interfaces.upload_adapters import IImageUploadAdapters
from signed_upload.infrastructure.adapters import (
    AiohttpUploadTransport,
    PostingKeySigner,
    SettingsIdentityProvider,
)


def get_upload_adapter_bundle(
    *,
    identity: Optional[IIdentityProvider] = None,
    timeout: Optional[float] = None,
) -> IImageUploadAdapters:
    """Provide the adapters container for the image upload pipeline.

    Identity defaults to the POSTING_USER / POSTING_KEY settings.
    """
    return SimpleNamespace(
        identity=identity or SettingsIdentityProvider(),
        signer=PostingKeySigner(),
        transport=AiohttpUploadTransport(timeout=timeout),
    )
