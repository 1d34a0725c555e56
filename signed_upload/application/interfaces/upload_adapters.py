from __future__ import annotations

from typing import Protocol, runtime_checkable

from .identity import IIdentityProvider
from .signer import ISigner
from .transport import IUploadTransport


@runtime_checkable
class IImageUploadAdapters(Protocol):
    identity: IIdentityProvider
    signer: ISigner
    transport: IUploadTransport
