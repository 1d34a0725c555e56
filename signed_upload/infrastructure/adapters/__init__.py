from .identity_provider import StaticIdentityProvider, SettingsIdentityProvider
from .signer_posting_key import PostingKeySigner
from .transport_aiohttp import AiohttpUploadTransport
from .image_file import LocalImageFile, InMemoryImageFile

__all__ = [
    "StaticIdentityProvider",
    "SettingsIdentityProvider",
    "PostingKeySigner",
    "AiohttpUploadTransport",
    "LocalImageFile",
    "InMemoryImageFile",
]
