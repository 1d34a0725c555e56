from .identity import IIdentityProvider, Identity
from .signer import ISigner
from .transport import IUploadTransport, TransportResponse, ProgressHook
from .image_file import IImageFile
from .progress import IProgressObserver
from .uploader import IImageUploader, ProgressTarget
from .upload_adapters import IImageUploadAdapters

__all__ = [
    "IIdentityProvider",
    "Identity",
    "ISigner",
    "IUploadTransport",
    "TransportResponse",
    "ProgressHook",
    "IImageFile",
    "IProgressObserver",
    "IImageUploader",
    "ProgressTarget",
    "IImageUploadAdapters",
]
