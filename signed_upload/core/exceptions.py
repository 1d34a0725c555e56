"""
Custom error types for the signed image upload flow
"""

from typing import Optional


class ImageUploadError(Exception):
    """Base exception for every failure reported by an upload attempt.

    ``message`` is the human-readable text shown both to the progress
    observer and to the caller.
    """

    default_code = "UPLOAD_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code or self.default_code
        super().__init__(self.message)


class AuthRequiredError(ImageUploadError):
    """Raised when no user id or posting key is available"""

    default_code = "AUTH_REQUIRED"

    def __init__(self, message: str = "Please login with your posting key first."):
        super().__init__(message)


class ImageReadError(ImageUploadError):
    """Raised when the image bytes cannot be read"""

    default_code = "IMAGE_READ_ERROR"

    def __init__(
        self,
        message: str = "Could not read image file.",
        file_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.file_name = file_name


class SigningError(ImageUploadError):
    """Raised when the posting key is malformed or the signing primitive fails"""

    default_code = "SIGNING_FAILURE"

    def __init__(self, message: str = "Failed to sign image."):
        super().__init__(message)


class ServerError(ImageUploadError):
    """Server answered 200 with an ``error`` field instead of a URL"""

    default_code = "SERVER_ERROR"


class MalformedResponseError(ImageUploadError):
    """Server answered 200 with a body that is not a usable JSON object"""

    default_code = "MALFORMED_RESPONSE"

    def __init__(
        self, message: str = "Invalid server response.", body: Optional[str] = None
    ):
        super().__init__(message)
        self.body = body


class HttpFailureError(ImageUploadError):
    """Server answered with a non-200 status

    Args:
        status (int): HTTP status code
        reason (str): HTTP status text
        detail (Optional[str]): ``error`` field of the body, when present
    Example:
        raise HttpFailureError(500, "Internal Server Error")
    """

    default_code = "HTTP_FAILURE"

    def __init__(self, status: int, reason: str, detail: Optional[str] = None):
        super().__init__(f"Upload failed: {reason}")
        self.status = status
        self.reason = reason
        self.detail = detail


class NetworkError(ImageUploadError):
    """Transport-level failure, no response was received"""

    default_code = "NETWORK_FAILURE"

    def __init__(self, message: str = "Network error during upload."):
        super().__init__(message)


class UploadCancelledError(ImageUploadError):
    """The awaiting task was cancelled before a terminal state was reached"""

    default_code = "CANCELLED"

    def __init__(self, message: str = "Upload cancelled."):
        super().__init__(message)


class TransportError(Exception):
    """Exception raised by transports when the request produced no response"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ConfigurationError(Exception):
    """Exception raised when configuration is invalid"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key


class InvalidStateTransition(Exception):
    """Exception raised when the upload state machine is driven out of order"""

    def __init__(self, current: str, target: str):
        super().__init__(f"Invalid upload state transition: {current} -> {target}")
        self.current = current
        self.target = target
