from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class ProgressKind(str, Enum):
    message = "message"
    error = "error"
    url = "url"


class ProgressEvent(BaseModel):
    """One notification on the progress channel.

    Exactly one of ``message`` (status narration), ``error`` (failure) or
    ``url`` (terminal success) is set.
    """

    message: Optional[str] = None
    error: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _exactly_one(self) -> "ProgressEvent":
        present = [v for v in (self.message, self.error, self.url) if v is not None]
        if len(present) != 1:
            raise ValueError("ProgressEvent needs exactly one of message, error, url")
        return self

    @classmethod
    def status(cls, message: str) -> "ProgressEvent":
        return cls(message=message)

    @classmethod
    def failure(cls, error: str) -> "ProgressEvent":
        return cls(error=error)

    @classmethod
    def done(cls, url: str) -> "ProgressEvent":
        return cls(url=url)

    @property
    def kind(self) -> ProgressKind:
        if self.url is not None:
            return ProgressKind.url
        if self.error is not None:
            return ProgressKind.error
        return ProgressKind.message

    @property
    def is_terminal(self) -> bool:
        return self.kind is not ProgressKind.message

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(exclude_none=True)


class UploadResponse(BaseModel):
    """JSON body returned by the image host."""

    url: Optional[str] = None
    error: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class UploadResult(BaseModel):
    """Outcome of one upload attempt: either a hosted URL or an error."""

    success: bool
    url: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    run_id: Optional[str] = None

    @classmethod
    def ok(cls, url: str, *, run_id: Optional[str] = None) -> "UploadResult":
        return cls(success=True, url=url, run_id=run_id)

    @classmethod
    def failed(
        cls, error: str, error_code: Optional[str], *, run_id: Optional[str] = None
    ) -> "UploadResult":
        return cls(success=False, error=error, error_code=error_code, run_id=run_id)
