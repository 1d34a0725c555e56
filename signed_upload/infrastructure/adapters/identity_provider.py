from __future__ import annotations

from typing import Optional

from signed_upload.application.interfaces import IIdentityProvider
from signed_upload.core.config import settings


class StaticIdentityProvider(IIdentityProvider):
    """Identity handed in explicitly by the caller (e.g. after a login form)."""

    def __init__(self, user: Optional[str], posting_key: Optional[str]) -> None:
        self._user = user
        self._posting_key = posting_key

    def get_current_user(self) -> Optional[str]:
        return self._user

    def get_posting_key(self) -> Optional[str]:
        return self._posting_key


class SettingsIdentityProvider(IIdentityProvider):
    """Identity taken from POSTING_USER / POSTING_KEY settings at call time."""

    def get_current_user(self) -> Optional[str]:
        return settings.posting_user or None

    def get_posting_key(self) -> Optional[str]:
        return settings.posting_key or None
