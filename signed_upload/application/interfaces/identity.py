from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


class IIdentityProvider(Protocol):
    """Supplies the logged-in user and their posting key on demand.

    Either value may be unavailable (``None`` or empty); the upload flow treats
    that as "not logged in".
    """

    def get_current_user(self) -> Optional[str]: ...

    def get_posting_key(self) -> Optional[str]: ...


@dataclass(frozen=True, slots=True)
class Identity:
    """User id and private key borrowed for the duration of one upload."""

    user_id: str
    private_key: str

    def __repr__(self) -> str:
        return f"Identity(user_id={self.user_id!r}, private_key=<redacted>)"
