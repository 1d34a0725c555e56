from __future__ import annotations

from typing import Protocol


class ISigner(Protocol):
    """Signs a message digest with a user's private key."""

    def sign(self, digest: bytes, private_key: str) -> str:
        """Return the string-encoded signature of ``digest``.

        Raises ValueError when ``private_key`` is not valid key material.
        """
        ...
