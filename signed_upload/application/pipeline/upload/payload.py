"""
Signing payload construction.

The image host verifies ``sha256(SIGNING_CHALLENGE || image)``; the byte order
must match the server exactly.
"""

from __future__ import annotations

SIGNING_CHALLENGE = "ImageSigningChallenge"
SIGNING_CHALLENGE_BYTES = SIGNING_CHALLENGE.encode("utf-8")


def build_signing_payload(image_bytes: bytes) -> bytes:
    """Return the challenge bytes immediately followed by the image bytes.

    Empty images are allowed and yield the challenge alone.
    """
    return SIGNING_CHALLENGE_BYTES + bytes(image_bytes)
