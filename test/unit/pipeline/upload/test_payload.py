import hashlib

import pytest

from signed_upload.application.pipeline.upload.payload import (
    SIGNING_CHALLENGE,
    build_signing_payload,
)


@pytest.mark.parametrize(
    "image_bytes",
    [b"", b"\x00", b"\x89PNG\r\n\x1a\n" + bytes(range(256)), b"\xff" * 4096],
)
def test_payload_is_challenge_then_image(image_bytes):
    payload = build_signing_payload(image_bytes)

    challenge = SIGNING_CHALLENGE.encode("utf-8")
    assert payload[: len(challenge)] == challenge
    assert payload[len(challenge) :] == image_bytes
    assert len(payload) == len(challenge) + len(image_bytes)


def test_challenge_literal_matches_server():
    assert SIGNING_CHALLENGE == "ImageSigningChallenge"


def test_empty_image_signs_challenge_only():
    assert build_signing_payload(b"") == b"ImageSigningChallenge"


def test_payload_hash_is_deterministic():
    data = b"same image bytes"
    first = hashlib.sha256(build_signing_payload(data)).hexdigest()
    second = hashlib.sha256(build_signing_payload(bytearray(data))).hexdigest()
    assert first == second
