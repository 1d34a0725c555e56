"""
Posting key signer compatible with Graphene-based chains (Blurt, Steem, Hive).

Keys are WIF strings; signatures are 65-byte compact recoverable secp256k1
signatures rendered as hex, the format the image host verifies.
"""

from __future__ import annotations

import hashlib
import logging

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
)

from signed_upload.application.interfaces import ISigner

logger = logging.getLogger(__name__)

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_WIF_VERSION = 0x80
# secp256k1 group order
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
# recovery header offset for compressed public keys: 27 + 4
_COMPACT_HEADER = 31


def b58decode(value: str) -> bytes:
    num = 0
    for ch in value:
        idx = _B58_ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Invalid base58 character {ch!r}")
        num = num * 58 + idx
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    pad = len(value) - len(value.lstrip("1"))
    return b"\x00" * pad + body


def _double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def decode_wif(wif: str) -> int:
    """Return the private scalar of a WIF key; ValueError if malformed."""
    raw = b58decode(wif.strip())
    if len(raw) == 38 and raw[33] == 0x01:
        # compressed-key marker
        payload, checksum = raw[:34], raw[34:]
    elif len(raw) == 37:
        payload, checksum = raw[:33], raw[33:]
    else:
        raise ValueError("Invalid WIF length")
    if payload[0] != _WIF_VERSION:
        raise ValueError("Invalid WIF version byte")
    if _double_sha256(payload)[:4] != checksum:
        raise ValueError("Invalid WIF checksum")
    secret = int.from_bytes(payload[1:33], "big")
    if not 0 < secret < CURVE_ORDER:
        raise ValueError("Private key out of range")
    return secret


def is_canonical(compact: bytes) -> bool:
    """Graphene canonical check on r (bytes 1..32) and s (bytes 33..64)."""
    return (
        not compact[1] & 0x80
        and not (compact[1] == 0 and not compact[2] & 0x80)
        and not compact[33] & 0x80
        and not (compact[33] == 0 and not compact[34] & 0x80)
    )


def _recovery_id(secret: int, e: int, r: int, s: int) -> int:
    # k = s^-1 (e + r*d) gives R = kG; its y parity (and x overflow) is the id
    k = (e + r * secret) * pow(s, -1, CURVE_ORDER) % CURVE_ORDER
    point = ec.derive_private_key(k, ec.SECP256K1()).public_key().public_numbers()
    recid = point.y & 1
    if point.x != r:
        recid |= 2
    return recid


class PostingKeySigner(ISigner):
    """ECDSA/secp256k1 signer producing canonical compact signatures."""

    def __init__(self, *, max_attempts: int = 64) -> None:
        self.max_attempts = max_attempts

    def sign(self, digest: bytes, private_key: str) -> str:
        if len(digest) != 32:
            raise TypeError("digest must be a 32-byte SHA-256 value")

        secret = decode_wif(private_key)
        key = ec.derive_private_key(secret, ec.SECP256K1())
        e = int.from_bytes(digest, "big")
        algorithm = ec.ECDSA(Prehashed(hashes.SHA256()))

        for attempt in range(1, self.max_attempts + 1):
            r, s = decode_dss_signature(key.sign(digest, algorithm))
            if s > CURVE_ORDER // 2:
                s = CURVE_ORDER - s
            header = _COMPACT_HEADER + _recovery_id(secret, e, r, s)
            compact = bytes([header]) + r.to_bytes(32, "big") + s.to_bytes(32, "big")
            if is_canonical(compact):
                logger.debug("Canonical signature after %d attempt(s)", attempt)
                return compact.hex()

        raise RuntimeError(
            f"No canonical signature after {self.max_attempts} attempts"
        )
