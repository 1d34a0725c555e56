from __future__ import annotations

import asyncio
import hashlib
import logging

from signed_upload.application.interfaces import ISigner, Identity
from signed_upload.application.pipeline.base import PipelineContext, BaseStep
from signed_upload.application.pipeline.upload.payload import build_signing_payload
from signed_upload.core.exceptions import SigningError

logger = logging.getLogger(__name__)


class SignPayloadStep(BaseStep):
    """Hash the signing payload and sign the digest with the posting key.

    Input:  identity, image_bytes
    Output: payload_digest, signature
    """

    name = "sign_payload"
    required_keys = ["identity", "image_bytes"]

    def __init__(self, signer: ISigner):
        self.signer = signer

    def _sign(self, image_bytes: bytes, private_key: str) -> tuple[bytes, str]:
        payload = build_signing_payload(image_bytes)
        digest = hashlib.sha256(payload).digest()
        return digest, self.signer.sign(digest, private_key)

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        identity: Identity = context.get("identity")
        image_bytes: bytes = context.get("image_bytes")

        loop = asyncio.get_running_loop()
        try:
            digest, signature = await loop.run_in_executor(
                None, self._sign, image_bytes, identity.private_key
            )
        except ValueError as e:
            logger.warning("Posting key for %s rejected: %s", identity.user_id, e)
            raise SigningError("Invalid posting key.") from e
        except Exception as e:  # noqa: BLE001
            logger.error("Signing failed for %s: %s", identity.user_id, e)
            raise SigningError() from e

        if not signature:
            raise SigningError()

        logger.debug(
            "Signed payload digest=%s signature=%s...", digest.hex(), signature[:12]
        )
        context.set("payload_digest", digest)
        context.set("signature", signature)
