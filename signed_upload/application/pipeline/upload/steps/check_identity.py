from __future__ import annotations

import logging

from signed_upload.application.interfaces import IIdentityProvider, Identity
from signed_upload.application.pipeline.base import PipelineContext, BaseStep
from signed_upload.application.pipeline.upload.state import (
    UploadState,
    UploadStateMachine,
)
from signed_upload.core.exceptions import AuthRequiredError

logger = logging.getLogger(__name__)


class CheckIdentityStep(BaseStep):
    """Identity gate: nothing else runs without a user id and a posting key.

    Input:  state
    Output: identity
    """

    name = "check_identity"

    def __init__(self, identity: IIdentityProvider):
        self.identity = identity

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        state: UploadStateMachine = context.input["state"]

        user = (self.identity.get_current_user() or "").strip()
        key = (self.identity.get_posting_key() or "").strip()
        if not user or not key:
            logger.info(
                "Upload refused: user=%s key_present=%s", user or None, bool(key)
            )
            raise AuthRequiredError()

        context.set("identity", Identity(user_id=user, private_key=key))
        state.advance(UploadState.PREPARING, "Preparing image...")
