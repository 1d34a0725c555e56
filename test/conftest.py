"""
Shared fixtures for the signed upload tests.
"""

import logging
from datetime import datetime
from types import SimpleNamespace
from typing import Callable, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from signed_upload.application.interfaces import TransportResponse
from signed_upload.core.pyd_schemas import ProgressEvent
from signed_upload.infrastructure.adapters import (
    InMemoryImageFile,
    StaticIdentityProvider,
)

# Bitcoin wiki WIF example; private key 0C28FCA3...72AA1D
TEST_WIF = "5HueCGU8rMjxEXxiPuD5BDku4MkFqeZyd4dZ1jvhTVqvbTLvyTJ"
TEST_SECRET = 0x0C28FCA386C7A227600B2FE50B7CAE11EC86D3BF1FBE471BE89827E19D72AA1D
TEST_ENDPOINT = "https://images.example.com"

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def pytest_configure(config):  # pylint: disable=unused-argument
    logging.getLogger("signed_upload").setLevel(logging.DEBUG)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    logger = logging.getLogger(request.node.nodeid)
    logger.info("Start: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        logger.info("Done in %.2fs", duration)

    request.addfinalizer(log_test_end)


class RecordingObserver:
    """Progress observer that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: List[ProgressEvent] = []

    def notify(self, event: ProgressEvent) -> None:
        self.events.append(event)

    @property
    def dicts(self) -> List[dict]:
        return [e.to_dict() for e in self.events]

    @property
    def terminal(self) -> List[ProgressEvent]:
        return [e for e in self.events if e.is_terminal]

    @property
    def last(self) -> Optional[ProgressEvent]:
        return self.events[-1] if self.events else None


class FakeTransport:
    """IUploadTransport double returning a canned response.

    ``progress`` lists (sent, total) pairs reported before responding;
    ``error`` is raised instead of responding when set.
    """

    def __init__(
        self,
        response: Optional[TransportResponse] = None,
        *,
        progress: Optional[List[tuple]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.response = response or TransportResponse(
            200, "OK", '{"url": "https://example.com/img.png"}'
        )
        self.progress = list(progress or [])
        self.error = error
        self.post_file = AsyncMock(side_effect=self._post_file)

    async def _post_file(
        self,
        url: str,
        *,
        field_name: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> TransportResponse:
        for sent, total in self.progress:
            if on_progress:
                on_progress(sent, total)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def image() -> InMemoryImageFile:
    return InMemoryImageFile(
        name="cat.png", data=b"\x89PNG\r\n\x1a\nfake-image", content_type="image/png"
    )


@pytest.fixture
def fake_signer():
    signer = MagicMock()
    signer.sign = MagicMock(return_value="1f" + "ab" * 64)
    return signer


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def make_adapters(fake_signer, fake_transport):
    """Build an adapters bundle; defaults to a logged-in user and fakes."""

    def _make(
        *,
        user: Optional[str] = "alice",
        key: Optional[str] = TEST_WIF,
        signer=None,
        transport=None,
    ) -> SimpleNamespace:
        return SimpleNamespace(
            identity=StaticIdentityProvider(user, key),
            signer=signer or fake_signer,
            transport=transport or fake_transport,
        )

    return _make


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def posting_key() -> str:
    return TEST_WIF


@pytest.fixture
def posting_secret() -> int:
    return TEST_SECRET


@pytest.fixture
def endpoint() -> str:
    return TEST_ENDPOINT


@pytest.fixture
def make_observer():
    """Factory for extra RecordingObserver instances."""
    return RecordingObserver
