from datetime import datetime, timedelta, timezone
from typing import List

import httpx
import pytest

from services.copyleaks.authenticator import LOGIN_PATH
from utils.settings import Settings

ID_URL = "https://id.test"
API_URL = "https://api.test"
DETECT_PREFIX = "/v1/ai-image-detector/"


class FakeCopyleaks:
    """Stand-in for the identity and detection services behind httpx.MockTransport.

    Queue `httpx.Response` objects (or exceptions) in `login_responses` and
    `detect_responses`; when a queue is empty a default success is returned.
    """

    def __init__(self) -> None:
        self.login_responses: List[object] = []
        self.detect_responses: List[object] = []
        self.login_calls: List[httpx.Request] = []
        self.detect_calls: List[httpx.Request] = []
        self.issued = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == LOGIN_PATH:
            self.login_calls.append(request)
            if self.login_responses:
                return self._next(self.login_responses)
            self.issued += 1
            return httpx.Response(200, json={"access_token": f"token-{self.issued}"})
        if request.url.path.startswith(DETECT_PREFIX):
            self.detect_calls.append(request)
            if self.detect_responses:
                return self._next(self.detect_responses)
            return httpx.Response(
                200, json={"summary": {"ai": 73}, "imageInfo": {"width": 640, "height": 480}}
            )
        return httpx.Response(404, json={"message": "unknown route"})

    @staticmethod
    def _next(queue: List[object]) -> httpx.Response:
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecorderSpy:
    """Records calls instead of touching a database."""

    enabled = True

    def __init__(self) -> None:
        self.calls = []

    async def record(self, request, result):
        self.calls.append((request, result))
        return len(self.calls)


@pytest.fixture
def fake_copyleaks() -> FakeCopyleaks:
    return FakeCopyleaks()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        email="dev@example.com",
        api_key="long-lived-key",
        id_url=ID_URL,
        api_url=API_URL,
    )
