from datetime import datetime, timedelta
from typing import Callable

import httpx
import pytest

IOS_BODY = {"resultCount": 1, "results": [{"bundleId": "com.example.app", "version": "1.2.3"}]}

PLAY_STORE_HTML = (
    '<html><body><script>AF_initDataCallback({key: \'ds:5\', data:'
    '[[null,[[["4.5.6",[[null,["Varies"]]]]]]]]});</script></body></html>'
)


class FakeClock:
    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, 0)) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingHandler:
    """MockTransport handler that records every request it serves."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client():
    clients: list[httpx.Client] = []

    def _make(respond: Callable[[httpx.Request], httpx.Response]) -> tuple[httpx.Client, RecordingHandler]:
        handler = RecordingHandler(respond)
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client, handler

    yield _make

    for client in clients:
        client.close()
