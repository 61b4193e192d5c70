"""Shared test fixtures."""

from typing import Any, Dict, List

import pytest

from wiki_action import Response, new


class FakeTransport:
    """Transport double: replays scripted responses and records every call."""

    def __init__(self, responses: List[Any] = None) -> None:
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def queue(self, body: Any, cookies: List[str] = ()) -> "FakeTransport":
        self.responses.append(Response([("Set-Cookie", c) for c in cookies], body))
        return self

    def send(self, method, payload, headers):
        self.calls.append({"method": method, "payload": payload, "headers": dict(headers)})
        if not self.responses:
            raise AssertionError("unexpected request: no scripted responses left")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


API = "https://test.example.org/w/api.php"


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def session(transport):
    return new(API, transport=transport)


@pytest.fixture(autouse=True)
def _quiet(monkeypatch):
    monkeypatch.delenv("WIKI_ACTION_VERBOSE", raising=False)
