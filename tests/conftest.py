import os
import sys

import pytest
import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from clockwork_sms.client import ClockworkClient
from clockwork_sms.config import Settings

TEST_API_KEY = "TEST-KEY"


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code


class FakeSession:
    """Stands in for requests.Session: records each request and replays a canned reply."""

    def __init__(self, body: str = "", status_code: int = 200, error: Exception | None = None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.calls = []

    def request(self, method, url, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body, self.status_code)

    def close(self):
        pass


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        api_key=TEST_API_KEY,
        send_url="https://test.com/send",
        credit_url="https://test.com/credit",
    )


@pytest.fixture
def make_client(settings):
    def _make(body: str = "", status_code: int = 200, error: Exception | None = None):
        session = FakeSession(body, status_code, error)
        return ClockworkClient(session=session, settings=settings), session
    return _make


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("connection refused")
