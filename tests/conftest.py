"""
Shared pytest configuration and fixtures.

Puts the project root on sys.path so all test modules can import `src.*`
without a package install.  Also defines the HTTP fakes that stand in for
``requests.Session`` so no test touches the network.
"""

import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure project root is importable from every test file
# ---------------------------------------------------------------------------
_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(_ROOT))

import pytest
import requests

from src.translation.config_store import ConfigStore, MemoryStorage, TranslationConfig


# ---------------------------------------------------------------------------
# HTTP fakes
# ---------------------------------------------------------------------------

class FakeResponse:
    """Just enough of ``requests.Response`` for the backends."""

    def __init__(self, payload=None, status_code: int = 200, reason: str = "OK", invalid_json: bool = False):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """
    Scripted stand-in for ``requests.Session``.

    ``routes`` maps a URL to either a :class:`FakeResponse`, an exception
    instance (raised when called), or a list of those consumed in order.
    Every call is recorded in ``calls`` as ``(method, url, kwargs)``.
    Unknown URLs raise ``requests.ConnectionError``.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def _dispatch(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        outcome = self.routes.get(url)
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if outcome is None:
            raise requests.ConnectionError(f"No route for {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get(self, url, **kwargs):
        return self._dispatch("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._dispatch("POST", url, kwargs)

    def calls_to(self, url):
        return [c for c in self.calls if c[1] == url]


# ---------------------------------------------------------------------------
# Canned payloads
# ---------------------------------------------------------------------------

def mymemory_ok(text: str) -> FakeResponse:
    return FakeResponse({"responseStatus": 200, "responseData": {"translatedText": text}})


def libre_ok(text: str) -> FakeResponse:
    return FakeResponse({"translatedText": text})


def baidu_ok(dst: str, src: str = "") -> FakeResponse:
    return FakeResponse({"from": "zh", "to": "en", "trans_result": [{"src": src, "dst": dst}]})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def session() -> FakeSession:
    """Empty fake session; tests add routes as needed."""
    return FakeSession()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(memory_storage) -> ConfigStore:
    return ConfigStore(memory_storage)


@pytest.fixture
def all_disabled() -> TranslationConfig:
    """Config with every network backend switched off."""
    config = TranslationConfig.defaults()
    for provider in config:
        provider.enabled = False
    return config
