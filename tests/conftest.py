"""
Pytest configuration and shared fixtures for the Binance client tests.

Provides an in-process fake aiohttp session so no test touches the network.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from binance_api.config.structs import ApiCredentials, ClientConfig
from binance_api.infrastructure.logging import LoggerInterface
from binance_api.infrastructure.logging.factory import LoggerFactory

API_KEY = "vmPUZE6mv9SD5VNHk4HlWFsOr6aKE2zvsw0MuIgwCIPy6utIco14y7Ju91duEh8A"
SECRET_KEY = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"
FIXED_TIMESTAMP = 1499827319559


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, status: int = 200, body: Union[str, bytes] = "{}",
                 headers: Optional[Dict[str, str]] = None):
        self.status = status
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self.headers = headers or {}

    async def read(self) -> bytes:
        return self._body


class _RequestContext:
    def __init__(self, outcome: Any):
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """
    Records every request and replays queued responses or exceptions in order.
    """

    def __init__(self, *outcomes: Any):
        self.outcomes: List[Any] = list(outcomes)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, outcome: Any) -> None:
        self.outcomes.append(outcome)

    def request(self, method, url, data=None, headers=None):
        self.calls.append({
            'method': method,
            'url': str(url),
            'data': data,
            'headers': dict(headers or {}),
        })
        outcome = self.outcomes.pop(0) if self.outcomes else FakeResponse()
        return _RequestContext(outcome)

    async def close(self) -> None:
        self.closed = True

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


@pytest.fixture(autouse=True)
def reset_logger_cache():
    """Loggers are cached by name; keep tests independent."""
    LoggerFactory.clear_cache()
    yield
    LoggerFactory.clear_cache()


@pytest.fixture
def mock_logger():
    return Mock(spec=LoggerInterface)


@pytest.fixture
def credentials():
    return ApiCredentials(api_key=API_KEY, secret_key=SECRET_KEY)


@pytest.fixture
def client_config(credentials):
    return ClientConfig(credentials=credentials)


@pytest.fixture
def public_config():
    return ClientConfig()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def fake_session():
    return FakeSession()
