"""
Shared test fixtures for the TFT client tests.
"""

import pytest
import sys
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tft_client.api.client import TFTClient
from tft_client.api.dispatcher import RequestDispatcher
from tft_client.api.rate_limiter import RateLimiter, TokenBucket
from tft_client.config import get_config
from tft_client.models import Summoner

from tests.fixtures.sample_matches import (
    SAMPLE_LEAGUE_RESPONSE,
    SAMPLE_MATCH_RESPONSE,
    SAMPLE_SUMMONER_RESPONSE,
)

TEST_API_KEY = "RGAPI-test-riot-key-12345"

Route = Union[httpx.Response, Exception, Callable[[httpx.Request], Any]]


class FakeRiotAPI:
    """
    In-memory Riot API behind an httpx.MockTransport.

    Routes are full URLs; unknown URLs answer 404 like the real API.
    Every request that reaches the transport is recorded.
    """

    def __init__(self):
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, json: Any = None, status: int = 200, content: Optional[bytes] = None) -> None:
        if content is not None:
            self.routes[url] = lambda request: httpx.Response(status, content=content)
        else:
            self.routes[url] = lambda request: httpx.Response(status, json=json)

    def add_handler(self, url: str, handler: Route) -> None:
        self.routes[url] = handler

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, json={"status": {"message": "Data not found", "status_code": 404}})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        result = route(request)
        if hasattr(result, "__await__"):
            result = await result
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def mock_env_vars(monkeypatch, tmp_path):
    """Set up mock environment variables for testing"""
    monkeypatch.setenv("RIOT_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("RIOT_API_KEY_FILE", str(tmp_path / "no-such-apikey"))
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def mock_env_vars_missing_riot(monkeypatch, tmp_path):
    """Environment without any Riot API key"""
    monkeypatch.delenv("RIOT_API_KEY", raising=False)
    monkeypatch.setenv("RIOT_API_KEY_FILE", str(tmp_path / "no-such-apikey"))
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def fake_api():
    return FakeRiotAPI()


@pytest.fixture
def fast_limiter():
    """Limiter that never makes a test wait"""
    return RateLimiter([TokenBucket(1000, 1.0), TokenBucket(1000, 1.0)])


@pytest.fixture
def dispatcher(fake_api, fast_limiter):
    return RequestDispatcher(TEST_API_KEY, fast_limiter, transport=fake_api.transport)


@pytest.fixture
def client(dispatcher):
    return TFTClient(dispatcher)


@pytest.fixture
def summoner():
    """Summoner as returned by summoner_by_name on na1"""
    return Summoner.from_dict(SAMPLE_SUMMONER_RESPONSE).with_routing("na1", "americas")


@pytest.fixture
def sample_summoner_data():
    return SAMPLE_SUMMONER_RESPONSE


@pytest.fixture
def sample_league_data():
    return SAMPLE_LEAGUE_RESPONSE


@pytest.fixture
def sample_match_data():
    return SAMPLE_MATCH_RESPONSE
