"""
Shared pytest fixtures.

A scripted fetcher, a controllable clock, and resolver components wired
over an in-memory cache repository.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import pytest

from hypixel_resolver.core.config import Settings
from hypixel_resolver.domain.fetch.interfaces import Fetcher
from hypixel_resolver.domain.fetch.value_objects import FetchResponse, FetchType
from hypixel_resolver.infrastructure.repositories.cache_repository import (
    InMemoryCacheRepository,
)
from hypixel_resolver.monitoring.metrics import ResolutionMetrics
from hypixel_resolver.services.client import HypixelClient
from hypixel_resolver.services.resolution import (
    GuildResolver,
    KeyedLock,
    ResolutionOrchestrator,
    UUIDResolver,
)

API_KEY = "8a5c2f6e-0f3d-4d7e-9b6a-1c2d3e4f5a6b"
NOTCH_UUID = "069a79f444e94726a5befca90e38aaf5"
PLAYER_UUID = "f7c77d999f154a66a87dc4a51ef30d19"
GUILD_ID = "5363aa5ced50ef8eaf2a7b59"
START_TIME = 1_700_000_000.0

ScriptedResponse = Union[FetchResponse, Callable[[Dict[str, str]], FetchResponse]]


def player_body(uuid: str, name: str, **fields: Any) -> Dict[str, Any]:
    player = {"uuid": uuid, "displayname": name, "playername": name.lower()}
    player.update(fields)
    return {"success": True, "player": player}


def guild_body(guild_id: str, name: str, members: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "guild": {
            "_id": guild_id,
            "name": name,
            "name_lower": name.lower(),
            "tag": name[:4].upper(),
            "members": [{"uuid": uuid, "rank": "Member"} for uuid in members or []],
        },
    }


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher(Fetcher):
    """Fetcher answering from scripted responses and recording every call."""

    def __init__(self):
        self.responses: Dict[FetchType, ScriptedResponse] = {}
        self.url_responses: Dict[str, Optional[Dict[str, Any]]] = {}
        self.calls: List[Tuple[FetchType, Dict[str, str]]] = []
        self.url_calls: List[str] = []
        self.closed = False

    def respond(self, fetch_type: FetchType, response: ScriptedResponse) -> None:
        self.responses[fetch_type] = response

    def calls_for(self, fetch_type: FetchType) -> List[Dict[str, str]]:
        return [params for called, params in self.calls if called is fetch_type]

    async def fetch(
        self, fetch_type: FetchType, params: Optional[Dict[str, str]] = None
    ) -> FetchResponse:
        params = dict(params or {})
        self.calls.append((fetch_type, params))
        # Yield so concurrent callers can interleave at the network boundary
        await asyncio.sleep(0)
        scripted = self.responses.get(fetch_type)
        if scripted is None:
            return FetchResponse.failure("not scripted", status_code=404)
        if callable(scripted):
            return scripted(params)
        return scripted

    async def get_url_contents(self, url: str) -> Optional[Dict[str, Any]]:
        self.url_calls.append(url)
        await asyncio.sleep(0)
        return self.url_responses.get(url)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, HYPIXEL_API_KEY=None, CACHE_BACKEND="memory")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def cache():
    return InMemoryCacheRepository()


@pytest.fixture
def metrics():
    return ResolutionMetrics()


@pytest.fixture
def locks():
    return KeyedLock()


@pytest.fixture
def orchestrator(cache, metrics, locks, clock):
    return ResolutionOrchestrator(cache, metrics=metrics, locks=locks, clock=clock)


@pytest.fixture
def uuid_resolver(cache, fetcher, metrics, locks, clock):
    return UUIDResolver(cache, fetcher, metrics=metrics, locks=locks, clock=clock)


@pytest.fixture
def guild_resolver(cache, fetcher, orchestrator, uuid_resolver, locks, clock):
    return GuildResolver(
        cache, fetcher, orchestrator, uuid_resolver, locks=locks, clock=clock
    )


@pytest.fixture
def client(settings, fetcher, cache, metrics, clock):
    return HypixelClient(
        API_KEY,
        settings=settings,
        fetcher=fetcher,
        cache=cache,
        metrics=metrics,
        clock=clock,
    )
