"""
Unit tests for the Resolution Orchestrator.

Covers freshness, the extra merge on refresh, failure attachment,
failure passthrough, empty responses and per-key single flight.
"""

import asyncio

import pytest

from conftest import START_TIME, NOTCH_UUID, player_body
from hypixel_resolver.domain.cache.value_objects import CacheType, TTL
from hypixel_resolver.domain.fetch.value_objects import FetchResponse, FetchType
from hypixel_resolver.domain.resources.entities import Player
from hypixel_resolver.services.resolution.providers import Provider


class TestResolutionOrchestrator:
    """Test ResolutionOrchestrator.handle()."""

    @pytest.fixture
    def provider(self):
        return Provider()

    def handle(self, orchestrator, fetcher, provider, uuid=NOTCH_UUID):
        return orchestrator.handle(
            CacheType.PLAYER,
            uuid,
            lambda: fetcher.fetch(FetchType.PLAYER, {"uuid": uuid}),
            lambda body: provider.build_player(uuid, body),
        )

    async def seed(self, cache, timestamp, **extra):
        player = Player(
            identifier=NOTCH_UUID,
            data={"displayname": "Notch", "karma": 1},
            timestamp=timestamp,
            extra=dict(extra),
        )
        await cache.save_record(player)
        return player

    @pytest.mark.asyncio
    async def test_miss_fetches_and_stores(self, orchestrator, fetcher, cache, provider, metrics):
        """Test a cache miss fetches, stamps and persists the record."""
        fetcher.respond(FetchType.PLAYER, FetchResponse.ok(player_body(NOTCH_UUID, "Notch")))

        result = await self.handle(orchestrator, fetcher, provider)

        assert isinstance(result, Player)
        assert result.timestamp == START_TIME
        assert await cache.get_record(CacheType.PLAYER, NOTCH_UUID) is result
        assert len(fetcher.calls) == 1
        assert metrics.sample(
            "hypixel_resolutions_total", cache_type="player", outcome="refreshed"
        ) == 1.0

    @pytest.mark.asyncio
    async def test_fresh_record_skips_fetch(self, orchestrator, fetcher, cache, provider, clock):
        """Test a fresh cached record is returned with no fetch."""
        cached = await self.seed(cache, START_TIME)
        clock.advance(599)

        result = await self.handle(orchestrator, fetcher, provider)

        assert result is cached
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_max_ttl_never_refreshes(self, orchestrator, fetcher, cache, provider, clock):
        """Test the max sentinel keeps any record fresh."""
        cached = await self.seed(cache, 0.0)
        cache.set_cache_time(CacheType.PLAYER, TTL.max())

        result = await self.handle(orchestrator, fetcher, provider)

        assert result is cached
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_refresh_carries_extra(self, orchestrator, fetcher, cache, provider, clock):
        """Test a refresh keeps extra and takes every payload field from the fetch."""
        await self.seed(cache, START_TIME, note="vip", visits=3)
        clock.advance(600)
        fetcher.respond(
            FetchType.PLAYER, FetchResponse.ok(player_body(NOTCH_UUID, "Notch", karma=99))
        )

        result = await self.handle(orchestrator, fetcher, provider)

        assert result.extra == {"note": "vip", "visits": 3}
        assert result.get("karma") == 99
        assert result.timestamp == START_TIME + 600
        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_failed_refresh_returns_same_record(
        self, orchestrator, fetcher, cache, provider, clock, metrics
    ):
        """Test a failed refresh attaches the response to the cached record."""
        cached = await self.seed(cache, START_TIME)
        clock.advance(601)
        failure = FetchResponse.failure("Key throttle", status_code=429, throttled=True)
        fetcher.respond(FetchType.PLAYER, failure)

        result = await self.handle(orchestrator, fetcher, provider)

        assert result is cached
        assert result.response is failure
        assert result.timestamp == START_TIME
        assert metrics.sample(
            "hypixel_resolutions_total", cache_type="player", outcome="stale"
        ) == 1.0

    @pytest.mark.asyncio
    async def test_failure_without_cache_returns_response(
        self, orchestrator, fetcher, cache, provider
    ):
        """Test the failure itself is returned when nothing was cached."""
        failure = FetchResponse.failure("Malformed UUID", status_code=400)
        fetcher.respond(FetchType.PLAYER, failure)

        result = await self.handle(orchestrator, fetcher, provider)

        assert result is failure
        assert await cache.get_record(CacheType.PLAYER, NOTCH_UUID) is None

    @pytest.mark.asyncio
    async def test_success_without_entity(self, orchestrator, fetcher, cache, provider, metrics):
        """Test a successful body with no entity stores nothing."""
        fetcher.respond(FetchType.PLAYER, FetchResponse.ok({"success": True, "player": None}))

        result = await self.handle(orchestrator, fetcher, provider)

        assert result is None
        assert await cache.get_record(CacheType.PLAYER, NOTCH_UUID) is None
        assert metrics.sample(
            "hypixel_resolutions_total", cache_type="player", outcome="empty"
        ) == 1.0

    @pytest.mark.asyncio
    async def test_concurrent_resolutions_fetch_once(
        self, orchestrator, fetcher, cache, provider, locks
    ):
        """Test concurrent resolutions of one identity share a single fetch."""
        fetcher.respond(FetchType.PLAYER, FetchResponse.ok(player_body(NOTCH_UUID, "Notch")))

        results = await asyncio.gather(
            *(self.handle(orchestrator, fetcher, provider) for _ in range(5))
        )

        assert len(fetcher.calls) == 1
        assert all(result is results[0] for result in results)
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_concurrent_refreshes_keep_extra(
        self, orchestrator, fetcher, cache, provider, clock
    ):
        """Test extra added between refreshes is never lost to a race."""
        cached = await self.seed(cache, START_TIME)
        cached.add_extra({"pinned": True})
        clock.advance(601)
        fetcher.respond(FetchType.PLAYER, FetchResponse.ok(player_body(NOTCH_UUID, "Notch")))

        results = await asyncio.gather(
            *(self.handle(orchestrator, fetcher, provider) for _ in range(3))
        )

        assert len(fetcher.calls) == 1
        assert all(result.extra == {"pinned": True} for result in results)

    @pytest.mark.asyncio
    async def test_independent_identities_run_in_parallel(
        self, orchestrator, fetcher, provider
    ):
        """Test different identifiers each get their own fetch."""
        other = "f7c77d999f154a66a87dc4a51ef30d19"
        fetcher.respond(
            FetchType.PLAYER,
            lambda params: FetchResponse.ok(player_body(params["uuid"], "someone")),
        )

        first, second = await asyncio.gather(
            self.handle(orchestrator, fetcher, provider),
            self.handle(orchestrator, fetcher, provider, uuid=other),
        )

        assert first.uuid == NOTCH_UUID
        assert second.uuid == other
        assert len(fetcher.calls) == 2
