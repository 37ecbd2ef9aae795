from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TypeVar

from courtside.core.config import settings
from courtside.core.enums import PartialFailurePolicyEnum, ProviderEnum, SourceModeEnum
from courtside.core.logging import logger
from courtside.core.models import LeagueData, Match, MatchDetails, StandingsEntry
from courtside.ingestion.merge import merge_matches, sort_matches_by_date
from courtside.ingestion.providers.base.adapter import ProviderAdapter
from courtside.ingestion.providers.base.errors import ProviderError
from courtside.ingestion.providers.base.registry import AdapterRegistry

from .errors import AggregationError, UnknownLeagueError
from .leagues import LeagueRoute, get_league_route, predefined_routes

__all__ = ["Aggregator", "AggregationError", "UnknownLeagueError"]

T = TypeVar("T")


@dataclass
class Aggregator:
    """
    League-level entry point: resolves a league's route, runs its adapter(s)
    and returns sorted, deduplicated results.

    Adapters are built per call and closed before the call returns. Provider
    failures surface as AggregationError; nothing is substituted here.
    """

    registry: AdapterRegistry
    routes: Mapping[str, LeagueRoute] = field(default_factory=predefined_routes)
    default_policy: PartialFailurePolicyEnum = field(
        default_factory=lambda: settings.partial_failure_policy
    )

    def leagues(self) -> list[LeagueRoute]:
        return list(self.routes.values())

    def route(self, league_id: str) -> LeagueRoute:
        return get_league_route(league_id, self.routes)

    async def _open(
        self, stack: AsyncExitStack, route: LeagueRoute, provider: ProviderEnum
    ) -> ProviderAdapter:
        try:
            adapter = self.registry.get(provider)
        except ProviderError as e:
            raise self._wrap(route, provider, e) from e
        stack.push_async_callback(adapter.aclose)
        return adapter

    @staticmethod
    def _wrap(route: LeagueRoute, provider: ProviderEnum, e: ProviderError) -> AggregationError:
        return AggregationError(
            f"{provider.value} feed failed for {route.league_id}: {e}",
            league_id=route.league_id,
            provider=provider.value,
            status_code=e.status_code,
        )

    async def _guard(self, route: LeagueRoute, provider: ProviderEnum, call: Awaitable[T]) -> T:
        try:
            return await call
        except ProviderError as e:
            logger.warning(
                "provider_fetch_failed",
                league_id=route.league_id,
                provider=provider.value,
                status_code=e.status_code,
                error=str(e),
            )
            raise self._wrap(route, provider, e) from e

    async def _fetch_dual_matches(self, route: LeagueRoute, stack: AsyncExitStack) -> list[Match]:
        schedule_provider = route.schedule_provider
        if schedule_provider is None:
            raise ValueError(f"Route {route.league_id} has no schedule provider")
        competition = route.competition
        results_adapter = await self._open(stack, route, route.provider)
        schedule_adapter = await self._open(stack, route, schedule_provider)

        results, schedule = await asyncio.gather(
            self._guard(route, route.provider, results_adapter.fetch_matches(competition)),
            self._guard(route, schedule_provider, schedule_adapter.fetch_matches(competition)),
            return_exceptions=True,
        )

        for outcome in (results, schedule):
            if isinstance(outcome, BaseException) and not isinstance(outcome, AggregationError):
                raise outcome

        if isinstance(results, AggregationError) and isinstance(schedule, AggregationError):
            raise results

        failed = results if isinstance(results, AggregationError) else schedule
        if not isinstance(failed, AggregationError):
            return merge_matches(results, schedule)

        if route.policy(self.default_policy) == PartialFailurePolicyEnum.STRICT:
            raise failed

        survivor = schedule if failed is results else results
        logger.warning(
            "feed_partial_failure",
            league_id=route.league_id,
            failed_provider=failed.provider,
            status_code=failed.status_code,
            returned=len(survivor),
        )
        return list(survivor)

    async def fetch_matches(self, league_id: str) -> list[Match]:
        route = self.route(league_id)
        async with AsyncExitStack() as stack:
            if route.source_mode == SourceModeEnum.DUAL:
                matches = await self._fetch_dual_matches(route, stack)
            else:
                adapter = await self._open(stack, route, route.provider)
                matches = await self._guard(
                    route, route.provider, adapter.fetch_matches(route.competition)
                )
        return sort_matches_by_date(matches)

    async def fetch_standings(self, league_id: str) -> list[StandingsEntry]:
        # Dual-source leagues take standings from the results-oriented feed.
        route = self.route(league_id)
        async with AsyncExitStack() as stack:
            adapter = await self._open(stack, route, route.provider)
            standings = await self._guard(
                route, route.provider, adapter.fetch_standings(route.competition)
            )
        return sorted(standings, key=lambda s: s.position)

    async def fetch_match_details(self, match_id: str, league_id: str) -> MatchDetails | None:
        route = self.route(league_id)
        if route.source_mode == SourceModeEnum.DUAL:
            for match in await self.fetch_matches(league_id):
                if match.id == match_id:
                    return MatchDetails(match=match, last_updated=datetime.now(UTC).isoformat())
            return None

        async with AsyncExitStack() as stack:
            adapter = await self._open(stack, route, route.provider)
            return await self._guard(
                route, route.provider, adapter.fetch_match_details(match_id, route.competition)
            )

    async def fetch_all_data(self, league_id: str) -> LeagueData:
        matches, standings = await asyncio.gather(
            self.fetch_matches(league_id), self.fetch_standings(league_id)
        )
        return LeagueData(matches=matches, standings=standings)
