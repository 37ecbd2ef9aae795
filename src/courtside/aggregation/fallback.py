from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from courtside.core.config import settings
from courtside.core.logging import logger
from courtside.core.models import LeagueData, Match, MatchDetails, StandingsEntry

from .aggregator import Aggregator
from .errors import AggregationError, UnknownLeagueError


class FallbackStore(Protocol):
    """Canned data substituted when a league's live feeds fail."""

    def matches(self, league_id: str) -> list[Match]: ...

    def standings(self, league_id: str) -> list[StandingsEntry]: ...

    def match_details(self, match_id: str, league_id: str) -> MatchDetails | None: ...


@dataclass(frozen=True)
class StaticFallbackStore:
    data: Mapping[str, LeagueData] = field(default_factory=dict)

    def matches(self, league_id: str) -> list[Match]:
        league = self.data.get(league_id)
        return list(league.matches) if league else []

    def standings(self, league_id: str) -> list[StandingsEntry]:
        league = self.data.get(league_id)
        return list(league.standings) if league else []

    def match_details(self, match_id: str, league_id: str) -> MatchDetails | None:
        for match in self.matches(league_id):
            if match.id == match_id:
                return MatchDetails(match=match)
        return None


@dataclass
class FallbackAggregator:
    """
    Opt-in wrapper: when ``enabled`` (``USE_MOCK_FALLBACK``), a failed league
    fetch is answered from ``store`` instead of raising. Unknown leagues are
    never masked.
    """

    aggregator: Aggregator
    store: FallbackStore
    enabled: bool = field(default_factory=lambda: settings.use_mock_fallback)

    def _should_substitute(self, e: AggregationError) -> bool:
        return self.enabled and not isinstance(e, UnknownLeagueError)

    def _log(self, what: str, e: AggregationError) -> None:
        logger.info(
            "fallback_substituted",
            what=what,
            league_id=e.league_id,
            provider=e.provider,
            status_code=e.status_code,
        )

    async def fetch_matches(self, league_id: str) -> list[Match]:
        try:
            return await self.aggregator.fetch_matches(league_id)
        except AggregationError as e:
            if not self._should_substitute(e):
                raise
            self._log("matches", e)
            return self.store.matches(league_id)

    async def fetch_standings(self, league_id: str) -> list[StandingsEntry]:
        try:
            return await self.aggregator.fetch_standings(league_id)
        except AggregationError as e:
            if not self._should_substitute(e):
                raise
            self._log("standings", e)
            return self.store.standings(league_id)

    async def fetch_match_details(self, match_id: str, league_id: str) -> MatchDetails | None:
        try:
            return await self.aggregator.fetch_match_details(match_id, league_id)
        except AggregationError as e:
            if not self._should_substitute(e):
                raise
            self._log("match_details", e)
            return self.store.match_details(match_id, league_id)

    async def fetch_all_data(self, league_id: str) -> LeagueData:
        try:
            return await self.aggregator.fetch_all_data(league_id)
        except AggregationError as e:
            if not self._should_substitute(e):
                raise
            self._log("all", e)
            return LeagueData(
                matches=self.store.matches(league_id),
                standings=self.store.standings(league_id),
            )
