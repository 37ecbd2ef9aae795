from __future__ import annotations

import pytest

from courtside.aggregation.errors import AggregationError, UnknownLeagueError
from courtside.aggregation.fallback import FallbackAggregator, StaticFallbackStore
from courtside.core.enums import MatchStatusEnum
from courtside.core.models import LeagueData, Match, MatchDetails, StandingsEntry, Team

CANNED = Match(
    id="mock-1",
    home_team=Team(id="101", name="London Lions", short_name="Lions"),
    away_team=Team(id="102", name="Leicester Riders", short_name="Riders"),
    date="2026-01-18",
    time="19:30",
    venue="Copper Box Arena",
    status=MatchStatusEnum.SCHEDULED,
)
STORE = StaticFallbackStore(data={"super-league": LeagueData(matches=[CANNED], standings=[])})


class FailingAggregator:
    def __init__(self, error: AggregationError) -> None:
        self.error = error

    async def fetch_matches(self, league_id: str) -> list[Match]:
        raise self.error

    async def fetch_standings(self, league_id: str) -> list[StandingsEntry]:
        raise self.error

    async def fetch_match_details(self, match_id: str, league_id: str) -> MatchDetails | None:
        raise self.error

    async def fetch_all_data(self, league_id: str) -> LeagueData:
        raise self.error


def _feed_down() -> AggregationError:
    return AggregationError(
        "geniussports feed failed", league_id="super-league", provider="geniussports", status_code=503
    )


@pytest.mark.asyncio
async def test_disabled_fallback_propagates() -> None:
    wrapper = FallbackAggregator(aggregator=FailingAggregator(_feed_down()), store=STORE, enabled=False)

    with pytest.raises(AggregationError):
        await wrapper.fetch_matches("super-league")


@pytest.mark.asyncio
async def test_enabled_fallback_substitutes_store_data() -> None:
    wrapper = FallbackAggregator(aggregator=FailingAggregator(_feed_down()), store=STORE, enabled=True)

    assert await wrapper.fetch_matches("super-league") == [CANNED]
    assert await wrapper.fetch_standings("super-league") == []
    details = await wrapper.fetch_match_details("mock-1", "super-league")
    assert details is not None and details.match == CANNED
    data = await wrapper.fetch_all_data("super-league")
    assert data.matches == [CANNED]


@pytest.mark.asyncio
async def test_unknown_league_is_never_masked() -> None:
    wrapper = FallbackAggregator(
        aggregator=FailingAggregator(UnknownLeagueError("nba")), store=STORE, enabled=True
    )

    with pytest.raises(UnknownLeagueError):
        await wrapper.fetch_matches("nba")
