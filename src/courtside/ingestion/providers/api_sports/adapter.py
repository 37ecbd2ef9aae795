from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from courtside.core.config import settings
from courtside.core.enums import LivePeriodEnum, MatchStatusEnum, ProviderEnum
from courtside.core.logging import logger
from courtside.core.models import (
    Match,
    MatchDetails,
    QuarterScore,
    QuarterScores,
    StandingsEntry,
    Team,
    standings_points,
)
from courtside.ingestion.dates import normalize_iso_timestamp
from courtside.ingestion.providers.api_sports.client import ApiSportsClient
from courtside.ingestion.providers.base.errors import ProviderMappingError
from courtside.ingestion.providers.base.types import Competition, Json
from courtside.ingestion.status import parse_score, parse_score_pair, resolve_status, scores_for_status
from courtside.ingestion.teams import make_team

FINISHED_LONG = frozenset({"game finished", "after over time"})
FINISHED_SHORT = frozenset({"FT", "AOT"})
LIVE_PHASE_MARKERS = ("quarter", "halftime", "break", "over time")

_PERIOD_BY_SHORT = {
    "Q1": LivePeriodEnum.Q1,
    "Q2": LivePeriodEnum.Q2,
    "HT": LivePeriodEnum.HALF_TIME,
    "Q3": LivePeriodEnum.Q3,
    "Q4": LivePeriodEnum.Q4,
    "OT": LivePeriodEnum.OVERTIME,
}

# No curated table for this feed; names fall through to the positional heuristic.
API_SPORTS_SHORT_NAMES: dict[str, str] = {}


def _as_dict(value: Any) -> Json:
    return value if isinstance(value, dict) else {}


def _status_strings(game: Json) -> tuple[str, str]:
    status = _as_dict(game.get("status"))
    return str(status.get("long") or "").strip(), str(status.get("short") or "").strip()


def status_of(game: Json) -> MatchStatusEnum:
    """Finished status first; phase markers only count for unfinished games."""
    long_text, short = _status_strings(game)
    lowered = long_text.lower()
    return resolve_status(
        finished=lowered in FINISHED_LONG or short.upper() in FINISHED_SHORT,
        in_progress=any(marker in lowered for marker in LIVE_PHASE_MARKERS),
    )


def current_period_of(game: Json, status: MatchStatusEnum) -> LivePeriodEnum | None:
    if status == MatchStatusEnum.COMPLETED:
        return LivePeriodEnum.FULL_TIME
    if status != MatchStatusEnum.LIVE:
        return None
    long_text, short = _status_strings(game)
    period = _PERIOD_BY_SHORT.get(short.upper())
    if period is not None:
        return period
    lowered = long_text.lower()
    if "halftime" in lowered:
        return LivePeriodEnum.HALF_TIME
    if "over time" in lowered:
        return LivePeriodEnum.OVERTIME
    return None


def _team_of(raw: Any) -> Team:
    side = _as_dict(raw)
    name = str(side.get("name") or "")
    logo = side.get("logo")
    return make_team(
        str(side.get("id") or name),
        name,
        API_SPORTS_SHORT_NAMES,
        logo=logo if isinstance(logo, str) else None,
    )


def game_to_match(game: Json, *, display_tz: str | None = None) -> Match:
    game_id = game.get("id")
    if game_id is None:
        raise ProviderMappingError("api-sports game without an id")

    raw_date = game.get("date")
    if not isinstance(raw_date, str):
        raise ProviderMappingError("api-sports game without a date", context={"id": game_id})
    try:
        kickoff = normalize_iso_timestamp(raw_date, display_tz=display_tz)
    except ValueError as e:
        raise ProviderMappingError(
            "Unreadable api-sports game date", context={"id": game_id, "date": raw_date}
        ) from e

    teams = _as_dict(game.get("teams"))
    scores = _as_dict(game.get("scores"))
    status = status_of(game)
    home_score, away_score = scores_for_status(
        status,
        parse_score_pair(
            _as_dict(scores.get("home")).get("total"),
            _as_dict(scores.get("away")).get("total"),
        ),
    )

    return Match(
        id=str(game_id),
        home_team=_team_of(teams.get("home")),
        away_team=_team_of(teams.get("away")),
        home_score=home_score,
        away_score=away_score,
        date=kickoff.date,
        time=kickoff.time,
        venue="TBC",
        status=status,
    )


def _quarter(home: Json, away: Json, key: str) -> QuarterScore:
    return QuarterScore(home=parse_score(home.get(key)) or 0, away=parse_score(away.get(key)) or 0)


def quarter_scores_of(game: Json) -> QuarterScores | None:
    scores = _as_dict(game.get("scores"))
    home = _as_dict(scores.get("home"))
    away = _as_dict(scores.get("away"))
    if home.get("quarter_1") is None:
        return None
    return QuarterScores(
        q1=_quarter(home, away, "quarter_1"),
        q2=_quarter(home, away, "quarter_2"),
        q3=_quarter(home, away, "quarter_3"),
        q4=_quarter(home, away, "quarter_4"),
        ot=_quarter(home, away, "over_time") if home.get("over_time") is not None else None,
    )


def standing_to_entry(row: Json) -> StandingsEntry:
    games = _as_dict(row.get("games"))
    points = _as_dict(row.get("points"))
    won = parse_score(_as_dict(games.get("win")).get("total")) or 0
    lost = parse_score(_as_dict(games.get("lose")).get("total")) or 0
    points_for = parse_score(points.get("for")) or 0
    points_against = parse_score(points.get("against")) or 0
    return StandingsEntry(
        position=parse_score(row.get("position")) or 0,
        team=_team_of(row.get("team")),
        played=parse_score(games.get("played")) or 0,
        won=won,
        lost=lost,
        points_for=points_for,
        points_against=points_against,
        points_difference=points_for - points_against,
        points=standings_points(won, lost, parse_score(_as_dict(row.get("group")).get("points"))),
    )


@dataclass(frozen=True)
class ApiSportsBasketballAdapter:
    """
    API-Sports "basketball" adapter, an alternative source for Super League
    Basketball (league 79). Requires an API key; the free tier allows 100
    requests per day.
    """

    client: ApiSportsClient
    league: int = field(default_factory=lambda: settings.api_sports_league_id)
    season: str = field(default_factory=lambda: settings.api_sports_season)
    display_tz: str | None = field(default_factory=lambda: settings.display_timezone)
    provider_key: str = ProviderEnum.API_SPORTS.value

    def _season_params(self) -> dict[str, str]:
        return {"league": str(self.league), "season": self.season}

    async def fetch_matches(self, competition: Competition) -> list[Match]:
        items = await self.client.get_response_items("/games", params=self._season_params())
        matches = [game_to_match(i, display_tz=self.display_tz) for i in items]
        logger.debug("api_sports_games_parsed", league_id=competition.league_id, matches=len(matches))
        return matches

    async def fetch_standings(self, competition: Competition) -> list[StandingsEntry]:
        rows = await self.client.get_response_rows("/standings", params=self._season_params())
        return sorted((standing_to_entry(r) for r in rows), key=lambda s: s.position)

    async def fetch_match_details(
        self, match_id: str, competition: Competition
    ) -> MatchDetails | None:
        items = await self.client.get_response_items("/games", params={"id": match_id})
        if not items:
            return None

        game = items[0]
        match = game_to_match(game, display_tz=self.display_tz)
        if match.status == MatchStatusEnum.SCHEDULED:
            return MatchDetails(match=match, last_updated=datetime.now(UTC).isoformat())
        return MatchDetails(
            match=match,
            current_period=current_period_of(game, match.status),
            quarter_scores=quarter_scores_of(game),
            last_updated=datetime.now(UTC).isoformat(),
        )

    async def aclose(self) -> None:
        await self.client.aclose()
