from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from courtside.core.config import settings
from courtside.core.enums import MatchStatusEnum, ProviderEnum
from courtside.core.logging import logger
from courtside.core.models import Match, MatchDetails, StandingsEntry, Team
from courtside.ingestion.dates import normalize_iso_timestamp
from courtside.ingestion.parsers.json_shape import parse_json_envelope
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.errors import (
    ProviderCapabilityError,
    ProviderMappingError,
)
from courtside.ingestion.providers.base.types import Competition, Json
from courtside.ingestion.providers.euroleague.adapter import EUROLEAGUE_SHORT_NAMES
from courtside.ingestion.status import parse_score_pair, scores_for_status
from courtside.ingestion.teams import make_team

PAGE_SIZE = 100

_STATUS_MAP = {
    "result": MatchStatusEnum.COMPLETED,
    "confirmed": MatchStatusEnum.SCHEDULED,
}


def _as_dict(value: Any) -> Json:
    return value if isinstance(value, dict) else {}


def _status_of(raw: Any) -> MatchStatusEnum:
    if not isinstance(raw, str):
        return MatchStatusEnum.SCHEDULED
    return _STATUS_MAP.get(raw.strip().lower(), MatchStatusEnum.SCHEDULED)


def _team_of(side: Json) -> Team:
    code = str(side.get("code") or "")
    name = str(side.get("name") or code)
    crest = _as_dict(side.get("imageUrls")).get("crest")
    return make_team(
        code or name,
        name,
        EUROLEAGUE_SHORT_NAMES,
        short_name=side.get("abbreviatedName") or None,
        logo=crest if isinstance(crest, str) else None,
    )


def game_to_match(game: Json, *, display_tz: str | None = None) -> Match:
    identifier = game.get("identifier")
    if not identifier:
        raise ProviderMappingError("InCrowd game without an identifier", context={"id": game.get("id")})

    raw_date = game.get("date")
    if not isinstance(raw_date, str):
        raise ProviderMappingError(
            "InCrowd game without a date", context={"identifier": identifier}
        )
    try:
        kickoff = normalize_iso_timestamp(raw_date, display_tz=display_tz)
    except ValueError as e:
        raise ProviderMappingError(
            "Unreadable InCrowd game date",
            context={"identifier": identifier, "date": raw_date},
        ) from e

    home = _as_dict(game.get("home"))
    away = _as_dict(game.get("away"))
    status = _status_of(game.get("status"))
    home_score, away_score = scores_for_status(
        status, parse_score_pair(home.get("score"), away.get("score"))
    )

    return Match(
        id=str(identifier),
        home_team=_team_of(home),
        away_team=_team_of(away),
        home_score=home_score,
        away_score=away_score,
        date=kickoff.date,
        time=kickoff.time,
        venue=_as_dict(game.get("venue")).get("name") or "TBC",
        status=status,
    )


@dataclass(frozen=True)
class InCrowdScheduleAdapter:
    """
    EuroLeague/EuroCup v2 feed served by InCrowd: the schedule-oriented half of
    the dual-source competitions. Game ``identifier`` values share the v1
    ``gamecode`` space, which is what makes the two feeds mergeable.
    """

    http: BaseHttpClient
    season_year: int = field(default_factory=lambda: settings.season_year)
    display_tz: str | None = field(default_factory=lambda: settings.display_timezone)
    provider_key: str = ProviderEnum.INCROWD.value

    async def fetch_matches(self, competition: Competition) -> list[Match]:
        season_code = competition.season_code(self.season_year)
        payload = await self.http.get_json(
            f"/competitions/{competition.code}/seasons/{season_code}/games",
            params={"pageSize": PAGE_SIZE},
            headers={"Accept": "application/json"},
        )
        envelope = parse_json_envelope(payload)
        matches = [game_to_match(g, display_tz=self.display_tz) for g in envelope.data]

        total = envelope.metadata.get("totalItems")
        if isinstance(total, int) and total > len(matches):
            logger.info(
                "incrowd_page_truncated",
                league_id=competition.league_id,
                returned=len(matches),
                total=total,
            )
        return matches

    async def fetch_standings(self, competition: Competition) -> list[StandingsEntry]:
        raise ProviderCapabilityError("InCrowd feed has no standings endpoint")

    async def fetch_match_details(
        self, match_id: str, competition: Competition
    ) -> MatchDetails | None:
        for match in await self.fetch_matches(competition):
            if match.id == match_id:
                return MatchDetails(match=match, last_updated=datetime.now(UTC).isoformat())
        return None

    async def aclose(self) -> None:
        await self.http.aclose()
