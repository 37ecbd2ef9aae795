from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from lxml import etree

from courtside.core.config import settings
from courtside.core.enums import MatchStatusEnum, ProviderEnum
from courtside.core.logging import logger
from courtside.core.models import Match, MatchDetails, StandingsEntry, standings_points
from courtside.ingestion.dates import (
    YearResolver,
    kickoff_in_past,
    local_now,
    normalize_kickoff,
)
from courtside.ingestion.parsers.xml_elements import (
    XmlDocument,
    element_int,
    element_text,
    parse_xml_document,
)
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.errors import ProviderMappingError
from courtside.ingestion.providers.base.types import Competition
from courtside.ingestion.status import parse_score_pair, resolve_status, scores_for_status
from courtside.ingestion.teams import build_short_name_table, make_team

EUROLEAGUE_SHORT_NAMES = build_short_name_table(
    {
        "Hapoel IBI Tel Aviv": "Hapoel TA",
        "AS Monaco": "Monaco",
        "Fenerbahce Beko Istanbul": "Fenerbahce",
        "Real Madrid": "Real Madrid",
        "FC Barcelona": "Barcelona",
        "Olympiacos Piraeus": "Olympiacos",
        "Panathinaikos AKTOR Athens": "Panathinaikos",
        "Anadolu Efes Istanbul": "Efes",
        "Maccabi Rapyd Tel Aviv": "Maccabi TA",
        "FC Bayern Munich": "Bayern",
        "Paris Basketball": "Paris",
        "LDLC ASVEL Villeurbanne": "ASVEL",
        "EA7 Emporio Armani Milan": "Milan",
        "Crvena Zvezda Meridianbet Belgrade": "Crvena Zvezda",
        "Partizan Mozzart Bet Belgrade": "Partizan",
        "Zalgiris Kaunas": "Zalgiris",
        "Virtus Bologna": "Virtus",
        "Valencia Basket": "Valencia",
        "Dubai Basketball": "Dubai",
        "Kosner Baskonia Vitoria-Gasteiz": "Baskonia",
    }
)

XML_HEADERS = {"Accept": "application/xml"}


def _game_to_match(
    game: etree._Element,
    *,
    now: datetime,
    year_for_month: YearResolver,
) -> Match:
    game_code = element_text(game, "gamecode")
    if not game_code:
        raise ProviderMappingError("EuroLeague game without a gamecode")

    date_text = element_text(game, "date")
    try:
        kickoff = normalize_kickoff(
            date_text, element_text(game, "time"), year_for_month=year_for_month
        )
    except ValueError as e:
        raise ProviderMappingError(
            "Unreadable EuroLeague game date",
            context={"gamecode": game_code, "date": date_text},
        ) from e

    scores = parse_score_pair(element_text(game, "homescore"), element_text(game, "awayscore"))
    played = element_text(game, "played").lower() == "true"

    # The played flag is authoritative; a past kickoff covers stale flags.
    status = resolve_status(finished=played, in_past=kickoff_in_past(kickoff, now))
    home_score, away_score = scores_for_status(status, scores)

    return Match(
        id=game_code,
        home_team=make_team(
            element_text(game, "homecode"), element_text(game, "hometeam"), EUROLEAGUE_SHORT_NAMES
        ),
        away_team=make_team(
            element_text(game, "awaycode"), element_text(game, "awayteam"), EUROLEAGUE_SHORT_NAMES
        ),
        home_score=home_score,
        away_score=away_score,
        date=kickoff.date,
        time=kickoff.time,
        venue="TBC",
        status=status,
    )


def parse_results(
    doc: XmlDocument,
    *,
    now: datetime,
    year_for_month: YearResolver | None = None,
) -> list[Match]:
    year_for_month = year_for_month or settings.reporting_year_for_month
    return [
        _game_to_match(game, now=now, year_for_month=year_for_month)
        for game in doc.iter_elements("game")
    ]


def parse_standings(doc: XmlDocument) -> list[StandingsEntry]:
    standings: list[StandingsEntry] = []
    for team in doc.iter_elements("team"):
        won = element_int(team, "wins")
        lost = element_int(team, "losses")
        standings.append(
            StandingsEntry(
                position=element_int(team, "ranking"),
                team=make_team(
                    element_text(team, "code"), element_text(team, "name"), EUROLEAGUE_SHORT_NAMES
                ),
                played=element_int(team, "totalgames"),
                won=won,
                lost=lost,
                points_for=element_int(team, "ptsfavour"),
                points_against=element_int(team, "ptsagainst"),
                points_difference=element_int(team, "difference"),
                points=standings_points(won, lost),
            )
        )
    return sorted(standings, key=lambda s: s.position)


@dataclass(frozen=True)
class EuroLeagueResultsAdapter:
    """
    EuroLeague/EuroCup v1 feed (XML), the results-oriented half of the
    dual-source competitions. Queries are scoped by season code, e.g. ``E2025``.
    """

    http: BaseHttpClient
    season_year: int = field(default_factory=lambda: settings.season_year)
    clock: Callable[[], datetime] = field(
        default=lambda: local_now(settings.display_timezone), repr=False
    )
    provider_key: str = ProviderEnum.EUROLEAGUE.value

    async def _fetch_document(self, path: str, competition: Competition) -> XmlDocument:
        season_code = competition.season_code(self.season_year)
        raw = await self.http.get_bytes(
            path, params={"seasoncode": season_code}, headers=XML_HEADERS
        )
        return parse_xml_document(raw)

    async def fetch_matches(self, competition: Competition) -> list[Match]:
        doc = await self._fetch_document("/results", competition)
        matches = parse_results(doc, now=self.clock())
        logger.debug(
            "euroleague_results_parsed",
            league_id=competition.league_id,
            matches=len(matches),
            completed=sum(1 for m in matches if m.status == MatchStatusEnum.COMPLETED),
        )
        return matches

    async def fetch_standings(self, competition: Competition) -> list[StandingsEntry]:
        doc = await self._fetch_document("/standings", competition)
        return parse_standings(doc)

    async def fetch_match_details(
        self, match_id: str, competition: Competition
    ) -> MatchDetails | None:
        # The v1 feed has no single-game endpoint.
        for match in await self.fetch_matches(competition):
            if match.id == match_id:
                return MatchDetails(match=match, last_updated=datetime.now(UTC).isoformat())
        return None

    async def aclose(self) -> None:
        await self.http.aclose()
