from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime

from bs4 import Tag

from courtside.core.config import settings
from courtside.core.enums import ProviderEnum
from courtside.core.logging import logger
from courtside.core.models import Match, MatchDetails, StandingsEntry, Team, standings_points
from courtside.ingestion.dates import YearResolver, normalize_kickoff
from courtside.ingestion.parsers.markup import MarkupDocument, parse_markup_envelope
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.errors import ProviderMappingError
from courtside.ingestion.providers.base.types import Competition
from courtside.ingestion.status import parse_score, parse_score_pair, resolve_status, scores_for_status
from courtside.ingestion.teams import build_short_name_table, make_team, resolve_short_name

SLB_SHORT_NAMES = build_short_name_table(
    {
        "London Lions": "Lions",
        "Cheshire Phoenix": "Phoenix",
        "B. Braun Sheffield Sharks": "Sharks",
        "B.Braun Sheffield Sharks": "Sharks",
        "Sheffield Sharks": "Sharks",
        "Bristol Flyers": "Flyers",
        "Manchester Basketball": "Manchester",
        "Leicester Riders": "Riders",
        "Newcastle Eagles": "Eagles",
        "Surrey 89ers": "89ers",
        "Caledonia Gladiators": "Gladiators",
    }
)

# Row-level tokens observed on schedule rows; anything else defers to scores.
STATUS_COMPLETE = "STATUS_COMPLETE"
STATUS_LIVE = "STATUS_LIVE"
STATUS_SCHEDULED = "STATUS_SCHEDULED"
KNOWN_STATUS_TOKENS = frozenset({STATUS_COMPLETE, STATUS_LIVE, STATUS_SCHEDULED})

_match_class_re = re.compile(r"^match_(\d+)$")
_team_href_re = re.compile(r"/team/(\d+)")
_finished_text_re = re.compile(r"\b(final|ft)\b", re.IGNORECASE)
_live_text_re = re.compile(r"\b(live|q[1-4]|half)", re.IGNORECASE)

EXTERNAL_FIXTURE_ID_PREFIX = "extfix_"


def _team_id_from_href(href: str | None) -> str | None:
    if not href:
        return None
    m = _team_href_re.search(href)
    return m.group(1) if m else None


def _match_id(doc: MarkupDocument, row: Tag, index: int) -> str:
    for token in doc.class_tokens(row):
        m = _match_class_re.match(token)
        if m:
            return m.group(1)

    el = doc.find_by_attribute_prefix("id", EXTERNAL_FIXTURE_ID_PREFIX, root=row)
    if el is not None:
        return str(el.get("id"))[len(EXTERNAL_FIXTURE_ID_PREFIX) :]

    return f"match-{index}"


def _parse_side(doc: MarkupDocument, side: Tag | None, default_name: str) -> tuple[Team, str]:
    """(team, raw score text) for a home-team/away-team block."""
    if side is None:
        return make_team(default_name, default_name, SLB_SHORT_NAMES), ""

    name = (
        doc.text_of(doc.select_one(".team-name span", root=side))
        or doc.text_of(doc.find_by_class("team-name", root=side))
        or default_name
    )
    team_id = _team_id_from_href(doc.attr_of(side.find("a"), "href")) or resolve_short_name(
        name, SLB_SHORT_NAMES
    )
    team = make_team(team_id, name, SLB_SHORT_NAMES, logo=doc.attr_of(side.find("img"), "src"))
    return team, doc.raw_text_of(doc.find_by_class("team-score", root=side))


def parse_schedule(doc: MarkupDocument, *, year_for_month: YearResolver | None = None) -> list[Match]:
    year_for_month = year_for_month or settings.reporting_year_for_month
    matches: list[Match] = []

    for index, row in enumerate(doc.find_all_by_class("match-wrap")):
        match_id = _match_id(doc, row, index)

        home_team, home_score_text = _parse_side(doc, doc.find_by_class("home-team", root=row), "Home")
        away_team, away_score_text = _parse_side(doc, doc.find_by_class("away-team", root=row), "Away")

        date_el = doc.find_by_class("match-date", root=row)
        time_text = doc.text_of(doc.find_by_class("match-time", root=row))
        if date_el is not None:
            date_text = doc.text_of(date_el)
        else:
            # Newer layout: a single element carries "Jan 18, 2026, 7:30 PM".
            date_text, time_text = time_text, ""

        try:
            kickoff = normalize_kickoff(date_text, time_text, year_for_month=year_for_month)
        except ValueError as e:
            raise ProviderMappingError(
                "Unreadable fixture date in schedule markup",
                context={"match_id": match_id, "date_text": date_text},
            ) from e

        tokens = set(doc.class_tokens(row))
        unknown_tokens = {t for t in tokens if t.startswith("STATUS_")} - KNOWN_STATUS_TOKENS
        if unknown_tokens:
            logger.debug("genius_unknown_status_token", match_id=match_id, tokens=sorted(unknown_tokens))
        status_text = doc.text_of(doc.find_by_class("match-status", root=row))
        scores = parse_score_pair(home_score_text, away_score_text)

        status = resolve_status(
            finished=STATUS_COMPLETE in tokens or bool(_finished_text_re.search(status_text)),
            scores=scores,
            in_progress=STATUS_LIVE in tokens or bool(_live_text_re.search(status_text)),
        )
        home_score, away_score = scores_for_status(status, scores)

        matches.append(
            Match(
                id=match_id,
                home_team=home_team,
                away_team=away_team,
                home_score=home_score,
                away_score=away_score,
                date=kickoff.date,
                time=kickoff.time,
                venue=doc.text_of(doc.find_by_class("match-venue", root=row)) or "TBC",
                status=status,
            )
        )

    return matches


def _cell_int(doc: MarkupDocument, row: Tag, class_name: str) -> int | None:
    return parse_score(doc.text_of(doc.find_by_class(class_name, root=row)))


def parse_standings(doc: MarkupDocument) -> list[StandingsEntry]:
    standings: list[StandingsEntry] = []

    for row in doc.select("table.standings tbody tr"):
        cells = row.find_all("td")
        if len(cells) < 5:
            continue

        team_cell = doc.select_one("td.team-name", root=row)
        name = doc.text_of(doc.find_by_class("team-name-full", root=team_cell)) if team_cell else ""
        if not name:
            name = doc.text_of(team_cell)
        code = doc.text_of(doc.find_by_class("team-name-code", root=team_cell)) if team_cell else ""
        link = team_cell.find("a") if team_cell is not None else None
        team_id = _team_id_from_href(doc.attr_of(link, "href")) or code or name

        won = _cell_int(doc, row, "STANDINGS_won") or 0
        lost = _cell_int(doc, row, "STANDINGS_lost") or 0
        points_for = _cell_int(doc, row, "STANDINGS_pointsFor") or 0
        points_against = _cell_int(doc, row, "STANDINGS_pointsAgainst") or 0

        standings.append(
            StandingsEntry(
                position=parse_score(doc.text_of(cells[0])) or 0,
                team=make_team(
                    team_id,
                    name,
                    SLB_SHORT_NAMES,
                    short_name=code or None,
                    logo=doc.attr_of(doc.select_one("td.team-logo img", root=row), "src"),
                ),
                played=_cell_int(doc, row, "STANDINGS_played") or 0,
                won=won,
                lost=lost,
                points_for=points_for,
                points_against=points_against,
                points_difference=points_for - points_against,
                points=standings_points(won, lost, _cell_int(doc, row, "STANDINGS_standingPoints")),
            )
        )

    return sorted(standings, key=lambda s: s.position)


@dataclass(frozen=True)
class GeniusSportsAdapter:
    """
    Super League Basketball via the Genius Sports embed feed.

    Both endpoints answer ``{"html": ..., "css": [...], "js": [...]}``; the
    schedule needs ``roundNumber=-1`` to return the whole season instead of
    the recent-rounds window.
    """

    http: BaseHttpClient
    provider_key: str = ProviderEnum.GENIUS_SPORTS.value

    async def _fetch_document(self, path: str, params: dict[str, str] | None = None) -> MarkupDocument:
        raw = await self.http.get_text(path, params=params, headers={"Accept": "application/json"})
        return parse_markup_envelope(raw)

    async def fetch_matches(self, competition: Competition) -> list[Match]:
        doc = await self._fetch_document("/schedule", params={"roundNumber": "-1"})
        matches = parse_schedule(doc)
        logger.debug("genius_schedule_parsed", league_id=competition.league_id, matches=len(matches))
        return matches

    async def fetch_standings(self, competition: Competition) -> list[StandingsEntry]:
        doc = await self._fetch_document("/standings")
        return parse_standings(doc)

    async def fetch_match_details(
        self, match_id: str, competition: Competition
    ) -> MatchDetails | None:
        # No per-game endpoint in the embed feed: pick the row out of the schedule.
        for match in await self.fetch_matches(competition):
            if match.id == match_id:
                return MatchDetails(match=match, last_updated=datetime.now(UTC).isoformat())
        return None

    async def aclose(self) -> None:
        await self.http.aclose()
