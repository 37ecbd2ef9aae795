from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from courtside.core.enums import LivePeriodEnum, MatchStatusEnum

Json = dict[str, Any]

TIME_TBC = "TBC"


def _drop_none(payload: Json) -> Json:
    return {k: v for k, v in payload.items() if v is not None}


@dataclass(frozen=True)
class Team:
    """A team as one provider identifies it (``id`` is provider-local)."""

    id: str
    name: str
    short_name: str
    logo: str | None = None

    def to_dict(self) -> Json:
        return _drop_none(
            {"id": self.id, "name": self.name, "shortName": self.short_name, "logo": self.logo}
        )


@dataclass(frozen=True)
class Match:
    """
    Canonical fixture/result.

    ``id`` is the provider's native game identifier and the dedup key when two
    feeds cover one competition. ``date`` is ``YYYY-MM-DD`` and ``time`` is
    ``HH:MM`` (or ``TBC``), both read as local wall-clock values.
    """

    id: str
    home_team: Team
    away_team: Team
    date: str
    time: str
    venue: str
    status: MatchStatusEnum
    home_score: int | None = None
    away_score: int | None = None

    def __post_init__(self) -> None:
        if self.status == MatchStatusEnum.SCHEDULED and (
            self.home_score is not None or self.away_score is not None
        ):
            raise ValueError(f"Scheduled match {self.id} cannot carry scores")

    def to_dict(self) -> Json:
        return _drop_none(
            {
                "id": self.id,
                "homeTeam": self.home_team.to_dict(),
                "awayTeam": self.away_team.to_dict(),
                "homeScore": self.home_score,
                "awayScore": self.away_score,
                "date": self.date,
                "time": self.time,
                "venue": self.venue,
                "status": self.status.value,
            }
        )


@dataclass(frozen=True)
class StandingsEntry:
    position: int
    team: Team
    played: int
    won: int
    lost: int
    points_for: int
    points_against: int
    points_difference: int
    points: int

    def to_dict(self) -> Json:
        return {
            "position": self.position,
            "team": self.team.to_dict(),
            "played": self.played,
            "won": self.won,
            "lost": self.lost,
            "pointsFor": self.points_for,
            "pointsAgainst": self.points_against,
            "pointsDifference": self.points_difference,
            "points": self.points,
        }


def standings_points(won: int, lost: int, reported: int | None = None) -> int:
    """League points: provider value when reported, else 2 per win and 1 per loss."""
    if reported is not None:
        return reported
    return 2 * won + lost


@dataclass(frozen=True)
class QuarterScore:
    home: int
    away: int

    def to_dict(self) -> Json:
        return {"home": self.home, "away": self.away}


@dataclass(frozen=True)
class QuarterScores:
    q1: QuarterScore | None = None
    q2: QuarterScore | None = None
    q3: QuarterScore | None = None
    q4: QuarterScore | None = None
    ot: QuarterScore | None = None

    def to_dict(self) -> Json:
        return {
            name: q.to_dict()
            for name, q in (
                ("q1", self.q1),
                ("q2", self.q2),
                ("q3", self.q3),
                ("q4", self.q4),
                ("ot", self.ot),
            )
            if q is not None
        }


@dataclass(frozen=True)
class TeamStatistics:
    field_goal_pct: int
    three_point_pct: int
    free_throw_pct: int
    rebounds: int
    offensive_rebounds: int
    defensive_rebounds: int
    assists: int
    turnovers: int
    steals: int
    blocks: int

    def to_dict(self) -> Json:
        return {
            "fieldGoalPct": self.field_goal_pct,
            "threePointPct": self.three_point_pct,
            "freeThrowPct": self.free_throw_pct,
            "rebounds": self.rebounds,
            "offensiveRebounds": self.offensive_rebounds,
            "defensiveRebounds": self.defensive_rebounds,
            "assists": self.assists,
            "turnovers": self.turnovers,
            "steals": self.steals,
            "blocks": self.blocks,
        }


@dataclass(frozen=True)
class PlayerStatistics:
    id: str
    name: str
    points: int
    rebounds: int
    assists: int
    minutes: int

    def to_dict(self) -> Json:
        return {
            "id": self.id,
            "name": self.name,
            "points": self.points,
            "rebounds": self.rebounds,
            "assists": self.assists,
            "minutes": self.minutes,
        }


@dataclass(frozen=True)
class MatchDetails:
    """
    A match plus whatever in-game detail the provider exposes.

    Quarter scores, team stats and box scores only exist once a game has
    tipped off; a scheduled match carrying any of them is rejected.
    """

    match: Match
    current_period: LivePeriodEnum | None = None
    quarter_scores: QuarterScores | None = None
    home_stats: TeamStatistics | None = None
    away_stats: TeamStatistics | None = None
    home_players: tuple[PlayerStatistics, ...] | None = None
    away_players: tuple[PlayerStatistics, ...] | None = None
    last_updated: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.match.status != MatchStatusEnum.SCHEDULED:
            return
        in_game = (
            self.current_period,
            self.quarter_scores,
            self.home_stats,
            self.away_stats,
            self.home_players,
            self.away_players,
        )
        if any(v is not None for v in in_game):
            raise ValueError(f"Scheduled match {self.match.id} cannot carry in-game details")

    @property
    def id(self) -> str:
        return self.match.id

    @property
    def status(self) -> MatchStatusEnum:
        return self.match.status

    def to_dict(self) -> Json:
        payload = self.match.to_dict()
        payload.update(
            _drop_none(
                {
                    "currentPeriod": self.current_period.value if self.current_period else None,
                    "quarterScores": self.quarter_scores.to_dict() if self.quarter_scores else None,
                    "homeStats": self.home_stats.to_dict() if self.home_stats else None,
                    "awayStats": self.away_stats.to_dict() if self.away_stats else None,
                    "homePlayers": (
                        [p.to_dict() for p in self.home_players]
                        if self.home_players is not None
                        else None
                    ),
                    "awayPlayers": (
                        [p.to_dict() for p in self.away_players]
                        if self.away_players is not None
                        else None
                    ),
                    "lastUpdated": self.last_updated,
                }
            )
        )
        return payload


@dataclass(frozen=True)
class LeagueData:
    matches: list[Match]
    standings: list[StandingsEntry]

    def to_dict(self) -> Json:
        return {
            "matches": [m.to_dict() for m in self.matches],
            "standings": [s.to_dict() for s in self.standings],
        }
