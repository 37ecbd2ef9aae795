from __future__ import annotations

import dataclasses

import pytest

from courtside.core.enums import LivePeriodEnum, MatchStatusEnum
from courtside.core.models import (
    Match,
    MatchDetails,
    QuarterScore,
    QuarterScores,
    StandingsEntry,
    Team,
    standings_points,
)

LIONS = Team(id="101", name="London Lions", short_name="Lions", logo="https://example.com/lions.png")
RIDERS = Team(id="102", name="Leicester Riders", short_name="Riders")


def _match(status: MatchStatusEnum, home: int | None = None, away: int | None = None) -> Match:
    return Match(
        id="1001",
        home_team=LIONS,
        away_team=RIDERS,
        date="2026-01-18",
        time="19:30",
        venue="Copper Box Arena",
        status=status,
        home_score=home,
        away_score=away,
    )


def test_scheduled_match_cannot_carry_scores() -> None:
    with pytest.raises(ValueError):
        _match(MatchStatusEnum.SCHEDULED, 0, 0)


def test_entities_are_frozen() -> None:
    match = _match(MatchStatusEnum.COMPLETED, 92, 85)
    with pytest.raises(dataclasses.FrozenInstanceError):
        match.home_score = 100  # type: ignore[misc]


def test_match_to_dict_uses_camel_case_and_drops_missing() -> None:
    payload = _match(MatchStatusEnum.SCHEDULED).to_dict()
    assert payload["homeTeam"] == {
        "id": "101",
        "name": "London Lions",
        "shortName": "Lions",
        "logo": "https://example.com/lions.png",
    }
    assert "logo" not in payload["awayTeam"]
    assert "homeScore" not in payload
    assert payload["status"] == "scheduled"


def test_standings_points_prefers_reported_value() -> None:
    assert standings_points(15, 3) == 33
    assert standings_points(15, 3, reported=30) == 30

    entry = StandingsEntry(
        position=1,
        team=LIONS,
        played=18,
        won=16,
        lost=2,
        points_for=1600,
        points_against=1400,
        points_difference=200,
        points=34,
    )
    assert entry.to_dict()["pointsDifference"] == 200


def test_details_rules_follow_match_status() -> None:
    quarters = QuarterScores(q1=QuarterScore(home=20, away=18))
    with pytest.raises(ValueError):
        MatchDetails(match=_match(MatchStatusEnum.SCHEDULED), quarter_scores=quarters)

    live = MatchDetails(
        match=_match(MatchStatusEnum.LIVE, 20, 18),
        current_period=LivePeriodEnum.Q2,
        quarter_scores=quarters,
        last_updated="2026-01-18T19:50:00+00:00",
    )
    assert live.id == "1001"
    assert live.to_dict()["currentPeriod"] == "Q2"
    assert live.to_dict()["quarterScores"] == {"q1": {"home": 20, "away": 18}}

    # lastUpdated is bookkeeping, not identity.
    assert dataclasses.replace(live, last_updated=None) == live
