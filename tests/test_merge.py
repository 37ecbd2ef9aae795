from __future__ import annotations

from courtside.core.enums import MatchStatusEnum
from courtside.core.models import Match, Team
from courtside.ingestion.merge import merge_matches, sort_matches_by_date

HOME = Team(id="MAD", name="Real Madrid", short_name="Real Madrid")
AWAY = Team(id="BAR", name="FC Barcelona", short_name="Barcelona")


def _match(match_id: str, date: str, status: MatchStatusEnum = MatchStatusEnum.SCHEDULED, score: tuple[int, int] | None = None) -> Match:
    home_score, away_score = score or (None, None)
    return Match(
        id=match_id,
        home_team=HOME,
        away_team=AWAY,
        date=date,
        time="20:00",
        venue="TBC",
        status=status,
        home_score=home_score,
        away_score=away_score,
    )


def test_results_record_survives_a_scheduled_duplicate() -> None:
    result = _match("E2025_170", "2026-01-14", MatchStatusEnum.COMPLETED, (95, 88))
    stale = _match("E2025_170", "2026-01-14")
    upcoming = _match("E2025_180", "2026-01-21")

    merged = merge_matches([result], [stale, upcoming])

    assert [m.id for m in merged] == ["E2025_170", "E2025_180"]
    assert merged[0] is result


def test_merge_with_an_empty_side() -> None:
    upcoming = _match("E2025_180", "2026-01-21")
    assert merge_matches([], [upcoming]) == [upcoming]
    assert merge_matches([upcoming], []) == [upcoming]


def test_sort_is_ascending_and_stable() -> None:
    a = _match("a", "2026-01-21")
    b = _match("b", "2026-01-14")
    c = _match("c", "2026-01-21")
    d = _match("d", "2025-12-30")

    assert [m.id for m in sort_matches_by_date([a, b, c, d])] == ["d", "b", "a", "c"]
    assert [m.id for m in sort_matches_by_date([c, a])] == ["c", "a"]
