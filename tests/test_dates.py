from __future__ import annotations

from datetime import datetime

import pytest

from courtside.ingestion.dates import (
    Kickoff,
    kickoff_in_past,
    normalize_iso_timestamp,
    normalize_kickoff,
    parse_calendar_date,
    parse_clock_time,
)


def _season_2025(month: int) -> int:
    return 2025 if month >= 8 else 2026


@pytest.mark.parametrize(
    ("date_text", "time_text", "expected"),
    [
        ("Sat 18 Jan", "19:30", Kickoff("2026-01-18", "19:30")),
        ("Sat 18 Oct", None, Kickoff("2025-10-18", "TBC")),
        ("Jan 16, 2026", "20:00", Kickoff("2026-01-16", "20:00")),
        ("18/01/2026", "7pm", Kickoff("2026-01-18", "19:00")),
        ("Jan 18, 2026, 7:30 PM", None, Kickoff("2026-01-18", "19:30")),
        ("Sat 18 Jan 19:30", "", Kickoff("2026-01-18", "19:30")),
        ("2026-01-18", "12:15 a.m.", Kickoff("2026-01-18", "00:15")),
        ("Thursday 4th December", "12 pm", Kickoff("2025-12-04", "12:00")),
    ],
)
def test_free_text_shapes(date_text: str, time_text: str | None, expected: Kickoff) -> None:
    assert normalize_kickoff(date_text, time_text, year_for_month=_season_2025) == expected


def test_near_midnight_timestamp_keeps_its_local_date() -> None:
    # 00:30 at +02:00 is 22:30 the previous day in UTC; the written date wins.
    kickoff = normalize_iso_timestamp("2026-01-24T00:30:00+02:00")
    assert kickoff == Kickoff("2026-01-24", "00:30")

    late = normalize_iso_timestamp("2026-01-23T23:45:00-05:00")
    assert late == Kickoff("2026-01-23", "23:45")


def test_zulu_timestamp_with_millis() -> None:
    assert normalize_iso_timestamp("2026-01-21T19:00:00.000Z") == Kickoff("2026-01-21", "19:00")


def test_unreadable_date_raises() -> None:
    with pytest.raises(ValueError):
        parse_calendar_date("TBC", year_for_month=_season_2025)
    with pytest.raises(ValueError):
        parse_calendar_date("", year_for_month=_season_2025)
    with pytest.raises(ValueError):
        parse_calendar_date("31/02/2026", year_for_month=_season_2025)


def test_clock_parsing() -> None:
    assert parse_clock_time("7:30 PM") == "19:30"
    assert parse_clock_time("12am") == "00:00"
    assert parse_clock_time("20:45") == "20:45"
    assert parse_clock_time("TBC") is None
    assert parse_clock_time(None) is None
    with pytest.raises(ValueError):
        parse_clock_time("25:10")


def test_kickoff_in_past() -> None:
    now = datetime(2026, 1, 18, 19, 0)
    assert kickoff_in_past(Kickoff("2026-01-18", "18:59"), now)
    assert not kickoff_in_past(Kickoff("2026-01-18", "19:30"), now)
    # Unknown tip-off only counts once the day is over.
    assert not kickoff_in_past(Kickoff("2026-01-18", "TBC"), now)
    assert kickoff_in_past(Kickoff("2026-01-17", "TBC"), now)
