from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable
from zoneinfo import ZoneInfo

from courtside.core.models import TIME_TBC
from courtside.core.text import collapse_whitespace

YearResolver = Callable[[int], int]

_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_iso_date_re = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})(?!\d)")
_slash_date_re = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})\b")
_month_re = re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?", re.IGNORECASE)
_day_re = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)?\b", re.IGNORECASE)
_year_re = re.compile(r"\b(\d{4})\b")
_clock12_re = re.compile(r"\b(\d{1,2})(?:[:.](\d{2}))?\s*([ap])\.?\s*m\.?(?![a-z])", re.IGNORECASE)
_clock24_re = re.compile(r"\b(\d{1,2}):(\d{2})\b")


@dataclass(frozen=True)
class Kickoff:
    """Canonical local ``YYYY-MM-DD`` date and ``HH:MM``/``TBC`` time."""

    date: str
    time: str

    def as_datetime(self) -> datetime:
        day = date.fromisoformat(self.date)
        if self.time == TIME_TBC:
            # Unknown tip-off: the game is only "past" once its day is over.
            return datetime.combine(day, time(23, 59))
        return datetime.combine(day, time.fromisoformat(self.time))


def _fmt_time(hour: int, minute: int) -> str:
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid clock time {hour}:{minute}")
    return f"{hour:02d}:{minute:02d}"


def parse_iso_datetime(value: str) -> datetime:
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)


def normalize_iso_timestamp(value: str, *, display_tz: str | None = None) -> Kickoff:
    """
    Reduce an ISO-8601 timestamp to a local (date, time) pair.

    The wall-clock reading in the timestamp's own offset is kept as-is; the
    date is never taken from a UTC rendering. With ``display_tz`` the instant
    is first moved into that zone and read there.
    """
    dt = parse_iso_datetime(value)
    if display_tz and dt.tzinfo is not None:
        dt = dt.astimezone(ZoneInfo(display_tz))
    return Kickoff(date=dt.date().isoformat(), time=_fmt_time(dt.hour, dt.minute))


def parse_clock_time(value: str | None) -> str | None:
    """``19:30`` / ``7:30 PM`` / ``7pm`` -> ``HH:MM``; None when there is no clock time."""
    text = collapse_whitespace(value)
    if not text:
        return None

    m = _clock12_re.search(text)
    if m:
        hour = int(m.group(1))
        minute = int(m.group(2) or 0)
        if not 1 <= hour <= 12:
            raise ValueError(f"Invalid 12-hour clock time: {value!r}")
        hour = hour % 12 + (12 if m.group(3).lower() == "p" else 0)
        return _fmt_time(hour, minute)

    m = _clock24_re.search(text)
    if m:
        return _fmt_time(int(m.group(1)), int(m.group(2)))

    return None


def _strip_clock(text: str) -> str:
    text = _clock12_re.sub(" ", text)
    return _clock24_re.sub(" ", text)


def parse_calendar_date(value: str, *, year_for_month: YearResolver) -> str:
    """
    Parse the date part of free text into ``YYYY-MM-DD``.

    Supports ``2026-01-18``, ``18/01/2026`` (day first), ``Jan 16, 2026``,
    ``Sat 18 Jan`` (year from ``year_for_month``) and the same with a clock
    time appended. Raises ValueError when no date can be read.
    """
    text = _strip_clock(collapse_whitespace(value))
    if not text.strip():
        raise ValueError("Empty date text")

    m = _iso_date_re.search(text)
    if m:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3))).isoformat()

    m = _slash_date_re.search(text)
    if m:
        day, month, year = int(m.group(1)), int(m.group(2)), int(m.group(3))
        if year < 100:
            year += 2000
        return date(year, month, day).isoformat()

    m = _month_re.search(text)
    if m:
        month = _MONTHS[m.group(1).lower()]
        rest = text[: m.start()] + " " + text[m.end() :]

        year_match = _year_re.search(rest)
        if year_match:
            year = int(year_match.group(1))
            rest = rest[: year_match.start()] + " " + rest[year_match.end() :]
        else:
            year = year_for_month(month)

        day_match = _day_re.search(rest)
        if day_match:
            return date(year, month, int(day_match.group(1))).isoformat()

    raise ValueError(f"Unrecognized date text: {value!r}")


def normalize_kickoff(
    date_text: str,
    time_text: str | None = None,
    *,
    year_for_month: YearResolver,
) -> Kickoff:
    """
    Free-text date (optionally carrying its own clock time) + optional time text.

    A time found in ``time_text`` wins over one embedded in ``date_text``;
    neither present gives ``TBC``.
    """
    day = parse_calendar_date(date_text, year_for_month=year_for_month)
    clock = parse_clock_time(time_text) or parse_clock_time(date_text)
    return Kickoff(date=day, time=clock or TIME_TBC)


def local_now(display_tz: str | None = None) -> datetime:
    """Naive wall-clock 'now', in ``display_tz`` when configured."""
    if display_tz:
        return datetime.now(ZoneInfo(display_tz)).replace(tzinfo=None)
    return datetime.now()


def kickoff_in_past(kickoff: Kickoff, now: datetime) -> bool:
    return kickoff.as_datetime() < now
