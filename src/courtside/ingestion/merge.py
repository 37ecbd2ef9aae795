from __future__ import annotations

from collections.abc import Iterable

from courtside.core.models import Match


def merge_matches(results: Iterable[Match], schedule: Iterable[Match]) -> list[Match]:
    """
    Combine a results-oriented and a schedule-oriented feed for one competition.

    Results entries are inserted first; a schedule entry is only added when
    its id is not already present, so it can never overwrite the record that
    carries the final score. Order is insertion order.
    """
    merged: dict[str, Match] = {}
    for match in results:
        merged.setdefault(match.id, match)
    for match in schedule:
        if match.id not in merged:
            merged[match.id] = match
    return list(merged.values())


def sort_matches_by_date(matches: Iterable[Match]) -> list[Match]:
    """Ascending by canonical date; ties keep their incoming order (stable sort)."""
    return sorted(matches, key=lambda m: m.date)
