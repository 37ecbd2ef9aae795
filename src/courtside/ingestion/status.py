from __future__ import annotations

import re
from typing import Any

from courtside.core.enums import MatchStatusEnum

ScorePair = tuple[int, int]

_digits_re = re.compile(r"^\d+$")


def parse_score(value: Any) -> int | None:
    """
    Strict score parse: only a full-string run of digits counts.

    Placeholders (``&nbsp;``, ``-``, em-dash, empty) yield None rather than a
    loosely-coerced 0 that would read as a real final score.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _digits_re.fullmatch(text):
        return None
    return int(text)


def parse_score_pair(home: Any, away: Any) -> ScorePair | None:
    h = parse_score(home)
    a = parse_score(away)
    if h is None or a is None:
        return None
    return h, a


def resolve_status(
    *,
    finished: bool = False,
    scores: ScorePair | None = None,
    in_progress: bool = False,
    in_past: bool = False,
) -> MatchStatusEnum:
    """
    Shared precedence for every provider:

    finished flag > numeric score pair > in-progress marker > kickoff in the
    past > scheduled. Adapters pass only the signals their source carries.
    """
    if finished:
        return MatchStatusEnum.COMPLETED
    if scores is not None:
        return MatchStatusEnum.COMPLETED
    if in_progress:
        return MatchStatusEnum.LIVE
    if in_past:
        return MatchStatusEnum.COMPLETED
    return MatchStatusEnum.SCHEDULED


def scores_for_status(
    status: MatchStatusEnum, scores: ScorePair | None
) -> tuple[int | None, int | None]:
    """Scores only travel with games that have started."""
    if status == MatchStatusEnum.SCHEDULED or scores is None:
        return None, None
    return scores
