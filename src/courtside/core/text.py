from __future__ import annotations

import re

_whitespace_re = re.compile(r"\s+")
_non_alnum_re = re.compile(r"[^a-z0-9\s]")


def normalize_team_alias(value: str) -> str:
    """Normalize a team name for stable lookups across sources and casings."""

    v = value.strip().lower()
    v = _non_alnum_re.sub(" ", v)
    v = _whitespace_re.sub(" ", v)
    return v.strip()


def collapse_whitespace(value: str | None) -> str:
    """Trim and collapse runs of whitespace (including non-breaking spaces)."""

    if not value:
        return ""
    return _whitespace_re.sub(" ", value.replace("\xa0", " ")).strip()
