from __future__ import annotations

from collections.abc import Mapping

from courtside.core.models import Team
from courtside.core.text import collapse_whitespace, normalize_team_alias

ShortNameTable = Mapping[str, str]


def build_short_name_table(names: Mapping[str, str]) -> dict[str, str]:
    """Key a roster-name -> abbreviation table by normalized alias."""
    return {normalize_team_alias(k): v for k, v in names.items()}


def fallback_short_name(name: str) -> str:
    """
    Positional heuristic used when a name is not in a provider table.

    Last token by default; names opening with a short prefix (``AS Monaco``,
    ``BC Wolves``) keep their first two tokens instead.
    """
    words = collapse_whitespace(name).split(" ")
    if len(words) <= 1:
        return words[0] if words and words[0] else name
    if len(words[0]) <= 3:
        return f"{words[0]} {words[1]}"
    return words[-1]


def resolve_short_name(name: str, table: ShortNameTable) -> str:
    hit = table.get(normalize_team_alias(name))
    if hit:
        return hit
    return fallback_short_name(name)


def make_team(
    team_id: str,
    name: str,
    table: ShortNameTable,
    *,
    short_name: str | None = None,
    logo: str | None = None,
) -> Team:
    name = collapse_whitespace(name)
    return Team(
        id=team_id,
        name=name,
        short_name=short_name or resolve_short_name(name, table),
        logo=logo or None,
    )
