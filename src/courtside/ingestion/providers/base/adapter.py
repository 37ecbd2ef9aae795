from __future__ import annotations

from typing import Protocol

from courtside.core.models import Match, MatchDetails, StandingsEntry

from .types import Competition


class ProviderAdapter(Protocol):
    """
    Aggregation depends on this, not on any HTTP client.

    Failures surface as ProviderError subclasses; an empty list (or None for
    details) only ever means the provider answered with nothing.
    """

    provider_key: str

    async def fetch_matches(self, competition: Competition) -> list[Match]: ...

    async def fetch_standings(self, competition: Competition) -> list[StandingsEntry]: ...

    async def fetch_match_details(
        self, match_id: str, competition: Competition
    ) -> MatchDetails | None: ...

    async def aclose(self) -> None: ...
