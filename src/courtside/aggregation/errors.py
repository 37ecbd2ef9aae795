from __future__ import annotations


class AggregationError(RuntimeError):
    """
    A feed behind a league failed. The provider error is kept as ``__cause__``
    and its HTTP status (if any) mirrored onto ``status_code``.
    """

    def __init__(
        self,
        message: str,
        *,
        league_id: str,
        provider: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.league_id = league_id
        self.provider = provider
        self.status_code = status_code


class UnknownLeagueError(AggregationError):
    """No route is configured for the requested league id."""

    def __init__(self, league_id: str) -> None:
        super().__init__(f"Unknown league id: {league_id!r}", league_id=league_id)
