from __future__ import annotations

from dataclasses import dataclass
from typing import Any

Json = dict[str, Any]


@dataclass(frozen=True)
class Competition:
    """
    Standardized competition handle passed to adapters.

    ``code`` is the provider-side competition prefix (``E`` EuroLeague,
    ``U`` EuroCup); single-competition providers ignore it.
    """

    league_id: str
    code: str | None = None
    season_year: int | None = None

    def season_code(self, default_year: int) -> str:
        if not self.code:
            raise ValueError(f"Competition {self.league_id} has no competition code")
        return f"{self.code}{self.season_year or default_year}"
