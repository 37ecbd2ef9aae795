from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from courtside.core.config import Settings, settings
from courtside.core.enums import PartialFailurePolicyEnum, ProviderEnum, SourceModeEnum
from courtside.ingestion.providers.api_sports.provider import register_api_sports_adapter
from courtside.ingestion.providers.base.registry import AdapterRegistry
from courtside.ingestion.providers.base.types import Competition, Json
from courtside.ingestion.providers.euroleague.provider import register_euroleague_adapter
from courtside.ingestion.providers.genius_sports.provider import register_genius_sports_adapter
from courtside.ingestion.providers.incrowd.provider import register_incrowd_adapter

from .errors import UnknownLeagueError

SUPER_LEAGUE = "super-league"
EUROLEAGUE = "euroleague"
EUROCUP = "eurocup"


@dataclass(frozen=True)
class LeagueRoute:
    """
    Static routing entry: which provider(s) serve a league.

    A single-source league has only ``provider``. A dual-source league uses
    ``provider`` as the results-oriented feed and ``schedule_provider`` as the
    schedule-oriented one; results win on merge.
    """

    league_id: str
    name: str
    short_name: str
    country: str
    source_mode: SourceModeEnum
    provider: ProviderEnum
    schedule_provider: ProviderEnum | None = None
    competition_code: str | None = None
    partial_failure_policy: PartialFailurePolicyEnum | None = None
    logo: str | None = None

    def __post_init__(self) -> None:
        dual = self.source_mode == SourceModeEnum.DUAL
        if dual and self.schedule_provider is None:
            raise ValueError(f"Dual-source league {self.league_id} needs a schedule provider")
        if not dual and self.schedule_provider is not None:
            raise ValueError(f"Single-source league {self.league_id} cannot set a schedule provider")

    @property
    def competition(self) -> Competition:
        return Competition(league_id=self.league_id, code=self.competition_code)

    def policy(self, default: PartialFailurePolicyEnum) -> PartialFailurePolicyEnum:
        return self.partial_failure_policy or default

    def to_dict(self) -> Json:
        payload: Json = {
            "id": self.league_id,
            "name": self.name,
            "shortName": self.short_name,
            "country": self.country,
        }
        if self.logo:
            payload["logo"] = self.logo
        return payload


def predefined_routes(cfg: Settings | None = None) -> dict[str, LeagueRoute]:
    cfg = cfg or settings
    routes = [
        LeagueRoute(
            league_id=SUPER_LEAGUE,
            name="Super League Basketball",
            short_name="Super League",
            country="England",
            source_mode=SourceModeEnum.SINGLE,
            provider=cfg.super_league_provider,
        ),
        LeagueRoute(
            league_id=EUROLEAGUE,
            name="EuroLeague",
            short_name="EuroLeague",
            country="Europe",
            source_mode=SourceModeEnum.DUAL,
            provider=ProviderEnum.EUROLEAGUE,
            schedule_provider=ProviderEnum.INCROWD,
            competition_code="E",
        ),
        LeagueRoute(
            league_id=EUROCUP,
            name="EuroCup",
            short_name="EuroCup",
            country="Europe",
            source_mode=SourceModeEnum.DUAL,
            provider=ProviderEnum.EUROLEAGUE,
            schedule_provider=ProviderEnum.INCROWD,
            competition_code="U",
        ),
    ]
    return {r.league_id: r for r in routes}


def get_league_route(league_id: str, routes: Mapping[str, LeagueRoute]) -> LeagueRoute:
    route = routes.get(league_id)
    if route is None:
        raise UnknownLeagueError(league_id)
    return route


def build_default_registry(
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AdapterRegistry:
    """Every known provider, wired to the configured base URLs."""
    registry = AdapterRegistry()
    register_genius_sports_adapter(registry, transport=transport)
    register_euroleague_adapter(registry, transport=transport)
    register_incrowd_adapter(registry, transport=transport)
    register_api_sports_adapter(registry, transport=transport)
    return registry
