from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import httpx

from courtside.core.config import settings
from courtside.core.enums import ProviderEnum
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.registry import AdapterRegistry
from courtside.ingestion.providers.euroleague.adapter import EuroLeagueResultsAdapter


def register_euroleague_adapter(
    registry: AdapterRegistry,
    *,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], datetime] | None = None,
) -> None:
    def make_adapter() -> EuroLeagueResultsAdapter:
        http = BaseHttpClient(base_url=base_url or settings.euroleague_base_url, transport=transport)
        if clock is None:
            return EuroLeagueResultsAdapter(http=http)
        return EuroLeagueResultsAdapter(http=http, clock=clock)

    registry.register(ProviderEnum.EUROLEAGUE, make_adapter)
