from __future__ import annotations

import httpx

from courtside.core.config import settings
from courtside.core.enums import ProviderEnum
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.registry import AdapterRegistry
from courtside.ingestion.providers.genius_sports.adapter import GeniusSportsAdapter


def register_genius_sports_adapter(
    registry: AdapterRegistry,
    *,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    def make_adapter() -> GeniusSportsAdapter:
        http = BaseHttpClient(
            base_url=base_url or settings.genius_sports_base_url, transport=transport
        )
        return GeniusSportsAdapter(http=http)

    registry.register(ProviderEnum.GENIUS_SPORTS, make_adapter)
