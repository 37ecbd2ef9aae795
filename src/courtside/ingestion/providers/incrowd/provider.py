from __future__ import annotations

import httpx

from courtside.core.config import settings
from courtside.core.enums import ProviderEnum
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.registry import AdapterRegistry
from courtside.ingestion.providers.incrowd.adapter import InCrowdScheduleAdapter


def register_incrowd_adapter(
    registry: AdapterRegistry,
    *,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    def make_adapter() -> InCrowdScheduleAdapter:
        http = BaseHttpClient(base_url=base_url or settings.incrowd_base_url, transport=transport)
        return InCrowdScheduleAdapter(http=http)

    registry.register(ProviderEnum.INCROWD, make_adapter)
