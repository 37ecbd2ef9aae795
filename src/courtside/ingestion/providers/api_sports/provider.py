from __future__ import annotations

import httpx

from courtside.core.config import settings
from courtside.core.enums import ProviderEnum
from courtside.ingestion.providers.api_sports.adapter import ApiSportsBasketballAdapter
from courtside.ingestion.providers.api_sports.client import ApiSportsClient, ApiSportsRateLimiter
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.errors import ProviderConfigurationError
from courtside.ingestion.providers.base.registry import AdapterRegistry


def register_api_sports_adapter(
    registry: AdapterRegistry,
    *,
    api_key: str | None = None,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    rate_limiter: ApiSportsRateLimiter | None = None,
) -> None:
    """
    The key is resolved when an adapter is built, so registering without one
    is fine as long as no API-Sports league is queried.

    Adapters are built per call, but they all share one rate limiter so the
    quota seen on one call paces the next.
    """
    limiter = rate_limiter or ApiSportsRateLimiter()

    def make_client() -> ApiSportsClient:
        try:
            key = api_key or settings.require_api_sports_key()
        except RuntimeError as e:
            raise ProviderConfigurationError(str(e)) from e
        http = BaseHttpClient(base_url=base_url or settings.api_sports_base_url, transport=transport)
        return ApiSportsClient(http=http, api_key=key, rate_limiter=limiter)

    registry.register(
        ProviderEnum.API_SPORTS,
        lambda: ApiSportsBasketballAdapter(client=make_client()),
    )
