from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from courtside.core.logging import logger
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.errors import ProviderParseError, ProviderResponseError


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class ApiSportsRateLimiter:
    """Proactive throttling based on API-Sports rate limit headers.

    The provider returns per-minute limit/remaining headers; we use them to pace
    requests and stay clear of HTTP 429. Sleeps are capped at ``max_sleep_s`` so
    a single request never stalls a caller for a whole bucket.
    """

    minute_limit_low_watermark: int = 2
    min_interval_s: float = 0.0
    max_sleep_s: float = 10.0
    last_request_monotonic: float | None = None

    _sleep: Any = field(default=asyncio.sleep, repr=False)
    _monotonic: Any = field(default=time.monotonic, repr=False)

    async def before_request(self) -> None:
        if self.min_interval_s <= 0.0:
            return
        now = float(self._monotonic())
        if self.last_request_monotonic is None:
            return
        elapsed = now - self.last_request_monotonic
        remaining = self.min_interval_s - elapsed
        if remaining > 0:
            await self._sleep(min(remaining, self.max_sleep_s))

    async def after_response(self, headers: Mapping[str, str]) -> None:
        limit = _parse_int(headers.get("X-RateLimit-Limit"))
        remaining = _parse_int(headers.get("X-RateLimit-Remaining"))

        if limit and limit > 0:
            self.min_interval_s = max(self.min_interval_s, 60.0 / float(limit))

        # Near the end of the minute bucket (or sharing the key with another process).
        if remaining is not None and remaining <= self.minute_limit_low_watermark:
            cooldown = self.max_sleep_s if remaining <= 1 else self.max_sleep_s / 2
            logger.info("api_sports_cooldown", remaining=remaining, sleep_s=cooldown)
            await self._sleep(cooldown)

        self.last_request_monotonic = float(self._monotonic())


@dataclass
class ApiSportsClient:
    http: BaseHttpClient
    api_key: str
    rate_limiter: ApiSportsRateLimiter = field(default_factory=ApiSportsRateLimiter)

    def _headers(self) -> dict[str, str]:
        return {"x-apisports-key": self.api_key}

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        await self.rate_limiter.before_request()

        # A 429 propagates as ProviderRateLimited; retrying is the caller's call.
        data, headers = await self.http.get_json_with_headers(
            path, params=params, headers=self._headers()
        )
        await self.rate_limiter.after_response(headers)

        # errors is a list when empty and an object keyed by field otherwise.
        errors = data.get("errors") or []
        if errors:
            raise ProviderResponseError(f"api-sports returned errors: {errors}")

        return data

    async def get_response_items(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        payload = await self.get(path, params=params)
        items = payload.get("response")
        if not isinstance(items, list):
            raise ProviderParseError(f"Expected 'response' list, got: {type(items)}")
        return [i for i in items if isinstance(i, dict)]

    async def get_response_rows(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Like get_response_items, but flattens grouped responses (list of lists)."""
        payload = await self.get(path, params=params)
        items = payload.get("response")
        if not isinstance(items, list):
            raise ProviderParseError(f"Expected 'response' list, got: {type(items)}")
        rows: list[dict[str, Any]] = []
        for item in items:
            if isinstance(item, list):
                rows.extend(i for i in item if isinstance(i, dict))
            elif isinstance(item, dict):
                rows.append(item)
        return rows

    async def aclose(self) -> None:
        await self.http.aclose()
