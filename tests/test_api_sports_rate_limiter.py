from __future__ import annotations

from typing import Any

import pytest

from courtside.ingestion.providers.api_sports.client import ApiSportsClient, ApiSportsRateLimiter
from courtside.ingestion.providers.base.client import BaseHttpClient
from courtside.ingestion.providers.base.errors import ProviderResponseError


def _recording_sleep(sleeps: list[float]):
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return fake_sleep


@pytest.mark.asyncio
async def test_api_sports_rate_limiter_paces_requests() -> None:
    sleeps: list[float] = []
    t = 0.0

    def fake_monotonic() -> float:
        return t

    limiter = ApiSportsRateLimiter(_sleep=_recording_sleep(sleeps), _monotonic=fake_monotonic)
    limiter.min_interval_s = 1.0
    limiter.last_request_monotonic = 0.0

    t = 0.25
    await limiter.before_request()
    assert sleeps == [0.75]


@pytest.mark.asyncio
async def test_api_sports_rate_limiter_uses_headers_for_bounded_cooldown() -> None:
    sleeps: list[float] = []

    limiter = ApiSportsRateLimiter(
        _sleep=_recording_sleep(sleeps),
        _monotonic=lambda: 123.0,
        minute_limit_low_watermark=2,
        max_sleep_s=10.0,
    )

    await limiter.after_response({"X-RateLimit-Limit": "300", "X-RateLimit-Remaining": "1"})
    assert limiter.min_interval_s == pytest.approx(0.2)
    assert sleeps == [10.0]
    assert limiter.last_request_monotonic == 123.0


@pytest.mark.asyncio
async def test_api_sports_rate_limiter_caps_pacing_sleep() -> None:
    sleeps: list[float] = []
    limiter = ApiSportsRateLimiter(
        _sleep=_recording_sleep(sleeps), _monotonic=lambda: 1.0, max_sleep_s=3.0
    )
    limiter.min_interval_s = 60.0
    limiter.last_request_monotonic = 0.0

    await limiter.before_request()
    assert sleeps == [3.0]


class DummyHttp(BaseHttpClient):
    def __init__(self, payload: dict[str, Any]) -> None:
        self.payload = payload
        self.calls: list[tuple[str, Any, Any]] = []

    async def get_json_with_headers(
        self, path: str, *, params: Any | None = None, headers: Any | None = None
    ) -> tuple[dict[str, Any], dict[str, str]]:
        self.calls.append((path, params, headers))
        return self.payload, {
            "X-RateLimit-Limit": "300",
            "X-RateLimit-Remaining": "299",
        }


@pytest.mark.asyncio
async def test_api_sports_client_reads_rate_limit_headers() -> None:
    http = DummyHttp({"response": [], "errors": []})
    client = ApiSportsClient(http=http, api_key="k")

    assert await client.get_response_items("/games") == []
    assert client.rate_limiter.min_interval_s > 0.0
    assert http.calls[0][2] == {"x-apisports-key": "k"}


@pytest.mark.asyncio
async def test_api_sports_client_raises_on_error_payload() -> None:
    client = ApiSportsClient(
        http=DummyHttp({"response": [], "errors": {"token": "Error/Missing application key."}}),
        api_key="k",
    )
    with pytest.raises(ProviderResponseError):
        await client.get("/games")
