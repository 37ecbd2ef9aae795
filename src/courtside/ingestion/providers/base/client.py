from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from courtside.core.config import settings
from courtside.core.logging import logger

from .errors import (
    ProviderHttpStatusError,
    ProviderNetworkError,
    ProviderParseError,
    ProviderRateLimited,
)

Json = dict[str, Any]


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic async HTTP client wrapper.

    - Uses a single underlying httpx.AsyncClient for connection pooling.
    - Provides consistent error handling: transport failures become
      ProviderNetworkError, non-2xx responses ProviderHttpStatusError.
    - Exactly one round trip per call; retries are a caller-level policy.
    """

    base_url: str
    timeout_s: float = field(default_factory=lambda: settings.http_timeout_s)
    connect_timeout_s: float = field(default_factory=lambda: settings.http_connect_timeout_s)
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> BaseHttpClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """
        Perform an HTTP request and return the (2xx) response.
        Raises ProviderNetworkError / ProviderHttpStatusError (incl. ProviderRateLimited).
        """
        try:
            resp = await self._client.request(
                method=method,
                url=path.lstrip("/"),
                params=params,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.warning("provider_transport_error", path=path, error=str(e))
            raise ProviderNetworkError(f"Network error for {method} {path}: {e}") from e

        if resp.status_code == 429:
            raise ProviderRateLimited(
                "Provider rate limited the request (HTTP 429).", status_code=429
            )

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "provider_http_status_error",
                url=str(resp.request.url),
                status_code=resp.status_code,
            )
            raise ProviderHttpStatusError(
                f"HTTP {resp.status_code} {resp.reason_phrase} for {method} {resp.request.url}",
                status_code=resp.status_code,
            ) from e

        return resp

    async def get_text(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        resp = await self.request("GET", path, params=params, headers=headers)
        return resp.text

    async def get_json_with_headers(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[Json, Mapping[str, str]]:
        resp = await self.request("GET", path, params=params, headers=headers)
        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderParseError(
                "Response was not valid JSON.", status_code=resp.status_code
            ) from e

        if not isinstance(data, dict):
            raise ProviderParseError(
                f"Expected JSON object, got {type(data)}", status_code=resp.status_code
            )

        return data, resp.headers

    async def get_json(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        data, _ = await self.get_json_with_headers(path, params=params, headers=headers)
        return data

    async def get_bytes(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        resp = await self.request("GET", path, params=params, headers=headers)
        return resp.content
