from __future__ import annotations


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures."""


class ProviderNetworkError(ProviderRequestError):
    """Transport failure before any response was obtained (timeouts, DNS, resets)."""


class ProviderHttpStatusError(ProviderRequestError):
    """Provider answered with a non-2xx status."""


class ProviderRateLimited(ProviderHttpStatusError):
    """Provider throttled the request (HTTP 429)."""


class ProviderParseError(ProviderError):
    """Malformed payload: bad XML, JSON discriminator mismatch, unexpected markup."""


class ProviderResponseError(ProviderError):
    """Provider returned a well-formed response indicating an application-level error."""


class ProviderCapabilityError(ProviderError):
    """Adapter does not support a requested operation."""


class ProviderConfigurationError(ProviderError):
    """Adapter cannot be built: a required key or setting is missing."""


class ProviderMappingError(ProviderParseError):
    """Mapping/extraction failed due to unexpected schema or values."""

    def __init__(self, message: str, *, context: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} | context={self.context}"
