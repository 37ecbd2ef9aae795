from __future__ import annotations

from typing import Callable

from courtside.core.enums import ProviderEnum

from .adapter import ProviderAdapter
from .errors import ProviderCapabilityError

AdapterFactory = Callable[[], ProviderAdapter]


class AdapterRegistry:
    def __init__(self) -> None:
        self._factories: dict[ProviderEnum, AdapterFactory] = {}

    def register(self, provider: ProviderEnum, factory: AdapterFactory) -> None:
        if provider in self._factories:
            raise ValueError(f"Duplicate adapter registration: {provider}")
        self._factories[provider] = factory

    def providers(self) -> list[ProviderEnum]:
        return list(self._factories)

    def get(self, provider: ProviderEnum) -> ProviderAdapter:
        """Build a fresh adapter; callers own (and must close) it."""
        factory = self._factories.get(provider)
        if factory is None:
            raise ProviderCapabilityError(f"No adapter registered for provider={provider}")
        return factory()
