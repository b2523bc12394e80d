"""Provider registry.

Owns every CatalogProvider and the single active-provider pointer. Built
once at startup and passed to whatever needs it.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from ..errors import DuplicateProviderError, NoActiveProviderError
from ..logging import get_logger
from .builtin import builtin_descriptors
from .fetch import AssetFetcher
from .models import ItemRecord, PaginationResult, ProviderStats
from .provider import CatalogProvider

if TYPE_CHECKING:
    from ..config import Settings

logger = get_logger("catalog.registry")


class ProviderRegistry:
    """Aggregates catalog providers behind one active selection.

    Responsibilities:
    - Register providers under unique ids
    - Initialize all providers concurrently, isolating failures
    - Route queries to the active provider
    - Route content lookups by the item's own provider
    """

    def __init__(self) -> None:
        self._providers: Dict[str, CatalogProvider] = {}
        self._active_id: Optional[str] = None
        self._ready = False
        self._fetcher: Optional[AssetFetcher] = None

    @classmethod
    def from_settings(cls, settings: "Settings", fetcher: Optional[AssetFetcher] = None) -> "ProviderRegistry":
        """Build a registry of the bundled icon sets described by ``settings``."""
        registry = cls()
        if fetcher is None:
            # The registry owns a fetcher it created and closes it in close()
            fetcher = registry._fetcher = AssetFetcher(timeout_s=settings.request_timeout_s)
        for descriptor in builtin_descriptors(settings.assets_path):
            registry.register(CatalogProvider(descriptor, fetcher=fetcher, ttl_s=settings.svg_cache_ttl_s))
        if not registry.set_active(settings.default_provider):
            logger.warning("Default provider %s is not registered", settings.default_provider)
        return registry

    def close(self) -> None:
        """Release the HTTP session of a fetcher built by from_settings()."""
        if self._fetcher is not None:
            self._fetcher.close()
            self._fetcher = None

    # --- Registration ---

    def register(self, provider: CatalogProvider) -> None:
        """Add a provider. Raises DuplicateProviderError if the id is taken."""
        if provider.id in self._providers:
            raise DuplicateProviderError(provider.id)
        self._providers[provider.id] = provider

    def get(self, provider_id: str) -> Optional[CatalogProvider]:
        return self._providers.get(provider_id)

    def providers(self) -> List[CatalogProvider]:
        return list(self._providers.values())

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __iter__(self) -> Iterator[CatalogProvider]:
        return iter(list(self._providers.values()))

    def __len__(self) -> int:
        return len(self._providers)

    # --- Lifecycle ---

    @property
    def ready(self) -> bool:
        return self._ready

    async def initialize_all(self) -> None:
        """Initialize every provider concurrently and wait for all to settle."""
        providers = list(self._providers.values())
        results = await asyncio.gather(
            *(p.initialize() for p in providers),
            return_exceptions=True,
        )
        for provider, result in zip(providers, results):
            if isinstance(result, BaseException):
                logger.error("Failed to initialize %s: %s", provider.id, result)
        self._ready = True
        logger.info("All providers initialized (%d)", len(providers))

    # --- Active provider ---

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def active(self) -> Optional[CatalogProvider]:
        if self._active_id is None:
            return None
        return self._providers.get(self._active_id)

    def set_active(self, provider_id: str) -> bool:
        """Point queries at ``provider_id``. Unknown ids return False."""
        if provider_id not in self._providers:
            return False
        self._active_id = provider_id
        return True

    def _require_active(self) -> CatalogProvider:
        provider = self.active
        if provider is None:
            raise NoActiveProviderError()
        return provider

    # --- Queries ---

    async def search(self, query: str, limit: int, offset: int) -> PaginationResult:
        return await self._require_active().search(query, limit, offset)

    async def get_random(self, limit: int, offset: int) -> PaginationResult:
        return await self._require_active().get_random(limit, offset)

    async def get_svg_content(self, item: ItemRecord) -> str:
        """Resolve content through the item's own provider, active or not."""
        provider = self._providers.get(item.provider_id)
        if provider is None:
            logger.error("Provider not found: %s", item.provider_id)
            return ""
        return await provider.get_svg_content(item)

    # --- Statistics ---

    def get_stats(self) -> List[ProviderStats]:
        return [
            ProviderStats(id=p.id, display_name=p.display_name, count=p.count)
            for p in self._providers.values()
        ]
