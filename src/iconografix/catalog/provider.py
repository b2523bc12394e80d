"""Catalog provider.

One provider owns one icon set: it lazily loads the set's manifest, answers
search and random queries from the loaded catalog and keeps a TTL cache of
fetched SVG markup.
"""

from __future__ import annotations

import asyncio
import random
import time
from typing import Callable, Dict, List, Optional, Tuple

from ..errors import FetchError, ManifestLoadError
from ..logging import get_logger
from .fetch import AssetFetcher
from .models import (
    CacheEntry,
    CatalogManifest,
    ItemRecord,
    PaginationResult,
    ProviderDescriptor,
    join_location,
    paginate,
)

logger = get_logger("catalog.provider")

DEFAULT_TTL_S = 3600.0

PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" '
    'fill="none" stroke="#ff9100" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
    '<circle cx="12" cy="12" r="10"/><line x1="12" y1="8" x2="12" y2="16"/>'
    '<line x1="8" y1="12" x2="16" y2="12"/></svg>'
)


class CatalogProvider:
    """A single named icon source backed by a manifest and a file tree.

    All methods run on one event loop. Blocking reads are pushed to a worker
    thread, but the catalog and the content cache are only mutated back on the
    loop, so no lock is needed.
    """

    def __init__(
        self,
        descriptor: ProviderDescriptor,
        fetcher: Optional[AssetFetcher] = None,
        ttl_s: float = DEFAULT_TTL_S,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.descriptor = descriptor
        self._fetcher = fetcher or AssetFetcher()
        self._ttl_s = ttl_s
        self._clock = clock
        self._catalog: List[ItemRecord] = []
        self._initialized = False
        self._init_task: Optional[asyncio.Task] = None
        self._cache: Dict[Tuple[str, str], CacheEntry] = {}
        self._pending: Dict[Tuple[str, str], asyncio.Task] = {}
        self.manifest: Optional[CatalogManifest] = None

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def display_name(self) -> str:
        return self.descriptor.display_name

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def catalog(self) -> List[ItemRecord]:
        return list(self._catalog)

    @property
    def count(self) -> int:
        return len(self._catalog)

    # --- Initialization ---

    async def initialize(self) -> bool:
        """Load the manifest once.

        Concurrent callers share one in-flight load. A failed load leaves an
        empty catalog and still counts as initialized. Always returns True.
        """
        if self._initialized:
            return True
        if self._init_task is None or self._init_task.done():
            self._init_task = asyncio.ensure_future(self._load())
        # shield: one caller abandoning the wait must not cancel the others
        await asyncio.shield(self._init_task)
        return True

    async def _load(self) -> None:
        try:
            manifest = await self._fetch_manifest()
        except ManifestLoadError as e:
            logger.warning("Failed to load %s manifest: %s", self.id, e)
            manifest = None

        if not self._initialized:
            self.manifest = manifest
            files = manifest.files if manifest else []
            self._catalog = [ItemRecord.from_file_name(self.id, f) for f in files]
            self._initialized = True
            logger.debug("Provider %s initialized with %d icons", self.id, len(self._catalog))

    async def _fetch_manifest(self) -> CatalogManifest:
        location = self.descriptor.manifest_location
        try:
            data = await asyncio.to_thread(self._fetcher.fetch_json, location)
            return CatalogManifest.from_api(data, self.id, self.display_name)
        except FetchError as e:
            raise ManifestLoadError(str(e))
        except ValueError as e:
            raise ManifestLoadError(f"Invalid manifest at {location}: {e}")
        except Exception as e:
            raise ManifestLoadError(f"Manifest load failed for {location}: {e}")

    # --- Queries ---

    async def search(self, query: str, limit: int = 10, offset: int = 0) -> PaginationResult:
        """Case-insensitive substring search over icon names."""
        await self.initialize()
        needle = (query or "").strip().lower()
        if needle:
            matches = [item for item in self._catalog if needle in item.name.lower()]
        else:
            matches = list(self._catalog)
        return paginate(matches, limit, offset)

    async def get_random(self, limit: int = 10, offset: int = 0) -> PaginationResult:
        """Shuffle the whole catalog and return one page of it.

        Every call reshuffles, so consecutive pages may overlap.
        """
        await self.initialize()
        shuffled = list(self._catalog)
        random.shuffle(shuffled)
        return paginate(shuffled, limit, offset)

    # --- Content ---

    async def get_svg_content(self, item: ItemRecord) -> str:
        """Return SVG markup for ``item``, from cache while fresh.

        Concurrent misses for the same item share one in-flight fetch. A
        failed fetch yields the placeholder glyph, which is cached like real
        content so failures are not retried before the TTL expires.
        """
        key = (item.provider_id, item.name)
        cached = self._cache.get(key)
        if cached is not None and self._clock() - cached.fetched_at < self._ttl_s:
            return cached.content

        pending = self._pending.get(key)
        if pending is None or pending.done():
            pending = asyncio.ensure_future(self._fetch_content(item, key))
            self._pending[key] = pending
        return await asyncio.shield(pending)

    async def _fetch_content(self, item: ItemRecord, key: Tuple[str, str]) -> str:
        fetched_at = self._clock()
        location = join_location(self.descriptor.base_path, item.relative_path)
        try:
            content = await asyncio.to_thread(self._fetcher.fetch_text, location)
            item.cached_content = content
        except FetchError as e:
            logger.warning("Failed to load SVG for %s from %s: %s", item.name, location, e.reason)
            content = PLACEHOLDER_SVG
        finally:
            self._pending.pop(key, None)

        self._cache[key] = CacheEntry(content=content, fetched_at=fetched_at)
        return content

    def cached_entry(self, item: ItemRecord) -> Optional[CacheEntry]:
        return self._cache.get((item.provider_id, item.name))
