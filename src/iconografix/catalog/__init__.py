"""Icon catalogs for Iconografix.

Each icon set is a CatalogProvider backed by a manifest and a file tree;
the ProviderRegistry aggregates them behind one active selection.
"""

from .builtin import BUILTIN_PROVIDERS, KnownProvider, builtin_descriptors
from .fetch import AssetFetcher
from .models import (
    CacheEntry,
    CatalogManifest,
    ItemRecord,
    PaginationResult,
    ProviderDescriptor,
    ProviderStats,
    paginate,
)
from .provider import PLACEHOLDER_SVG, CatalogProvider
from .registry import ProviderRegistry

__all__ = [
    "AssetFetcher",
    "BUILTIN_PROVIDERS",
    "CacheEntry",
    "CatalogManifest",
    "CatalogProvider",
    "ItemRecord",
    "KnownProvider",
    "PLACEHOLDER_SVG",
    "PaginationResult",
    "ProviderDescriptor",
    "ProviderRegistry",
    "ProviderStats",
    "builtin_descriptors",
    "paginate",
]
