"""Catalog data models.

Normalized shapes for manifests, icon items and paginated query results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

MANIFEST_FILE = "manifest.json"
SVG_SUFFIX = ".svg"


def format_display_name(name: str) -> str:
    """Turn a file stem like ``arrow-right`` into ``Arrow Right``."""
    return " ".join(word[:1].upper() + word[1:] for word in re.split(r"[-_]", name))


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    # fromisoformat() only accepts a trailing "Z" from 3.11 onwards
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


@dataclass
class ItemRecord:
    """One icon within a provider's catalog.

    ``cached_content`` is None until content has been fetched for this record;
    an empty string means it was fetched and came back empty.
    """
    id: str
    name: str
    display_name: str
    provider_id: str
    relative_path: str
    cached_content: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_file_name(cls, provider_id: str, file_name: str) -> "ItemRecord":
        name = file_name[:-len(SVG_SUFFIX)] if file_name.endswith(SVG_SUFFIX) else file_name
        return cls(
            id=f"{provider_id}_{name}",
            name=name,
            display_name=format_display_name(name),
            provider_id=provider_id,
            relative_path=file_name,
        )

    @property
    def has_content(self) -> bool:
        return self.cached_content is not None

    @property
    def export_file_name(self) -> str:
        return f"{self.name}_{self.provider_id.lower()}.svg"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "provider": self.provider_id,
            "path": self.relative_path,
        }


@dataclass
class CatalogManifest:
    """A provider's file list as published in ``manifest.json``."""
    provider_id: str
    display_name: str
    generated_at: Optional[datetime] = None
    files: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Any, provider_id: str = "", display_name: str = "") -> "CatalogManifest":
        """Parse a manifest object, or the degraded bare-list form.

        Raises ValueError when ``data`` is neither.
        """
        if isinstance(data, list):
            return cls(
                provider_id=provider_id,
                display_name=display_name,
                files=[f for f in data if isinstance(f, str)],
            )
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected manifest type: {type(data).__name__}")

        files = data.get("files") or []
        if not isinstance(files, list):
            raise ValueError("Manifest 'files' must be a list")

        return cls(
            provider_id=data.get("provider") or provider_id,
            display_name=data.get("displayName") or display_name,
            generated_at=_parse_timestamp(data.get("lastUpdated")),
            files=[f for f in files if isinstance(f, str)],
        )


@dataclass
class ProviderDescriptor:
    """Static description of one icon source."""
    id: str
    display_name: str
    base_path: str

    @property
    def manifest_location(self) -> str:
        return join_location(self.base_path, MANIFEST_FILE)


@dataclass
class PaginationResult:
    """A page of items plus the size of the full matching set."""
    items: List[ItemRecord]
    total: int
    offset: int

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def has_next(self) -> bool:
        return self.offset + self.count < self.total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [item.to_dict() for item in self.items],
            "pagination": {
                "total": self.total,
                "count": self.count,
                "offset": self.offset,
                "hasNext": self.has_next,
            },
        }


@dataclass
class CacheEntry:
    content: str
    fetched_at: float


@dataclass
class ProviderStats:
    id: str
    display_name: str
    count: int


def join_location(base: str, name: str) -> str:
    """Join a base path or URL with a relative file name."""
    return f"{base.rstrip('/')}/{name.lstrip('/')}"


def paginate(items: List[ItemRecord], limit: int, offset: int) -> PaginationResult:
    """Slice ``items`` into one page; limit and offset are clamped to [0, total]."""
    total = len(items)
    offset = max(0, min(offset, total))
    limit = max(0, min(limit, total))
    return PaginationResult(items=items[offset:offset + limit], total=total, offset=offset)
