"""Shared fixtures: on-disk icon asset trees and a counting fetcher."""

import json
from pathlib import Path
from typing import List, Optional

import pytest

from iconografix.catalog import AssetFetcher, CatalogProvider, ProviderDescriptor

SVG = '<svg xmlns="http://www.w3.org/2000/svg"\n  viewBox="0 0 24 24">\n    <path d="M0 0h24"/>\n</svg>\n'


class CountingFetcher(AssetFetcher):
    """AssetFetcher that records every location it reads."""

    def __init__(self):
        super().__init__(timeout_s=1)
        self.calls: List[str] = []

    def fetch_text(self, location: str) -> str:
        self.calls.append(location)
        return super().fetch_text(location)

    def calls_for(self, suffix: str) -> int:
        return sum(1 for c in self.calls if c.endswith(suffix))


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def write_icon_set(
    root: Path,
    directory: str,
    files: List[str],
    provider: str = "",
    manifest: Optional[object] = None,
    with_svgs: bool = True,
) -> Path:
    """Create ``root/directory`` with a manifest and SVG files."""
    path = root / directory
    path.mkdir(parents=True, exist_ok=True)
    if manifest is None:
        manifest = {
            "provider": provider or directory.upper(),
            "displayName": directory.title(),
            "count": len(files),
            "lastUpdated": "2024-05-01T12:00:00.000Z",
            "files": files,
        }
    if isinstance(manifest, str):
        (path / "manifest.json").write_text(manifest, encoding="utf-8")
    else:
        (path / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")
    if with_svgs:
        for name in files:
            (path / name).write_text(SVG, encoding="utf-8")
    return path


@pytest.fixture
def fetcher() -> CountingFetcher:
    return CountingFetcher()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def feather_dir(tmp_path) -> Path:
    return write_icon_set(
        tmp_path, "feather", ["arrow-left.svg", "arrow-right.svg", "bell.svg"], provider="FEATHER"
    )


@pytest.fixture
def make_provider(fetcher, clock):
    def _make(base_path: Path, provider_id: str = "FEATHER", ttl_s: float = 60.0) -> CatalogProvider:
        descriptor = ProviderDescriptor(id=provider_id, display_name=provider_id.title(), base_path=str(base_path))
        return CatalogProvider(descriptor, fetcher=fetcher, ttl_s=ttl_s, clock=clock)
    return _make
