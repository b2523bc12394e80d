"""Asset fetching for catalog providers.

Resolves a location to text. ``http(s)://`` locations go through a
requests session; anything else is read from the local filesystem.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import requests

from ..errors import FetchError


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


class AssetFetcher:
    """Blocking text fetcher shared by all providers of a registry."""

    def __init__(self, timeout_s: float = 30.0, session: Optional[requests.Session] = None):
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._session.headers["Accept"] = "application/json, image/svg+xml, text/plain"

    def fetch_text(self, location: str) -> str:
        """Return the text at ``location`` or raise FetchError."""
        if is_remote(location):
            return self._fetch_remote(location)
        return self._fetch_local(location)

    def fetch_json(self, location: str) -> Any:
        text = self.fetch_text(location)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise FetchError(location, f"invalid JSON: {e}")

    def _fetch_remote(self, location: str) -> str:
        try:
            response = self._session.get(location, timeout=self.timeout_s)
            response.raise_for_status()
            return response.text
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise FetchError(location, f"HTTP {status}")
        except requests.exceptions.ConnectionError:
            raise FetchError(location, "connection failed")
        except requests.exceptions.RequestException as e:
            raise FetchError(location, str(e))

    def _fetch_local(self, location: str) -> str:
        try:
            return Path(location).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(location, str(e))

    def close(self) -> None:
        self._session.close()
