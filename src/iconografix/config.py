from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .env import as_flag, as_int, as_str, env_flag, env_int, env_str, load_env_files

APP = "iconografix"


def config_dir() -> Path:
    """
    Cross-platform config directory:
      - Windows: %APPDATA%\\iconografix
      - macOS/Linux: $XDG_CONFIG_HOME/iconografix or ~/.config/iconografix
    """
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))) / APP


def config_path() -> Path:
    return config_dir() / "config.json"


@dataclass
class Settings:
    assets_path: str = "assets/icons"   # local directory or http(s) URL
    default_provider: str = "ICONOIR"
    default_limit: int = 24
    max_limit: int = 100
    svg_cache_ttl_s: int = 3600
    request_timeout_s: int = 30
    production: bool = False
    host_origin: str = ""               # exact embedding host origin
    enable_multi_select: bool = True
    debug_logging: bool = False

    @staticmethod
    def load(path: Optional[Path] = None) -> "Settings":
        path = path or config_path()

        # .env files feed the ICONOGRAFIX_* overrides below
        load_env_files(config_dir())

        data: dict = {}

        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                data = {}
            if not isinstance(data, dict):
                data = {}

        # Malformed values fall back to the field default
        s = Settings(
            assets_path=as_str(data.get("assets_path"), Settings.assets_path),
            default_provider=as_str(data.get("default_provider"), Settings.default_provider),
            default_limit=as_int(data.get("default_limit"), Settings.default_limit),
            max_limit=as_int(data.get("max_limit"), Settings.max_limit),
            svg_cache_ttl_s=as_int(data.get("svg_cache_ttl_s"), Settings.svg_cache_ttl_s),
            request_timeout_s=as_int(data.get("request_timeout_s"), Settings.request_timeout_s),
            production=as_flag(data.get("production"), Settings.production),
            host_origin=as_str(data.get("host_origin"), Settings.host_origin),
            enable_multi_select=as_flag(data.get("enable_multi_select"), Settings.enable_multi_select),
            debug_logging=as_flag(data.get("debug_logging"), Settings.debug_logging),
        )

        # Environment overrides (highest priority)
        s.assets_path = env_str("ASSETS_PATH", s.assets_path)
        s.default_provider = env_str("DEFAULT_PROVIDER", s.default_provider)
        s.default_limit = env_int("DEFAULT_LIMIT", s.default_limit)
        s.max_limit = env_int("MAX_LIMIT", s.max_limit)
        s.svg_cache_ttl_s = env_int("SVG_CACHE_TTL", s.svg_cache_ttl_s)
        s.request_timeout_s = env_int("REQUEST_TIMEOUT", s.request_timeout_s)
        s.production = env_flag("PRODUCTION", s.production)
        s.host_origin = env_str("HOST_ORIGIN", s.host_origin)
        s.enable_multi_select = env_flag("MULTI_SELECT", s.enable_multi_select)
        s.debug_logging = env_flag("DEBUG", s.debug_logging)

        return s

    def clamp_limit(self, limit: Optional[int]) -> int:
        """Apply the default and upper bound to a requested page size."""
        if limit is None:
            return self.default_limit
        return max(0, min(limit, self.max_limit))
