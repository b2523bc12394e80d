"""Environment helpers.

Loads ``.env`` files and reads typed ``ICONOGRAFIX_*`` overrides.
Priority order (highest to lowest):
1. Existing environment variables (never overwritten)
2. .env in current working directory
3. .env in config directory (~/.config/iconografix/.env)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

ENV_PREFIX = "ICONOGRAFIX_"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def parse_env_file(path: Path) -> Dict[str, str]:
    """Parse KEY=value lines from a .env file.

    Comments, blank lines and an optional ``export`` prefix are accepted.
    Values wrapped in matching single or double quotes are unquoted.
    """
    result: Dict[str, str] = {}

    if not path.is_file():
        return result

    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return result

    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].strip()

        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        if key:
            result[key] = value

    return result


def load_env_files(config_dir: Path) -> None:
    """Load config-dir and cwd .env files without overriding the environment."""
    combined: Dict[str, str] = {}
    for env_file in (config_dir / ".env", Path.cwd() / ".env"):
        combined.update(parse_env_file(env_file))

    for key, value in combined.items():
        os.environ.setdefault(key, value)


def as_int(value: Any, default: int) -> int:
    """Coerce a config or env value to int, falling back to ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def as_flag(value: Any, default: bool) -> bool:
    """Coerce a config or env value to bool; "true"/"off"/1 style values are accepted."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
    return default


def as_str(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def env_str(name: str, default: str) -> str:
    return os.environ.get(ENV_PREFIX + name, default)


def env_int(name: str, default: int) -> int:
    return as_int(os.environ.get(ENV_PREFIX + name), default)


def env_flag(name: str, default: bool) -> bool:
    return as_flag(os.environ.get(ENV_PREFIX + name), default)
