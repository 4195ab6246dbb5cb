"""Environment variable loaders for configuration."""

from __future__ import annotations

import logging
import os
from typing import Final

from .errors import InvalidSettingError

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def env_str(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_flag(name: str, *, default: bool) -> bool:
    value = env_str(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise InvalidSettingError(name, value, expected="a boolean such as 'true' or '0'")


def env_log_level(name: str, *, default: int) -> int:
    """Read a level name (``DEBUG``, ``warning``...) and return its numeric value."""

    value = env_str(name)
    if value is None:
        return default
    level = logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        raise InvalidSettingError(name, value, expected="a logging level name")
    return level
