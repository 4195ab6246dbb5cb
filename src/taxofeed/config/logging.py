"""Logging setup for the command line and the per-row diagnostics channel."""

from __future__ import annotations

import logging
from typing import Final

from .env import env_log_level

LOG_LEVEL_ENV: Final[str] = "TAXOFEED_LOG_LEVEL"
DIAGNOSTICS_LEVEL_ENV: Final[str] = "TAXOFEED_DIAGNOSTICS_LEVEL"
DIAGNOSTICS_LOGGER: Final[str] = "taxofeed.diagnostics"

_FORMAT: Final[str] = "%(levelname)-7s %(name)s: %(message)s"


def configure_logging(
    *,
    level: int | None = None,
    diagnostics_level: int | None = None,
    force: bool = False,
) -> None:
    """Configure the root logger and the diagnostics logger.

    Levels not passed explicitly come from ``TAXOFEED_LOG_LEVEL`` (default INFO) and
    ``TAXOFEED_DIAGNOSTICS_LEVEL``. Large feeds emit one diagnostics line per matched
    or created category, so that logger can be raised to WARNING on its own; when left
    unset it inherits the root level.
    """

    if level is None:
        level = env_log_level(LOG_LEVEL_ENV, default=logging.INFO)
    logging.basicConfig(level=level, format=_FORMAT, force=force)

    if diagnostics_level is None:
        diagnostics_level = env_log_level(DIAGNOSTICS_LEVEL_ENV, default=logging.NOTSET)
    logging.getLogger(DIAGNOSTICS_LOGGER).setLevel(diagnostics_level)
