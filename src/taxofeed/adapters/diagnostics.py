"""Diagnostics sink writing import messages to the standard logging tree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taxofeed.config import DIAGNOSTICS_LOGGER

if TYPE_CHECKING:
    from collections.abc import Mapping


class LoggingDiagnostics:
    """Render ``{placeholder}`` messages and log them; formatting never raises."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.log = logger or logging.getLogger(DIAGNOSTICS_LOGGER)

    def info(self, message: str, context: Mapping[str, object]) -> None:
        self.log.info(self._render(message, context))

    def error(self, message: str, context: Mapping[str, object]) -> None:
        self.log.error(self._render(message, context))

    @staticmethod
    def _render(message: str, context: Mapping[str, object]) -> str:
        try:
            return message.format_map(dict(context))
        except (KeyError, IndexError, ValueError):
            return f"{message} {dict(context)!r}"


if TYPE_CHECKING:
    from taxofeed.domain.ports import DiagnosticsSink

    _sink_check: DiagnosticsSink = LoggingDiagnostics()
