from __future__ import annotations

import logging

import pytest

from taxofeed.adapters.diagnostics import DIAGNOSTICS_LOGGER, LoggingDiagnostics


def test_info_renders_placeholders(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=DIAGNOSTICS_LOGGER)

    LoggingDiagnostics().info("`{handle}` - Category `#{id}` added.", {"handle": "tags", "id": 7})

    assert caplog.records[-1].name == DIAGNOSTICS_LOGGER
    assert caplog.records[-1].levelno == logging.INFO
    assert caplog.records[-1].getMessage() == "`tags` - Category `#7` added."


def test_error_logs_at_error_level(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=DIAGNOSTICS_LOGGER)

    LoggingDiagnostics().error("Could not create - `{e}`.", {"e": "{}"})

    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.records[-1].getMessage() == "Could not create - `{}`."


def test_missing_placeholder_falls_back_to_context(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=DIAGNOSTICS_LOGGER)

    LoggingDiagnostics().info("Found `{count}` categories", {"i": 2})

    assert caplog.records[-1].getMessage() == "Found `{count}` categories {'i': 2}"


def test_custom_logger_is_used(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("taxofeed.tests.diagnostics")
    caplog.set_level(logging.INFO, logger=logger.name)

    LoggingDiagnostics(logger).info("plain message", {})

    assert caplog.records[-1].name == logger.name
