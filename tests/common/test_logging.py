from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from taxofeed.config import DIAGNOSTICS_LOGGER, InvalidSettingError, configure_logging


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("TAXOFEED_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TAXOFEED_DIAGNOSTICS_LEVEL", raising=False)
    root = logging.getLogger()
    diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)
    monkeypatch.setattr(root, "handlers", [])
    saved = (root.level, diagnostics.level)
    yield
    root.setLevel(saved[0])
    diagnostics.setLevel(saved[1])


def test_configure_logging_defaults_to_info() -> None:
    configure_logging(force=True)

    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger(DIAGNOSTICS_LOGGER).level == logging.NOTSET


def test_configure_logging_reads_levels_from_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TAXOFEED_LOG_LEVEL", "debug")
    monkeypatch.setenv("TAXOFEED_DIAGNOSTICS_LEVEL", "warning")

    configure_logging(force=True)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger(DIAGNOSTICS_LOGGER).level == logging.WARNING


def test_explicit_levels_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAXOFEED_LOG_LEVEL", "debug")

    configure_logging(level=logging.ERROR, diagnostics_level=logging.INFO, force=True)

    assert logging.getLogger().level == logging.ERROR
    assert logging.getLogger(DIAGNOSTICS_LOGGER).level == logging.INFO


def test_configure_logging_rejects_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAXOFEED_LOG_LEVEL", "loud")

    with pytest.raises(InvalidSettingError):
        configure_logging(force=True)
