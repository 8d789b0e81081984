from __future__ import annotations

import logging

import pytest

from denom_display.logger import TRACE, ColoredFormatter, get_logger, setup_logging
from denom_display.settings import DisplaySettings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("urllib3").setLevel(logging.NOTSET)
    logging.getLogger("backoff").setLevel(logging.NOTSET)


def test_debug_quiets_http_loggers(restore_root_logger):
    setup_logging("debug")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_trace_level(restore_root_logger):
    setup_logging("TRACE")

    assert logging.getLogger().level == TRACE
    assert logging.getLogger("urllib3").level == TRACE


def test_level_from_environment(restore_root_logger, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")

    setup_logging()

    assert logging.getLogger().level == logging.WARNING


def test_colored_formatter_restores_levelname():
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)

    output = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[31m" in output
    assert "boom" in output
    assert record.levelname == "ERROR"


def test_get_logger():
    assert get_logger("denom_display.resolver").name == "denom_display.resolver"


def test_level_from_settings(restore_root_logger, tmp_path, monkeypatch):
    monkeypatch.setenv("DENOM_DISPLAY_CONFIG", str(tmp_path / "missing.toml"))
    settings = DisplaySettings(log_level="error")

    setup_logging(settings.log_level)

    assert logging.getLogger().level == logging.ERROR


def test_package_modules_use_named_loggers():
    from denom_display import power, resolver, valuation

    assert resolver.logger.name == "denom_display.resolver"
    assert power.logger.name == "denom_display.power"
    assert valuation.logger.name == "denom_display.valuation"
