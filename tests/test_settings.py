"""Tests for settings configuration loading."""

from __future__ import annotations

from textwrap import dedent

import pytest
from pydantic import ValidationError

from denom_display.constants import DEFAULT_METADATA_ENDPOINT
from denom_display.settings import DisplaySettings


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a path that does not exist by default."""
    monkeypatch.setenv("DENOM_DISPLAY_CONFIG", str(tmp_path / "missing.toml"))
    for name in (
        "DENOM_DISPLAY_LCD_ENDPOINT",
        "DENOM_DISPLAY_REQUEST_TIMEOUT",
        "DENOM_DISPLAY_DEFAULT_CURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = DisplaySettings()

    assert settings.metadata_endpoint == DEFAULT_METADATA_ENDPOINT
    assert settings.lcd_endpoint is None
    assert settings.retry_failed_metadata is False
    assert settings.power_reduction == "1000000"
    assert settings.default_currency == "usd"


def test_toml_table_is_loaded(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        dedent(
            """
            [denom_display]
            lcd_endpoint = "https://lcd.example"
            request_timeout = 3.5
            max_fetch_tries = 2
            retry_failed_metadata = true
            """
        ).strip()
    )
    monkeypatch.setenv("DENOM_DISPLAY_CONFIG", str(config_path))

    settings = DisplaySettings()

    assert settings.lcd_endpoint == "https://lcd.example"
    assert settings.request_timeout == 3.5
    assert settings.max_fetch_tries == 2
    assert settings.retry_failed_metadata is True


def test_precedence_init_over_env_over_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text('lcd_endpoint = "https://file.example"\nrequest_timeout = 1.0')
    monkeypatch.setenv("DENOM_DISPLAY_CONFIG", str(config_path))
    monkeypatch.setenv("DENOM_DISPLAY_LCD_ENDPOINT", "https://env.example")

    from_env = DisplaySettings()
    from_init = DisplaySettings(lcd_endpoint="https://init.example")

    assert from_env.lcd_endpoint == "https://env.example"
    assert from_env.request_timeout == 1.0
    assert from_init.lcd_endpoint == "https://init.example"


def test_invalid_timeout_rejected():
    with pytest.raises(ValidationError):
        DisplaySettings(request_timeout=0)


def test_power_reduction_normalised():
    assert DisplaySettings(power_reduction=10**18).power_reduction == str(10**18)

    with pytest.raises(ValidationError, match="power_reduction must be numeric"):
        DisplaySettings(power_reduction="lots")


def test_currency_lowered():
    assert DisplaySettings(default_currency="EUR").default_currency == "eur"


def test_lcd_endpoint_required():
    with pytest.raises(ValueError, match="lcd_endpoint must be configured"):
        DisplaySettings().lcd_endpoint_required

    settings = DisplaySettings(lcd_endpoint="https://lcd.example")
    assert settings.lcd_endpoint_required == "https://lcd.example"
