"""Settings module with unified configuration precedence: INIT > ENV > CONFIG FILE."""

from __future__ import annotations

import math
import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import DEFAULT_METADATA_ENDPOINT, POWER_REDUCTION
from .numbers import parse_float

load_dotenv()


class DisplaySettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - init kwargs
    - ENV / .env (prefixed with DENOM_DISPLAY_)
    - Config file (TOML), lowest precedence
    """

    # --- collaborator endpoints ---
    metadata_endpoint: str = DEFAULT_METADATA_ENDPOINT
    lcd_endpoint: str | None = None

    # --- fetch behaviour ---
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout (seconds) for metadata and trace lookups.",
    )
    max_fetch_tries: int = Field(
        default=5,
        ge=1,
        description="Attempts per request, including the first, before giving up.",
    )
    retry_failed_metadata: bool = Field(
        default=False,
        description="Clear the in-flight marker after a failed IBC metadata fetch so the next lookup retries.",
    )

    # --- valuation ---
    default_currency: str = "usd"
    power_reduction: str = str(POWER_REDUCTION)

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DENOM_DISPLAY_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("default_currency")
    @classmethod
    def lower_currency(cls, v: str) -> str:
        return v.lower()

    @field_validator("power_reduction", mode="before")
    @classmethod
    def validate_power_reduction(cls, v: Any) -> str:
        """Accept numbers and numeric strings; store the string form."""
        if isinstance(v, bool):
            raise ValueError("power_reduction must be numeric")
        text = str(v).strip()
        if math.isnan(parse_float(text)):
            raise ValueError(f"power_reduction must be numeric, got {v!r}")
        return text

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: INIT > ENV > FILE."""
        env_cfg = os.environ.get("DENOM_DISPLAY_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    local_config = Path("denom-display.toml")
                    user_config = (
                        Path.home() / ".config" / "denom-display" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [denom_display]
                body = data.get("denom_display", data)
                if not isinstance(body, dict):
                    return {}
                return body

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSource(settings_cls, cfg_path),
            file_secret_settings,
        )

    @property
    def lcd_endpoint_required(self) -> str:
        """Get lcd_endpoint, raising ValueError if not set."""
        if self.lcd_endpoint is None:
            raise ValueError("lcd_endpoint must be configured")
        return self.lcd_endpoint
