"""HTTP clients for IBC display metadata and denom traces."""

from __future__ import annotations

import asyncio
from typing import Any

import backoff
import requests

from ..constants import DENOM_TRACE_PATH
from ..domain import AssetConfig, DenomTrace
from ..logger import get_logger
from ..settings import DisplaySettings

logger = get_logger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def _should_giveup(exc: Exception) -> bool:
    return (
        isinstance(exc, requests.exceptions.HTTPError)
        and exc.response is not None
        and exc.response.status_code not in RETRYABLE_STATUS_CODES
    )


def _on_backoff(details: Any) -> None:
    logger.warning(
        "Request failed (attempt %d), retrying in %.1fs: %s",
        details["tries"],
        details["wait"],
        details.get("exception"),
    )


class MetadataClient:
    """Fetches IBC display metadata and transfer denom traces.

    Both endpoints are plain JSON GETs; transient failures are retried
    with exponential backoff.
    """

    def __init__(self, settings: DisplaySettings):
        self.settings = settings
        self.metadata_endpoint = settings.metadata_endpoint.rstrip("/")
        self.timeout = settings.request_timeout
        self.max_tries = settings.max_fetch_tries

    async def _get_json(self, url: str) -> Any:
        @backoff.on_exception(
            backoff.expo,
            requests.exceptions.RequestException,
            max_tries=self.max_tries,
            giveup=_should_giveup,
            on_backoff=_on_backoff,
            jitter=backoff.full_jitter,
        )
        async def _get() -> Any:
            response = await asyncio.to_thread(requests.get, url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        logger.debug("GET %s", url)
        return await _get()

    async def fetch_metadata(self, ibc_hash: str) -> AssetConfig:
        """Fetch display metadata for ``ibc/<ibc_hash>``."""
        payload = await self._get_json(f"{self.metadata_endpoint}/{ibc_hash}")
        return AssetConfig.model_validate(payload)

    async def fetch_denom_trace(self, ibc_hash: str) -> DenomTrace:
        """Fetch the transfer denom trace for ``ibc/<ibc_hash>`` from the LCD.

        Raises:
            ValueError: If no LCD endpoint is configured or the response
                carries no ``denom_trace``
        """
        lcd = self.settings.lcd_endpoint_required.rstrip("/")
        payload = await self._get_json(f"{lcd}{DENOM_TRACE_PATH}/{ibc_hash}")
        trace = payload.get("denom_trace") if isinstance(payload, dict) else None
        if not trace:
            raise ValueError(f"No denom_trace in response for ibc/{ibc_hash}")
        return DenomTrace.model_validate(trace)
