"""Denomination resolution across local, global and IBC metadata sources."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

from .constants import (
    ATTO_DENOM_EXPONENT,
    IBC_PREFIX,
    MICRO_DENOM_EXPONENT,
    SPECIAL_DENOM_EXPONENTS,
)
from .domain import AssetConfig, DenomTrace
from .logger import get_logger
from .registry import AssetRegistry, find_local_asset

if TYPE_CHECKING:
    from .clients.metadata import MetadataClient
    from .settings import DisplaySettings

logger = get_logger(__name__)

Scope = Literal["local", "global"]
MetadataFetcher = Callable[[str], Awaitable[AssetConfig | Mapping[str, Any]]]
TraceFetcher = Callable[[str], Awaitable[DenomTrace | Mapping[str, Any]]]


class ResolutionSource(str, Enum):
    IBC_METADATA = "ibc_metadata"
    LOCAL = "local"
    GLOBAL = "global"
    HEURISTIC = "heuristic"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class Resolution:
    """Display unit chosen for a denom."""

    denom: str
    display_denom: str
    exponent: int
    source: ResolutionSource
    asset: AssetConfig | None = None

    @property
    def has_metadata(self) -> bool:
        return self.asset is not None


def fallback_exponent(denom: str) -> int | None:
    """Exponent implied by the denom's naming convention, if any.

    ``u``-prefixed denoms are micro-units, ``a``-prefixed ones atto-units.
    """
    if denom.startswith("u"):
        return MICRO_DENOM_EXPONENT
    if denom.startswith("a"):
        return ATTO_DENOM_EXPONENT
    return SPECIAL_DENOM_EXPONENTS.get(denom)


class DenomResolver:
    """Resolves denoms to display units.

    IBC metadata and denom traces are cached for the lifetime of the
    resolver and never evicted. A metadata cache miss returns the raw denom
    immediately and fetches in the background; later calls see the result.
    Fetches are only scheduled while an event loop is running.
    """

    def __init__(
        self,
        registry: AssetRegistry | None = None,
        fetch_metadata: MetadataFetcher | None = None,
        fetch_trace: TraceFetcher | None = None,
        *,
        retry_failed_metadata: bool = False,
        metadata_cache: dict[str, AssetConfig] | None = None,
        trace_cache: dict[str, DenomTrace] | None = None,
    ):
        self.registry = registry if registry is not None else AssetRegistry()
        self._fetch_metadata = fetch_metadata
        self._fetch_trace = fetch_trace
        self.retry_failed_metadata = retry_failed_metadata

        self.ibc_metadata: dict[str, AssetConfig] = (
            metadata_cache if metadata_cache is not None else {}
        )
        self.ibc_denoms: dict[str, DenomTrace] = (
            trace_cache if trace_cache is not None else {}
        )
        self.in_flight: set[str] = set()
        self._tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def from_settings(
        cls,
        settings: DisplaySettings,
        registry: AssetRegistry | None = None,
        client: MetadataClient | None = None,
    ) -> DenomResolver:
        """Build a resolver wired to the HTTP metadata and trace services."""
        from .clients.metadata import MetadataClient

        client = client or MetadataClient(settings)
        return cls(
            registry,
            fetch_metadata=client.fetch_metadata,
            fetch_trace=client.fetch_denom_trace,
            retry_failed_metadata=settings.retry_failed_metadata,
        )

    def resolve(
        self,
        denom: str,
        scope: Scope = "local",
        local_assets: Iterable[AssetConfig | Mapping[str, Any]] | None = None,
    ) -> Resolution:
        """Resolve ``denom`` to its display unit. Never raises.

        Args:
            denom: Raw denom, possibly ``ibc/<hash>``
            scope: ``"local"`` searches ``local_assets``; anything else
                searches the global registry
            local_assets: Asset list of the current chain

        Returns:
            The display unit, or the raw denom at the heuristic exponent
            when no source knows it
        """
        if denom.startswith(IBC_PREFIX):
            ibc_hash = denom[len(IBC_PREFIX) :]
            asset = self.ibc_metadata.get(ibc_hash)
            if asset is None:
                self._schedule_metadata_fetch(ibc_hash)
                return Resolution(denom, denom, 0, ResolutionSource.UNRESOLVED)
            return self._from_asset(denom, asset, ResolutionSource.IBC_METADATA)

        if scope == "local":
            asset = find_local_asset(local_assets, denom)
            source = ResolutionSource.LOCAL
        else:
            asset = self.registry.find(denom)
            source = ResolutionSource.GLOBAL

        if asset is not None:
            return self._from_asset(denom, asset, source)

        exponent = fallback_exponent(denom)
        if exponent:
            return Resolution(denom, denom, exponent, ResolutionSource.HEURISTIC)
        return Resolution(denom, denom, 0, ResolutionSource.UNRESOLVED)

    @staticmethod
    def _from_asset(
        denom: str, asset: AssetConfig, source: ResolutionSource
    ) -> Resolution:
        unit = asset.display_unit()
        if unit is None:
            return Resolution(denom, denom, 0, source, asset)
        return Resolution(denom, unit.denom, unit.exponent, source, asset)

    def display_denom(self, denom: str) -> str:
        """Display unit name for ``denom`` from the global registry."""
        return self.resolve(denom, "global").display_denom

    def exponent_for_denom(self, denom: str) -> int:
        """Display exponent from the global registry, 0 when unknown."""
        asset = self.registry.find(denom)
        if asset is None:
            return 0
        unit = asset.display_unit()
        return unit.exponent if unit else 0

    def special_denom(self, denom: str) -> int:
        """Naming-convention exponent, falling back to the global registry."""
        exponent = fallback_exponent(denom)
        if exponent is not None:
            return exponent
        return self.exponent_for_denom(denom)

    def _schedule_metadata_fetch(self, ibc_hash: str) -> None:
        if ibc_hash in self.in_flight:
            return
        if self._fetch_metadata is None:
            logger.debug("No metadata fetcher configured, ibc/%s unresolved", ibc_hash)
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "No running event loop, skipping metadata fetch for ibc/%s", ibc_hash
            )
            return

        self.in_flight.add(ibc_hash)
        task = loop.create_task(self._load_metadata(ibc_hash, self._fetch_metadata))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Scheduled metadata fetch for ibc/%s", ibc_hash)

    async def _load_metadata(self, ibc_hash: str, fetch: MetadataFetcher) -> None:
        try:
            payload = await fetch(ibc_hash)
            asset = AssetConfig.model_validate(payload)
        except Exception as exc:
            logger.warning("Metadata fetch for ibc/%s failed: %s", ibc_hash, exc)
            if self.retry_failed_metadata:
                self.in_flight.discard(ibc_hash)
            return

        self.ibc_metadata.setdefault(ibc_hash, asset)
        logger.debug("Cached IBC metadata for ibc/%s (base %s)", ibc_hash, asset.base)

    async def wait_pending(self) -> None:
        """Wait for every outstanding metadata fetch to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    @property
    def pending_fetches(self) -> int:
        return len(self._tasks)

    async def fetch_denom_trace(self, denom: str) -> DenomTrace:
        """Return the IBC denom trace for ``denom``, fetching it once.

        Raises:
            ValueError: If the trace is not cached and no fetcher is configured
        """
        ibc_hash = denom.removeprefix(IBC_PREFIX)
        trace = self.ibc_denoms.get(ibc_hash)
        if trace is None:
            if self._fetch_trace is None:
                raise ValueError("No denom trace fetcher configured")
            trace = DenomTrace.model_validate(await self._fetch_trace(ibc_hash))
            self.ibc_denoms[ibc_hash] = trace
        return trace
