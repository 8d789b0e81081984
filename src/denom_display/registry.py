"""Chain asset lists and the global multi-chain asset registry."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from .domain import AssetConfig
from .logger import get_logger

logger = get_logger(__name__)


def coerce_assets(
    entries: Iterable[AssetConfig | Mapping[str, Any]],
) -> list[AssetConfig]:
    """Validate raw asset entries, dropping the ones that do not parse."""
    assets: list[AssetConfig] = []
    for entry in entries:
        if isinstance(entry, AssetConfig):
            assets.append(entry)
            continue
        try:
            assets.append(AssetConfig.model_validate(entry))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed asset entry (%d validation errors): %r",
                exc.error_count(),
                entry,
            )
    return assets


def find_local_asset(
    assets: Iterable[AssetConfig | Mapping[str, Any]] | None, denom: str
) -> AssetConfig | None:
    """Find the asset whose base is ``denom`` in a single chain's list."""
    if not assets:
        return None
    for asset in coerce_assets(assets):
        if asset.base == denom:
            return asset
    return None


class AssetRegistry:
    """Asset lists of every known chain, in registry order."""

    def __init__(
        self,
        chains: Mapping[str, Iterable[AssetConfig | Mapping[str, Any]]] | None = None,
    ):
        self._chains: dict[str, list[AssetConfig]] = {}
        for chain_name, assets in (chains or {}).items():
            self.add_chain(chain_name, assets)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> AssetRegistry:
        """Build from ``{chain_name: {"assets": [...]}}`` as served by registries."""
        return cls(
            {
                chain_name: (chain or {}).get("assets") or []
                for chain_name, chain in data.items()
            }
        )

    def add_chain(
        self, chain_name: str, assets: Iterable[AssetConfig | Mapping[str, Any]]
    ) -> None:
        self._chains[chain_name] = coerce_assets(assets)
        logger.debug(
            "Registered %d assets for chain %s",
            len(self._chains[chain_name]),
            chain_name,
        )

    @property
    def chain_names(self) -> list[str]:
        return list(self._chains)

    def assets_for(self, chain_name: str) -> list[AssetConfig]:
        return self._chains.get(chain_name, [])

    def find(self, denom: str) -> AssetConfig | None:
        """First asset with base ``denom``, searching chains in order."""
        for assets in self._chains.values():
            for asset in assets:
                if asset.base == denom:
                    return asset
        return None

    def __len__(self) -> int:
        return len(self._chains)
