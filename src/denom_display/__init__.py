"""Display amounts, fiat values and consensus power for chain-native tokens."""

from __future__ import annotations

from .domain import AssetConfig, Capital, Coin, DenomTrace, DenomUnit, TokenBalance
from .power import potential_consensus_power
from .registry import AssetRegistry
from .resolver import DenomResolver, Resolution, ResolutionSource
from .settings import DisplaySettings
from .valuation import PriceBook, Valuation, color

__all__ = [
    "AssetConfig",
    "AssetRegistry",
    "Capital",
    "Coin",
    "DenomResolver",
    "DenomTrace",
    "DenomUnit",
    "DisplaySettings",
    "PriceBook",
    "Resolution",
    "ResolutionSource",
    "TokenBalance",
    "Valuation",
    "color",
    "potential_consensus_power",
]
