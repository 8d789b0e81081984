"""Display amounts and fiat values for raw on-chain coins."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_TOKEN_FORMAT,
    DISPLAY_DENOM_MAX_LENGTH,
    DUST_THRESHOLD,
    SMALL_AMOUNT_FORMAT,
    SMALL_AMOUNT_THRESHOLD,
)
from .domain import AssetConfig, Coin
from .logger import get_logger
from .numbers import format_with_pattern, to_number
from .registry import AssetRegistry
from .resolver import DenomResolver, Scope
from .settings import DisplaySettings

logger = get_logger(__name__)

CoinLike = Coin | Mapping[str, Any]


class CoinGeckoEntry(BaseModel):
    """Price-feed registration of a denom."""

    coin_id: str = Field(default="", alias="coinId")
    symbol: str | None = None
    exponent: int | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


@dataclass
class PriceBook:
    """Price-feed snapshot: denom -> coin id, and coin id -> prices.

    ``prices[coin_id]`` maps a currency to its price and
    ``f"{currency}_24h_change"`` to the day's change in percent.
    """

    coingecko: dict[str, CoinGeckoEntry] = field(default_factory=dict)
    prices: dict[str, dict[str, float]] = field(default_factory=dict)

    @classmethod
    def from_mappings(
        cls,
        coingecko: Mapping[str, Mapping[str, Any]] | None = None,
        prices: Mapping[str, Mapping[str, float]] | None = None,
    ) -> PriceBook:
        return cls(
            coingecko={
                denom: CoinGeckoEntry.model_validate(entry)
                for denom, entry in (coingecko or {}).items()
            },
            prices={coin_id: dict(info) for coin_id, info in (prices or {}).items()},
        )

    def update_prices(self, prices: Mapping[str, Mapping[str, float]]) -> None:
        for coin_id, info in prices.items():
            self.prices[coin_id] = dict(info)

    def price_info(self, denom: str) -> dict[str, float] | None:
        entry = self.coingecko.get(denom)
        return self.prices.get(entry.coin_id if entry else "")


def color(change: float | None) -> str:
    """CSS class for a signed price change."""
    if not change:
        return ""
    if change > 0:
        return "text-success"
    if change < 0:
        return "text-error"
    return ""


def _as_coin(token: CoinLike | None) -> Coin | None:
    if token is None or isinstance(token, Coin):
        return token
    return Coin.model_validate(token)


class Valuation:
    """Turns raw coins into display amounts, fiat values and strings.

    Denoms are resolved through the resolver; ``local_assets`` is the asset
    list of the chain currently being displayed.
    """

    def __init__(
        self,
        resolver: DenomResolver,
        price_book: PriceBook | None = None,
        *,
        local_assets: Iterable[AssetConfig | Mapping[str, Any]] | None = None,
        currency: str = "usd",
    ):
        self.resolver = resolver
        self.price_book = price_book if price_book is not None else PriceBook()
        self.local_assets = list(local_assets) if local_assets else []
        self.currency = currency

    @classmethod
    def from_settings(
        cls,
        settings: DisplaySettings,
        registry: AssetRegistry | None = None,
        price_book: PriceBook | None = None,
        *,
        local_assets: Iterable[AssetConfig | Mapping[str, Any]] | None = None,
    ) -> Valuation:
        """Valuation backed by a resolver that fetches over HTTP.

        IBC metadata is only fetched when formatting runs inside an event
        loop; outside one, ``ibc/`` denoms stay unresolved. Synchronous
        callers can prefetch with ``await resolver.wait_pending()`` after a
        first pass inside ``asyncio.run``.
        """
        return cls(
            DenomResolver.from_settings(settings, registry),
            price_book,
            local_assets=local_assets,
            currency=settings.default_currency,
        )

    # --- prices ---

    def price_info(self, denom: str) -> dict[str, float] | None:
        return self.price_book.price_info(denom)

    def price(self, denom: str, currency: str | None = None) -> float:
        if not denom or len(denom) < 2:
            return 0
        info = self.price_info(denom)
        return (info.get(currency or self.currency) or 0) if info else 0

    def price_changes(self, denom: str, currency: str | None = None) -> float:
        info = self.price_info(denom)
        key = f"{currency or self.currency}_24h_change"
        return (info.get(key) or 0) if info else 0

    def price_color(self, denom: str, currency: str | None = None) -> str:
        return color(self.price_changes(denom, currency))

    @staticmethod
    def color(change: float | None) -> str:
        return color(change)

    @staticmethod
    def show_changes(value: float | None) -> str:
        return format_with_pattern(value, "+0,0") if value else ""

    # --- amounts ---

    def display_amount(
        self, token: CoinLike | None, scope: Scope = "global"
    ) -> float:
        """Amount in display units, scaled by the resolved exponent."""
        coin = _as_coin(token)
        if coin is None or not coin.amount or not coin.denom:
            return 0
        resolution = self.resolver.resolve(coin.denom, scope, self.local_assets)
        amount = to_number(coin.amount)
        if resolution.exponent > 0:
            amount = amount / 10**resolution.exponent
        return amount

    def display_value(
        self, token: CoinLike | None, scope: Scope = "global"
    ) -> float:
        """Fiat value of the display amount; 0 when no price is known."""
        coin = _as_coin(token)
        if coin is None or not coin.denom:
            return 0
        return self.display_amount(coin, scope) * self.price(coin.denom)

    def token_amount_number(self, token: CoinLike | None) -> float:
        """Amount scaled by the price feed's exponent for the denom's symbol.

        Falls back to the naming convention and the global registry.
        """
        coin = _as_coin(token)
        if coin is None or not coin.denom:
            return 0
        entry = self.price_book.coingecko.get(coin.denom)
        symbol = (entry.symbol if entry else None) or coin.denom
        symbol_entry = self.price_book.coingecko.get(symbol.lower())
        exponent = (
            symbol_entry.exponent if symbol_entry else None
        ) or self.resolver.special_denom(coin.denom)
        return to_number(coin.amount) / 10**exponent

    def token_value_number(self, token: CoinLike | None) -> float:
        coin = _as_coin(token)
        if coin is None or not coin.denom:
            return 0
        return self.token_amount_number(coin) * self.price(coin.denom)

    def token_value(self, token: CoinLike | None) -> str:
        if token is None:
            return ""
        return format_with_pattern(self.token_value_number(token), "0,0.[00]")

    # --- strings ---

    def format_token(
        self,
        token: CoinLike | None,
        with_denom: bool = True,
        fmt: str = DEFAULT_TOKEN_FORMAT,
        scope: Scope = "local",
    ) -> str:
        """Render a coin as ``"<amount> <DENOM>"``.

        Amounts under 0.000001 render as ``"0 <denom>"`` and amounts under
        0.01 get six decimals whatever ``fmt`` asks for. The denom is cut
        to ten characters. An unsupported ``fmt`` falls back to
        ``"0,0.[0]"`` with a warning.
        """
        coin = _as_coin(token)
        if coin is None or not coin.amount or not coin.denom:
            return "-"

        resolution = self.resolver.resolve(coin.denom, scope, self.local_assets)
        amount = to_number(coin.amount)
        denom = coin.denom
        if resolution.exponent > 0:
            amount = amount / 10**resolution.exponent
            if resolution.has_metadata:
                denom = resolution.display_denom.upper()

        label = denom[:DISPLAY_DENOM_MAX_LENGTH]
        if amount < DUST_THRESHOLD:
            return f"0 {label}"
        if amount < SMALL_AMOUNT_THRESHOLD:
            fmt = SMALL_AMOUNT_FORMAT

        try:
            number = format_with_pattern(amount, fmt)
        except ValueError:
            logger.warning(
                "Unsupported number pattern %r, using %r", fmt, DEFAULT_TOKEN_FORMAT
            )
            number = format_with_pattern(amount, DEFAULT_TOKEN_FORMAT)
        return f"{number} {label}" if with_denom else number

    def format_token_amount(self, token: CoinLike | None) -> str:
        return self.format_token(token, False)

    def format_token2(self, token: CoinLike | None) -> str:
        return self.format_token(token, True, "0,0.[00]")

    def format_tokens(
        self,
        tokens: Iterable[CoinLike] | None,
        with_denom: bool = True,
        fmt: str = "0.0a",
    ) -> str:
        if tokens is None:
            return ""
        return ", ".join(self.format_token(t, with_denom, fmt) for t in tokens)
