"""Denomination, token and address constants."""

from typing import TypedDict

IBC_PREFIX = "ibc/"

# Exponents assumed for denoms that no registry knows about.
MICRO_DENOM_EXPONENT = 6
ATTO_DENOM_EXPONENT = 18
SPECIAL_DENOM_EXPONENTS: dict[str, int] = {
    "inj": 18,
}

# PowerReduction is the factor by which token amounts are divided to obtain
# voting power.
POWER_REDUCTION = 1_000_000

# Bounds a non-finite consensus power result is clamped to.
MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER

# Below this a display amount renders as plain zero.
DUST_THRESHOLD = 0.000001
# Below this a display amount is rendered with extra precision.
SMALL_AMOUNT_THRESHOLD = 0.01
SMALL_AMOUNT_FORMAT = "0.[000000]"
DEFAULT_TOKEN_FORMAT = "0,0.[0]"
DISPLAY_DENOM_MAX_LENGTH = 10

DEFAULT_METADATA_ENDPOINT = "https://metadata.ping.pub/metadata"
DENOM_TRACE_PATH = "/ibc/apps/transfer/v1/denom_traces"

ETH_ASSET = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# Keys are lower-case; lookups are case-insensitive.
ADDRESS_ALIASES: dict[str, str] = {
    # Sepolia testnet
    "0xb18d4f69083a46d22d420576aa56d424e4041a7c": "Sepolia Faucet",
    "0x1c7e51d7390ede6f473e0b7c9c94a65a8d9b6fa4": "Sepolia Deployer",
    # Tokens
    ETH_ASSET.lower(): "ETH",
    "0x779877a7b0d9e8603169ddbd7836e478b4624789": "LINK",
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": "USDC",
    "0xdac17f958d2ee523a2206206994597c13d831ec7": "USDT",
}


class TokenFormat(TypedDict):
    symbol: str
    decimals: int
    pattern: str


# Keyed by lower-case address; see formatting.amount for canonical lookup.
WELL_KNOWN_TOKENS: dict[str, TokenFormat] = {
    ETH_ASSET.lower(): {"symbol": "ETH", "decimals": 18, "pattern": "0,0.0000"},
    "0x779877a7b0d9e8603169ddbd7836e478b4624789": {
        "symbol": "LINK",
        "decimals": 18,
        "pattern": "0,0.0000",
    },
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": {
        "symbol": "USDC",
        "decimals": 6,
        "pattern": "0,0.00",
    },
    "0xdac17f958d2ee523a2206206994597c13d831ec7": {
        "symbol": "USDT",
        "decimals": 6,
        "pattern": "0,0.00",
    },
    "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599": {
        "symbol": "WBTC",
        "decimals": 8,
        "pattern": "0,0.00000000",
    },
}

# Amounts above this with no known token are assumed to be wei-scale.
WEI_SCALE_THRESHOLD = 1e10
WEI_DECIMALS = 18
DEFAULT_AMOUNT_FORMAT = "0,0.0000"

NON_SLASHABLE_UNIT = "ETH"
