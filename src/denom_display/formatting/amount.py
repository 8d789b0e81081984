from __future__ import annotations

import math
from typing import Any

from web3 import Web3

from ..constants import (
    DEFAULT_AMOUNT_FORMAT,
    WEI_DECIMALS,
    WEI_SCALE_THRESHOLD,
    WELL_KNOWN_TOKENS,
    TokenFormat,
)
from ..numbers import format_with_pattern, parse_float


def _canonical_address(address: str) -> str:
    try:
        return Web3.to_checksum_address(address)
    except (TypeError, ValueError):
        return address.lower()


# Reverse lookup: canonical address -> token format
_TOKENS_BY_ADDRESS: dict[str, TokenFormat] = {
    _canonical_address(address): token for address, token in WELL_KNOWN_TOKENS.items()
}


def token_format_for(token_address: str) -> TokenFormat | None:
    """Known decimals and symbol for a token contract, in any address casing."""
    return _TOKENS_BY_ADDRESS.get(_canonical_address(token_address))


def format_amount(amount: Any, token_address: str | None = None) -> str:
    """Format a raw token amount for display.

    Known token contracts are scaled by their decimals and suffixed with
    their symbol. Unknown amounts above 1e10 are assumed to be wei.
    """
    if amount is None:
        return "Invalid amount"

    value = parse_float(amount)
    if math.isnan(value):
        return "Invalid amount"

    if token_address:
        token = token_format_for(token_address)
        if token is not None:
            scaled = value / 10 ** token["decimals"]
            return f"{format_with_pattern(scaled, token['pattern'])} {token['symbol']}"

    if value > WEI_SCALE_THRESHOLD:
        return format_with_pattern(value / 10**WEI_DECIMALS, DEFAULT_AMOUNT_FORMAT)
    return format_with_pattern(value, DEFAULT_AMOUNT_FORMAT)
