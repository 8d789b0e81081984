"""Render validator capital payloads as a single display line."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ..constants import NON_SLASHABLE_UNIT
from ..domain import Capital
from ..logger import get_logger
from .address import shorten_address
from .amount import format_amount

logger = get_logger(__name__)


def _slashable_pairs(capital: Mapping[str, Any]) -> list[str]:
    pairs: list[str] = []
    balances = capital.get("slashable_balance")
    if isinstance(balances, list):
        for entry in balances:
            if not isinstance(entry, Mapping):
                continue
            address = entry.get("address")
            amount = entry.get("amount")
            if address and amount:
                pairs.append(f"{format_amount(amount)} {shorten_address(address)}")

    non_slashable = capital.get("non_slashable_capital")
    if non_slashable and non_slashable != "0":
        pairs.append(
            f"Non-slashable: {format_amount(non_slashable)} {NON_SLASHABLE_UNIT}"
        )
    return pairs


def _scanned_pairs(capital: Mapping[str, Any]) -> list[str]:
    """Pair every ``*address*`` key with its ``*amount*`` sibling."""
    pairs: list[str] = []
    for key, address in capital.items():
        if not isinstance(key, str) or "address" not in key:
            continue
        amount = capital.get(key.replace("address", "amount", 1))
        if amount:
            pairs.append(f"{shorten_address(address)}: {format_amount(amount)}")
    return pairs


def format_capital(capital: Any) -> str:
    """Format a capital structure, given as a mapping or a JSON string.

    The ``slashable_balance``/``non_slashable_capital`` schema is tried
    first; payloads without it fall back to address/amount key pairs.
    """
    if isinstance(capital, Capital):
        capital = capital.model_dump()
    if not isinstance(capital, (Mapping, str)) or capital == "":
        return "No capital"

    try:
        parsed = json.loads(capital) if isinstance(capital, str) else capital
        if not isinstance(parsed, Mapping):
            return "No capital"

        pairs = _slashable_pairs(parsed) or _scanned_pairs(parsed)
    except (TypeError, ValueError) as exc:
        logger.error("Error formatting capital: %s", exc)
        return "Invalid capital format"

    return ", ".join(pairs) if pairs else "No valid capital format"
