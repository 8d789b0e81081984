"""Small display helpers for percentages, ratios and transaction payloads."""

from __future__ import annotations

import base64
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..numbers import format_with_pattern, to_number

PERCENT_FORMAT = "0.[00]%"

_ESCAPED_NEWLINE_RE = re.compile(r"\\n|\\r")


def percent(decimal: str | float | None) -> str:
    return format_with_pattern(to_number(decimal), PERCENT_FORMAT) if decimal else "-"


def format_commission_rate(rate: str | None) -> str:
    if not rate:
        return "-"
    return percent(rate)


def format_decimal_to_percent(decimal: str | float) -> str:
    return format_with_pattern(to_number(decimal), PERCENT_FORMAT)


def calculate_percent(
    value: str | float | None, total: str | float | None
) -> str:
    """Share of ``value`` in ``total``; shares below 0.01% render as 0%."""
    if not value or not total:
        return "0"
    denominator = to_number(total)
    if denominator == 0:
        return "0"
    share = to_number(value) / denominator
    return format_with_pattern(share if share > 0.0001 else 0, PERCENT_FORMAT)


def calculate_bonded_ratio(pool: Mapping[str, Any] | None) -> str:
    """Bonded share of a staking pool (``bonded_tokens``/``not_bonded_tokens``)."""
    if not pool or not pool.get("bonded_tokens"):
        return "-"
    bonded = to_number(pool["bonded_tokens"])
    not_bonded = to_number(pool.get("not_bonded_tokens"))
    total = bonded + not_bonded
    if not total:
        return "-"
    return format_with_pattern(bonded / total, PERCENT_FORMAT)


def format_number(value: float | None, fmt: str = "0.[00]") -> str:
    if not value:
        return ""
    return format_with_pattern(value, fmt)


def number_and_sign(value: float, fmt: str = "+0,0") -> str:
    return format_with_pattern(value, fmt)


def summarize_messages(msgs: Iterable[Mapping[str, Any]] | None) -> str:
    """Summarise message types, e.g. ``"Send×2, Delegate"``."""
    if not msgs:
        return ""
    counts: dict[str, int] = {}
    for msg in msgs:
        msg_type = msg.get("@type") or msg.get("typeUrl") or "unknown"
        name = msg_type[msg_type.rfind(".") + 1 :].replace("Msg", "", 1)
        counts[name] = counts.get(name, 0) + 1
    return ", ".join(
        f"{name}×{count}" if count > 1 else name for name, count in counts.items()
    )


def multi_line(value: str | None) -> str:
    """Turn escaped ``\\n``/``\\r`` sequences into real newlines."""
    return _ESCAPED_NEWLINE_RE.sub("\n", value) if value else ""


def hex_to_string(value: str | None) -> str:
    if not value:
        return ""
    return bytes.fromhex(value).decode("utf-8", errors="replace")


def base64_to_string(value: str | None) -> str:
    if not value:
        return ""
    return base64.b64decode(value).decode("utf-8", errors="replace")
