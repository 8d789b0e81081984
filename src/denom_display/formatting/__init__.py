from __future__ import annotations

from .address import shorten_address
from .amount import format_amount, token_format_for
from .capital import format_capital
from .display import (
    base64_to_string,
    calculate_bonded_ratio,
    calculate_percent,
    format_commission_rate,
    format_decimal_to_percent,
    format_number,
    hex_to_string,
    multi_line,
    number_and_sign,
    percent,
    summarize_messages,
)

__all__ = [
    "base64_to_string",
    "calculate_bonded_ratio",
    "calculate_percent",
    "format_amount",
    "format_capital",
    "format_commission_rate",
    "format_decimal_to_percent",
    "format_number",
    "hex_to_string",
    "multi_line",
    "number_and_sign",
    "percent",
    "shorten_address",
    "summarize_messages",
    "token_format_for",
]
