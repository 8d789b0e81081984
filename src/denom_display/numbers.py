"""Lenient number parsing and pattern-based number formatting.

Chain payloads carry amounts as strings or numbers of either kind, and the
display layer describes formats with short patterns such as ``"0,0.[00]"``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal, localcontext
from functools import lru_cache
from typing import Any

_LEADING_FLOAT_RE = re.compile(
    r"^\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)

_PATTERN_RE = re.compile(
    r"^(?P<sign>\+)?0(?P<thousands>,0)?"
    r"(?:\.(?P<fixed>0*)(?:\[(?P<optional>0+)\])?)?"
    r"(?P<abbreviate>a)?(?P<percent>%)?$"
)

# Decimal precision covering the integer digits of any finite float.
_MAX_FLOAT_DIGITS = 320

_ABBREVIATIONS = (
    (1e12, "t"),
    (1e9, "b"),
    (1e6, "m"),
    (1e3, "k"),
)


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def parse_float(value: Any) -> float:
    """Parse the leading numeric prefix of ``value``.

    Numbers pass through unchanged. Strings yield their longest leading
    decimal literal (``"12.5abc"`` -> 12.5). Anything else, including
    booleans, yields NaN.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if not isinstance(value, str):
        return math.nan
    match = _LEADING_FLOAT_RE.match(value)
    if not match:
        return math.nan
    return float(match.group(1))


def to_number(value: Any) -> float:
    """Strict numeric conversion: the whole string must be a number.

    Blank strings convert to 0 and unparseable input to NaN.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if value is None:
        return math.nan
    text = str(value).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def _round_half_up(value: float, decimals: int) -> Decimal | float:
    """Round the shortest decimal form of ``value``, ties toward +infinity.

    ``2.25`` rounds to ``2.3`` and ``-2.5`` to ``-2``.
    """
    if not math.isfinite(value):
        return value
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    with localcontext(prec=_MAX_FLOAT_DIGITS + decimals):
        return Decimal(repr(value)).quantize(
            Decimal(1).scaleb(-decimals), rounding=rounding
        )


@dataclass(frozen=True)
class NumberPattern:
    """A parsed display pattern.

    ``"0,0.[00]"`` -> thousands separators, up to two decimals.
    ``"0.0000"`` -> exactly four decimals.
    ``"0.0a"`` -> one decimal, abbreviated with k/m/b/t.
    ``"0.[00]%"`` -> percentage, up to two decimals.
    ``"+0,0"`` -> integer with an explicit sign on positives.
    """

    fixed_decimals: int = 0
    optional_decimals: int = 0
    thousands: bool = False
    abbreviate: bool = False
    percent: bool = False
    signed: bool = False

    @classmethod
    def parse(cls, pattern: str) -> NumberPattern:
        return _parse_pattern(pattern)

    def format(self, value: float) -> str:
        if isinstance(value, int):
            value = _int_to_float(value)
        if math.isnan(value):
            value = 0.0
        if self.percent:
            value *= 100

        suffix = ""
        if self.abbreviate:
            magnitude = abs(value)
            for threshold, unit in _ABBREVIATIONS:
                if magnitude >= threshold:
                    value /= threshold
                    suffix = unit
                    break

        decimals = self.fixed_decimals + self.optional_decimals
        separator = "," if self.thousands else ""
        text = f"{abs(_round_half_up(value, decimals)):{separator}.{decimals}f}"
        if self.optional_decimals and "." in text:
            integer, fraction = text.split(".")
            fraction = fraction[: self.fixed_decimals] + fraction[
                self.fixed_decimals :
            ].rstrip("0")
            text = f"{integer}.{fraction}" if fraction else integer

        is_zero = not any(ch.isdigit() and ch != "0" for ch in text)
        if value < 0 and not is_zero:
            text = f"-{text}"
        elif self.signed and value > 0 and not is_zero:
            text = f"+{text}"

        if self.percent:
            suffix += "%"
        return f"{text}{suffix}"


@lru_cache(maxsize=64)
def _parse_pattern(pattern: str) -> NumberPattern:
    match = _PATTERN_RE.match(pattern)
    if not match:
        raise ValueError(f"Unsupported number pattern: {pattern!r}")
    return NumberPattern(
        fixed_decimals=len(match.group("fixed") or ""),
        optional_decimals=len(match.group("optional") or ""),
        thousands=match.group("thousands") is not None,
        abbreviate=match.group("abbreviate") is not None,
        percent=match.group("percent") is not None,
        signed=match.group("sign") is not None,
    )


def format_with_pattern(value: float, pattern: str) -> str:
    """Render ``value`` using a display pattern such as ``"0,0.[00]"``."""
    return NumberPattern.parse(pattern).format(value)
