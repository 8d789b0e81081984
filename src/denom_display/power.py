from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .constants import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER, POWER_REDUCTION
from .domain import Capital, TokenBalance
from .logger import get_logger
from .numbers import parse_float

logger = get_logger(__name__)


def _coerce_capital(capital: Any) -> Capital | None:
    """Validate a loosely shaped capital payload.

    Balance entries that do not parse are skipped; a payload whose
    top-level shape does not parse yields None.
    """
    if not isinstance(capital, Mapping):
        return None

    balances: list[TokenBalance] = []
    raw_balances = capital.get("slashable_balance")
    if isinstance(raw_balances, list):
        for entry in raw_balances:
            if isinstance(entry, TokenBalance):
                balances.append(entry)
            elif isinstance(entry, Mapping):
                try:
                    balances.append(TokenBalance.model_validate(entry))
                except ValidationError:
                    logger.debug("Skipping malformed balance entry: %r", entry)

    try:
        return Capital.model_validate({**capital, "slashable_balance": balances})
    except ValidationError as exc:
        logger.warning("Ignoring malformed capital payload: %s", exc)
        return None


def potential_consensus_power(
    capital: Capital | Mapping[str, Any],
    power_reduction: str = str(POWER_REDUCTION),
    *,
    max_power: int = MAX_SAFE_INTEGER,
    min_power: int = MIN_SAFE_INTEGER,
) -> int:
    """Potential consensus power of a validator's capital.

    Power is the harmonic mean of every positive slashable balance and the
    non-slashable capital, divided by ``power_reduction`` and floored. The
    harmonic mean is dominated by the smallest balances, so splitting
    capital into many small stakes lowers power.

    Args:
        capital: Capital payload or model
        power_reduction: Divisor from raw amounts to voting power, usually
            ``DisplaySettings.power_reduction``
        max_power: Result when the quotient overflows to +inf
        min_power: Result when the quotient is -inf or NaN

    Returns:
        The floored power, 0 when there is no capital or the divisor is 0
    """
    if not isinstance(capital, Capital):
        capital = _coerce_capital(capital)
        if capital is None:
            return 0

    non_slashable = capital.non_slashable_capital
    if not capital.slashable_balance and (not non_slashable or non_slashable == "0"):
        return 0

    # Sum of inverses := sum(1 / amount)
    sum_inverse = 0.0
    count = 0
    for balance in capital.slashable_balance:
        amount = parse_float(balance.amount)
        if amount > 0:
            sum_inverse += 1 / amount
            count += 1

    if non_slashable:
        amount = parse_float(non_slashable)
        if amount > 0:
            sum_inverse += 1 / amount
            count += 1

    if count == 0 or sum_inverse == 0:
        return 0

    harmonic_mean = count / sum_inverse

    reduction = parse_float(power_reduction)
    if reduction == 0:
        return 0

    result = harmonic_mean / reduction
    if not math.isfinite(result):
        return max_power if result > 0 else min_power
    return math.floor(result)
