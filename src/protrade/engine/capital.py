"""Standard position margin helper."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

STANDARD_MARGIN_PCT = 0.05


def suggest_margin(capital: float | str, pct: float = STANDARD_MARGIN_PCT) -> int | None:
    """Return ``pct`` of total capital rounded to a whole amount.

    Returns None when capital is not a number. No other validation is done;
    the engine rejects a non-positive margin on its own.
    """
    try:
        value = float(capital)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    share = value * pct
    if math.isinf(share):
        return None
    # exact at any magnitude, unlike quantize under the default context
    amount = Decimal(repr(share)).to_integral_value(rounding=ROUND_HALF_UP)
    return int(amount)
