from __future__ import annotations

from decimal import Decimal, ROUND_CEILING
from typing import Optional, Union

from .formats import HUNDRED, ZERO, fmt_money

DEFAULT_TIP_PERCENT = Decimal("15")

Number = Union[Decimal, int, float]


def _as_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def compute_tip(amount: Number, tip_percent: Number, round_up: bool) -> Decimal:
    """Return ``tip_percent`` percent of ``amount``.

    With ``round_up`` the tip is raised to the next whole currency unit
    (ceiling, also for negative values). Inputs are not validated.
    """
    tip = _as_decimal(tip_percent) / HUNDRED * _as_decimal(amount)
    if round_up:
        tip = tip.to_integral_value(rounding=ROUND_CEILING)
    if tip.is_zero():
        # Drop the sign of a negative zero so it never displays as "-$0.00".
        return ZERO
    return tip


def calculate_tip(
    amount: Number,
    tip_percent: Number = DEFAULT_TIP_PERCENT,
    round_up: bool = False,
    *,
    locale: Optional[str] = None,
) -> str:
    """Compute the tip and format it as currency for ``locale`` (host default)."""
    return fmt_money(compute_tip(amount, tip_percent, round_up), locale=locale)
