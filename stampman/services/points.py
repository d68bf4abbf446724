"""Point calculation.

    base  = floor(amount / amount_per_point)
    total = floor(base * multiplier) + bonus

Runs once, at purchase submission; the result is frozen on the Purchase.
"""

import math
from dataclasses import dataclass
from decimal import Decimal

from stampman.gates import Gates
from stampman.services.promotions import NO_EFFECT, PromotionEffect


@dataclass(frozen=True)
class PointsBreakdown:
    """How a point award was computed."""

    base: int
    multiplier: Decimal
    bonus: int
    total: int


def _as_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def calculate(amount, settings, effect: PromotionEffect = NO_EFFECT) -> PointsBreakdown:
    """
    Compute the point award for a purchase amount.

    Args:
        amount: Purchase amount (Decimal, int or numeric str)
        settings: SystemSettings (only amount_per_point is read)
        effect: Resolved promotions (defaults to no promotions)

    Raises:
        ConfigurationError: If amount_per_point <= 0 or the effect yields a
            negative total
        ValidationError: If amount is not a positive cent amount within
            bounds, or the total overflows the points columns
    """
    Gates.settings_ratio(settings, "amount_per_point")
    Gates.positive_amount(amount)

    amount = _as_decimal(amount)
    base = math.floor(amount / _as_decimal(settings.amount_per_point))
    total = math.floor(base * effect.multiplier) + effect.bonus
    Gates.point_total(total, bonus=effect.bonus)

    return PointsBreakdown(
        base=base,
        multiplier=effect.multiplier,
        bonus=effect.bonus,
        total=total,
    )


def suggested_stamps(amount, settings) -> int:
    """
    Stamps suggested to the approving admin: floor(amount / amount_per_stamp).

    Raises:
        ConfigurationError: If amount_per_stamp <= 0
        ValidationError: If amount <= 0
    """
    Gates.settings_ratio(settings, "amount_per_stamp")
    Gates.positive_amount(amount)
    return math.floor(_as_decimal(amount) / _as_decimal(settings.amount_per_stamp))
