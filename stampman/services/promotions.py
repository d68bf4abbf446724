"""Promotion evaluation.

Resolves the promotions active at a moment into one multiplier and one
additive bonus:

    multiplier = max(1, highest active multiplier)
    bonus      = sum of active bonuses

Overlapping multiplier campaigns never stack multiplicatively; the
highest one wins.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from stampman.conf import load_backend
from stampman.models import Promotion, PromotionKind

ONE = Decimal("1")


@dataclass(frozen=True)
class PromotionEffect:
    """Resolved effect of the active promotions."""

    multiplier: Decimal = ONE
    bonus: int = 0

    @property
    def is_neutral(self) -> bool:
        return self.multiplier == ONE and self.bonus == 0


NO_EFFECT = PromotionEffect()


def active_promotions(now: datetime, promotions: Iterable[Promotion] = ()) -> list[Promotion]:
    """Promotions with status active and starts_at <= now <= ends_at."""
    return [p for p in promotions if p.is_active_at(now)]


def resolve(now: datetime, promotions: Iterable[Promotion] = ()) -> PromotionEffect:
    """Collapse the promotions active at ``now`` into a PromotionEffect."""
    multiplier = ONE
    bonus = 0
    for promo in active_promotions(now, promotions):
        if promo.kind == PromotionKind.MULTIPLIER:
            multiplier = max(multiplier, Decimal(promo.value))
        elif promo.kind == PromotionKind.BONUS:
            bonus += math.floor(promo.value)
        # discount promotions do not touch points

    return PromotionEffect(multiplier=multiplier, bonus=bonus)


class PromotionService:
    """
    Read side of promotions.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def active(cls, now: datetime | None = None) -> list[Promotion]:
        """Promotions running now (engine clock unless given)."""
        now = now or load_backend("CLOCK").now()
        return active_promotions(now, cls._candidates(now))

    @classmethod
    def current_effect(cls, now: datetime | None = None) -> PromotionEffect:
        """Resolved multiplier/bonus for purchases submitted now."""
        now = now or load_backend("CLOCK").now()
        return resolve(now, cls._candidates(now))

    @classmethod
    def _candidates(cls, now: datetime):
        return Promotion.objects.filter(starts_at__lte=now, ends_at__gte=now)
