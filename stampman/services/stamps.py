"""Stamp ledger.

Overflow policy: looped rollover. Assigning ``count`` stamps mints one
coupon per full round, ``(stamps + count) // total_stamps``, and keeps the
remainder on the card. 8 + 5 stamps on a 10-stamp card mint one coupon and
leave 3; 25 stamps on a fresh 10-stamp card mint two and leave 5.
"""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from django.db import transaction

from stampman.conf import load_backend
from stampman.exceptions import ValidationError
from stampman.models import Coupon, LoyaltyCard, Member, Purchase, StampCard
from stampman.services.coupons import CouponService

logger = logging.getLogger(__name__)


class StampAssignment(NamedTuple):
    """Stamps granted on one card while approving a purchase."""

    card_id: int
    count: int


@dataclass
class StampResult:
    """Outcome of one add_stamps() call."""

    stamp_card: StampCard
    coupons: list[Coupon] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return bool(self.coupons)


def validate_count(count) -> int:
    """Stamp counts are non-negative ints (bools rejected)."""
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValidationError("INVALID_STAMP_COUNT", count=repr(count))
    return count


class StampService:
    """
    Stamp card progress.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def add_stamps(
        cls,
        member: Member,
        card: LoyaltyCard,
        count: int,
        purchase: Purchase | None = None,
    ) -> StampResult:
        """
        Add ``count`` stamps to the member's progress on ``card``.

        Creates the StampCard on first use. Mints one coupon per
        completed round (see module docstring).

        Args:
            member: Stamp owner
            card: Loyalty card definition
            count: Stamps to add (positive int)
            purchase: Purchase granting the stamps, recorded on coupons

        Returns:
            StampResult with the updated card and minted coupons

        Raises:
            ValidationError: If count is not a positive int
        """
        if validate_count(count) == 0:
            raise ValidationError("INVALID_STAMP_COUNT", count=repr(count))

        with transaction.atomic():
            stamp_card, created = StampCard.objects.select_for_update().get_or_create(
                member=member,
                card=card,
            )

            new_total = stamp_card.stamps + count
            rounds, remainder = divmod(new_total, card.total_stamps)

            coupons = [
                CouponService.mint(member, card, purchase=purchase)
                for _ in range(rounds)
            ]

            stamp_card.stamps = remainder
            update_fields = ["stamps", "updated_at"]
            if rounds:
                stamp_card.times_completed += rounds
                stamp_card.last_completed_at = load_backend("CLOCK").now()
                update_fields += ["times_completed", "last_completed_at"]
            stamp_card.save(update_fields=update_fields)

        if rounds:
            logger.info(
                "Card %s completed %d time(s) by %s, %d stamp(s) carried over",
                card.pk,
                rounds,
                member.code,
                remainder,
            )

        return StampResult(stamp_card=stamp_card, coupons=coupons)

    @classmethod
    def get_card(cls, member_code: str, card_id: int) -> StampCard | None:
        """Member's progress on a card, or None before the first stamp."""
        try:
            return StampCard.objects.select_related("card").get(
                member__code=member_code,
                card_id=card_id,
            )
        except StampCard.DoesNotExist:
            return None

    @classmethod
    def cards_for(cls, member_code: str) -> list[StampCard]:
        """All stamp cards a member has started."""
        return list(
            StampCard.objects.select_related("card")
            .filter(member__code=member_code)
            .order_by("card__name")
        )
