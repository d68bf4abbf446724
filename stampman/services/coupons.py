"""Coupon issuing."""

import logging

from django.db import IntegrityError, transaction

from stampman.conf import load_backend, stampman_settings
from stampman.exceptions import ConfigurationError
from stampman.gates import Gates
from stampman.models import Coupon, CouponStatus, LoyaltyCard, Member, Purchase
from stampman.protocols.runtime import CodeGenerator
from stampman.signals import coupon_minted

logger = logging.getLogger(__name__)


class CouponService:
    """
    Mints coupons for completed stamp cards.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def mint(
        cls,
        member: Member,
        card: LoyaltyCard,
        purchase: Purchase | None = None,
    ) -> Coupon:
        """
        Create an active coupon for ``member`` from ``card``'s reward.

        The code comes from the CODE_GENERATOR backend; uniqueness is the
        database's job. A colliding code is retried in a savepoint up to
        COUPON_CODE_ATTEMPTS times.

        Args:
            member: Coupon owner
            card: Completed loyalty card
            purchase: Purchase whose stamps completed the card, if any

        Returns:
            Created Coupon

        Raises:
            ValidationError: If the card has no reward text
            ConfigurationError: If no unique code could be generated
        """
        Gates.reward_text(card)

        generator: CodeGenerator = load_backend("CODE_GENERATOR")
        prefix = stampman_settings.COUPON_CODE_PREFIX
        attempts = stampman_settings.COUPON_CODE_ATTEMPTS
        reward = card.reward.strip()

        for attempt in range(1, attempts + 1):
            code = generator.new_code(prefix)
            try:
                with transaction.atomic():
                    coupon = Coupon.objects.create(
                        code=code,
                        member=member,
                        card=card,
                        purchase=purchase,
                        name=f"Coupon: {reward}",
                        description=(
                            f"Earned by completing {card.total_stamps} stamps on {card.name}"
                        ),
                        status=CouponStatus.ACTIVE,
                    )
            except IntegrityError:
                if not Coupon.objects.filter(code=code).exists():
                    raise
                logger.warning("Coupon code collision on %s (attempt %d/%d)", code, attempt, attempts)
                continue

            logger.info("Coupon %s minted for %s (card %s)", coupon.code, member.code, card.pk)
            transaction.on_commit(
                lambda c=coupon: coupon_minted.send(sender=Coupon, coupon=c)
            )
            return coupon

        raise ConfigurationError(
            "COUPON_CODE_EXHAUSTED",
            attempts=attempts,
            generator=stampman_settings.CODE_GENERATOR,
        )

    @classmethod
    def for_member(cls, member_code: str, status: str | None = None) -> list[Coupon]:
        """Coupons owned by a member, newest first."""
        qs = Coupon.objects.filter(member__code=member_code)
        if status:
            qs = qs.filter(status=status)
        return list(qs)
