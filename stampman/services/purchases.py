"""Purchase workflow.

    submit()  -> pending, point award computed and frozen
    approve() -> approved: credit frozen points, apply stamps, mint coupons, notify
    reject()  -> rejected: balance untouched, notify

approve() and reject() run as one transaction each: either the status
change and every side effect commit, or nothing does.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from django.db import transaction

from stampman.conf import load_backend
from stampman.exceptions import NotFound, ValidationError
from stampman.gates import Gates
from stampman.models import (
    Branch,
    Coupon,
    LoyaltyCard,
    NotificationKind,
    Purchase,
    PurchaseStatus,
    StampCard,
    SystemSettings,
    TransactionKind,
)
from stampman.services import points as points_calculator
from stampman.services.ledger import LedgerService
from stampman.services.notifications import NotificationService
from stampman.services.promotions import PromotionService
from stampman.services.stamps import StampAssignment, StampService, validate_count
from stampman.services.transitions import actor_label, apply_transition, parse_id
from stampman.signals import purchase_approved, purchase_rejected, purchase_submitted

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 200


@dataclass
class PurchaseApproval:
    """Everything approve() changed."""

    purchase: Purchase
    points_credited: int
    coupons: list[Coupon] = field(default_factory=list)
    stamp_cards: list[StampCard] = field(default_factory=list)


def _format_amount(amount) -> str:
    return f"${Decimal(amount):,.2f}"


class PurchaseService:
    """
    Purchase workflow.

    Uses @classmethod for extensibility (consistent with other services).
    """

    # ======================================================================
    # Submission
    # ======================================================================

    @classmethod
    def preview(cls, amount) -> points_calculator.PointsBreakdown:
        """Points a purchase of ``amount`` would earn right now. Persists nothing."""
        now = load_backend("CLOCK").now()
        return points_calculator.calculate(
            amount,
            SystemSettings.load(),
            PromotionService.current_effect(now),
        )

    @classmethod
    def submit(
        cls,
        member_code: str,
        amount,
        branch_id: int | None = None,
        description: str = "",
        receipt: str | None = None,
    ) -> Purchase:
        """
        Register a purchase as pending, freezing its point award.

        Args:
            member_code: Member code
            amount: Purchase amount (> 0)
            branch_id: Branch where the purchase happened
            description: Free text (max 200 chars)
            receipt: Receipt/invoice reference

        Returns:
            Created Purchase (pending)

        Raises:
            NotFound: Unknown member or branch
            ValidationError: Bad amount or description, inactive branch
            ConfigurationError: amount_per_point <= 0
        """
        member = LedgerService.get_member(member_code)
        branch = cls._get_branch(branch_id) if branch_id is not None else None
        description = cls._clean_description(description)

        now = load_backend("CLOCK").now()
        breakdown = points_calculator.calculate(
            amount,
            SystemSettings.load(),
            PromotionService.current_effect(now),
        )

        with transaction.atomic():
            purchase = Purchase.objects.create(
                member=member,
                branch=branch,
                amount=Decimal(str(amount)),
                description=description,
                receipt=receipt or None,
                points=breakdown.total,
                base_points=breakdown.base,
                multiplier=breakdown.multiplier,
                bonus_points=breakdown.bonus,
                status=PurchaseStatus.PENDING,
                submitted_at=now,
            )
            transaction.on_commit(
                lambda: purchase_submitted.send(sender=Purchase, purchase=purchase)
            )

        logger.info(
            "Purchase %s submitted by %s: %s -> %d pts",
            purchase.pk,
            member.code,
            amount,
            purchase.points,
        )
        return purchase

    @classmethod
    def suggested_stamps(cls, purchase_id: int) -> int:
        """Stamps suggested for a purchase: floor(amount / amount_per_stamp)."""
        purchase = cls.get(purchase_id)
        return points_calculator.suggested_stamps(purchase.amount, SystemSettings.load())

    # ======================================================================
    # Decisions
    # ======================================================================

    @classmethod
    def approve(
        cls,
        purchase_id: int,
        stamp_assignments: Iterable[tuple[int, int]] = (),
        acting_user=None,
    ) -> PurchaseApproval:
        """
        Approve a pending purchase.

        Credits the points frozen at submission (never recomputed),
        applies the stamp assignments and emits one notification.

        Args:
            purchase_id: Purchase primary key
            stamp_assignments: (card_id, count) pairs; zero counts are skipped
            acting_user: Staff member approving

        Returns:
            PurchaseApproval

        Raises:
            InsufficientAuthorization: Acting user may not approve
            NotFound: Unknown purchase or loyalty card
            ValidationError: Negative or non-integer stamp count
            InvalidStateTransition: Purchase is not pending
        """
        Gates.acting_user_authorized(acting_user, action="purchase.approve")
        assignments = cls._clean_assignments(stamp_assignments)
        decided_by = actor_label(acting_user)
        now = load_backend("CLOCK").now()

        with transaction.atomic():
            purchase = cls._get_for_update(purchase_id)
            cards = cls._get_cards(assignments)

            apply_transition(
                purchase,
                PurchaseStatus.APPROVED,
                approved_at=now,
                decided_at=now,
                decided_by=decided_by,
            )

            points_credited = 0
            if purchase.points > 0:
                LedgerService.credit(
                    purchase.member_id,
                    purchase.points,
                    TransactionKind.EARN,
                    description=f"Purchase #{purchase.pk}",
                    reference=purchase.reference,
                    created_by=decided_by,
                )
                points_credited = purchase.points

            member = purchase.member
            coupons: list[Coupon] = []
            stamp_cards: list[StampCard] = []
            for assignment in assignments:
                result = StampService.add_stamps(
                    member,
                    cards[assignment.card_id],
                    assignment.count,
                    purchase=purchase,
                )
                stamp_cards.append(result.stamp_card)
                coupons.extend(result.coupons)

            cls._notify_approved(purchase, coupons, now)

            transaction.on_commit(
                lambda: purchase_approved.send(
                    sender=Purchase, purchase=purchase, coupons=coupons
                )
            )

        logger.info(
            "Purchase %s approved by %s: +%d pts, %d coupon(s)",
            purchase.pk,
            decided_by,
            points_credited,
            len(coupons),
        )
        return PurchaseApproval(
            purchase=purchase,
            points_credited=points_credited,
            coupons=coupons,
            stamp_cards=stamp_cards,
        )

    @classmethod
    def reject(cls, purchase_id: int, acting_user=None) -> Purchase:
        """
        Reject a pending purchase. The balance is untouched.

        Raises:
            InsufficientAuthorization: Acting user may not reject
            NotFound: Unknown purchase
            InvalidStateTransition: Purchase is not pending
        """
        Gates.acting_user_authorized(acting_user, action="purchase.reject")
        decided_by = actor_label(acting_user)
        now = load_backend("CLOCK").now()

        with transaction.atomic():
            purchase = cls._get_for_update(purchase_id)
            apply_transition(
                purchase,
                PurchaseStatus.REJECTED,
                decided_at=now,
                decided_by=decided_by,
            )

            NotificationService.emit(
                purchase.member_id,
                f"Your purchase of {_format_amount(purchase.amount)} from "
                f"{purchase.submitted_at.date().isoformat()} was REJECTED. "
                "Please contact the store administrator.",
                kind=NotificationKind.PURCHASE_REJECTED,
                timestamp=now,
            )

            transaction.on_commit(
                lambda: purchase_rejected.send(sender=Purchase, purchase=purchase)
            )

        logger.info("Purchase %s rejected by %s", purchase.pk, decided_by)
        return purchase

    # ======================================================================
    # Queries
    # ======================================================================

    @classmethod
    def get(cls, purchase_id: int) -> Purchase:
        pk = parse_id(purchase_id, "PURCHASE_NOT_FOUND", "purchase_id")
        try:
            return Purchase.objects.select_related("member", "branch").get(pk=pk)
        except Purchase.DoesNotExist:
            raise NotFound("PURCHASE_NOT_FOUND", purchase_id=purchase_id)

    @classmethod
    def pending(cls, branch_id: int | None = None) -> list[Purchase]:
        """Pending purchases, oldest first (review queue)."""
        qs = Purchase.objects.select_related("member", "branch").filter(
            status=PurchaseStatus.PENDING
        )
        if branch_id is not None:
            qs = qs.filter(branch_id=branch_id)
        return list(qs.order_by("submitted_at", "pk"))

    @classmethod
    def for_member(cls, member_code: str, status: str | None = None) -> list[Purchase]:
        qs = Purchase.objects.filter(member__code=member_code)
        if status:
            qs = qs.filter(status=status)
        return list(qs)

    # ======================================================================
    # Helpers
    # ======================================================================

    @classmethod
    def _get_for_update(cls, purchase_id: int) -> Purchase:
        """MUST be called inside transaction.atomic()."""
        pk = parse_id(purchase_id, "PURCHASE_NOT_FOUND", "purchase_id")
        try:
            return Purchase.objects.select_for_update().get(pk=pk)
        except Purchase.DoesNotExist:
            raise NotFound("PURCHASE_NOT_FOUND", purchase_id=purchase_id)

    @classmethod
    def _get_branch(cls, branch_id: int) -> Branch:
        pk = parse_id(branch_id, "BRANCH_NOT_FOUND", "branch_id")
        try:
            branch = Branch.objects.get(pk=pk)
        except Branch.DoesNotExist:
            raise NotFound("BRANCH_NOT_FOUND", branch_id=branch_id)
        if not branch.is_active:
            raise ValidationError("BRANCH_INACTIVE", branch_id=branch_id)
        return branch

    @classmethod
    def _clean_description(cls, description) -> str:
        if description is None:
            return ""
        if not isinstance(description, str) or len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                "INVALID_DESCRIPTION",
                max_length=DESCRIPTION_MAX_LENGTH,
            )
        return description.strip()

    @classmethod
    def _clean_assignments(cls, stamp_assignments) -> list[StampAssignment]:
        assignments = []
        for card_id, count in stamp_assignments:
            card_id = parse_id(card_id, "CARD_NOT_FOUND", "card_id")
            if validate_count(count):
                assignments.append(StampAssignment(card_id, count))
        return assignments

    @classmethod
    def _get_cards(cls, assignments: list[StampAssignment]) -> dict[int, LoyaltyCard]:
        wanted = {a.card_id for a in assignments}
        cards = LoyaltyCard.objects.filter(pk__in=wanted, is_active=True).in_bulk()
        missing = wanted - set(cards)
        if missing:
            raise NotFound("CARD_NOT_FOUND", card_ids=sorted(missing))
        return cards

    @classmethod
    def _notify_approved(cls, purchase: Purchase, coupons: list[Coupon], now) -> None:
        branch_name = purchase.branch.name if purchase.branch_id else "the store"
        message = (
            f"Your purchase of {_format_amount(purchase.amount)} at {branch_name} "
            f"was APPROVED. You received +{purchase.points} points."
        )
        kind = NotificationKind.PURCHASE_APPROVED
        if coupons:
            names = ", ".join(c.name for c in coupons)
            message += f" You also earned {len(coupons)} reward coupon(s): {names}."
            kind = NotificationKind.REWARD_EARNED

        NotificationService.emit(purchase.member_id, message, kind=kind, timestamp=now)
