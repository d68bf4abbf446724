"""Redemption workflow.

    request() -> pending, reward cost debited immediately and frozen
    approve() -> approved, no balance change
    reject()  -> rejected, frozen cost refunded
"""

import logging

from django.db import transaction

from stampman.conf import load_backend
from stampman.exceptions import NotFound
from stampman.gates import Gates
from stampman.models import Redemption, RedemptionStatus, Reward, TransactionKind
from stampman.services.ledger import LedgerService
from stampman.services.transitions import actor_label, apply_transition, parse_id
from stampman.signals import redemption_approved, redemption_rejected, redemption_requested

logger = logging.getLogger(__name__)


class RedemptionService:
    """
    Points-for-reward requests.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def request(cls, member_code: str, reward_id: int) -> Redemption:
        """
        Request a reward, debiting its cost right away.

        Args:
            member_code: Member code
            reward_id: Reward primary key

        Returns:
            Created Redemption (pending)

        Raises:
            NotFound: Unknown member, unknown or inactive reward
            InsufficientPoints: Balance below the reward cost (nothing changes)
        """
        member = LedgerService.get_member(member_code)
        try:
            reward = Reward.objects.get(
                pk=parse_id(reward_id, "REWARD_NOT_FOUND", "reward_id"),
                is_active=True,
            )
        except Reward.DoesNotExist:
            raise NotFound("REWARD_NOT_FOUND", reward_id=reward_id)

        now = load_backend("CLOCK").now()

        with transaction.atomic():
            redemption = Redemption.objects.create(
                member=member,
                reward=reward,
                reward_name=reward.name,
                points=reward.points,
                status=RedemptionStatus.PENDING,
                requested_at=now,
            )
            LedgerService.debit(
                member.pk,
                reward.points,
                description=f"Redemption: {reward.name}",
                reference=redemption.reference,
                created_by=member.code,
            )
            transaction.on_commit(
                lambda: redemption_requested.send(sender=Redemption, redemption=redemption)
            )

        logger.info(
            "Redemption %s requested by %s: %s (-%d pts)",
            redemption.pk,
            member.code,
            reward.name,
            reward.points,
        )
        return redemption

    @classmethod
    def approve(cls, redemption_id: int, acting_user=None) -> Redemption:
        """
        Approve a pending redemption. Points were already debited.

        Raises:
            InsufficientAuthorization: Acting user may not approve
            NotFound: Unknown redemption
            InvalidStateTransition: Redemption is not pending
        """
        Gates.acting_user_authorized(acting_user, action="redemption.approve")
        decided_by = actor_label(acting_user)
        now = load_backend("CLOCK").now()

        with transaction.atomic():
            redemption = cls._get_for_update(redemption_id)
            apply_transition(
                redemption,
                RedemptionStatus.APPROVED,
                decided_at=now,
                decided_by=decided_by,
            )
            transaction.on_commit(
                lambda: redemption_approved.send(sender=Redemption, redemption=redemption)
            )

        logger.info("Redemption %s approved by %s", redemption.pk, decided_by)
        return redemption

    @classmethod
    def reject(cls, redemption_id: int, acting_user=None) -> Redemption:
        """
        Reject a pending redemption and refund its frozen cost.

        Raises:
            InsufficientAuthorization: Acting user may not reject
            NotFound: Unknown redemption
            InvalidStateTransition: Redemption is not pending
        """
        Gates.acting_user_authorized(acting_user, action="redemption.reject")
        decided_by = actor_label(acting_user)
        now = load_backend("CLOCK").now()

        with transaction.atomic():
            redemption = cls._get_for_update(redemption_id)
            apply_transition(
                redemption,
                RedemptionStatus.REJECTED,
                decided_at=now,
                decided_by=decided_by,
            )
            LedgerService.credit(
                redemption.member_id,
                redemption.points,
                TransactionKind.REFUND,
                description=f"Refund: {redemption.reward_name}",
                reference=redemption.reference,
                created_by=decided_by,
            )
            transaction.on_commit(
                lambda: redemption_rejected.send(sender=Redemption, redemption=redemption)
            )

        logger.info(
            "Redemption %s rejected by %s, %d pts refunded",
            redemption.pk,
            decided_by,
            redemption.points,
        )
        return redemption

    @classmethod
    def get(cls, redemption_id: int) -> Redemption:
        pk = parse_id(redemption_id, "REDEMPTION_NOT_FOUND", "redemption_id")
        try:
            return Redemption.objects.select_related("member", "reward").get(pk=pk)
        except Redemption.DoesNotExist:
            raise NotFound("REDEMPTION_NOT_FOUND", redemption_id=redemption_id)

    @classmethod
    def pending(cls) -> list[Redemption]:
        """Pending redemptions, oldest first."""
        return list(
            Redemption.objects.select_related("member")
            .filter(status=RedemptionStatus.PENDING)
            .order_by("requested_at", "pk")
        )

    @classmethod
    def for_member(cls, member_code: str) -> list[Redemption]:
        return list(Redemption.objects.filter(member__code=member_code))

    @classmethod
    def _get_for_update(cls, redemption_id: int) -> Redemption:
        """MUST be called inside transaction.atomic()."""
        pk = parse_id(redemption_id, "REDEMPTION_NOT_FOUND", "redemption_id")
        try:
            return Redemption.objects.select_for_update().get(pk=pk)
        except Redemption.DoesNotExist:
            raise NotFound("REDEMPTION_NOT_FOUND", redemption_id=redemption_id)
