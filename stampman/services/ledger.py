"""Point ledger: balance mutations and their audit rows.

Every balance change goes through here: the member row is locked, the
balance updated, and a PointTransaction appended in the same transaction.
"""

import logging

from django.db import transaction

from stampman.exceptions import NotFound, ValidationError
from stampman.gates import Gates
from stampman.models import Member, PointTransaction, TransactionKind

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Points balance operations.

    Uses @classmethod for extensibility (consistent with other services).
    All mutations use transaction.atomic() and select_for_update().
    """

    @classmethod
    def get_member(cls, member_code: str) -> Member:
        """
        Get active member or raise.

        Raises:
            NotFound: If no active member has this code
        """
        try:
            return Member.objects.get(code=member_code, is_active=True)
        except Member.DoesNotExist:
            raise NotFound("MEMBER_NOT_FOUND", member_code=member_code)

    @classmethod
    def get_balance(cls, member_code: str) -> int:
        """Current points balance."""
        return cls.get_member(member_code).points_balance

    @classmethod
    def get_transactions(cls, member_code: str, limit: int = 50) -> list[PointTransaction]:
        """Ledger history for a member, newest first."""
        return list(PointTransaction.objects.filter(member__code=member_code)[:limit])

    @classmethod
    def credit(
        cls,
        member_id: int,
        points: int,
        kind: str,
        description: str,
        reference: str = "",
        created_by: str = "",
    ) -> PointTransaction:
        """
        Add points to a balance (earn or refund).

        Earned points also count toward lifetime_points; refunds do not.

        Raises:
            ValidationError: If points <= 0
        """
        if points <= 0:
            raise ValidationError("INVALID_AMOUNT", message="Points must be positive", points=points)

        with transaction.atomic():
            member = cls._get_member_for_update(member_id)

            member.points_balance += points
            update_fields = ["points_balance", "updated_at"]
            if kind == TransactionKind.EARN:
                member.lifetime_points += points
                update_fields.append("lifetime_points")
            member.save(update_fields=update_fields)

            tx = PointTransaction.objects.create(
                member=member,
                kind=kind,
                points=points,
                balance_after=member.points_balance,
                description=description,
                reference=reference,
                created_by=created_by,
            )

        return tx

    @classmethod
    def debit(
        cls,
        member_id: int,
        points: int,
        description: str,
        reference: str = "",
        created_by: str = "",
    ) -> PointTransaction:
        """
        Remove points from a balance (redeem).

        Raises:
            ValidationError: If points <= 0
            InsufficientPoints: If the balance does not cover points
        """
        if points <= 0:
            raise ValidationError("INVALID_AMOUNT", message="Points must be positive", points=points)

        with transaction.atomic():
            member = cls._get_member_for_update(member_id)
            Gates.sufficient_points(member.points_balance, points)

            member.points_balance -= points
            member.save(update_fields=["points_balance", "updated_at"])

            tx = PointTransaction.objects.create(
                member=member,
                kind=TransactionKind.REDEEM,
                points=-points,
                balance_after=member.points_balance,
                description=description,
                reference=reference,
                created_by=created_by,
            )

        return tx

    @classmethod
    def _get_member_for_update(cls, member_id: int) -> Member:
        """
        Get member with row-level lock for mutation.

        MUST be called inside transaction.atomic().
        """
        try:
            return Member.objects.select_for_update().get(pk=member_id)
        except Member.DoesNotExist:
            raise NotFound("MEMBER_NOT_FOUND", member_id=member_id)
