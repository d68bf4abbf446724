"""Redemption workflow: request (debit), approve, reject (refund)."""

import pytest

from stampman.exceptions import (
    InsufficientAuthorization,
    InsufficientPoints,
    InvalidStateTransition,
    NotFound,
)
from stampman.models import (
    Member,
    PointTransaction,
    Redemption,
    RedemptionStatus,
    Reward,
    TransactionKind,
)
from stampman.services.ledger import LedgerService
from stampman.services.redemptions import RedemptionService
from stampman.signals import redemption_rejected, redemption_requested
from stampman.tests.helpers import NOW


def balance(member):
    return Member.objects.get(pk=member.pk).points_balance


@pytest.fixture
def requested(rich_member, reward):
    """MEM-002 (1000 pts) asks for a 400-point reward."""
    return RedemptionService.request("MEM-002", reward.pk)


class TestRequest:
    def test_debits_immediately(self, requested, rich_member):
        assert requested.status == RedemptionStatus.PENDING
        assert requested.points == 400
        assert requested.reward_name == "Free Shipping"
        assert requested.requested_at == NOW
        assert balance(rich_member) == 600

    def test_lifetime_points_unchanged(self, requested, rich_member):
        rich_member.refresh_from_db()
        assert rich_member.lifetime_points == 1000

    def test_ledger_row(self, requested, rich_member):
        tx = PointTransaction.objects.get(member=rich_member)
        assert tx.kind == TransactionKind.REDEEM
        assert tx.points == -400
        assert tx.balance_after == 600
        assert tx.reference == f"redemption:{requested.pk}"

    def test_cost_frozen_at_request(self, requested, rich_member, reward, admin_member):
        reward.points = 900
        reward.save()

        RedemptionService.reject(requested.pk, acting_user=admin_member)

        assert balance(rich_member) == 1000

    def test_insufficient_points_changes_nothing(self, member, reward):
        with pytest.raises(InsufficientPoints) as exc:
            RedemptionService.request("MEM-001", reward.pk)

        assert exc.value.data["available"] == 0
        assert exc.value.data["requested"] == 400
        assert not Redemption.objects.exists()
        assert not PointTransaction.objects.exists()
        assert balance(member) == 0

    def test_exact_balance_allowed(self, rich_member, db):
        everything = Reward.objects.create(name="Weekend Getaway", points=1000)
        RedemptionService.request("MEM-002", everything.pk)
        assert balance(rich_member) == 0

    def test_two_requests_cannot_overdraw(self, rich_member, reward):
        RedemptionService.request("MEM-002", reward.pk)
        RedemptionService.request("MEM-002", reward.pk)

        with pytest.raises(InsufficientPoints):
            RedemptionService.request("MEM-002", reward.pk)

        assert balance(rich_member) == 200
        assert Redemption.objects.count() == 2

    def test_unknown_reward(self, rich_member):
        with pytest.raises(NotFound, match="REWARD_NOT_FOUND"):
            RedemptionService.request("MEM-002", 9999)

    def test_inactive_reward(self, rich_member, reward):
        reward.is_active = False
        reward.save()
        with pytest.raises(NotFound, match="REWARD_NOT_FOUND"):
            RedemptionService.request("MEM-002", reward.pk)

    def test_unknown_member(self, reward):
        with pytest.raises(NotFound, match="MEMBER_NOT_FOUND"):
            RedemptionService.request("NOPE", reward.pk)

    @pytest.mark.parametrize("reward_id", ["abc", None, 4.0])
    def test_malformed_reward_id(self, rich_member, reward_id):
        with pytest.raises(NotFound, match="REWARD_NOT_FOUND"):
            RedemptionService.request("MEM-002", reward_id)
        assert balance(rich_member) == 1000
        assert not Redemption.objects.exists()

    def test_requested_signal(self, rich_member, reward, django_capture_on_commit_callbacks):
        received = []

        def handler(sender, redemption, **kwargs):
            received.append(redemption.points)

        redemption_requested.connect(handler)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                RedemptionService.request("MEM-002", reward.pk)
        finally:
            redemption_requested.disconnect(handler)

        assert received == [400]


class TestApprove:
    def test_no_balance_change(self, requested, rich_member, admin_member):
        redemption = RedemptionService.approve(requested.pk, acting_user=admin_member)

        assert redemption.status == RedemptionStatus.APPROVED
        assert redemption.decided_at == NOW
        assert redemption.decided_by == "ADM-001"
        assert balance(rich_member) == 600
        assert PointTransaction.objects.count() == 1

    def test_terminal(self, requested, admin_member):
        RedemptionService.approve(requested.pk, acting_user=admin_member)

        with pytest.raises(InvalidStateTransition):
            RedemptionService.approve(requested.pk, acting_user=admin_member)
        with pytest.raises(InvalidStateTransition):
            RedemptionService.reject(requested.pk, acting_user=admin_member)

    def test_unauthorized(self, requested, rich_member):
        with pytest.raises(InsufficientAuthorization):
            RedemptionService.approve(requested.pk, acting_user=rich_member)

        requested.refresh_from_db()
        assert requested.status == RedemptionStatus.PENDING

    def test_unknown(self, db, admin_member):
        with pytest.raises(NotFound, match="REDEMPTION_NOT_FOUND"):
            RedemptionService.approve(9999, acting_user=admin_member)

    def test_malformed_id(self, requested, rich_member, admin_member):
        with pytest.raises(NotFound, match="REDEMPTION_NOT_FOUND"):
            RedemptionService.approve("x", acting_user=admin_member)
        with pytest.raises(NotFound, match="REDEMPTION_NOT_FOUND"):
            RedemptionService.reject("", acting_user=admin_member)
        assert balance(rich_member) == 600


class TestReject:
    def test_refunds_frozen_cost(self, requested, rich_member, admin_member):
        redemption = RedemptionService.reject(requested.pk, acting_user=admin_member)

        assert redemption.status == RedemptionStatus.REJECTED
        assert balance(rich_member) == 1000

        refund = PointTransaction.objects.get(kind=TransactionKind.REFUND)
        assert refund.points == 400
        assert refund.balance_after == 1000
        assert refund.reference == f"redemption:{requested.pk}"

    def test_refund_not_counted_as_lifetime(self, requested, rich_member, admin_member):
        RedemptionService.reject(requested.pk, acting_user=admin_member)
        rich_member.refresh_from_db()
        assert rich_member.lifetime_points == 1000

    def test_refund_happens_once(self, requested, rich_member, admin_member, superadmin_member):
        RedemptionService.reject(requested.pk, acting_user=admin_member)

        with pytest.raises(InvalidStateTransition):
            RedemptionService.reject(requested.pk, acting_user=superadmin_member)
        with pytest.raises(InvalidStateTransition):
            RedemptionService.approve(requested.pk, acting_user=superadmin_member)

        assert balance(rich_member) == 1000
        assert PointTransaction.objects.filter(kind=TransactionKind.REFUND).count() == 1

    def test_unauthorized(self, requested, rich_member):
        with pytest.raises(InsufficientAuthorization):
            RedemptionService.reject(requested.pk, acting_user=None)
        assert balance(rich_member) == 600

    def test_rejected_signal(self, requested, admin_member, django_capture_on_commit_callbacks):
        received = []

        def handler(sender, redemption, **kwargs):
            received.append(redemption.status)

        redemption_rejected.connect(handler)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                RedemptionService.reject(requested.pk, acting_user=admin_member)
        finally:
            redemption_rejected.disconnect(handler)

        assert received == [RedemptionStatus.REJECTED]


class TestQueries:
    def test_pending_and_for_member(self, requested, rich_member, reward, admin_member):
        second = RedemptionService.request("MEM-002", reward.pk)
        RedemptionService.approve(requested.pk, acting_user=admin_member)

        assert RedemptionService.pending() == [second]
        assert len(RedemptionService.for_member("MEM-002")) == 2

    def test_transactions_newest_first(self, requested, rich_member, admin_member):
        RedemptionService.reject(requested.pk, acting_user=admin_member)

        kinds = [tx.kind for tx in LedgerService.get_transactions("MEM-002")]
        assert kinds == [TransactionKind.REFUND, TransactionKind.REDEEM]
        assert LedgerService.get_balance("MEM-002") == 1000
