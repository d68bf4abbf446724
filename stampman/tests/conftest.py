"""Pytest fixtures for Stampman tests."""

from datetime import timedelta
from decimal import Decimal

import pytest

from stampman.models import (
    Branch,
    LoyaltyCard,
    Member,
    MemberRole,
    Promotion,
    PromotionKind,
    Reward,
    SystemSettings,
)
from stampman.tests.helpers import NOW, FixedClock, RecordingEmitter, ScriptedCodeGenerator


@pytest.fixture(autouse=True)
def stampman_backends(settings):
    """Freeze the engine clock and reset scripted backends for every test."""
    FixedClock.moment = NOW
    ScriptedCodeGenerator.codes = []
    ScriptedCodeGenerator.issued = 0
    RecordingEmitter.sent = []
    settings.STAMPMAN = {"CLOCK": "stampman.tests.helpers.FixedClock"}
    return settings


@pytest.fixture
def system_settings(db):
    """$1000 per point, $50000 per stamp."""
    return SystemSettings.objects.create(
        pk=SystemSettings.SINGLETON_PK,
        amount_per_point=Decimal("1000"),
        amount_per_stamp=Decimal("50000"),
        points_expiration_days=365,
    )


@pytest.fixture
def branch(db):
    return Branch.objects.create(name="Downtown", city="Bogota", manager="Ana")


@pytest.fixture
def member(db):
    """Shopper with an empty balance."""
    return Member.objects.create(code="MEM-001", name="Juan Perez", email="juan@example.com")


@pytest.fixture
def rich_member(db):
    """Shopper with 1000 points."""
    return Member.objects.create(
        code="MEM-002",
        name="Laura Gomez",
        points_balance=1000,
        lifetime_points=1000,
    )


@pytest.fixture
def admin_member(db, branch):
    return Member.objects.create(
        code="ADM-001",
        name="Maria Garcia",
        role=MemberRole.ADMIN,
        branch=branch,
    )


@pytest.fixture
def superadmin_member(db):
    return Member.objects.create(code="SUP-001", name="Carlos Rodriguez", role=MemberRole.SUPERADMIN)


@pytest.fixture
def coffee_card(db):
    return LoyaltyCard.objects.create(
        name="Free Coffee",
        total_stamps=10,
        reward="Free Americano",
        category="Coffee",
    )


@pytest.fixture
def vip_card(db):
    return LoyaltyCard.objects.create(
        name="VIP Discount",
        total_stamps=5,
        reward="20% Discount",
        category="Discounts",
    )


@pytest.fixture
def reward(db):
    return Reward.objects.create(name="Free Shipping", points=400)


@pytest.fixture
def double_points(db):
    """Active 2x multiplier around NOW."""
    return Promotion.objects.create(
        title="Double Points",
        kind=PromotionKind.MULTIPLIER,
        value=Decimal("2"),
        starts_at=NOW - timedelta(days=7),
        ends_at=NOW + timedelta(days=7),
    )


@pytest.fixture
def welcome_bonus(db):
    """Active +50 bonus around NOW."""
    return Promotion.objects.create(
        title="Welcome Bonus",
        kind=PromotionKind.BONUS,
        value=Decimal("50"),
        starts_at=NOW - timedelta(days=1),
        ends_at=NOW + timedelta(days=1),
    )
