"""
Tests for Stampman gates, exceptions and backend adapters.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from stampman.adapters.authorization import DjangoStaffAuthorizer, RoleAuthorizer
from stampman.adapters.notifications import OutboxNotificationEmitter
from stampman.adapters.runtime import DjangoClock, UUIDCodeGenerator
from stampman.conf import get_stampman_settings, load_backend, stampman_settings
from stampman.exceptions import (
    ConfigurationError,
    InsufficientAuthorization,
    InsufficientPoints,
    InvalidStateTransition,
    NotFound,
    StampmanError,
    ValidationError,
)
from stampman.gates import AMOUNT_MAX, POINTS_MAX, GateResult, Gates
from stampman.models import MemberRole
from stampman.protocols import Authorizer, Clock, CodeGenerator, NotificationEmitter
from stampman.tests.helpers import FixedClock


def user(**attrs):
    return SimpleNamespace(**{"is_active": True, **attrs})


# =============================================================================
# G1: Acting user authorized
# =============================================================================


class TestActingUserAuthorized:
    @pytest.mark.parametrize("role", [MemberRole.ADMIN, MemberRole.SUPERADMIN])
    def test_staff_roles_pass(self, role):
        result = Gates.acting_user_authorized(user(role=role))
        assert result == GateResult(True, "G1_ActingUserAuthorized")

    def test_plain_user_refused(self):
        with pytest.raises(InsufficientAuthorization) as exc:
            Gates.acting_user_authorized(user(role=MemberRole.USER), action="purchase.approve")
        assert exc.value.data["action"] == "purchase.approve"

    def test_none_refused(self):
        assert not Gates.check_acting_user_authorized(None)

    def test_inactive_refused(self):
        assert not Gates.check_acting_user_authorized(user(role=MemberRole.ADMIN, is_active=False))

    def test_backend_swapped_by_settings(self, settings):
        settings.STAMPMAN = {**settings.STAMPMAN, "AUTHORIZER": "stampman.tests.helpers.AllowAll"}
        assert Gates.check_acting_user_authorized(None)


class TestDjangoStaffAuthorizer:
    def test_staff(self):
        assert DjangoStaffAuthorizer().is_authorized(user(is_staff=True))

    def test_superuser(self):
        assert DjangoStaffAuthorizer().is_authorized(user(is_superuser=True))

    def test_regular_user(self):
        assert not DjangoStaffAuthorizer().is_authorized(user(is_staff=False))

    def test_inactive_staff(self):
        assert not DjangoStaffAuthorizer().is_authorized(user(is_staff=True, is_active=False))

    def test_anonymous(self):
        assert not DjangoStaffAuthorizer().is_authorized(None)

    @pytest.mark.django_db
    def test_auth_user_model(self, django_user_model):
        staff = django_user_model.objects.create_user("clerk", password="x", is_staff=True)
        shopper = django_user_model.objects.create_user("shopper", password="x")
        assert DjangoStaffAuthorizer().is_authorized(staff)
        assert not DjangoStaffAuthorizer().is_authorized(shopper)


class TestRoleAuthorizer:
    def test_missing_role(self):
        assert not RoleAuthorizer().is_authorized(user())


# =============================================================================
# G2 - G7
# =============================================================================


class TestPendingTransition:
    def _record(self, status):
        meta = SimpleNamespace(model_name="purchase")
        return SimpleNamespace(pk=7, status=status, _meta=meta)

    def test_pending_passes(self):
        assert Gates.pending_transition(self._record("pending"), "approved").passed

    @pytest.mark.parametrize("status", ["approved", "rejected"])
    def test_terminal_refused(self, status):
        with pytest.raises(InvalidStateTransition) as exc:
            Gates.pending_transition(self._record(status), "approved")
        assert exc.value.data["current"] == status
        assert "#7" in exc.value.message


class TestSufficientPoints:
    def test_enough(self):
        assert Gates.sufficient_points(1000, 400).passed

    def test_exact(self):
        assert Gates.check_sufficient_points(400, 400)

    def test_short(self):
        assert not Gates.check_sufficient_points(399, 400)
        with pytest.raises(InsufficientPoints):
            Gates.sufficient_points(0, 1)


class TestPositiveAmount:
    @pytest.mark.parametrize("amount", [1, "0.01", Decimal("150000"), 2.5, "1.10", AMOUNT_MAX])
    def test_valid(self, amount):
        assert Gates.positive_amount(amount).passed

    @pytest.mark.parametrize("amount", [0, "-1", "", "ten", None, "Infinity", float("nan")])
    def test_invalid(self, amount):
        with pytest.raises(ValidationError) as exc:
            Gates.positive_amount(amount)
        assert exc.value.code == "INVALID_AMOUNT"

    @pytest.mark.parametrize("amount", ["1e15", "1000000000000", AMOUNT_MAX + Decimal("0.01")])
    def test_beyond_column_bound(self, amount):
        with pytest.raises(ValidationError) as exc:
            Gates.positive_amount(amount)
        assert "must not exceed" in exc.value.message

    @pytest.mark.parametrize("amount", ["999.999", "0.001", Decimal("10.005"), 0.1 + 0.2])
    def test_sub_cent_precision(self, amount):
        with pytest.raises(ValidationError) as exc:
            Gates.positive_amount(amount)
        assert "2 decimal places" in exc.value.message


class TestSettingsRatio:
    @pytest.mark.parametrize(
        "field,code",
        [
            ("amount_per_point", "INVALID_AMOUNT_PER_POINT"),
            ("amount_per_stamp", "INVALID_AMOUNT_PER_STAMP"),
        ],
    )
    def test_zero_refused(self, field, code):
        with pytest.raises(ConfigurationError) as exc:
            Gates.settings_ratio(SimpleNamespace(**{field: Decimal("0")}), field)
        assert exc.value.code == code

    def test_missing_refused(self):
        with pytest.raises(ConfigurationError):
            Gates.settings_ratio(SimpleNamespace(), "amount_per_point")

    def test_positive_passes(self):
        settings = SimpleNamespace(amount_per_point=Decimal("1000"))
        assert Gates.settings_ratio(settings, "amount_per_point").passed


class TestRewardText:
    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_refused(self, text):
        with pytest.raises(ValidationError, match="INVALID_REWARD_TEXT"):
            Gates.reward_text(SimpleNamespace(pk=1, reward=text))

    def test_text_passes(self):
        assert Gates.reward_text(SimpleNamespace(pk=1, reward="Free Americano")).passed


class TestPointTotal:
    @pytest.mark.parametrize("total", [0, 350, POINTS_MAX])
    def test_within_column(self, total):
        assert Gates.point_total(total).passed

    def test_negative_refused(self):
        with pytest.raises(ConfigurationError) as exc:
            Gates.point_total(-450, bonus=-500)
        assert exc.value.code == "INVALID_PROMOTION_VALUE"
        assert exc.value.data["bonus"] == -500

    def test_overflow_refused(self):
        with pytest.raises(ValidationError, match="INVALID_AMOUNT"):
            Gates.point_total(POINTS_MAX + 1)


# =============================================================================
# Exceptions
# =============================================================================


class TestExceptions:
    def test_default_message(self):
        e = InsufficientPoints(available=10, requested=400)
        assert e.code == "INSUFFICIENT_POINTS"
        assert e.message == "Insufficient points for redemption"
        assert str(e) == "[INSUFFICIENT_POINTS] Insufficient points for redemption"

    def test_as_dict(self):
        e = NotFound("REWARD_NOT_FOUND", reward_id=3)
        assert e.as_dict() == {
            "code": "REWARD_NOT_FOUND",
            "message": "Reward not found",
            "data": {"reward_id": 3},
        }

    def test_custom_message(self):
        e = ValidationError("INVALID_AMOUNT", message="Points must be positive")
        assert e.message == "Points must be positive"

    def test_unknown_code_used_as_message(self):
        assert StampmanError("SOMETHING_ELSE").message == "SOMETHING_ELSE"

    @pytest.mark.parametrize(
        "cls",
        [
            ValidationError,
            ConfigurationError,
            InsufficientPoints,
            InsufficientAuthorization,
            NotFound,
            InvalidStateTransition,
        ],
    )
    def test_taxonomy(self, cls):
        assert issubclass(cls, StampmanError)
        assert cls().code == cls.default_code


# =============================================================================
# Configuration and runtime adapters
# =============================================================================


class TestConf:
    def test_defaults(self, settings):
        settings.STAMPMAN = {}
        conf = get_stampman_settings()
        assert conf.COUPON_CODE_PREFIX == "REW"
        assert conf.COUPON_CODE_ATTEMPTS == 5
        assert conf.NOTIFICATION_SENDER == "System"
        assert conf.DEFAULT_AMOUNT_PER_POINT == Decimal("1000")
        assert isinstance(load_backend("CLOCK"), DjangoClock)

    def test_lazy_proxy_rereads(self, settings):
        settings.STAMPMAN = {"COUPON_CODE_PREFIX": "CAFE"}
        assert stampman_settings.COUPON_CODE_PREFIX == "CAFE"
        settings.STAMPMAN = {"COUPON_CODE_PREFIX": "SHOP"}
        assert stampman_settings.COUPON_CODE_PREFIX == "SHOP"

    def test_unknown_key_rejected(self, settings):
        settings.STAMPMAN = {"NOT_A_SETTING": 1}
        with pytest.raises(TypeError):
            get_stampman_settings()

    def test_test_clock_installed(self):
        assert isinstance(load_backend("CLOCK"), FixedClock)


class TestRuntimeAdapters:
    def test_django_clock_is_aware(self):
        assert DjangoClock().now().tzinfo is not None

    def test_uuid_code_format(self):
        code = UUIDCodeGenerator().new_code("REW")
        prefix, suffix = code.split("-")
        assert prefix == "REW"
        assert len(suffix) == 12
        assert suffix == suffix.upper()

    def test_uuid_code_without_prefix(self):
        assert len(UUIDCodeGenerator().new_code("")) == 12

    def test_uuid_codes_differ(self):
        generator = UUIDCodeGenerator()
        codes = {generator.new_code("REW") for _ in range(500)}
        assert len(codes) == 500


class TestProtocolConformance:
    @pytest.mark.parametrize(
        "adapter,protocol",
        [
            (RoleAuthorizer, Authorizer),
            (DjangoStaffAuthorizer, Authorizer),
            (DjangoClock, Clock),
            (FixedClock, Clock),
            (UUIDCodeGenerator, CodeGenerator),
            (OutboxNotificationEmitter, NotificationEmitter),
        ],
    )
    def test_adapter_satisfies_protocol(self, adapter, protocol):
        assert isinstance(adapter(), protocol)
