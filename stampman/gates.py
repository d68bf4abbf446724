"""
Stampman Gates - Guard rules shared by the workflows.

G1: ActingUserAuthorized - acting user may approve/reject (Authorizer backend)
G2: PendingTransition - only pending records can transition
G3: SufficientPoints - balance covers a reward's cost
G4: PositiveAmount - purchase amount > 0, storable exactly (cents, column bound)
G5: SettingsRatio - amount_per_point / amount_per_stamp > 0
G6: RewardText - loyalty card carries usable reward text
G7: PointTotal - frozen award is non-negative and fits the points columns

Each gate raises the matching StampmanError subclass and returns a
GateResult when it passes.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from stampman.conf import load_backend
from stampman.protocols.authorization import Authorizer
from stampman.exceptions import (
    ConfigurationError,
    InsufficientAuthorization,
    InsufficientPoints,
    InvalidStateTransition,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Purchase.amount is DecimalField(max_digits=14, decimal_places=2)
AMOUNT_MAX = Decimal("999999999999.99")
AMOUNT_QUANTUM = Decimal("0.01")

# Points columns are 32-bit IntegerFields
POINTS_MAX = 2_147_483_647


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Stampman guard rules."""

    # =========================================================================
    # G1: Acting user authorized
    # =========================================================================

    @classmethod
    def acting_user_authorized(cls, acting_user, action: str = "") -> GateResult:
        """
        G1: The configured Authorizer must accept the acting user.

        Args:
            acting_user: Whoever triggers the transition
            action: Label for logs and error data (e.g. "purchase.approve")

        Raises:
            InsufficientAuthorization: If the authorizer refuses
        """
        authorizer: Authorizer = load_backend("AUTHORIZER")
        if not authorizer.is_authorized(acting_user):
            logger.warning("G1_ActingUserAuthorized: %r refused for %s", acting_user, action)
            raise InsufficientAuthorization(
                "NOT_AUTHORIZED",
                gate="G1_ActingUserAuthorized",
                action=action,
            )
        return GateResult(True, "G1_ActingUserAuthorized")

    @classmethod
    def check_acting_user_authorized(cls, acting_user) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.acting_user_authorized(acting_user)
            return True
        except InsufficientAuthorization:
            return False

    # =========================================================================
    # G2: Pending transition
    # =========================================================================

    @classmethod
    def pending_transition(cls, record, target: str) -> GateResult:
        """
        G2: Purchases and redemptions leave "pending" exactly once.

        Args:
            record: Purchase or Redemption (anything with status and pk)
            target: Status the caller wants to move to

        Raises:
            InvalidStateTransition: If the record is already terminal
        """
        if record.status != "pending":
            raise InvalidStateTransition(
                "INVALID_TRANSITION",
                message=f"Cannot move {record._meta.model_name} #{record.pk} "
                f"from {record.status} to {target}.",
                gate="G2_PendingTransition",
                current=record.status,
                target=target,
            )
        return GateResult(True, "G2_PendingTransition")

    # =========================================================================
    # G3: Sufficient points
    # =========================================================================

    @classmethod
    def sufficient_points(cls, available: int, requested: int) -> GateResult:
        """
        G3: A redemption cannot overdraw the balance.

        Raises:
            InsufficientPoints: If available < requested
        """
        if available < requested:
            raise InsufficientPoints(
                "INSUFFICIENT_POINTS",
                gate="G3_SufficientPoints",
                available=available,
                requested=requested,
            )
        return GateResult(True, "G3_SufficientPoints")

    @classmethod
    def check_sufficient_points(cls, available: int, requested: int) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.sufficient_points(available, requested)
            return True
        except InsufficientPoints:
            return False

    # =========================================================================
    # G4: Positive amount
    # =========================================================================

    @classmethod
    def positive_amount(cls, amount) -> GateResult:
        """
        G4: Purchase amounts must be strictly positive numbers that the
        amount column stores exactly (at most AMOUNT_MAX, two decimals).

        Raises:
            ValidationError: If amount is missing, not numeric, <= 0,
                too large or more precise than cents
        """
        try:
            value = Decimal(str(amount))
        except (ArithmeticError, ValueError, TypeError):
            raise ValidationError("INVALID_AMOUNT", gate="G4_PositiveAmount", amount=str(amount))

        if not value.is_finite() or value <= 0:
            raise ValidationError("INVALID_AMOUNT", gate="G4_PositiveAmount", amount=str(amount))

        if value > AMOUNT_MAX:
            raise ValidationError(
                "INVALID_AMOUNT",
                message=f"Purchase amount must not exceed {AMOUNT_MAX}",
                gate="G4_PositiveAmount",
                amount=str(amount),
            )

        # Checked after the bound so quantize() stays within context precision
        if value != value.quantize(AMOUNT_QUANTUM):
            raise ValidationError(
                "INVALID_AMOUNT",
                message="Purchase amount must have at most 2 decimal places",
                gate="G4_PositiveAmount",
                amount=str(amount),
            )
        return GateResult(True, "G4_PositiveAmount")

    # =========================================================================
    # G5: Settings ratio
    # =========================================================================

    _RATIO_CODES = {
        "amount_per_point": "INVALID_AMOUNT_PER_POINT",
        "amount_per_stamp": "INVALID_AMOUNT_PER_STAMP",
    }

    @classmethod
    def settings_ratio(cls, settings, field: str) -> GateResult:
        """
        G5: Currency-to-point and currency-to-stamp ratios must be > 0.

        Args:
            settings: SystemSettings (or any object with the field)
            field: "amount_per_point" or "amount_per_stamp"

        Raises:
            ConfigurationError: If the ratio is missing or not positive
        """
        value = getattr(settings, field, None)
        if value is None or value <= 0:
            raise ConfigurationError(
                cls._RATIO_CODES[field],
                gate="G5_SettingsRatio",
                field=field,
                value=str(value),
            )
        return GateResult(True, "G5_SettingsRatio")

    # =========================================================================
    # G6: Reward text
    # =========================================================================

    @classmethod
    def reward_text(cls, card) -> GateResult:
        """
        G6: A loyalty card must carry reward text to derive coupons from.

        Raises:
            ValidationError: If the reward text is blank
        """
        if not (card.reward or "").strip():
            raise ValidationError(
                "INVALID_REWARD_TEXT",
                gate="G6_RewardText",
                card_id=card.pk,
            )
        return GateResult(True, "G6_RewardText")

    # =========================================================================
    # G7: Point total
    # =========================================================================

    @classmethod
    def point_total(cls, total: int, bonus: int = 0) -> GateResult:
        """
        G7: A frozen point award is never negative and fits the points columns.

        A negative total can only come from promotion values the database
        refuses (negative bonus, non-positive multiplier) reaching the
        calculator anyway, so it is reported as configuration.

        Raises:
            ConfigurationError: If total < 0
            ValidationError: If total exceeds POINTS_MAX
        """
        if total < 0:
            raise ConfigurationError(
                "INVALID_PROMOTION_VALUE",
                gate="G7_PointTotal",
                total=total,
                bonus=bonus,
            )
        if total > POINTS_MAX:
            raise ValidationError(
                "INVALID_AMOUNT",
                message=f"Purchase would earn more than {POINTS_MAX} points",
                gate="G7_PointTotal",
                total=total,
            )
        return GateResult(True, "G7_PointTotal")
