"""
Stampman exceptions.

Every engine error is a StampmanError carrying a machine-readable code,
a human message and structured data. The subclasses form the taxonomy
callers map to user-facing messages:

    ValidationError            bad input (amount, stamp count, text)
    ConfigurationError         bad settings ratios or backends
    InsufficientPoints         balance below a reward's cost
    InsufficientAuthorization  acting user may not approve/reject
    NotFound                   unknown member, purchase, reward, ...
    InvalidStateTransition     record is no longer pending
"""

from typing import Any


class StampmanError(Exception):
    """
    Structured exception for loyalty operations.

    Usage:
        try:
            RedemptionService.request("MEM-001", reward_id)
        except StampmanError as e:
            if e.code == "INSUFFICIENT_POINTS":
                show_balance(e.data["available"])
    """

    default_code = "STAMPMAN_ERROR"

    _default_messages = {
        "STAMPMAN_ERROR": "Loyalty engine error",
        # Validation
        "INVALID_AMOUNT": "Purchase amount must be positive",
        "INVALID_STAMP_COUNT": "Stamp count must be a positive integer",
        "INVALID_DESCRIPTION": "Description is malformed",
        "INVALID_REWARD_TEXT": "Loyalty card has no reward text",
        "BRANCH_INACTIVE": "Branch is not accepting purchases",
        # Configuration
        "INVALID_AMOUNT_PER_POINT": "amount_per_point must be positive",
        "INVALID_AMOUNT_PER_STAMP": "amount_per_stamp must be positive",
        "COUPON_CODE_EXHAUSTED": "Could not generate a unique coupon code",
        "INVALID_PROMOTION_VALUE": "Active promotions produce a negative point award",
        # Balance
        "INSUFFICIENT_POINTS": "Insufficient points for redemption",
        # Authorization
        "NOT_AUTHORIZED": "Acting user is not allowed to perform this action",
        # Lookup
        "MEMBER_NOT_FOUND": "Member not found",
        "BRANCH_NOT_FOUND": "Branch not found",
        "PURCHASE_NOT_FOUND": "Purchase not found",
        "REDEMPTION_NOT_FOUND": "Redemption not found",
        "REWARD_NOT_FOUND": "Reward not found",
        "CARD_NOT_FOUND": "Loyalty card not found",
        "NOTIFICATION_NOT_FOUND": "Notification not found",
        # State machine
        "INVALID_TRANSITION": "Record is no longer pending",
    }

    def __init__(self, code: str | None = None, message: str | None = None, **data: Any):
        self.code = code or self.default_code
        self.message = message or self._default_messages.get(self.code, self.code)
        self.data = data
        super().__init__(f"[{self.code}] {self.message}")

    def as_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": self.data}


class ValidationError(StampmanError):
    default_code = "INVALID_AMOUNT"


class ConfigurationError(StampmanError):
    default_code = "INVALID_AMOUNT_PER_POINT"


class InsufficientPoints(StampmanError):
    default_code = "INSUFFICIENT_POINTS"


class InsufficientAuthorization(StampmanError):
    default_code = "NOT_AUTHORIZED"


class NotFound(StampmanError):
    default_code = "MEMBER_NOT_FOUND"


class InvalidStateTransition(StampmanError):
    default_code = "INVALID_TRANSITION"
