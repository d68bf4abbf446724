"""Stampman models.

Aggregates:
- Member: points balance and cosmetic tier
- Purchase / Redemption: pending -> approved | rejected
- StampCard: per-member progress on a LoyaltyCard
- Coupon: minted when a stamp card completes

Catalogue and configuration: Branch, Promotion, LoyaltyCard, Reward, SystemSettings.
Audit and outbox: PointTransaction, Notification, NotificationRead.
"""

from stampman.models.branch import Branch, BranchStatus
from stampman.models.member import Member, MemberRole, Tier
from stampman.models.system_settings import SystemSettings
from stampman.models.promotion import Promotion, PromotionKind, PromotionStatus
from stampman.models.purchase import Purchase, PurchaseStatus
from stampman.models.loyalty_card import LoyaltyCard, StampCard
from stampman.models.coupon import Coupon, CouponStatus
from stampman.models.reward import Reward, Redemption, RedemptionStatus
from stampman.models.ledger import PointTransaction, TransactionKind
from stampman.models.notification import Notification, NotificationKind, NotificationRead

__all__ = [
    "Branch",
    "BranchStatus",
    "Member",
    "MemberRole",
    "Tier",
    "SystemSettings",
    "Promotion",
    "PromotionKind",
    "PromotionStatus",
    "Purchase",
    "PurchaseStatus",
    "LoyaltyCard",
    "StampCard",
    "Coupon",
    "CouponStatus",
    "Reward",
    "Redemption",
    "RedemptionStatus",
    # Ledger
    "PointTransaction",
    "TransactionKind",
    # Outbox
    "Notification",
    "NotificationKind",
    "NotificationRead",
]
