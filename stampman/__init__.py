"""
Django Stampman - Loyalty transaction engine.

Usage:
    from stampman import PurchaseService, RedemptionService
    from stampman.gates import Gates, GateResult

    purchase = PurchaseService.submit("MEM-001", Decimal("150000"), branch_id=1)
    approval = PurchaseService.approve(purchase.pk, [(card.pk, 2)], acting_user=admin)
    redemption = RedemptionService.request("MEM-001", reward.pk)
"""


def __getattr__(name):
    if name == "PurchaseService":
        from stampman.services.purchases import PurchaseService

        return PurchaseService
    if name == "RedemptionService":
        from stampman.services.redemptions import RedemptionService

        return RedemptionService
    if name == "StampService":
        from stampman.services.stamps import StampService

        return StampService
    if name == "PromotionService":
        from stampman.services.promotions import PromotionService

        return PromotionService
    if name == "Gates":
        from stampman.gates import Gates

        return Gates
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "PurchaseService",
    "RedemptionService",
    "StampService",
    "PromotionService",
    "Gates",
]
__version__ = "0.1.0"
