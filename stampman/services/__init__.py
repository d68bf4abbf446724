"""Stampman services.

- promotions: PromotionEvaluator (resolve, PromotionService)
- points: PointsCalculator (calculate, suggested_stamps)
- stamps: StampLedger (StampService)
- coupons: CouponIssuer (CouponService)
- purchases: PurchaseWorkflow (PurchaseService)
- redemptions: RedemptionWorkflow (RedemptionService)
- ledger, notifications: balance mutations and the notification outbox
"""
