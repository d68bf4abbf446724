"""
Stampman signals: public event API.

All signals are dispatched with transaction.on_commit(), so receivers
only ever see committed state.

Emitted signals:
- purchase_submitted: sender=Purchase, purchase=Purchase
- purchase_approved: sender=Purchase, purchase=Purchase, coupons=list[Coupon]
- purchase_rejected: sender=Purchase, purchase=Purchase
- coupon_minted: sender=Coupon, coupon=Coupon
- redemption_requested: sender=Redemption, redemption=Redemption
- redemption_approved: sender=Redemption, redemption=Redemption
- redemption_rejected: sender=Redemption, redemption=Redemption
"""

from django.dispatch import Signal

# Purchase workflow
purchase_submitted = Signal()
purchase_approved = Signal()
purchase_rejected = Signal()

# Stamp cards
coupon_minted = Signal()

# Redemption workflow
redemption_requested = Signal()
redemption_approved = Signal()
redemption_rejected = Signal()
