"""Clock and code generator adapters."""

import uuid

from django.utils import timezone


class DjangoClock:
    """Adapter: django.utils.timezone.now()."""

    def now(self):
        return timezone.now()


class UUIDCodeGenerator:
    """
    Adapter: PREFIX-XXXXXXXXXXXX from uuid4.

    Collisions are caught by the unique constraint on Coupon.code, not
    assumed away; see CouponService.mint().
    """

    length = 12

    def new_code(self, prefix: str) -> str:
        suffix = uuid.uuid4().hex[: self.length].upper()
        return f"{prefix}-{suffix}" if prefix else suffix
