"""Coupon model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class CouponStatus(models.TextChoices):
    ACTIVE = "active", _("Active")
    USED = "used", _("Used")
    EXPIRED = "expired", _("Expired")


class Coupon(models.Model):
    """
    Redeemable artifact minted when a stamp card completes.

    ``code`` is globally unique at the database level. Transitions to
    used/expired belong to the point-of-sale process, not to this app.
    """

    code = models.CharField(_("code"), max_length=64, unique=True)
    member = models.ForeignKey(
        "stampman.Member",
        on_delete=models.CASCADE,
        related_name="coupons",
        verbose_name=_("member"),
    )
    card = models.ForeignKey(
        "stampman.LoyaltyCard",
        on_delete=models.SET_NULL,
        related_name="coupons",
        null=True,
        blank=True,
        verbose_name=_("source card"),
    )
    purchase = models.ForeignKey(
        "stampman.Purchase",
        on_delete=models.SET_NULL,
        related_name="coupons",
        null=True,
        blank=True,
        verbose_name=_("source purchase"),
    )
    name = models.CharField(_("name"), max_length=200)
    description = models.CharField(_("description"), max_length=255, blank=True)
    status = models.CharField(
        _("status"),
        max_length=10,
        choices=CouponStatus.choices,
        default=CouponStatus.ACTIVE,
    )
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        db_table = "stampman_coupon"
        verbose_name = _("coupon")
        verbose_name_plural = _("coupons")
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.code} ({self.status})"
