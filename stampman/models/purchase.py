"""Purchase model.

A purchase is submitted by a member and sits pending until staff approve
or reject it. Its point award is computed once, at submission, and frozen
in ``points`` together with the breakdown that produced it. Approval
credits exactly that value; it never recomputes from current settings.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class PurchaseStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    APPROVED = "approved", _("Approved")
    REJECTED = "rejected", _("Rejected")


class Purchase(models.Model):
    member = models.ForeignKey(
        "stampman.Member",
        on_delete=models.PROTECT,
        related_name="purchases",
        verbose_name=_("member"),
    )
    branch = models.ForeignKey(
        "stampman.Branch",
        on_delete=models.SET_NULL,
        related_name="purchases",
        null=True,
        blank=True,
        verbose_name=_("branch"),
    )
    amount = models.DecimalField(_("amount"), max_digits=14, decimal_places=2)
    description = models.CharField(_("description"), max_length=200, blank=True)
    receipt = models.CharField(
        _("receipt"),
        max_length=200,
        null=True,
        blank=True,
        help_text=_("Receipt or invoice number/URL, if provided"),
    )

    # Frozen at submission
    points = models.IntegerField(_("points"), editable=False)
    base_points = models.IntegerField(_("base points"), editable=False)
    multiplier = models.DecimalField(
        _("multiplier"),
        max_digits=10,
        decimal_places=2,
        default=Decimal("1"),
        editable=False,
    )
    bonus_points = models.IntegerField(_("bonus points"), default=0, editable=False)

    status = models.CharField(
        _("status"),
        max_length=10,
        choices=PurchaseStatus.choices,
        default=PurchaseStatus.PENDING,
        db_index=True,
    )
    submitted_at = models.DateTimeField(_("submitted at"))
    approved_at = models.DateTimeField(_("approved at"), null=True, blank=True)
    decided_at = models.DateTimeField(_("decided at"), null=True, blank=True)
    decided_by = models.CharField(_("decided by"), max_length=150, blank=True)

    class Meta:
        db_table = "stampman_purchase"
        verbose_name = _("purchase")
        verbose_name_plural = _("purchases")
        ordering = ["-submitted_at"]
        indexes = [
            models.Index(fields=["member", "-submitted_at"], name="stampman_purchase_member_idx"),
        ]

    def __str__(self):
        return f"#{self.pk} {self.member_id} ${self.amount} ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == PurchaseStatus.PENDING

    @property
    def reference(self) -> str:
        """Idempotency key used by ledger rows derived from this purchase."""
        return f"purchase:{self.pk}"
