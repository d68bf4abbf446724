"""Point ledger: one immutable row per balance change."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TransactionKind(models.TextChoices):
    EARN = "earn", _("Earn")
    REDEEM = "redeem", _("Redeem")
    REFUND = "refund", _("Refund")
    ADJUST = "adjust", _("Adjust")


class PointTransaction(models.Model):
    """
    Immutable record of a points movement.

    Rows are append-only. (kind, reference) is unique for non-empty
    references, so the credit for ``purchase:12`` or the refund for
    ``redemption:7`` can only ever be written once.
    """

    member = models.ForeignKey(
        "stampman.Member",
        on_delete=models.CASCADE,
        related_name="transactions",
        verbose_name=_("member"),
    )
    kind = models.CharField(_("kind"), max_length=10, choices=TransactionKind.choices)
    points = models.IntegerField(
        _("points"),
        help_text=_("Positive for earn/refund, negative for redeem"),
    )
    balance_after = models.IntegerField(_("balance after"))
    description = models.CharField(_("description"), max_length=200)
    reference = models.CharField(
        _("reference"),
        max_length=100,
        blank=True,
        help_text=_("Source record (e.g. purchase:123)"),
    )
    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    created_by = models.CharField(_("created by"), max_length=150, blank=True)

    class Meta:
        db_table = "stampman_point_transaction"
        verbose_name = _("point transaction")
        verbose_name_plural = _("point transactions")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["member", "-created_at"], name="stampman_ptx_member_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["kind", "reference"],
                condition=~models.Q(reference=""),
                name="stampman_unique_kind_reference",
            ),
        ]

    def __str__(self):
        sign = "+" if self.points > 0 else ""
        return f"{sign}{self.points}pts: {self.description}"
