"""Reward catalogue and point redemptions."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Reward(models.Model):
    """Catalogue entry members can buy with points."""

    name = models.CharField(_("name"), max_length=100)
    description = models.CharField(_("description"), max_length=200, blank=True)
    points = models.PositiveIntegerField(_("points cost"))
    is_active = models.BooleanField(_("active"), default=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        db_table = "stampman_reward"
        verbose_name = _("reward")
        verbose_name_plural = _("rewards")
        ordering = ["points"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(points__gt=0),
                name="stampman_reward_points_positive",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.points}pts)"


class RedemptionStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    APPROVED = "approved", _("Approved")
    REJECTED = "rejected", _("Rejected")


class Redemption(models.Model):
    """
    Points-for-reward request.

    The cost is debited when the request is created and frozen here;
    rejection refunds exactly ``points``.
    """

    member = models.ForeignKey(
        "stampman.Member",
        on_delete=models.PROTECT,
        related_name="redemptions",
        verbose_name=_("member"),
    )
    reward = models.ForeignKey(
        Reward,
        on_delete=models.SET_NULL,
        related_name="redemptions",
        null=True,
        blank=True,
        verbose_name=_("reward"),
    )
    reward_name = models.CharField(_("reward name"), max_length=100)
    points = models.PositiveIntegerField(_("points"), editable=False)
    status = models.CharField(
        _("status"),
        max_length=10,
        choices=RedemptionStatus.choices,
        default=RedemptionStatus.PENDING,
        db_index=True,
    )
    requested_at = models.DateTimeField(_("requested at"))
    decided_at = models.DateTimeField(_("decided at"), null=True, blank=True)
    decided_by = models.CharField(_("decided by"), max_length=150, blank=True)

    class Meta:
        db_table = "stampman_redemption"
        verbose_name = _("redemption")
        verbose_name_plural = _("redemptions")
        ordering = ["-requested_at"]

    def __str__(self):
        return f"#{self.pk} {self.reward_name} -{self.points}pts ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == RedemptionStatus.PENDING

    @property
    def reference(self) -> str:
        return f"redemption:{self.pk}"
