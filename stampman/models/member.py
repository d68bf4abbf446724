"""Member model.

A member is anyone known to the loyalty program: shoppers earning points
and the staff (admin, superadmin) approving their purchases. The default
authorizer decides on ``role``; see stampman.adapters.authorization.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MemberRole(models.TextChoices):
    USER = "user", _("User")
    ADMIN = "admin", _("Admin")
    SUPERADMIN = "superadmin", _("Super admin")


class Tier(models.TextChoices):
    """Cosmetic status label. Set externally, never computed by the engine."""

    BRONZE = "bronze", _("Bronze")
    SILVER = "silver", _("Silver")
    GOLD = "gold", _("Gold")


class Member(models.Model):
    """
    Loyalty program member.

    points_balance is only mutated by the workflows in stampman.services,
    always under select_for_update(). A DB check constraint keeps it >= 0.
    """

    code = models.CharField(
        _("code"),
        max_length=50,
        unique=True,
        help_text=_("Unique member code (e.g. MEM-001)"),
    )
    name = models.CharField(_("name"), max_length=150)
    email = models.EmailField(_("email"), blank=True, db_index=True)
    role = models.CharField(
        _("role"),
        max_length=20,
        choices=MemberRole.choices,
        default=MemberRole.USER,
    )
    branch = models.ForeignKey(
        "stampman.Branch",
        on_delete=models.SET_NULL,
        related_name="staff",
        null=True,
        blank=True,
        verbose_name=_("branch"),
        help_text=_("Branch managed by this admin"),
    )

    # Points
    points_balance = models.IntegerField(
        _("points balance"),
        default=0,
        help_text=_("Points available for redemption"),
    )
    lifetime_points = models.IntegerField(
        _("lifetime points"),
        default=0,
        help_text=_("Total points ever earned (never decreases)"),
    )

    tier = models.CharField(
        _("tier"),
        max_length=20,
        choices=Tier.choices,
        blank=True,
    )

    is_active = models.BooleanField(_("active"), default=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "stampman_member"
        verbose_name = _("member")
        verbose_name_plural = _("members")
        ordering = ["code"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(points_balance__gte=0),
                name="stampman_member_points_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.code}: {self.points_balance}pts"

    @property
    def is_staff_member(self) -> bool:
        return self.role in (MemberRole.ADMIN, MemberRole.SUPERADMIN)
