"""Promotion model: time-bounded point modifiers."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class PromotionKind(models.TextChoices):
    MULTIPLIER = "multiplier", _("Multiplier")
    BONUS = "bonus", _("Bonus")
    # Stored and displayed, never applied to points.
    DISCOUNT = "discount", _("Discount")


class PromotionStatus(models.TextChoices):
    ACTIVE = "active", _("Active")
    INACTIVE = "inactive", _("Inactive")


class Promotion(models.Model):
    """
    Campaign rule active between starts_at and ends_at (both inclusive).

    value is the factor for multipliers (2 = double points) and the
    number of extra points for bonuses.
    """

    title = models.CharField(_("title"), max_length=100)
    description = models.TextField(_("description"), blank=True)
    kind = models.CharField(_("kind"), max_length=20, choices=PromotionKind.choices)
    value = models.DecimalField(_("value"), max_digits=10, decimal_places=2)
    starts_at = models.DateTimeField(_("starts at"))
    ends_at = models.DateTimeField(_("ends at"))
    status = models.CharField(
        _("status"),
        max_length=10,
        choices=PromotionStatus.choices,
        default=PromotionStatus.ACTIVE,
    )
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        db_table = "stampman_promotion"
        verbose_name = _("promotion")
        verbose_name_plural = _("promotions")
        ordering = ["-starts_at"]
        indexes = [
            models.Index(fields=["status", "starts_at", "ends_at"], name="stampman_promo_window_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(kind=PromotionKind.MULTIPLIER) | models.Q(value__gt=0),
                name="stampman_promo_multiplier_positive",
            ),
            models.CheckConstraint(
                condition=~models.Q(kind=PromotionKind.BONUS) | models.Q(value__gte=0),
                name="stampman_promo_bonus_non_negative",
            ),
        ]

    def __str__(self):
        if self.kind == PromotionKind.MULTIPLIER:
            return f"{self.title} ({self.value}x)"
        if self.kind == PromotionKind.BONUS:
            return f"{self.title} (+{self.value})"
        return self.title

    def is_active_at(self, moment) -> bool:
        return (
            self.status == PromotionStatus.ACTIVE
            and self.starts_at <= moment <= self.ends_at
        )
