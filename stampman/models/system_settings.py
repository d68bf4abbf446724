"""Global economic ratios used at purchase-submission time."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class SystemSettings(models.Model):
    """
    Singleton row (pk=1) holding the currency-to-point and
    currency-to-stamp ratios.

    Values are checked by the calculator, not by the database, so a
    misconfigured row surfaces as ConfigurationError at submission time.
    """

    SINGLETON_PK = 1

    amount_per_point = models.DecimalField(
        _("amount per point"),
        max_digits=14,
        decimal_places=2,
        help_text=_("Purchase amount that earns one point"),
    )
    amount_per_stamp = models.DecimalField(
        _("amount per stamp"),
        max_digits=14,
        decimal_places=2,
        help_text=_("Purchase amount that suggests one stamp"),
    )
    points_expiration_days = models.PositiveIntegerField(
        _("points expiration (days)"),
    )
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "stampman_system_settings"
        verbose_name = _("system settings")
        verbose_name_plural = _("system settings")

    def __str__(self):
        return f"1pt/{self.amount_per_point} | 1 stamp/{self.amount_per_stamp}"

    @classmethod
    def load(cls) -> "SystemSettings":
        """Return the settings row, creating it from STAMPMAN defaults."""
        from stampman.conf import stampman_settings

        obj, _ = cls.objects.get_or_create(
            pk=cls.SINGLETON_PK,
            defaults={
                "amount_per_point": stampman_settings.DEFAULT_AMOUNT_PER_POINT,
                "amount_per_stamp": stampman_settings.DEFAULT_AMOUNT_PER_STAMP,
                "points_expiration_days": stampman_settings.DEFAULT_POINTS_EXPIRATION_DAYS,
            },
        )
        return obj
