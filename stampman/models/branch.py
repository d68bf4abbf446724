"""Branch model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class BranchStatus(models.TextChoices):
    ACTIVE = "active", _("Active")
    INACTIVE = "inactive", _("Inactive")


class Branch(models.Model):
    """Physical store where purchases are made."""

    name = models.CharField(_("name"), max_length=100)
    address = models.CharField(_("address"), max_length=200, blank=True)
    city = models.CharField(_("city"), max_length=100, blank=True)
    phone = models.CharField(_("phone"), max_length=30, blank=True)
    manager = models.CharField(_("manager"), max_length=100, blank=True)
    status = models.CharField(
        _("status"),
        max_length=10,
        choices=BranchStatus.choices,
        default=BranchStatus.ACTIVE,
    )
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        db_table = "stampman_branch"
        verbose_name = _("branch")
        verbose_name_plural = _("branches")
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def is_active(self) -> bool:
        return self.status == BranchStatus.ACTIVE
