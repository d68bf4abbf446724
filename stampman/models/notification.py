"""Notification outbox."""

from datetime import timedelta

from django.db import models
from django.utils.translation import gettext_lazy as _


class NotificationKind(models.TextChoices):
    PURCHASE_APPROVED = "purchase_approved", _("Purchase approved")
    REWARD_EARNED = "reward_earned", _("Purchase approved, reward earned")
    PURCHASE_REJECTED = "purchase_rejected", _("Purchase rejected")
    BROADCAST = "broadcast", _("Broadcast")
    MESSAGE = "message", _("Message")


class Notification(models.Model):
    """
    Message written in the same transaction as the change it reports.

    member is null for broadcasts.
    """

    member = models.ForeignKey(
        "stampman.Member",
        on_delete=models.CASCADE,
        related_name="notifications",
        null=True,
        blank=True,
        verbose_name=_("member"),
    )
    kind = models.CharField(
        _("kind"),
        max_length=20,
        choices=NotificationKind.choices,
        default=NotificationKind.MESSAGE,
    )
    message = models.TextField(_("message"))
    sender = models.CharField(_("sender"), max_length=150)
    created_at = models.DateTimeField(_("created at"), db_index=True)

    class Meta:
        db_table = "stampman_notification"
        verbose_name = _("notification")
        verbose_name_plural = _("notifications")
        ordering = ["-created_at", "-id"]

    def __str__(self):
        target = self.member_id or "all"
        return f"[{target}] {self.message[:40]}"

    @property
    def is_broadcast(self) -> bool:
        return self.member_id is None

    @classmethod
    def cleanup_old(cls, days: int | None = None):
        """Remove notifications older than N days, measured on the engine clock."""
        from stampman.conf import load_backend, stampman_settings

        if days is None:
            days = stampman_settings.NOTIFICATION_RETENTION_DAYS
        cutoff = load_backend("CLOCK").now() - timedelta(days=days)
        return cls.objects.filter(created_at__lt=cutoff).delete()


class NotificationRead(models.Model):
    """
    Read receipt: one row per (member, notification) pair.

    Broadcasts are a single shared Notification row, so read state lives
    here instead of on the notification.
    """

    member = models.ForeignKey(
        "stampman.Member",
        on_delete=models.CASCADE,
        related_name="notification_reads",
        verbose_name=_("member"),
    )
    notification = models.ForeignKey(
        Notification,
        on_delete=models.CASCADE,
        related_name="reads",
        verbose_name=_("notification"),
    )
    read_at = models.DateTimeField(_("read at"))

    class Meta:
        db_table = "stampman_notification_read"
        verbose_name = _("notification read")
        verbose_name_plural = _("notification reads")
        constraints = [
            models.UniqueConstraint(
                fields=["member", "notification"],
                name="stampman_unique_notification_read",
            ),
        ]

    def __str__(self):
        return f"{self.member_id} read #{self.notification_id}"
