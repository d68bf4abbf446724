"""NotificationEmitter adapter backed by the Notification outbox table."""

import logging

from stampman.models import Notification

logger = logging.getLogger(__name__)


class OutboxNotificationEmitter:
    """
    Adapter: writes Notification rows.

    Runs inside the caller's transaction, so a rolled-back approval never
    leaves a notification behind. Delivery (push, email, ...) reads the
    outbox.
    """

    def emit(self, target_member_id, message, timestamp, sender, kind="message") -> None:
        notification = Notification.objects.create(
            member_id=target_member_id,
            kind=kind,
            message=message,
            sender=sender,
            created_at=timestamp,
        )
        logger.debug(
            "Notification %s queued for %s",
            notification.pk,
            target_member_id or "all members",
        )
