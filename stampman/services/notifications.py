"""Notification service: emitter backend, member inbox and read receipts."""

from django.db.models import Q

from stampman.conf import load_backend, stampman_settings
from stampman.exceptions import NotFound
from stampman.gates import Gates
from stampman.models import Member, Notification, NotificationKind, NotificationRead
from stampman.protocols.notifications import NotificationEmitter
from stampman.services.transitions import parse_id


class NotificationService:
    """
    Notification entry points.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def emit(
        cls,
        member_id: int | None,
        message: str,
        sender: str | None = None,
        kind: str = NotificationKind.MESSAGE,
        timestamp=None,
    ) -> None:
        """Send through the configured emitter, stamped with the engine clock."""
        emitter: NotificationEmitter = load_backend("NOTIFICATION_EMITTER")
        emitter.emit(
            member_id,
            message,
            timestamp or load_backend("CLOCK").now(),
            sender or stampman_settings.NOTIFICATION_SENDER,
            kind=kind,
        )

    @classmethod
    def broadcast(cls, message: str, acting_user) -> None:
        """
        Send a message to every member, signed by the acting user.

        Raises:
            InsufficientAuthorization: If the acting user may not broadcast
        """
        Gates.acting_user_authorized(acting_user, action="notification.broadcast")
        sender = getattr(acting_user, "name", "") or str(acting_user)
        cls.emit(None, message, sender=sender, kind=NotificationKind.BROADCAST)

    @classmethod
    def for_member(cls, member_code: str, limit: int = 50) -> list[Notification]:
        """Member's own notifications plus broadcasts, newest first."""
        member = cls._get_member(member_code)
        return list(cls._visible_to(member)[:limit])

    # ======================================================================
    # Read state
    # ======================================================================

    @classmethod
    def unread_count(cls, member_code: str) -> int:
        """Visible notifications the member has not marked as read."""
        member = cls._get_member(member_code)
        return cls._visible_to(member).exclude(reads__member=member).count()

    @classmethod
    def mark_read(cls, member_code: str, notification_id: int) -> bool:
        """
        Mark one visible notification (own or broadcast) as read.

        Returns:
            True if it was unread, False if it was already read

        Raises:
            NotFound: Unknown member, or a notification the member cannot see
        """
        member = cls._get_member(member_code)
        pk = parse_id(notification_id, "NOTIFICATION_NOT_FOUND", "notification_id")
        try:
            notification = cls._visible_to(member).get(pk=pk)
        except Notification.DoesNotExist:
            raise NotFound("NOTIFICATION_NOT_FOUND", notification_id=notification_id)

        _, created = NotificationRead.objects.get_or_create(
            member=member,
            notification=notification,
            defaults={"read_at": load_backend("CLOCK").now()},
        )
        return created

    @classmethod
    def mark_all_read(cls, member_code: str) -> int:
        """Mark every visible notification as read. Returns how many were unread."""
        member = cls._get_member(member_code)
        now = load_backend("CLOCK").now()
        unread = cls._visible_to(member).exclude(reads__member=member)
        receipts = [
            NotificationRead(member=member, notification=n, read_at=now) for n in unread
        ]
        NotificationRead.objects.bulk_create(receipts, ignore_conflicts=True)
        return len(receipts)

    # ======================================================================
    # Helpers
    # ======================================================================

    @classmethod
    def _get_member(cls, member_code: str) -> Member:
        try:
            return Member.objects.get(code=member_code, is_active=True)
        except Member.DoesNotExist:
            raise NotFound("MEMBER_NOT_FOUND", member_code=member_code)

    @classmethod
    def _visible_to(cls, member: Member):
        return Notification.objects.filter(Q(member=member) | Q(member__isnull=True))
