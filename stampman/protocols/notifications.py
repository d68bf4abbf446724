"""Notification protocol."""

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class NotificationEmitter(Protocol):
    """
    Delivers a message to one member or, with no target, to everyone.

    Called inside the workflow's transaction; an implementation that
    writes to the database commits or rolls back with it.
    """

    def emit(
        self,
        target_member_id: int | None,
        message: str,
        timestamp: datetime,
        sender: str,
        kind: str = "message",
    ) -> None:
        """
        Emit one notification.

        Args:
            target_member_id: Member primary key, or None for a broadcast
            message: Text shown to the member
            timestamp: When the notified event happened (engine clock)
            sender: Display name of the sender
            kind: NotificationKind value
        """
        ...
