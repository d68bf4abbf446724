"""Deterministic backends for tests."""

from datetime import datetime, timezone

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock frozen at ``moment``. Tests move it by assigning the class attribute."""

    moment = NOW

    def now(self):
        return type(self).moment


class ScriptedCodeGenerator:
    """Returns ``codes`` in order, then falls back to a counter."""

    codes: list[str] = []
    issued = 0

    def new_code(self, prefix: str) -> str:
        cls = type(self)
        cls.issued += 1
        if cls.codes:
            return cls.codes.pop(0)
        return f"{prefix}-SEQ{cls.issued:05d}"


class AllowAll:
    def is_authorized(self, acting_user) -> bool:
        return True


class RecordingEmitter:
    """Collects emitted notifications in memory instead of the outbox."""

    sent: list[dict] = []

    def emit(self, target_member_id, message, timestamp, sender, kind="message") -> None:
        type(self).sent.append(
            {
                "member_id": target_member_id,
                "message": message,
                "timestamp": timestamp,
                "sender": sender,
                "kind": kind,
            }
        )
