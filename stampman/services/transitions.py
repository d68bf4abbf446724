"""Helpers shared by the purchase and redemption workflows.

Pending -> terminal transitions, actor labels and primary-key parsing.
"""

from stampman.exceptions import InvalidStateTransition, NotFound
from stampman.gates import Gates

PENDING = "pending"


def parse_id(value, code: str, field: str) -> int:
    """
    Primary key from caller input.

    Accepts ints and decimal strings. Anything else cannot name a row and
    raises NotFound with ``code``.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value)
    raise NotFound(code, **{field: repr(value)})


def actor_label(acting_user) -> str:
    """Short identifier stored in decided_by / created_by."""
    for attr in ("code", "username", "email"):
        value = getattr(acting_user, attr, None)
        if value:
            return str(value)[:150]
    return str(acting_user)[:150]


def apply_transition(record, target: str, **changes):
    """
    Move a locked Purchase/Redemption out of pending.

    The UPDATE is conditional on status still being pending, so a second
    approver racing past the row lock still loses: zero rows updated means
    someone else already decided.

    MUST be called inside transaction.atomic().

    Raises:
        InvalidStateTransition: If the record is not (or no longer) pending
    """
    Gates.pending_transition(record, target)

    updated = (
        type(record)
        .objects.filter(pk=record.pk, status=PENDING)
        .update(status=target, **changes)
    )
    if not updated:
        raise InvalidStateTransition(
            "INVALID_TRANSITION",
            message=f"{record._meta.model_name} #{record.pk} was decided concurrently.",
            target=target,
        )

    record.status = target
    for name, value in changes.items():
        setattr(record, name, value)
    return record
