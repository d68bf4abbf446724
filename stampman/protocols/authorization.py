"""Authorization protocol."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Authorizer(Protocol):
    """
    Decides whether an acting user may approve or reject.

    Every approve/reject entry point asks this collaborator first.

    Configuration in settings.py:
        STAMPMAN = {
            "AUTHORIZER": "stampman.adapters.authorization.RoleAuthorizer",
        }
    """

    def is_authorized(self, acting_user: Any) -> bool:
        ...
