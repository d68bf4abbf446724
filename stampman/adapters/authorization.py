"""Authorizer adapters."""

from stampman.models import MemberRole


class RoleAuthorizer:
    """Adapter: admins and superadmins (Member.role) may approve/reject."""

    allowed_roles = frozenset({MemberRole.ADMIN, MemberRole.SUPERADMIN})

    def is_authorized(self, acting_user) -> bool:
        if acting_user is None or not getattr(acting_user, "is_active", True):
            return False
        return getattr(acting_user, "role", None) in self.allowed_roles


class DjangoStaffAuthorizer:
    """
    Adapter: django.contrib.auth users with is_staff or is_superuser.

    Configuration in settings.py:
        STAMPMAN = {
            "AUTHORIZER": "stampman.adapters.authorization.DjangoStaffAuthorizer",
        }
    """

    def is_authorized(self, acting_user) -> bool:
        if acting_user is None or not getattr(acting_user, "is_active", False):
            return False
        return bool(
            getattr(acting_user, "is_staff", False)
            or getattr(acting_user, "is_superuser", False)
        )
