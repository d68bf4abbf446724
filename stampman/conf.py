"""
Stampman configuration.

Usage in settings.py:
    STAMPMAN = {
        "AUTHORIZER": "stampman.adapters.authorization.DjangoStaffAuthorizer",
        "COUPON_CODE_PREFIX": "CAFE",
        "NOTIFICATION_SENDER": "Loyalty Desk",
    }
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string


@dataclass
class StampmanSettings:
    """Stampman configuration settings."""

    # Collaborator backends (dotted paths)
    AUTHORIZER: str = "stampman.adapters.authorization.RoleAuthorizer"
    CLOCK: str = "stampman.adapters.runtime.DjangoClock"
    NOTIFICATION_EMITTER: str = "stampman.adapters.notifications.OutboxNotificationEmitter"
    CODE_GENERATOR: str = "stampman.adapters.runtime.UUIDCodeGenerator"

    # Coupons
    COUPON_CODE_PREFIX: str = "REW"
    COUPON_CODE_ATTEMPTS: int = 5

    # Notifications
    NOTIFICATION_SENDER: str = "System"
    NOTIFICATION_RETENTION_DAYS: int = 180

    # Seed values for the SystemSettings row
    DEFAULT_AMOUNT_PER_POINT: Decimal = Decimal("1000")
    DEFAULT_AMOUNT_PER_STAMP: Decimal = Decimal("50000")
    DEFAULT_POINTS_EXPIRATION_DAYS: int = 365


def get_stampman_settings() -> StampmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STAMPMAN", {})
    return StampmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stampman_settings(), name)


stampman_settings = _LazySettings()


def load_backend(setting_name: str):
    """Instantiate the backend configured under ``setting_name``."""
    backend_path = getattr(stampman_settings, setting_name)
    backend_class = import_string(backend_path)
    return backend_class()
