"""
Trackman configuration.

Usage in settings.py:
    TRACKMAN = {
        "DEFAULT_LOCATION": "Cais de recepção",
        "CREATION_REASON": "Produto criado e recebido no sistema.",
        "ADMIN_ROLES": ("ADMIN", "SUPER_ADMIN"),
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class TrackmanSettings:
    """Trackman configuration settings."""

    # Location given to received products without one
    DEFAULT_LOCATION: str = "Localização não definida"

    # Movement reason recorded for the creation event
    CREATION_REASON: str = "Produto criado e recebido no sistema."

    # Roles that satisfy transitions requiring an administrator
    ADMIN_ROLES: tuple = ("ADMIN", "SUPER_ADMIN")


def get_trackman_settings() -> TrackmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "TRACKMAN", {})
    return TrackmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in TrackmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_trackman_settings(), name)


trackman_settings = _LazySettings()
