"""Django app configuration for Trackman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class TrackmanConfig(AppConfig):
    """Configuration for Trackman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "trackman"
    verbose_name = _("Ciclo de Vida de Produtos")

    def ready(self):
        # Graph and policy table validate themselves on import
        from trackman import graph, policies  # noqa: F401
