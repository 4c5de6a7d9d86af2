"""
Company model — Tenant that owns products.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Company(models.Model):
    """Tenant. Products, movements and audit entries are scoped to one."""

    name = models.CharField(
        max_length=150,
        verbose_name=_('Nome'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Ativa'),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Empresa')
        verbose_name_plural = _('Empresas')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
