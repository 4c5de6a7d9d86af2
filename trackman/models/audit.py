"""
AuditLog model — Append-only trail of mutating operations.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from trackman.models.enums import AuditAction


class AuditLog(models.Model):
    """
    One entry per mutating operation (creation, status change, ...).

    Written in the same transaction as the change it records.
    Never updated or deleted.
    """

    action = models.CharField(
        max_length=20,
        choices=AuditAction.choices,
        db_index=True,
        verbose_name=_('Ação'),
    )
    entity = models.CharField(
        max_length=50,
        verbose_name=_('Entidade'),
        help_text=_('Ex: Product'),
    )
    entity_id = models.CharField(
        max_length=64,
        verbose_name=_('ID da Entidade'),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Usuário'),
    )
    company = models.ForeignKey(
        'trackman.Company',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        verbose_name=_('Empresa'),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    class Meta:
        verbose_name = _('Registo de Auditoria')
        verbose_name_plural = _('Registos de Auditoria')
        ordering = ['-created_at', '-pk']
        indexes = [
            models.Index(fields=['entity', 'entity_id'], name='trackman_audit_entity'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError("Registos de auditoria são imutáveis.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Registos de auditoria são imutáveis.")

    def __str__(self) -> str:
        return f"{self.action} {self.entity}#{self.entity_id}"
