"""
Movement model — Immutable ledger of product status changes.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from trackman.models.enums import ProductStatus


class Movement(models.Model):
    """
    Immutable record of one committed status change.

    Rules:
    - NEVER update() or delete()
    - previous_status is None only for the creation event
    - Created ONLY by StatusTransitions, together with the product update
    """

    product = models.ForeignKey(
        'trackman.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Produto'),
    )

    previous_status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        null=True,
        blank=True,
        verbose_name=_('Status Anterior'),
    )
    new_status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        verbose_name=_('Novo Status'),
    )

    # Snapshot at the time of the move, 0 when not meaningful
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantidade'),
    )
    location = models.CharField(
        max_length=150,
        blank=True,
        verbose_name=_('Localização'),
    )
    reason = models.TextField(
        verbose_name=_('Motivo'),
        help_text=_('Obrigatório. Ex: "Produto danificado"'),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Usuário'),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    class Meta:
        verbose_name = _('Movimento')
        verbose_name_plural = _('Movimentos')
        ordering = ['-created_at', '-pk']
        indexes = [
            models.Index(fields=['product', 'created_at'], name='trackman_move_product_created'),
        ]

    def save(self, *args, **kwargs):
        """Save a new movement. Existing movements cannot be changed."""
        if self.pk:
            raise ValueError(
                "Movimentos são imutáveis. "
                "Para corrigir, registe uma nova mudança de status."
            )
        if not self.reason:
            raise ValueError("Motivo é obrigatório")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — movements are immutable."""
        raise ValueError("Movimentos são imutáveis e não podem ser eliminados.")

    @property
    def is_creation(self) -> bool:
        return self.previous_status is None

    def as_dict(self) -> dict:
        """Serialize with the acting user's public identity."""
        user = None
        if self.user_id is not None:
            user = {
                'id': self.user.pk,
                'name': self.user.get_full_name() or self.user.get_username(),
                'email': self.user.email,
            }
        return {
            'id': self.pk,
            'productId': self.product_id,
            'previousStatus': self.previous_status,
            'newStatus': self.new_status,
            'quantity': str(self.quantity),
            'location': self.location,
            'reason': self.reason,
            'createdAt': self.created_at.isoformat(),
            'user': user,
        }

    def __str__(self) -> str:
        origin = self.previous_status or '∅'
        return f"{origin} → {self.new_status} | {self.reason}"
