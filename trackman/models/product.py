"""
Product model — Item moving through the warehouse pipeline.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _

from trackman.models.enums import ProductStatus


class Product(models.Model):
    """
    A received item tracked until it is delivered or eliminated.

    Rules:
    - status, last_moved_at and shipped_at are written ONLY by
      StatusTransitions (trackman.services.transitions)
    - shipped_at is set when landing on DELIVERED or ELIMINATED, never cleared
    """

    company = models.ForeignKey(
        'trackman.Company',
        on_delete=models.PROTECT,
        related_name='products',
        verbose_name=_('Empresa'),
    )
    internal_code = models.CharField(
        max_length=50,
        verbose_name=_('Código Interno'),
    )
    description = models.CharField(
        max_length=255,
        verbose_name=_('Descrição'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantidade'),
    )
    unit = models.CharField(
        max_length=20,
        verbose_name=_('Unidade'),
        help_text=_('Ex: un, kg, cx, palete'),
    )
    current_location = models.CharField(
        max_length=150,
        blank=True,
        verbose_name=_('Localização Atual'),
    )
    observations = models.TextField(
        blank=True,
        verbose_name=_('Observações'),
    )

    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.RECEIVED,
        db_index=True,
        verbose_name=_('Status'),
    )
    last_moved_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Última Movimentação'),
    )
    shipped_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Expedido em'),
        help_text=_('Preenchido ao entregar ou eliminar o produto'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Produto')
        verbose_name_plural = _('Produtos')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'internal_code'],
                name='trackman_product_unique_code_per_company',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'status'], name='trackman_prod_company_status'),
        ]

    @property
    def is_final(self) -> bool:
        """Is the product in a terminal status?"""
        from trackman.graph import is_terminal
        return is_terminal(self.status)

    def __str__(self) -> str:
        return f"{self.internal_code} — {self.description}"
