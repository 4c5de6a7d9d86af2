"""
Enums for Trackman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ProductStatus(models.TextChoices):
    """
    Pipeline stage of a product.

    Values are stored as-is (upper case names), labels are what operators see.
    Legal moves between them live in trackman.graph.
    """
    RECEIVED = 'RECEIVED', _('Recebido')
    IN_ANALYSIS = 'IN_ANALYSIS', _('Em Análise')
    APPROVED = 'APPROVED', _('Aprovado')
    REJECTED = 'REJECTED', _('Rejeitado')
    IN_STORAGE = 'IN_STORAGE', _('Em Armazenamento')
    IN_PREPARATION = 'IN_PREPARATION', _('Em Preparação')
    IN_SHIPPING = 'IN_SHIPPING', _('Em Expedição')
    DELIVERED = 'DELIVERED', _('Entregue')
    IN_RETURN = 'IN_RETURN', _('Em Devolução')
    ELIMINATED = 'ELIMINATED', _('Eliminado')
    CANCELLED = 'CANCELLED', _('Cancelado')


class Role(models.TextChoices):
    """Role of the acting user."""
    SUPER_ADMIN = 'SUPER_ADMIN', _('Super Administrador')  # Whole platform
    ADMIN = 'ADMIN', _('Administrador')
    OPERATOR = 'OPERATOR', _('Operador')


class AuditAction(models.TextChoices):
    """Kind of mutating operation recorded in the audit log."""
    CREATE = 'CREATE', _('Criação')
    UPDATE = 'UPDATE', _('Atualização')
    DELETE = 'DELETE', _('Eliminação')
    STATUS_CHANGE = 'STATUS_CHANGE', _('Mudança de status')
