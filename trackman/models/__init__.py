"""
Trackman Models.

Core models for the product lifecycle:
- Company: Tenant
- Product: Item moving through the pipeline (current status)
- Movement: Immutable ledger of status changes
- AuditLog: Append-only trail of mutating operations
"""

from trackman.models.audit import AuditLog
from trackman.models.company import Company
from trackman.models.enums import AuditAction, ProductStatus, Role
from trackman.models.movement import Movement
from trackman.models.product import Product

__all__ = [
    'ProductStatus',
    'Role',
    'AuditAction',
    'Company',
    'Product',
    'Movement',
    'AuditLog',
]
