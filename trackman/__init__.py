"""
Django Trackman — Motor de Ciclo de Vida de Produtos.

Recepção → análise → armazenamento → expedição → entrega, com histórico
de movimentos e trilha de auditoria.

Uso:
    from trackman import lifecycle, LifecycleError

    lifecycle.next_possible_states('IN_STORAGE')  # [IN_PREPARATION, IN_SHIPPING]
    lifecycle.change_status(produto, 'IN_ANALYSIS', user=u, role=Role.OPERATOR)
    lifecycle.history(produto)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'lifecycle':
        from trackman.service import Lifecycle
        return Lifecycle
    elif name == 'LifecycleError':
        from trackman.exceptions import LifecycleError
        return LifecycleError
    elif name == 'Company':
        from trackman.models.company import Company
        return Company
    elif name == 'Product':
        from trackman.models.product import Product
        return Product
    elif name == 'Movement':
        from trackman.models.movement import Movement
        return Movement
    elif name == 'AuditLog':
        from trackman.models.audit import AuditLog
        return AuditLog
    elif name == 'ProductStatus':
        from trackman.models.enums import ProductStatus
        return ProductStatus
    elif name == 'Role':
        from trackman.models.enums import Role
        return Role
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'lifecycle',
    'LifecycleError',
    'Company',
    'Product',
    'Movement',
    'AuditLog',
    'ProductStatus',
    'Role',
]

__version__ = '0.1.0'
