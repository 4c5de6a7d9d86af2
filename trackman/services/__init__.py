"""
Lifecycle services — modular organization of lifecycle operations.

Re-exports all public classes:
    from trackman.services import PolicyResolver, LifecycleQueries, StatusTransitions
"""

from trackman.services.queries import LifecycleQueries
from trackman.services.resolver import Authorization, FieldValidation, PolicyResolver
from trackman.services.transitions import StatusTransitions, TransitionResult

__all__ = [
    'PolicyResolver',
    'Authorization',
    'FieldValidation',
    'LifecycleQueries',
    'StatusTransitions',
    'TransitionResult',
]
