"""
Lifecycle Service — The single public interface for the product lifecycle.

Usage:
    from trackman import lifecycle, LifecycleError

    lifecycle.next_possible_states(product.status)
    lifecycle.authorize(product.status, 'APPROVED', Role.OPERATOR)
    result = lifecycle.change_status(product, 'IN_ANALYSIS', user=u, role=Role.OPERATOR)
    result.transition.as_dict()  # {'from': 'RECEIVED', 'to': 'IN_ANALYSIS'}
"""

from trackman.services.queries import LifecycleQueries
from trackman.services.resolver import PolicyResolver
from trackman.services.transitions import StatusTransitions


class Lifecycle(LifecycleQueries, PolicyResolver, StatusTransitions):
    """
    Single interface for all lifecycle operations.

    Queries and policy checks are pure reads. change_status() and receive()
    are the only writers of Product.status and of the movement ledger.
    """
