"""
Lifecycle queries — read-only operations.

All methods are classmethods on Lifecycle and use no locking.
"""

from trackman.graph import STATUS_GRAPH
from trackman.models.enums import ProductStatus
from trackman.models.movement import Movement


class LifecycleQueries:
    """Read-only lifecycle query methods."""

    @classmethod
    def next_possible_states(cls, status) -> list[ProductStatus]:
        """Statuses reachable in one step, in declared order."""
        return list(STATUS_GRAPH.edges_from(status))

    @classmethod
    def is_final(cls, status) -> bool:
        """Terminal statuses (DELIVERED, ELIMINATED) have no way out."""
        return STATUS_GRAPH.is_terminal(status)

    @classmethod
    def next_states(cls, product) -> dict:
        """
        What can be done next with this product.

        Returns:
            {"currentStatus", "nextPossibleStates", "isFinalState"}
        """
        status = product.status
        return {
            'currentStatus': str(status),
            'nextPossibleStates': [str(s) for s in cls.next_possible_states(status)],
            'isFinalState': cls.is_final(status),
        }

    @classmethod
    def history(cls, product):
        """Movements of a product, newest first, with the acting user loaded."""
        return (
            Movement.objects
            .filter(product=product)
            .select_related('user')
            .order_by('-created_at', '-pk')
        )
