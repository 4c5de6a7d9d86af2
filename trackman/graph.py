"""
Status graph — which product status changes exist at all.

    RECEIVED       → IN_ANALYSIS
    IN_ANALYSIS    → APPROVED | REJECTED
    REJECTED       → IN_RETURN
    APPROVED       → IN_STORAGE
    IN_STORAGE     → IN_PREPARATION | IN_SHIPPING
    IN_PREPARATION → IN_SHIPPING | CANCELLED
    IN_SHIPPING    → DELIVERED
    IN_RETURN      → RECEIVED | ELIMINATED
    CANCELLED      → IN_STORAGE

DELIVERED and ELIMINATED are terminal. CANCELLED → IN_STORAGE (reactivation)
and IN_RETURN → RECEIVED (re-processing) are the two re-entry cycles.

The graph is fixed data, validated once when the module is imported.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.core.exceptions import ImproperlyConfigured

from trackman.models.enums import ProductStatus


@dataclass(frozen=True)
class TransitionEdge:
    """Ordered (from, to) pair of statuses."""

    from_status: ProductStatus
    to_status: ProductStatus

    def as_dict(self) -> dict[str, str]:
        return {'from': str(self.from_status), 'to': str(self.to_status)}

    def __str__(self) -> str:
        return f"{self.from_status} → {self.to_status}"


class StatusGraph:
    """
    Immutable adjacency table over ProductStatus.

    Raises:
        ImproperlyConfigured: if a status has no entry, an unknown status
            appears, or a status points to itself.
    """

    def __init__(self, transitions: dict[ProductStatus, tuple[ProductStatus, ...]]):
        missing = [s for s in ProductStatus if s not in transitions]
        if missing:
            raise ImproperlyConfigured(
                f"Status sem transições definidas: {', '.join(missing)}"
            )
        for source, targets in transitions.items():
            if source not in ProductStatus.values:
                raise ImproperlyConfigured(f"Status desconhecido: {source}")
            for target in targets:
                if target not in ProductStatus.values:
                    raise ImproperlyConfigured(f"Status desconhecido: {target}")
                if target == source:
                    raise ImproperlyConfigured(f"Transição para o próprio status: {source}")

        self._transitions = {
            ProductStatus(source): tuple(ProductStatus(t) for t in targets)
            for source, targets in transitions.items()
        }

    def edges_from(self, status) -> tuple[ProductStatus, ...]:
        """Legal destinations in declared order, empty for a terminal status."""
        return self._transitions.get(status, ())

    def is_terminal(self, status) -> bool:
        return not self.edges_from(status)

    def is_edge(self, from_status, to_status) -> bool:
        return to_status in self.edges_from(from_status)

    def edges(self) -> list[TransitionEdge]:
        return [
            TransitionEdge(source, target)
            for source, targets in self._transitions.items()
            for target in targets
        ]

    def terminals(self) -> list[ProductStatus]:
        return [s for s, targets in self._transitions.items() if not targets]


STATUS_GRAPH = StatusGraph({
    ProductStatus.RECEIVED: (ProductStatus.IN_ANALYSIS,),
    ProductStatus.IN_ANALYSIS: (
        ProductStatus.APPROVED,
        ProductStatus.REJECTED,
    ),
    ProductStatus.REJECTED: (ProductStatus.IN_RETURN,),
    ProductStatus.APPROVED: (ProductStatus.IN_STORAGE,),
    ProductStatus.IN_STORAGE: (
        ProductStatus.IN_PREPARATION,
        ProductStatus.IN_SHIPPING,
    ),
    ProductStatus.IN_PREPARATION: (
        ProductStatus.IN_SHIPPING,
        ProductStatus.CANCELLED,
    ),
    ProductStatus.IN_SHIPPING: (ProductStatus.DELIVERED,),
    ProductStatus.DELIVERED: (),
    ProductStatus.IN_RETURN: (
        ProductStatus.RECEIVED,
        ProductStatus.ELIMINATED,
    ),
    ProductStatus.ELIMINATED: (),
    ProductStatus.CANCELLED: (ProductStatus.IN_STORAGE,),
})


def edges_from(status) -> tuple[ProductStatus, ...]:
    return STATUS_GRAPH.edges_from(status)


def is_terminal(status) -> bool:
    return STATUS_GRAPH.is_terminal(status)
