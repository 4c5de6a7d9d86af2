"""
Transition policies — extra requirements attached to specific edges.

An edge without an entry has no requirement beyond existing in the graph.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.core.exceptions import ImproperlyConfigured

from trackman.graph import STATUS_GRAPH, StatusGraph, TransitionEdge
from trackman.models.enums import ProductStatus

COMMENT_FIELD = 'reason'


@dataclass(frozen=True)
class TransitionPolicy:
    """Requirements for committing one transition."""

    requires_admin_role: bool = False
    requires_comment: bool = False
    required_fields: tuple[str, ...] = ()

    @property
    def required(self) -> tuple[str, ...]:
        """Named fields followed by the comment field, without duplicates."""
        fields = list(dict.fromkeys(self.required_fields))
        if self.requires_comment and COMMENT_FIELD not in fields:
            fields.append(COMMENT_FIELD)
        return tuple(fields)


EMPTY_POLICY = TransitionPolicy()


class PolicyTable:
    """
    Policies keyed by TransitionEdge.

    Raises:
        ImproperlyConfigured: if a policy is declared for a pair that is
            not an edge of the graph.
    """

    def __init__(self, policies: dict[TransitionEdge, TransitionPolicy],
                 graph: StatusGraph = STATUS_GRAPH):
        for edge in policies:
            if not graph.is_edge(edge.from_status, edge.to_status):
                raise ImproperlyConfigured(
                    f"Política declarada para transição inexistente: {edge}"
                )
        self._policies = dict(policies)

    def policy_for(self, from_status, to_status) -> TransitionPolicy:
        return self._policies.get(TransitionEdge(from_status, to_status), EMPTY_POLICY)


POLICY_TABLE = PolicyTable({
    TransitionEdge(ProductStatus.RECEIVED, ProductStatus.IN_ANALYSIS): TransitionPolicy(),
    TransitionEdge(ProductStatus.IN_ANALYSIS, ProductStatus.APPROVED): TransitionPolicy(
        requires_admin_role=True,
    ),
    TransitionEdge(ProductStatus.IN_ANALYSIS, ProductStatus.REJECTED): TransitionPolicy(
        requires_admin_role=True,
        requires_comment=True,
        required_fields=('reason',),
    ),
    TransitionEdge(ProductStatus.REJECTED, ProductStatus.IN_RETURN): TransitionPolicy(
        requires_comment=True,
    ),
    TransitionEdge(ProductStatus.IN_PREPARATION, ProductStatus.IN_SHIPPING): TransitionPolicy(),
    TransitionEdge(ProductStatus.IN_SHIPPING, ProductStatus.DELIVERED): TransitionPolicy(),
})


def policy_for(from_status, to_status) -> TransitionPolicy:
    return POLICY_TABLE.policy_for(from_status, to_status)
