"""
Policy resolver — pure checks over the status graph and policy table.

No database access, no side effects. The same inputs always give the same
answer, so callers can use these to build UI affordances and the applier
re-runs them at commit time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from trackman.graph import STATUS_GRAPH
from trackman.permissions import Capabilities
from trackman.policies import POLICY_TABLE, TransitionPolicy


@dataclass(frozen=True)
class Authorization:
    """Outcome of PolicyResolver.authorize()."""

    allowed: bool
    reason: str | None = None
    code: str | None = None  # "ILLEGAL_TRANSITION", "ADMIN_REQUIRED"

    def __bool__(self) -> bool:
        return self.allowed


@dataclass(frozen=True)
class FieldValidation:
    """Outcome of PolicyResolver.validate_fields()."""

    missing_fields: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.missing_fields

    def __bool__(self) -> bool:
        return self.valid


def _is_missing(data: Mapping | None, field: str) -> bool:
    if data is None or field not in data:
        return True
    value = data[field]
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ''


class PolicyResolver:
    """Legality, authorization and evidence checks for a transition."""

    @classmethod
    def is_legal(cls, from_status, to_status) -> bool:
        return STATUS_GRAPH.is_edge(from_status, to_status)

    @classmethod
    def policy_for(cls, from_status, to_status) -> TransitionPolicy:
        return POLICY_TABLE.policy_for(from_status, to_status)

    @classmethod
    def authorize(cls, from_status, to_status, role) -> Authorization:
        """
        Can `role` move a product from `from_status` to `to_status`?

        Illegality is reported before the role check, so a non-edge never
        reveals its role requirements.

        Args:
            role: Role member, role string or already resolved Capabilities
        """
        if not cls.is_legal(from_status, to_status):
            return Authorization(
                allowed=False,
                reason=f"Transição de {from_status} para {to_status} não é permitida",
                code='ILLEGAL_TRANSITION',
            )

        policy = cls.policy_for(from_status, to_status)
        capabilities = Capabilities.for_role(role)
        if policy.requires_admin_role and not capabilities.can_act_as_admin:
            return Authorization(
                allowed=False,
                reason="Esta transição requer permissões de Administrador",
                code='ADMIN_REQUIRED',
            )

        return Authorization(allowed=True)

    @classmethod
    def validate_fields(cls, from_status, to_status, data: Mapping | None) -> FieldValidation:
        """
        Check that the evidence required by the edge's policy is present.

        A field is missing when absent, None, or a blank string. `data=None`
        means every required field is missing.
        """
        policy = cls.policy_for(from_status, to_status)
        missing = tuple(
            field for field in policy.required
            if _is_missing(data, field)
        )
        return FieldValidation(missing_fields=missing)
