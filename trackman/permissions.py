"""
Capabilities — what an acting role may do, resolved once per request.

The policy resolver never looks at role names; it asks the capabilities.
"""

from __future__ import annotations

from dataclasses import dataclass

from trackman.conf import trackman_settings


@dataclass(frozen=True)
class Capabilities:
    """Resolved permissions of the acting user."""

    can_act_as_admin: bool = False

    @classmethod
    def for_role(cls, role) -> Capabilities:
        """
        Resolve a role (Role member, plain string or None) into capabilities.

        Roles listed in TRACKMAN["ADMIN_ROLES"] can act as administrator.
        """
        if isinstance(role, Capabilities):
            return role
        admin_roles = {str(r) for r in trackman_settings.ADMIN_ROLES}
        return cls(can_act_as_admin=role is not None and str(role) in admin_roles)
