# core/access.py

"""
The access decision.

AccessEvaluator.grants() is the only place that encodes the override
and OR policy. The sidebar (core.navigation) and the page guard
(core.route_guard) both call it with the same Principal and AliasTable,
so what the menu shows and what the route allows cannot drift apart.
"""

from dataclasses import dataclass, field
from typing import Optional

from core.aliases import ALIAS_TABLE, AliasTable, AnyOf, Requirement, Single
from core.permissions import EMPTY_PERMISSIONS, PermissionSet
from models.enums import CanonicalRole


# ============================================================
# PRINCIPAL
# ============================================================
@dataclass(frozen=True)
class Principal:
    """
    Snapshot of the current user. Built once per profile fetch and
    replaced wholesale on refresh; never mutated.
    """
    role: CanonicalRole
    permissions: PermissionSet = field(default=EMPTY_PERMISSIONS)

    # Identity details carried for display only
    user_id: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    office: Optional[str] = None


def is_administrator(principal: Optional[Principal]) -> bool:
    """Role check only; the wildcard token does not make someone an administrator."""
    return principal is not None and principal.role == CanonicalRole.administrator


def has_override(principal: Optional[Principal]) -> bool:
    """Administrators and holders of the wildcard token bypass every requirement."""
    if principal is None:
        return False
    return is_administrator(principal) or principal.permissions.is_unrestricted()


# ============================================================
# EVALUATOR
# ============================================================
class AccessEvaluator:
    def __init__(self, alias_table: AliasTable = ALIAS_TABLE):
        self.alias_table = alias_table

    def grants(self, principal: Optional[Principal], requirement: Requirement = None) -> bool:
        expanded = self.alias_table.expand(requirement)

        if expanded is None:
            return True

        if principal is None:
            return False

        if has_override(principal):
            return True

        if isinstance(expanded, Single):
            return principal.permissions.contains(expanded.token)

        if isinstance(expanded, AnyOf):
            return any(principal.permissions.contains(t) for t in expanded.tokens)

        return False


default_evaluator = AccessEvaluator()


def grants(principal: Optional[Principal], requirement: Requirement = None) -> bool:
    """Shortcut bound to the process-wide ALIAS_TABLE."""
    return default_evaluator.grants(principal, requirement)
