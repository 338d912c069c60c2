# core/aliases.py

"""
Requirements and the alias table.

Pages and menu entries are gated by coarse aliases ("admin", "mis_rentas")
or by exact permission tokens ("usuarios.listar"). The requirement types
below keep the two apart; AliasTable.expand() reduces everything to
None / Single / AnyOf before evaluation.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

from core.permissions import canonical_token


# ============================================================
# REQUIREMENT SHAPES
# ============================================================
@dataclass(frozen=True)
class Single:
    token: str


@dataclass(frozen=True)
class AnyOf:
    tokens: Tuple[str, ...] = ()

    def __init__(self, tokens: Iterable[str] = ()):
        object.__setattr__(self, "tokens", tuple(tokens))


@dataclass(frozen=True)
class Alias:
    name: str


Requirement = Optional[Union[Single, AnyOf, Alias]]

# Blank token: nobody holds it
UNSATISFIABLE = Single("")


def describe_requirement(requirement: Requirement) -> str:
    if requirement is None:
        return "none"
    if isinstance(requirement, Single):
        return requirement.token
    if isinstance(requirement, Alias):
        return f"alias:{requirement.name}"
    return " | ".join(requirement.tokens) or "none"


# ============================================================
# ALIAS TABLE
# ============================================================
class AliasTable:
    """Read-only mapping alias -> permission tokens (OR semantics)."""

    def __init__(self, entries: Mapping[str, Iterable[str]]):
        table = {}
        for alias, tokens in entries.items():
            key = canonical_token(alias)
            if key is None:
                continue
            canonical = []
            for token in tokens:
                value = canonical_token(token)
                if value is not None and value not in canonical:
                    canonical.append(value)
            table[key] = tuple(canonical)
        self._table = MappingProxyType(table)

    def __contains__(self, alias) -> bool:
        key = canonical_token(alias)
        return key is not None and key in self._table

    def aliases(self) -> list:
        return list(self._table.keys())

    def resolve(self, alias: str) -> list:
        """
        Tokens for `alias`. An unknown alias is treated as a literal
        permission token, so callers may pass either.
        """
        key = canonical_token(alias)
        if key is None:
            return []
        if key in self._table:
            return list(self._table[key])
        return [key]

    def expand(self, requirement: Requirement) -> Optional[Union[Single, AnyOf]]:
        """
        Reduce a requirement to None / Single / AnyOf with canonical tokens.
        Only a truly empty AnyOf (or an alias mapped to nothing) means "no
        restriction configured" and becomes None. Blank names and lists of
        blank tokens are malformed and expand to an unsatisfiable Single.
        """
        if requirement is None:
            return None

        if isinstance(requirement, Alias):
            if canonical_token(requirement.name) is None:
                return UNSATISFIABLE
            tokens = self.resolve(requirement.name)
        elif isinstance(requirement, Single):
            token = canonical_token(requirement.token)
            return Single(token) if token else UNSATISFIABLE
        elif isinstance(requirement, AnyOf):
            if not requirement.tokens:
                return None
            tokens = [t for t in (canonical_token(x) for x in requirement.tokens) if t]
            if not tokens:
                # Only junk entries: malformed, never satisfiable
                return UNSATISFIABLE
        else:
            raise TypeError(f"Unsupported requirement: {requirement!r}")

        if not tokens:
            return None
        return AnyOf(tokens)


# ============================================================
# DEFAULT TABLE
# ============================================================
ALIAS_TABLE = AliasTable({
    # Administration area
    "admin": ["configuracion_sistema", "sistema.administrar"],
    "administration": ["configuracion_sistema", "sistema.administrar"],

    # Rentals
    "mis_rentas": ["rentas.ver", "rentas.listar"],
    "renovaciones": ["rentas.editar", "rentas.ver"],

    # Reports
    "reportes": ["reportes", "exportar"],
    "reports": ["reportes", "exportar"],

    # Payments / leads
    "centro_pagos": ["pagos.ver", "pagos.listar"],
    "interesados": ["interesados.ver", "interesados.listar", "ver_propiedades"],

    # Offices / branches
    "administraciones": ["oficinas.listar", "ver_oficinas", "ver_propiedades"],
    "sucursales": ["ver_oficinas", "ver_sucursales", "oficinas.listar"],

    # Users / roles
    "usuarios": ["usuarios.listar", "ver_usuarios"],
    "roles": ["gestionar_roles", "ver_permisos"],

    # Open to every authenticated user
    "dashboard": [],
})
