# tests/test_access.py

"""
Tests for the access decision (override + OR policy).
"""

import pytest

from core.access import AccessEvaluator, Principal, grants, has_override, is_administrator
from core.aliases import Alias, AliasTable, AnyOf, Single
from core.permissions import build_permission_set
from models.enums import CanonicalRole


def make_principal(role=CanonicalRole.agent, permissions=()):
    return Principal(role=role, permissions=build_permission_set(list(permissions)))


REQUIREMENTS = [
    None,
    Single("usuarios.listar"),
    Single("not.held.anywhere"),
    AnyOf(["a", "b"]),
    AnyOf([]),
    Alias("admin"),
    Alias("roles"),
    Alias("no_such_alias"),
]


@pytest.mark.parametrize("requirement", REQUIREMENTS)
def test_administrator_is_granted_everything(requirement):
    assert grants(make_principal(CanonicalRole.administrator), requirement) is True


@pytest.mark.parametrize("requirement", REQUIREMENTS)
def test_wildcard_token_is_granted_everything(requirement):
    assert grants(make_principal(permissions=["ALL"]), requirement) is True


@pytest.mark.parametrize("role", list(CanonicalRole))
def test_no_requirement_always_granted(role):
    assert grants(make_principal(role), None) is True
    assert grants(make_principal(role), AnyOf([])) is True


def test_alias_or_semantics():
    principal = make_principal(permissions=["rentas.ver"])
    assert grants(principal, Alias("mis_rentas")) is True
    assert grants(principal, AnyOf(["rentas.ver", "rentas.listar"])) is True
    assert grants(principal, Alias("usuarios")) is False


def test_single_requirement():
    principal = make_principal(permissions=["usuarios.listar"])
    assert grants(principal, Single("USUARIOS.LISTAR")) is True
    assert grants(principal, Single("usuarios.crear")) is False
    assert grants(principal, Single("")) is False


def test_empty_permissions_deny_non_empty_requirements():
    principal = make_principal(permissions=[])
    assert grants(principal, Single("usuarios.listar")) is False
    assert grants(principal, Alias("mis_rentas")) is False


def test_unknown_alias_matches_literal_token():
    principal = make_principal(permissions=["reportes.exportar"])
    assert grants(principal, Alias("reportes.exportar")) is True


def test_admin_lite_tokens_are_not_an_override():
    principal = make_principal(permissions=["sistema.administrar"])
    assert has_override(principal) is False
    assert grants(principal, Alias("admin")) is True
    assert grants(principal, Alias("usuarios")) is False


def test_missing_principal():
    assert grants(None, None) is True
    assert grants(None, Single("rentas.ver")) is False
    assert is_administrator(None) is False
    assert has_override(None) is False


def test_evaluator_uses_its_own_alias_table():
    evaluator = AccessEvaluator(AliasTable({"mis_rentas": ["custom.token"]}))
    principal = make_principal(permissions=["custom.token"])
    assert evaluator.grants(principal, Alias("mis_rentas")) is True
    assert grants(principal, Alias("mis_rentas")) is False


def test_principal_is_immutable():
    principal = make_principal()
    with pytest.raises(Exception):
        principal.role = CanonicalRole.administrator


@pytest.mark.parametrize("requirement", [Single(""), AnyOf(["", " "]), Alias("  ")])
def test_blank_requirements_are_never_granted(requirement):
    assert grants(make_principal(permissions=[]), requirement) is False
    assert grants(make_principal(permissions=["rentas.ver"]), requirement) is False
    assert grants(None, requirement) is False
