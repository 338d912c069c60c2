# tests/test_roles.py

"""
Tests for role normalization.
"""

import pytest

from core.roles import (
    DEFAULT_ROLE,
    RecordRole,
    StringRole,
    is_known_role,
    normalize_role,
    parse_raw_role,
    role_display_name,
)
from models.enums import CanonicalRole


@pytest.mark.parametrize(
    "raw",
    ["admin", "Administrador", "ADMINISTRADOR DEL SISTEMA", " administrador "],
)
def test_admin_spellings(raw):
    assert normalize_role(raw) == CanonicalRole.administrator


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("gerente", CanonicalRole.manager),
        ("Manager", CanonicalRole.manager),
        ("coordinador", CanonicalRole.coordinator),
        ("AGENTE", CanonicalRole.agent),
        ("propietario", CanonicalRole.owner),
        ("Inquilino", CanonicalRole.tenant),
        ("tenant", CanonicalRole.tenant),
        ("administrador_del_sistema", CanonicalRole.administrator),
    ],
)
def test_synonyms(raw, expected):
    assert normalize_role(raw) == expected


def test_accents_are_ignored():
    assert normalize_role("Ádministrádor") == CanonicalRole.administrator
    assert normalize_role("coordinadór") == CanonicalRole.coordinator


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "superhero", 42, 3.5, [], ["admin"], {}, {"uid": "x"}, object()],
)
def test_normalize_is_total(raw):
    assert normalize_role(raw) == DEFAULT_ROLE


def test_record_field_precedence():
    # name-like fields win over code
    assert normalize_role({"name": "gerente", "code": "admin"}) == CanonicalRole.manager
    assert normalize_role({"nombre": "Propietario", "code": "tenant"}) == CanonicalRole.owner
    assert normalize_role({"display_name": "Coordinador"}) == CanonicalRole.coordinator
    # code outranks the display label
    assert normalize_role({"display_name": "Gerente", "code": "admin"}) == CanonicalRole.administrator
    # blank name falls through to code
    assert normalize_role({"name": "  ", "code": "ADMIN"}) == CanonicalRole.administrator
    # non-string name is skipped
    assert normalize_role({"name": 7, "nombre": "inquilino"}) == CanonicalRole.tenant


def test_parse_raw_role_tags_shapes():
    assert parse_raw_role("admin") == StringRole("admin")
    assert isinstance(parse_raw_role({"name": "admin"}), RecordRole)
    assert parse_raw_role(None) is None
    assert parse_raw_role(12) is None


@pytest.mark.parametrize(
    "raw",
    ["admin", "Gerente", "coordinador", "agente", "OWNER", "inquilino", "unknown"],
)
def test_normalize_is_idempotent(raw):
    first = normalize_role(raw)
    assert normalize_role(first.value) == first
    assert normalize_role(first) == first


def test_custom_default():
    assert normalize_role("???", default=CanonicalRole.tenant) == CanonicalRole.tenant


def test_is_known_role():
    assert is_known_role("Administrador") is True
    assert is_known_role("authenticated") is False
    assert is_known_role(None) is False


def test_display_names():
    assert role_display_name(CanonicalRole.administrator) == "Administrador"
    assert role_display_name(CanonicalRole.tenant) == "Inquilino"
