# tests/test_aliases.py

"""
Tests for the alias table and requirement expansion.
"""

import pytest

from core.aliases import ALIAS_TABLE, UNSATISFIABLE, Alias, AliasTable, AnyOf, Single, describe_requirement


def test_resolve_known_alias():
    assert ALIAS_TABLE.resolve("mis_rentas") == ["rentas.ver", "rentas.listar"]
    assert ALIAS_TABLE.resolve(" MIS_RENTAS ") == ["rentas.ver", "rentas.listar"]


def test_unknown_alias_is_a_literal_token():
    assert ALIAS_TABLE.resolve("Usuarios.Crear") == ["usuarios.crear"]


def test_blank_alias_resolves_to_nothing():
    assert ALIAS_TABLE.resolve("  ") == []


def test_table_is_read_only():
    with pytest.raises(TypeError):
        ALIAS_TABLE._table["new"] = ("x",)


def test_expand_alias_to_any_of():
    assert ALIAS_TABLE.expand(Alias("usuarios")) == AnyOf(["usuarios.listar", "ver_usuarios"])


def test_expand_empty_any_of_is_no_requirement():
    assert ALIAS_TABLE.expand(AnyOf([])) is None
    assert ALIAS_TABLE.expand(Alias("dashboard")) is None
    assert ALIAS_TABLE.expand(None) is None


def test_expand_canonicalizes_tokens():
    assert ALIAS_TABLE.expand(Single(" Rentas.VER ")) == Single("rentas.ver")
    assert ALIAS_TABLE.expand(AnyOf(["A", "b"])) == AnyOf(["a", "b"])


def test_expand_rejects_unknown_shapes():
    with pytest.raises(TypeError):
        ALIAS_TABLE.expand("mis_rentas")


def test_custom_table_dedupes_and_canonicalizes():
    table = AliasTable({" Reports ": ["Reportes", "reportes", "EXPORTAR"]})
    assert "reports" in table
    assert table.resolve("reports") == ["reportes", "exportar"]


def test_describe_requirement():
    assert describe_requirement(None) == "none"
    assert describe_requirement(Single("rentas.ver")) == "rentas.ver"
    assert describe_requirement(Alias("admin")) == "alias:admin"
    assert describe_requirement(AnyOf(["a", "b"])) == "a | b"


def test_expand_blank_tokens_fail_closed():
    assert ALIAS_TABLE.expand(AnyOf(["", "  "])) == UNSATISFIABLE
    assert ALIAS_TABLE.expand(AnyOf([None, 3])) == UNSATISFIABLE
    assert ALIAS_TABLE.expand(Alias("  ")) == UNSATISFIABLE
    assert ALIAS_TABLE.expand(Single("")) == UNSATISFIABLE
    # junk mixed with real tokens keeps the real ones
    assert ALIAS_TABLE.expand(AnyOf([" ", "Rentas.Ver"])) == AnyOf(["rentas.ver"])
