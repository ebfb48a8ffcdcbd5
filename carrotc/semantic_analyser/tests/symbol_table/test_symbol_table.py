import io

import pytest

from carrotc.exceptions import DuplicateSymbolError, EmptySymTableError, WrongArgumentError
from carrotc.semantic_analyser.core.symbol_table import SymbolTable
from carrotc.semantic_analyser.core.symbols import FnSym, VarSym


def int_sym():
    return VarSym(type_label="int")


def bool_sym():
    return VarSym(type_label="bool")


def empty_table():
    table = SymbolTable()
    table.pop_scope()
    return table


def test_new_table_has_one_empty_scope():
    table = SymbolTable()

    assert len(table) == 1
    assert table.snapshot() == [{}]
    assert not table.is_error()


def test_push_then_pop_restores_front_scope():
    # --- ARRANGE ---
    table = SymbolTable()
    table.add("x", int_sym())
    before = table.snapshot()

    # --- ACT ---
    table.push_scope()
    table.add("y", bool_sym())
    table.pop_scope()

    # --- ASSERT ---
    assert table.snapshot() == before


def test_duplicate_in_same_scope_raises():
    table = SymbolTable()
    table.add("x", int_sym())

    with pytest.raises(DuplicateSymbolError) as exc_info:
        table.add("x", bool_sym())

    assert exc_info.value.name == "x"


def test_same_name_in_different_scopes_is_allowed():
    table = SymbolTable()
    table.add("x", int_sym())
    table.push_scope()

    table.add("x", bool_sym())

    assert len(table) == 2


def test_local_lookup_agrees_with_global_lookup():
    table = SymbolTable()
    table.add("x", int_sym())
    table.push_scope()
    inner = bool_sym()
    table.add("y", inner)

    assert table.lookup_local("y") is inner
    assert table.lookup_global("y") is inner
    assert table.lookup_local("x") is None
    assert table.lookup_global("x") is not None


def test_inner_binding_shadows_outer_until_popped():
    # --- ARRANGE ---
    table = SymbolTable()
    outer, inner = int_sym(), bool_sym()
    table.add("n", outer)

    # --- ACT & ASSERT ---
    table.push_scope()
    table.add("n", inner)
    assert table.lookup_global("n") is inner

    table.pop_scope()
    assert table.lookup_global("n") is outer


def test_missing_name_is_not_found():
    table = SymbolTable()

    assert table.lookup_local("ghost") is None
    assert table.lookup_global("ghost") is None


def test_lookups_on_empty_table_return_none():
    table = empty_table()

    assert table.lookup_local("x") is None
    assert table.lookup_global("x") is None


def test_pop_on_empty_table_raises():
    table = empty_table()

    with pytest.raises(EmptySymTableError):
        table.pop_scope()


@pytest.mark.parametrize(
    "name, sym, message",
    [
        pytest.param(None, None, "name and sym are null", id="both_null"),
        pytest.param(None, VarSym(type_label="int"), "name is null", id="name_null"),
        pytest.param("", VarSym(type_label="int"), "name is null", id="name_empty"),
        pytest.param("x", None, "sym is null", id="sym_null"),
    ],
)
def test_add_rejects_missing_arguments(name, sym, message):
    table = SymbolTable()

    with pytest.raises(WrongArgumentError, match=message):
        table.add(name, sym)


def test_argument_errors_take_precedence_over_empty_table():
    table = empty_table()

    with pytest.raises(WrongArgumentError):
        table.add(None, int_sym())


def test_add_on_empty_table_raises():
    table = empty_table()

    with pytest.raises(EmptySymTableError):
        table.add("x", int_sym())


def test_error_flag_is_sticky():
    table = SymbolTable()

    table.set_error()
    table.push_scope()
    table.pop_scope()

    assert table.is_error()


def test_dump_prints_scopes_front_first():
    # --- ARRANGE ---
    table = SymbolTable()
    table.add("main", FnSym(type_label="void"))
    table.push_scope()
    table.add("x", int_sym())
    table.add("y", bool_sym())
    out = io.StringIO()

    # --- ACT ---
    table.dump(out)

    # --- ASSERT ---
    assert out.getvalue() == "\n=== Sym Table ===\n{x=int, y=bool}\n{main=void}\n\n"
