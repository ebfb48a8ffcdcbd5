from carrotc.parser.core.classes import Position
from carrotc.semantic_analyser.core.symbols import FnSym, FormalSym, Kind, StructDeclSym, StructSym, VarSym, placeholder_sym


def test_each_binding_variant_carries_its_kind():
    assert VarSym(type_label="int").kind == Kind.VAR
    assert FormalSym(type_label="bool").kind == Kind.FORMAL
    assert FnSym(type_label="void").kind == Kind.FUNC
    assert StructDeclSym(name="S").kind == Kind.STRUCT_DECL
    assert StructSym(type_label="S").kind == Kind.STRUCT


def test_binding_renders_as_its_type_label():
    assert str(VarSym(type_label="int")) == "int"
    assert str(StructSym(type_label="Point")) == "Point"
    assert str(StructDeclSym(name="Point")) == "struct"


def test_first_formal_declaration_wins():
    fn = FnSym(type_label="int")

    fn.add_formal("a", "int")
    fn.add_formal("b", "bool")
    fn.add_formal("a", "bool")

    assert fn.formal_names == ["a", "b"]
    assert fn.formal_types == ["int", "bool"]


def test_struct_declaration_owns_its_fields():
    # --- ARRANGE ---
    decl = StructDeclSym(name="Point")
    x_field = VarSym(type_label="int")

    # --- ACT ---
    decl.add_field("x", x_field)
    decl.add_field("x", VarSym(type_label="bool"))

    # --- ASSERT ---
    assert decl.lookup_field("x") is x_field
    assert decl.lookup_field("y") is None
    assert decl.fields.snapshot() == [{"x": "int"}]


def test_separate_struct_declarations_do_not_share_fields():
    first, second = StructDeclSym(name="A"), StructDeclSym(name="B")

    first.add_field("x", VarSym(type_label="int"))

    assert second.lookup_field("x") is None


def test_struct_declaration_serializes_fields_as_labels():
    decl = StructDeclSym(name="Point", declared_at=Position(line=1, col=8))
    decl.add_field("x", VarSym(type_label="int"))

    dumped = decl.model_dump(mode="json")

    assert dumped["fields"] == [{"x": "int"}]
    assert dumped["kind"] == "structDecl"


def test_struct_instance_does_not_serialize_its_declaration():
    decl = StructDeclSym(name="Point")

    dumped = StructSym(type_label="Point", struct_decl=decl).model_dump()

    assert "struct_decl" not in dumped


def test_placeholder_has_blank_type_and_given_position():
    pos = Position(line=3, col=4)

    sym = placeholder_sym(pos)

    assert sym.kind == Kind.VAR
    assert sym.type_label == " "
    assert sym.declared_at == pos
