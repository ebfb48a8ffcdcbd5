"""
Binding records ("syms") created by name analysis.

Every declaration introduces exactly one binding. The set of variants is closed
and each one is tagged with its `Kind`, so consumers dispatch on `sym.kind`.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from carrotc.config.config import PLACEHOLDER_TYPE, STRUCT_TYPE
from carrotc.parser.core.classes import Position

from .symbol_table import SymbolTable


class Kind(str, Enum):
    VAR = "var"
    FORMAL = "formal"
    FUNC = "func"
    STRUCT_DECL = "structDecl"
    STRUCT = "struct"


class Sym(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Kind
    type_label: str
    declared_at: Optional[Position] = None

    def __str__(self) -> str:
        return self.type_label


class VarSym(Sym):
    kind: Literal[Kind.VAR] = Kind.VAR


class FormalSym(Sym):
    kind: Literal[Kind.FORMAL] = Kind.FORMAL


class FnSym(Sym):
    """A function binding; `type_label` is the return type."""

    kind: Literal[Kind.FUNC] = Kind.FUNC
    formal_types: List[str] = Field(default_factory=list)
    formal_names: List[str] = Field(default_factory=list)

    def add_formal(self, name: str, type_label: str) -> None:
        # The first declaration of a formal name fixes the signature.
        if name in self.formal_names:
            return
        self.formal_names.append(name)
        self.formal_types.append(type_label)


class StructDeclSym(Sym):
    """
    The binding of a struct type declaration. It owns a one-scope symbol
    table listing the struct's fields.
    """

    kind: Literal[Kind.STRUCT_DECL] = Kind.STRUCT_DECL
    type_label: str = STRUCT_TYPE
    name: str
    fields: SymbolTable = Field(default_factory=SymbolTable)

    def add_field(self, name: str, sym: Sym) -> None:
        if self.fields.lookup_local(name) is None:
            self.fields.add(name, sym)

    def lookup_field(self, name: str) -> Optional[Sym]:
        return self.fields.lookup_global(name)

    @field_serializer("fields")
    def _serialize_fields(self, fields: SymbolTable):
        return fields.snapshot()


class StructSym(Sym):
    """A variable (or field) of struct type; `type_label` is the struct's name."""

    kind: Literal[Kind.STRUCT] = Kind.STRUCT
    # Declaration this instance was checked against. Not owned.
    struct_decl: Optional[StructDeclSym] = Field(default=None, exclude=True, repr=False)


def placeholder_sym(pos: Position) -> VarSym:
    """The stand-in returned for a resolved identifier that is not a struct instance."""
    return VarSym(type_label=PLACEHOLDER_TYPE, declared_at=pos)
