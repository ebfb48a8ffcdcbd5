"""
Defines the formal data structures (contracts) for the Abstract Syntax Tree (AST)
produced by the parser stage.

Identifier and literal nodes carry a `Position` so later stages can key their
diagnostics on the exact line and column of the offending token.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# --- Core Data Structures ---


class Position(BaseModel):
    """A 1-based (line, column) location in the source code."""

    model_config = ConfigDict(frozen=True)

    line: int
    col: int

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


class ASTNode(BaseModel):
    """A base class for all AST nodes."""

    pass


# --- Literals and Identifiers ---


class Identifier(ASTNode):
    name: str
    pos: Position
    # The binding this identifier resolved to; filled in by name analysis.
    sym: Optional[Any] = None


class IntLiteral(ASTNode):
    value: int
    pos: Position


class StringLiteral(ASTNode):
    # Raw text of the literal, surrounding quotes included.
    value: str
    pos: Position


class TrueLiteral(ASTNode):
    pos: Position


class FalseLiteral(ASTNode):
    pos: Position


# --- Expressions ---
Expression = Union[IntLiteral, StringLiteral, TrueLiteral, FalseLiteral, Identifier, "DotAccess", "AssignExp", "CallExp", "UnaryExp", "BinaryExp"]


class DotAccess(ASTNode):
    loc: Expression
    field: Identifier


class AssignExp(ASTNode):
    lhs: Expression
    rhs: Expression


class CallExp(ASTNode):
    callee: Identifier
    args: List[Expression] = Field(default_factory=list)


class UnaryExp(ASTNode):
    op: Literal["-", "!"]
    operand: Expression


class BinaryExp(ASTNode):
    op: Literal["+", "-", "*", "/", "&&", "||", "==", "!=", "<", ">", "<=", ">="]
    left: Expression
    right: Expression


# --- Types ---


class IntType(ASTNode):
    label: Literal["int"] = "int"


class BoolType(ASTNode):
    label: Literal["bool"] = "bool"


class VoidType(ASTNode):
    label: Literal["void"] = "void"


class StructType(ASTNode):
    label: Literal["struct"] = "struct"
    name: Identifier


TypeNode = Union[IntType, BoolType, VoidType, StructType]


# --- Declarations ---

# Size marker of a variable that is not of struct type.
NOT_STRUCT = -1


class VarDecl(ASTNode):
    var_type: TypeNode
    name: Identifier
    size: int = NOT_STRUCT


class FormalDecl(ASTNode):
    param_type: TypeNode
    name: Identifier


class StructDecl(ASTNode):
    name: Identifier
    fields: List[VarDecl]


# --- Statements ---


class AssignStmt(ASTNode):
    assign: AssignExp


class PostIncStmt(ASTNode):
    loc: Expression


class PostDecStmt(ASTNode):
    loc: Expression


class ReadStmt(ASTNode):
    loc: Expression


class WriteStmt(ASTNode):
    exp: Expression


class IfStmt(ASTNode):
    condition: Expression
    decls: List[VarDecl]
    stmts: List["Statement"]


class IfElseStmt(ASTNode):
    condition: Expression
    then_decls: List[VarDecl]
    then_stmts: List["Statement"]
    else_decls: List[VarDecl]
    else_stmts: List["Statement"]


class WhileStmt(ASTNode):
    condition: Expression
    decls: List[VarDecl]
    stmts: List["Statement"]


class RepeatStmt(ASTNode):
    condition: Expression
    decls: List[VarDecl]
    stmts: List["Statement"]


class CallStmt(ASTNode):
    call: CallExp


class ReturnStmt(ASTNode):
    exp: Optional[Expression] = None


Statement = Union[AssignStmt, PostIncStmt, PostDecStmt, ReadStmt, WriteStmt, IfStmt, IfElseStmt, WhileStmt, RepeatStmt, CallStmt, ReturnStmt]


# --- Top-level Structures ---


class FnBody(ASTNode):
    decls: List[VarDecl]
    stmts: List[Statement]


class FnDecl(ASTNode):
    return_type: TypeNode
    name: Identifier
    formals: List[FormalDecl]
    body: FnBody


Declaration = Union[VarDecl, FnDecl, StructDecl]


class Program(ASTNode):
    """The root of the entire AST, representing a single source file."""

    decls: List[Declaration]
    file_path: str = "<stdin>"


for _model in (DotAccess, AssignExp, CallExp, UnaryExp, BinaryExp, PostIncStmt, PostDecStmt, ReadStmt, WriteStmt, IfStmt, IfElseStmt, WhileStmt, RepeatStmt, ReturnStmt, AssignStmt, CallStmt, FnBody, FnDecl, Program):
    _model.model_rebuild()
