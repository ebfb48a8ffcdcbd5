from typing import List, Optional, Tuple

from carrotc.parser.core.classes import *


def get_pos(line: int = 1, col: int = 1):
    return Position(line=line, col=col)


def get_identifier(name: str, line: int = 1, col: int = 1):
    return Identifier(name=name, pos=get_pos(line, col))


def get_int_literal(value: int):
    return IntLiteral(value=value, pos=get_pos())


def get_string_literal(value: str):
    return StringLiteral(value=value, pos=get_pos())


def get_true_literal():
    return TrueLiteral(pos=get_pos())


def get_false_literal():
    return FalseLiteral(pos=get_pos())


def get_type(label: str):
    """`int`, `bool`, `void`, or any other name for `struct <name>`."""
    if label == "int":
        return IntType()
    if label == "bool":
        return BoolType()
    if label == "void":
        return VoidType()
    return StructType(name=get_identifier(label))


def get_dot_access(loc: Expression, field: str):
    return DotAccess(loc=loc, field=get_identifier(field))


def get_assign_exp(lhs: Expression, rhs: Expression):
    return AssignExp(lhs=lhs, rhs=rhs)


def get_call_exp(callee: str, args: Optional[List[Expression]] = None):
    return CallExp(callee=get_identifier(callee), args=args or [])


def get_unary_exp(op: str, operand: Expression):
    return UnaryExp(op=op, operand=operand)


def get_binary_exp(op: str, left: Expression, right: Expression):
    return BinaryExp(op=op, left=left, right=right)


def get_var_decl(type_label: str, name: str):
    var_type = get_type(type_label)
    size = 0 if isinstance(var_type, StructType) else NOT_STRUCT
    return VarDecl(var_type=var_type, name=get_identifier(name), size=size)


def get_formal(type_label: str, name: str):
    return FormalDecl(param_type=get_type(type_label), name=get_identifier(name))


def get_struct_decl(name: str, fields: List[Tuple[str, str]]):
    return StructDecl(name=get_identifier(name), fields=[get_var_decl(t, n) for t, n in fields])


def get_assign_stmt(lhs: Expression, rhs: Expression):
    return AssignStmt(assign=get_assign_exp(lhs, rhs))


def get_fn_decl(
    name: str,
    return_type: str = "void",
    formals: Optional[List[Tuple[str, str]]] = None,
    decls: Optional[List[VarDecl]] = None,
    stmts: Optional[List[Statement]] = None,
) -> FnDecl:
    """
    A flexible factory to build FnDecl nodes for tests.

    Args:
        name: The name of the function.
        return_type: A type label, as accepted by `get_type`. Defaults to "void".
        formals: A list of (type, name) tuples, e.g., [("int", "a")]. Defaults to [].
        decls: Local variable declarations of the body.
        stmts: Statements of the body.
    """
    formal_nodes = [get_formal(t, n) for t, n in formals or []]
    body = FnBody(decls=decls or [], stmts=stmts or [])
    return FnDecl(return_type=get_type(return_type), name=get_identifier(name), formals=formal_nodes, body=body)


def get_program(decls: List[Declaration]):
    return Program(decls=decls)
