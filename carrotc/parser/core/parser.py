import os
from typing import Optional

from lark import Lark, LarkError, Token, Transformer

from carrotc.config.config import BINARY_OPERATOR_MAP, MAX_INT_LITERAL, UNARY_OPERATOR_MAP
from carrotc.diagnostics import ErrorReporter
from carrotc.exceptions import ErrorCode
from carrotc.parser.utils.helpers import _translate_lark_error, pre_parsing_checks

from .classes import *


def _load_grammar() -> str:
    try:
        # Use importlib.resources for robust package data access
        from importlib.resources import files as pkg_files

        return (pkg_files("carrotc.parser.core") / "carrot.lark").read_text()
    except (ModuleNotFoundError, FileNotFoundError):
        # Fallback for development environments
        grammar_path = os.path.join(os.path.dirname(__file__), "carrot.lark")
        with open(grammar_path, "r") as f:
            return f.read()


# The basic lexer keeps keywords reserved in every parser state.
LARK_PARSER = Lark(_load_grammar(), start="start", parser="lalr", lexer="basic")


class CarrotTransformer(Transformer):
    """
    Transforms the Lark parse tree into the pydantic AST.
    Each method is called when Lark finishes a rule (or alias) with the same
    name, bottom-up, so every method receives already-transformed children.
    Anonymous keyword and punctuation tokens are filtered out by Lark; the
    operator tokens are named terminals and arrive as `Token`s.
    """

    def __init__(self, file_path: str, reporter: Optional[ErrorReporter] = None):
        self.file_path = file_path
        self.reporter = reporter
        super().__init__()

    def _position(self, token: Token) -> Position:
        return Position(line=token.line, col=token.column)

    # --- Identifiers and Literals ---
    def id(self, items):
        (token,) = items
        return Identifier(name=token.value, pos=self._position(token))

    def int_lit(self, items):
        (token,) = items
        pos = self._position(token)
        value = int(token.value)
        if value > MAX_INT_LITERAL:
            if self.reporter is not None:
                self.reporter.warn(pos, ErrorCode.INT_LITERAL_TOO_LARGE)
            value = MAX_INT_LITERAL
        return IntLiteral(value=value, pos=pos)

    def str_lit(self, items):
        (token,) = items
        return StringLiteral(value=token.value, pos=self._position(token))

    def true_lit(self, items):
        return TrueLiteral(pos=self._position(items[0]))

    def false_lit(self, items):
        return FalseLiteral(pos=self._position(items[0]))

    # --- Expressions ---
    def dot_access(self, items):
        loc, field = items
        return DotAccess(loc=loc, field=field)

    def assign_exp(self, items):
        lhs, rhs = items
        return AssignExp(lhs=lhs, rhs=rhs)

    def actuals(self, items):
        return list(items)

    def fn_call(self, items):
        callee, args = items
        return CallExp(callee=callee, args=args)

    def unary_exp(self, items):
        op, operand = items
        return UnaryExp(op=UNARY_OPERATOR_MAP[op.type], operand=operand)

    def binary_exp(self, items):
        left, op, right = items
        return BinaryExp(op=BINARY_OPERATOR_MAP[op.type], left=left, right=right)

    # --- Types ---
    def int_type(self, items):
        return IntType()

    def bool_type(self, items):
        return BoolType()

    def void_type(self, items):
        return VoidType()

    def struct_type(self, items):
        (name,) = items
        return StructType(name=name)

    # --- Statements ---
    def block(self, items):
        decls, stmts = items
        return decls, stmts

    def assign_stmt(self, items):
        return AssignStmt(assign=items[0])

    def post_inc_stmt(self, items):
        return PostIncStmt(loc=items[0])

    def post_dec_stmt(self, items):
        return PostDecStmt(loc=items[0])

    def read_stmt(self, items):
        return ReadStmt(loc=items[0])

    def write_stmt(self, items):
        return WriteStmt(exp=items[0])

    def if_stmt(self, items):
        condition, (decls, stmts) = items
        return IfStmt(condition=condition, decls=decls, stmts=stmts)

    def if_else_stmt(self, items):
        condition, (then_decls, then_stmts), (else_decls, else_stmts) = items
        return IfElseStmt(
            condition=condition,
            then_decls=then_decls,
            then_stmts=then_stmts,
            else_decls=else_decls,
            else_stmts=else_stmts,
        )

    def while_stmt(self, items):
        condition, (decls, stmts) = items
        return WhileStmt(condition=condition, decls=decls, stmts=stmts)

    def repeat_stmt(self, items):
        condition, (decls, stmts) = items
        return RepeatStmt(condition=condition, decls=decls, stmts=stmts)

    def call_stmt(self, items):
        return CallStmt(call=items[0])

    def return_stmt(self, items):
        return ReturnStmt(exp=items[0] if items else None)

    # --- Declarations ---
    def decl_list(self, items):
        return list(items)

    def stmt_list(self, items):
        return list(items)

    def var_decl(self, items):
        var_type, name = items
        size = 0 if isinstance(var_type, StructType) else NOT_STRUCT
        return VarDecl(var_type=var_type, name=name, size=size)

    def formal(self, items):
        param_type, name = items
        return FormalDecl(param_type=param_type, name=name)

    def formals(self, items):
        return list(items)

    def fn_body(self, items):
        decls, stmts = items
        return FnBody(decls=decls, stmts=stmts)

    def fn_decl(self, items):
        return_type, name, formals, body = items
        return FnDecl(return_type=return_type, name=name, formals=formals, body=body)

    def struct_decl(self, items):
        name, *fields = items
        return StructDecl(name=name, fields=fields)

    def start(self, items):
        return Program(decls=list(items), file_path=self.file_path)


def parse_carrot(script_content: str, file_path: str = "<stdin>", reporter: Optional[ErrorReporter] = None) -> Program:
    """Parses the script content and transforms it into the AST."""

    pre_parsing_checks(script_content, file_path)

    try:
        parse_tree = LARK_PARSER.parse(script_content)
        return CarrotTransformer(file_path=file_path, reporter=reporter).transform(parse_tree)
    except LarkError as e:
        raise _translate_lark_error(e, file_path) from e
