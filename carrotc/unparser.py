"""
Pretty-prints a Carrot AST back to source text.

Sub-expressions are fully parenthesized, blocks are indented by four spaces and,
once name analysis has run, every identifier use is followed by its binding in
parentheses: `x(int)`, `s(Point)`, `f(int, bool -> void)`.
"""

from io import StringIO

from .config.config import INDENT_STEP
from .exceptions import InternalCompilerError
from .parser.core.classes import *
from .semantic_analyser.core.symbols import FnSym


def unparse(program: Program) -> str:
    out = StringIO()
    Unparser(out).unparse(program, 0)
    return out.getvalue()


def describe_sym(sym) -> str:
    """The annotation printed after a resolved identifier."""
    if isinstance(sym, FnSym):
        params = ", ".join(sym.formal_types)
        arrow = f"{params} -> " if params else "-> "
        return f"{arrow}{sym.type_label}"
    return sym.type_label


class Unparser:
    def __init__(self, out: StringIO):
        self.out = out

    def unparse(self, node, indent: int) -> None:
        method = getattr(self, f"unparse_{type(node).__name__}", None)
        if method is None:
            raise InternalCompilerError(f"Cannot unparse node type '{type(node).__name__}'.")
        method(node, indent)

    def _write(self, text: str) -> None:
        self.out.write(text)

    def _indent(self, indent: int) -> None:
        self._write(" " * indent)

    def _type(self, type_node) -> str:
        if isinstance(type_node, StructType):
            return f"struct {type_node.name.name}"
        return type_node.label

    def _block(self, decls, stmts, indent: int) -> None:
        for decl in decls:
            self.unparse(decl, indent + INDENT_STEP)
        for stmt in stmts:
            self.unparse(stmt, indent + INDENT_STEP)

    def _joined(self, nodes) -> None:
        for i, node in enumerate(nodes):
            if i:
                self._write(", ")
            self.unparse(node, 0)

    # --- Declarations ---

    def unparse_Program(self, node: Program, indent: int) -> None:
        for decl in node.decls:
            self.unparse(decl, indent)

    def unparse_VarDecl(self, node: VarDecl, indent: int) -> None:
        self._indent(indent)
        self._write(f"{self._type(node.var_type)} {node.name.name};\n")

    def unparse_FnDecl(self, node: FnDecl, indent: int) -> None:
        self._indent(indent)
        formals = ", ".join(f"{self._type(f.param_type)} {f.name.name}" for f in node.formals)
        self._write(f"{self._type(node.return_type)} {node.name.name}({formals}) {{\n")
        self._block(node.body.decls, node.body.stmts, indent)
        self._write("}\n\n")

    def unparse_StructDecl(self, node: StructDecl, indent: int) -> None:
        self._indent(indent)
        self._write(f"struct {node.name.name}{{\n")
        for field_decl in node.fields:
            self.unparse(field_decl, indent + INDENT_STEP)
        self._indent(indent)
        self._write("};\n\n")

    # --- Statements ---

    def unparse_AssignStmt(self, node: AssignStmt, indent: int) -> None:
        self._indent(indent)
        # A top-level assignment is not parenthesized.
        self.unparse(node.assign.lhs, 0)
        self._write(" = ")
        self.unparse(node.assign.rhs, 0)
        self._write(";\n")

    def unparse_PostIncStmt(self, node: PostIncStmt, indent: int) -> None:
        self._indent(indent)
        self.unparse(node.loc, 0)
        self._write("++;\n")

    def unparse_PostDecStmt(self, node: PostDecStmt, indent: int) -> None:
        self._indent(indent)
        self.unparse(node.loc, 0)
        self._write("--;\n")

    def unparse_ReadStmt(self, node: ReadStmt, indent: int) -> None:
        self._indent(indent)
        self._write("cin >> ")
        self.unparse(node.loc, 0)
        self._write(";\n")

    def unparse_WriteStmt(self, node: WriteStmt, indent: int) -> None:
        self._indent(indent)
        self._write("cout << ")
        self.unparse(node.exp, 0)
        self._write(";\n")

    def _guarded(self, keyword: str, condition, indent: int) -> None:
        self._indent(indent)
        self._write(f"{keyword} (")
        self.unparse(condition, 0)
        self._write(") {\n")

    def unparse_IfStmt(self, node: IfStmt, indent: int) -> None:
        self._guarded("if", node.condition, indent)
        self._block(node.decls, node.stmts, indent)
        self._indent(indent)
        self._write("}\n")

    def unparse_IfElseStmt(self, node: IfElseStmt, indent: int) -> None:
        self._guarded("if", node.condition, indent)
        self._block(node.then_decls, node.then_stmts, indent)
        self._indent(indent)
        self._write("}\n")
        self._indent(indent)
        self._write("else {\n")
        self._block(node.else_decls, node.else_stmts, indent)
        self._indent(indent)
        self._write("}\n")

    def unparse_WhileStmt(self, node: WhileStmt, indent: int) -> None:
        self._guarded("while", node.condition, indent)
        self._block(node.decls, node.stmts, indent)
        self._indent(indent)
        self._write("}\n")

    def unparse_RepeatStmt(self, node: RepeatStmt, indent: int) -> None:
        self._guarded("repeat", node.condition, indent)
        self._block(node.decls, node.stmts, indent)
        self._indent(indent)
        self._write("}\n")

    def unparse_CallStmt(self, node: CallStmt, indent: int) -> None:
        self._indent(indent)
        self.unparse(node.call, 0)
        self._write(";\n")

    def unparse_ReturnStmt(self, node: ReturnStmt, indent: int) -> None:
        self._indent(indent)
        self._write("return")
        if node.exp is not None:
            self._write(" ")
            self.unparse(node.exp, 0)
        self._write(";\n")

    # --- Expressions ---

    def unparse_IntLiteral(self, node: IntLiteral, indent: int) -> None:
        self._write(str(node.value))

    def unparse_StringLiteral(self, node: StringLiteral, indent: int) -> None:
        self._write(node.value)

    def unparse_TrueLiteral(self, node: TrueLiteral, indent: int) -> None:
        self._write("true")

    def unparse_FalseLiteral(self, node: FalseLiteral, indent: int) -> None:
        self._write("false")

    def unparse_Identifier(self, node: Identifier, indent: int) -> None:
        self._write(node.name)
        if node.sym is not None:
            self._write(f"({describe_sym(node.sym)})")

    def unparse_DotAccess(self, node: DotAccess, indent: int) -> None:
        self._write("(")
        self.unparse(node.loc, 0)
        self._write(").")
        self.unparse(node.field, 0)

    def unparse_AssignExp(self, node: AssignExp, indent: int) -> None:
        self._write("(")
        self.unparse(node.lhs, 0)
        self._write(" = ")
        self.unparse(node.rhs, 0)
        self._write(")")

    def unparse_CallExp(self, node: CallExp, indent: int) -> None:
        self.unparse(node.callee, 0)
        self._write("(")
        self._joined(node.args)
        self._write(")")

    def unparse_UnaryExp(self, node: UnaryExp, indent: int) -> None:
        self._write(f"({node.op}")
        self.unparse(node.operand, 0)
        self._write(")")

    def unparse_BinaryExp(self, node: BinaryExp, indent: int) -> None:
        self._write("(")
        self.unparse(node.left, 0)
        self._write(f" {node.op} ")
        self.unparse(node.right, 0)
        self._write(")")
