from typing import List, Optional

from carrotc.config.config import VOID_TYPE
from carrotc.diagnostics import ErrorReporter
from carrotc.exceptions import DuplicateSymbolError, EmptySymTableError, ErrorCode, InternalCompilerError, WrongArgumentError
from carrotc.parser.core.classes import *

from .symbol_table import SymbolTable
from .symbols import FnSym, FormalSym, Kind, StructDeclSym, StructSym, Sym, VarSym, placeholder_sym


class NameAnalyser:
    """
    Walks a Program, resolving every identifier use against a scoped symbol table.

    - Declarations add bindings to the innermost scope; the binding is also
      attached to the declaring identifier.
    - Functions, struct bodies and every `if`/`else`/`while`/`repeat` block
      open a new scope for their contents.
    - Uses are looked up through the whole scope chain and the result is
      attached to the identifier node.

    Semantic errors are reported through the ErrorReporter and set the table's
    error flag; the walk always continues. Expression visitors return a binding
    hint so that a parent dot-access can descend into struct fields.
    """

    def __init__(self, table: SymbolTable, reporter: ErrorReporter):
        self.table = table
        self.reporter = reporter

    def analyse(self, program: Program) -> None:
        self.visit(program)

    def visit(self, node) -> Optional[Sym]:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise InternalCompilerError(f"Name analysis has no rule for node type '{type(node).__name__}'.")
        return method(node)

    # --- Helpers ---

    def _error(self, pos: Position, code: ErrorCode) -> None:
        self.reporter.fatal(pos, code)
        self.table.set_error()

    def _declare(self, ident: Identifier, sym: Sym) -> None:
        try:
            self.table.add(ident.name, sym)
        except (DuplicateSymbolError, EmptySymTableError, WrongArgumentError) as e:
            raise InternalCompilerError(f"Could not declare '{ident.name}' at {ident.pos}: {e}") from e
        ident.sym = sym

    def _pop_scope(self) -> None:
        try:
            self.table.pop_scope()
        except EmptySymTableError as e:
            raise InternalCompilerError(f"Scope stack underflow: {e}") from e

    def _visit_block(self, decls: List[VarDecl], stmts: List[Statement]) -> None:
        self.table.push_scope()
        self._visit_all(decls)
        self._visit_all(stmts)
        self._pop_scope()

    def _visit_all(self, nodes) -> None:
        for node in nodes:
            self.visit(node)

    def _resolved(self, sym: Sym, ident: Identifier) -> Sym:
        # Struct instances propagate so a parent dot-access can look inside them.
        if sym.kind == Kind.STRUCT:
            return sym
        return placeholder_sym(ident.pos)

    # --- Top level ---

    def visit_Program(self, node: Program) -> None:
        self._visit_all(node.decls)

    # --- Declarations ---

    def visit_VarDecl(self, node: VarDecl) -> None:
        name = node.name
        if node.var_type.label == VOID_TYPE:
            self._error(name.pos, ErrorCode.VOID_NON_FUNCTION)
            return

        existing = self.table.lookup_local(name.name)
        if existing is not None:
            # A local that repeats a formal's name is accepted and the formal stays in effect.
            if existing.kind != Kind.FORMAL:
                self._error(name.pos, ErrorCode.MULTIPLY_DECLARED)
            return

        if isinstance(node.var_type, StructType):
            struct_id = node.var_type.name
            decl = self.table.lookup_global(struct_id.name)
            if decl is None:
                self._error(struct_id.pos, ErrorCode.UNDECLARED)
                return
            if decl.kind != Kind.STRUCT_DECL:
                self._error(struct_id.pos, ErrorCode.INVALID_STRUCT_TYPE)
                return
            struct_id.sym = decl
            self._declare(name, StructSym(type_label=struct_id.name, declared_at=name.pos, struct_decl=decl))
        else:
            self._declare(name, VarSym(type_label=node.var_type.label, declared_at=name.pos))

    def visit_FnDecl(self, node: FnDecl) -> None:
        name = node.name
        sym = FnSym(type_label=node.return_type.label, declared_at=name.pos)
        if self.table.lookup_local(name.name) is not None:
            # The body is still analysed.
            self._error(name.pos, ErrorCode.MULTIPLY_DECLARED)
        else:
            self._declare(name, sym)

        for formal in node.formals:
            sym.add_formal(formal.name.name, formal.param_type.label)

        self.table.push_scope()
        self._visit_all(node.formals)
        self.visit(node.body)
        self._pop_scope()

    def visit_FormalDecl(self, node: FormalDecl) -> None:
        name = node.name
        if node.param_type.label == VOID_TYPE:
            self._error(name.pos, ErrorCode.VOID_NON_FUNCTION)
            return
        if self.table.lookup_local(name.name) is not None:
            self._error(name.pos, ErrorCode.MULTIPLY_DECLARED)
            return
        self._declare(name, FormalSym(type_label=node.param_type.label, declared_at=name.pos))

    def visit_StructDecl(self, node: StructDecl) -> None:
        name = node.name
        if self.table.lookup_local(name.name) is not None:
            self._error(name.pos, ErrorCode.MULTIPLY_DECLARED)
            return

        sym = StructDeclSym(name=name.name, declared_at=name.pos)
        self._declare(name, sym)

        for field_decl in node.fields:
            field_sym = self._field_sym(field_decl)
            if field_sym is not None:
                sym.add_field(field_decl.name.name, field_sym)

        # The regular declaration rules report void and duplicate fields.
        self.table.push_scope()
        self._visit_all(node.fields)
        self._pop_scope()

    def _field_sym(self, field_decl: VarDecl) -> Optional[Sym]:
        field_type = field_decl.var_type
        if isinstance(field_type, StructType):
            decl = self.table.lookup_global(field_type.name.name)
            struct_decl = decl if isinstance(decl, StructDeclSym) else None
            return StructSym(type_label=field_type.name.name, declared_at=field_decl.name.pos, struct_decl=struct_decl)
        if field_type.label == VOID_TYPE:
            return None
        return VarSym(type_label=field_type.label, declared_at=field_decl.name.pos)

    def visit_FnBody(self, node: FnBody) -> None:
        self._visit_all(node.decls)
        self._visit_all(node.stmts)

    # --- Statements ---

    def visit_AssignStmt(self, node: AssignStmt) -> None:
        self.visit(node.assign)

    def visit_PostIncStmt(self, node: PostIncStmt) -> None:
        self.visit(node.loc)

    def visit_PostDecStmt(self, node: PostDecStmt) -> None:
        self.visit(node.loc)

    def visit_ReadStmt(self, node: ReadStmt) -> None:
        self.visit(node.loc)

    def visit_WriteStmt(self, node: WriteStmt) -> None:
        self.visit(node.exp)

    def visit_IfStmt(self, node: IfStmt) -> None:
        self.visit(node.condition)
        self._visit_block(node.decls, node.stmts)

    def visit_IfElseStmt(self, node: IfElseStmt) -> None:
        self.visit(node.condition)
        self._visit_block(node.then_decls, node.then_stmts)
        self._visit_block(node.else_decls, node.else_stmts)

    def visit_WhileStmt(self, node: WhileStmt) -> None:
        self.visit(node.condition)
        self._visit_block(node.decls, node.stmts)

    def visit_RepeatStmt(self, node: RepeatStmt) -> None:
        self.visit(node.condition)
        self._visit_block(node.decls, node.stmts)

    def visit_CallStmt(self, node: CallStmt) -> None:
        self.visit(node.call)

    def visit_ReturnStmt(self, node: ReturnStmt) -> None:
        if node.exp is not None:
            self.visit(node.exp)

    # --- Expressions ---

    def visit_IntLiteral(self, node: IntLiteral) -> None:
        return None

    def visit_StringLiteral(self, node: StringLiteral) -> None:
        return None

    def visit_TrueLiteral(self, node: TrueLiteral) -> None:
        return None

    def visit_FalseLiteral(self, node: FalseLiteral) -> None:
        return None

    def visit_Identifier(self, node: Identifier) -> Optional[Sym]:
        sym = self.table.lookup_global(node.name)
        if sym is None:
            self._error(node.pos, ErrorCode.UNDECLARED)
            return None
        node.sym = sym
        return self._resolved(sym, node)

    def visit_DotAccess(self, node: DotAccess) -> Optional[Sym]:
        receiver = self.visit(node.loc)
        if receiver is None:
            # The receiver already produced a diagnostic.
            return None
        if receiver.kind != Kind.STRUCT:
            self._error(receiver.declared_at, ErrorCode.DOT_ACCESS_NON_STRUCT)
            return None

        struct_decl = self.table.lookup_global(receiver.type_label)
        if not isinstance(struct_decl, StructDeclSym):
            # The struct's name is shadowed here; use the declaration the instance was checked against.
            struct_decl = receiver.struct_decl
        if struct_decl is None:
            # The struct type was undeclared, which its declaration already reported.
            return None

        field = node.field
        field_sym = struct_decl.lookup_field(field.name)
        if field_sym is None:
            self._error(field.pos, ErrorCode.INVALID_STRUCT_FIELD)
            return None
        field.sym = field_sym
        return self._resolved(field_sym, field)

    def visit_AssignExp(self, node: AssignExp) -> None:
        self.visit(node.lhs)
        self.visit(node.rhs)

    def visit_CallExp(self, node: CallExp) -> None:
        self.visit(node.callee)
        self._visit_all(node.args)

    def visit_UnaryExp(self, node: UnaryExp) -> None:
        self.visit(node.operand)

    def visit_BinaryExp(self, node: BinaryExp) -> None:
        self.visit(node.left)
        self.visit(node.right)
