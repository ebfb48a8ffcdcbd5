import sys
from typing import TYPE_CHECKING, Dict, List, Optional, TextIO

from carrotc.exceptions import DuplicateSymbolError, EmptySymTableError, WrongArgumentError

if TYPE_CHECKING:
    from .symbols import Sym


class SymbolTable:
    """
    A stack of scopes, each mapping identifier names to their bindings.

    The front of the stack (index 0) is the innermost scope. A new table starts
    with a single empty scope. The table also carries a sticky error flag that
    name analysis sets whenever it emits a diagnostic.
    """

    def __init__(self):
        self._scopes: List[Dict[str, "Sym"]] = [{}]
        self._error = False

    def __len__(self) -> int:
        return len(self._scopes)

    def __repr__(self) -> str:
        return f"SymbolTable(scopes={len(self._scopes)})"

    # --- Scope management ---

    def push_scope(self) -> None:
        self._scopes.insert(0, {})

    def pop_scope(self) -> None:
        if not self._scopes:
            raise EmptySymTableError()
        self._scopes.pop(0)

    # --- Declarations and lookups ---

    def add(self, name: Optional[str], sym: Optional["Sym"]) -> None:
        """
        Adds a declaration to the innermost scope.
        Raises WrongArgumentError, EmptySymTableError or DuplicateSymbolError,
        checked in that order.
        """
        if not name and sym is None:
            raise WrongArgumentError("name and sym are null")
        if not name:
            raise WrongArgumentError("name is null")
        if sym is None:
            raise WrongArgumentError("sym is null")
        if not self._scopes:
            raise EmptySymTableError()

        current_scope = self._scopes[0]
        if name in current_scope:
            raise DuplicateSymbolError(name)
        current_scope[name] = sym

    def lookup_local(self, name: str) -> Optional["Sym"]:
        if not self._scopes:
            return None
        return self._scopes[0].get(name)

    def lookup_global(self, name: str) -> Optional["Sym"]:
        for scope in self._scopes:
            if name in scope:
                return scope[name]
        return None

    # --- Error flag ---

    def set_error(self) -> None:
        self._error = True

    def is_error(self) -> bool:
        return self._error

    # --- Debugging ---

    def snapshot(self) -> List[Dict[str, str]]:
        """Every scope, front first, as a name -> type label mapping."""
        return [{name: str(sym) for name, sym in scope.items()} for scope in self._scopes]

    def dump(self, stream: Optional[TextIO] = None) -> None:
        stream = stream or sys.stdout
        text = "\n=== Sym Table ===\n"
        for scope in self.snapshot():
            text += "{" + ", ".join(f"{name}={label}" for name, label in scope.items()) + "}\n"
        text += "\n"
        stream.write(text)
