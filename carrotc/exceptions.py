"""
Custom exception types for the Carrot compiler.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from carrotc.parser.core.classes import Position


class ErrorCode(Enum):

    # --- Name Analysis Errors ---
    MULTIPLY_DECLARED = "Multiply declared identifier"
    UNDECLARED = "Undeclared identifier"
    VOID_NON_FUNCTION = "Non-function declared void"
    INVALID_STRUCT_TYPE = "Invalid name of struct type"
    DOT_ACCESS_NON_STRUCT = "Dot-access of non-struct type"
    INVALID_STRUCT_FIELD = "Invalid struct field name"

    # --- Warnings ---
    INT_LITERAL_TOO_LARGE = "integer literal too large; using max value"

    # --- Syntax Pre-Parsing Errors ---
    SYNTAX_UNMATCHED_BRACKET = "Syntax Error: Unmatched bracket '{char}'."
    SYNTAX_UNCLOSED_STRING = "Syntax Error: Unterminated string literal."
    SYNTAX_BAD_ESCAPE = "Syntax Error: String literal with bad escaped character '\\{char}'."

    # This code is for when the parser finds a token that is valid, but not in the right place.
    SYNTAX_UNEXPECTED_TOKEN = "Syntax Error: Invalid syntax. {details}"

    # This code is for when the lexer finds a character that doesn't belong to any token.
    SYNTAX_INVALID_CHARACTER = "Syntax Error: Illegal character '{char}'."

    # This is a fallback for any other, less common parsing errors from Lark.
    SYNTAX_PARSING_ERROR = "Syntax Error: A general parsing error occurred. Details: {details}"


class CarrotError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        pos: Optional["Position"] = None,
        file_path: Optional[str] = None,
        **kwargs,
    ):
        self.code = code
        self.pos = pos
        self.file_path = file_path
        self.details = kwargs

        core_message = code.value.format(**kwargs)

        location_prefix = ""
        if pos and file_path:
            location_prefix = f"Error in '{file_path}' (Line: {pos.line}, Column: {pos.col}):\n"
        elif pos:
            location_prefix = f"Error at line {pos.line}, column {pos.col}:\n"
        elif file_path:
            location_prefix = f"Error in '{file_path}': "

        self.message = location_prefix + core_message

        super().__init__(self.message)


class InternalCompilerError(Exception):
    def __init__(self, message: str):
        super().__init__(message)


# --- Symbol table boundary errors ---
# Raised by SymbolTable and consumed by the name analyser; never shown to users.


class EmptySymTableError(Exception):
    def __init__(self, message: str = "symbol table has no scopes"):
        super().__init__(message)


class DuplicateSymbolError(Exception):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is already declared in the current scope")


class WrongArgumentError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
