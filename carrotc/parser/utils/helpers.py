from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedToken

from carrotc.config.config import VALID_STRING_ESCAPES
from carrotc.exceptions import CarrotError, ErrorCode
from carrotc.parser.core.classes import Position

# --- Constants for the checks ---
BRACKET_PAIRS = {"(": ")", "{": "}"}
OPENING_BRACKETS = set(BRACKET_PAIRS.keys())
CLOSING_BRACKETS = set(BRACKET_PAIRS.values())


def pre_parsing_checks(script_content: str, file_path: str):
    """
    Performs simple checks for common lexical errors to provide better messages
    than the parser would: unbalanced brackets, unterminated string literals and
    string literals with a bad escape sequence.
    """

    bracket_stack = []  # A stack of (char, Position)
    for i, line in enumerate(script_content.splitlines()):
        line_num = i + 1
        in_string = False
        string_start = None
        col_idx = 0
        while col_idx < len(line):
            char = line[col_idx]
            pos = Position(line=line_num, col=col_idx + 1)

            if in_string:
                if char == "\\":
                    escaped = line[col_idx + 1] if col_idx + 1 < len(line) else ""
                    if escaped not in VALID_STRING_ESCAPES:
                        raise CarrotError(code=ErrorCode.SYNTAX_BAD_ESCAPE, pos=pos, file_path=file_path, char=escaped)
                    col_idx += 2
                    continue
                if char == '"':
                    in_string = False
                col_idx += 1
                continue

            # The rest of the line is a comment.
            if char == "#" or line.startswith("//", col_idx):
                break

            if char == '"':
                in_string = True
                string_start = pos
            elif char in OPENING_BRACKETS:
                bracket_stack.append((char, pos))
            elif char in CLOSING_BRACKETS:
                if not bracket_stack:
                    raise CarrotError(code=ErrorCode.SYNTAX_UNMATCHED_BRACKET, pos=pos, file_path=file_path, char=char)
                opening_char, _ = bracket_stack.pop()
                if BRACKET_PAIRS[opening_char] != char:
                    raise CarrotError(code=ErrorCode.SYNTAX_UNMATCHED_BRACKET, pos=pos, file_path=file_path, char=char)
            col_idx += 1

        # String literals never span lines.
        if in_string:
            raise CarrotError(code=ErrorCode.SYNTAX_UNCLOSED_STRING, pos=string_start, file_path=file_path)

    if bracket_stack:
        opening_char, pos = bracket_stack[-1]
        raise CarrotError(code=ErrorCode.SYNTAX_UNMATCHED_BRACKET, pos=pos, file_path=file_path, char=opening_char)


# A mapping from Lark's internal token names to friendly, human-readable names.
FRIENDLY_TOKEN_NAMES = {
    "ID": "an identifier",
    "INTLITERAL": "an integer literal",
    "STRINGLITERAL": "a string literal",
    "TRUE": "'true'",
    "FALSE": "'false'",
    "SEMICOLON": "a semicolon ';'",
    "COMMA": "a comma ','",
    "DOT": "a dot '.'",
    "LPAR": "an opening parenthesis '('",
    "RPAR": "a closing parenthesis ')'",
    "LBRACE": "an opening brace '{'",
    "RBRACE": "a closing brace '}'",
    "EQUAL": "an assignment '='",
    "INT": "the 'int' keyword",
    "BOOL": "the 'bool' keyword",
    "VOID": "the 'void' keyword",
    "STRUCT": "the 'struct' keyword",
    "$END": "the end of the file",
}


def _translate_lark_error(err: LarkError, file_path: str) -> CarrotError:
    """Translates a generic LarkError into a user-friendly CarrotError."""

    if isinstance(err, UnexpectedToken):
        expected_str = ""
        if err.expected:
            friendly_expected = [FRIENDLY_TOKEN_NAMES.get(e, e) for e in sorted(err.expected)]
            if len(friendly_expected) > 1:
                expected_str = f"Expected one of: {', '.join(friendly_expected[:-1])} or {friendly_expected[-1]}"
            else:
                expected_str = f"Expected {friendly_expected[0]}"

        found_token = err.token
        # The end-of-input token may carry no usable location.
        has_location = isinstance(err.line, int) and isinstance(err.column, int) and err.line > 0
        pos = Position(line=err.line, col=err.column) if has_location else None
        found_str = f"but found '{found_token.value}' instead."
        if found_token.type == "$END":
            found_str = "but reached the end of the file instead."

        details = f"{expected_str}, {found_str}" if expected_str else f"Found unexpected token '{found_token.value}'."

        return CarrotError(code=ErrorCode.SYNTAX_UNEXPECTED_TOKEN, pos=pos, file_path=file_path, details=details)

    elif isinstance(err, UnexpectedCharacters):
        pos = Position(line=err.line, col=err.column)
        return CarrotError(code=ErrorCode.SYNTAX_INVALID_CHARACTER, pos=pos, file_path=file_path, char=err.char)

    # Fallback for any other Lark error
    return CarrotError(code=ErrorCode.SYNTAX_PARSING_ERROR, file_path=file_path, details=str(err))
