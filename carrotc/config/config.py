"""
Static configuration data for the Carrot compiler.
This includes keyword sets, operator mappings, type labels and pipeline stages.
"""

RESERVED_KEYWORDS = {
    "int",
    "bool",
    "void",
    "true",
    "false",
    "struct",
    "cin",
    "cout",
    "if",
    "else",
    "while",
    "repeat",
    "return",
}

# Type labels carried by bindings.
VOID_TYPE = "void"
STRUCT_TYPE = "struct"
PLACEHOLDER_TYPE = " "

# Largest value an integer literal may hold; larger literals are clamped.
MAX_INT_LITERAL = 2**31 - 1

# Escapes accepted inside string literals (the character after the backslash).
VALID_STRING_ESCAPES = {"n", "t", "'", '"', "?", "\\"}

# Lark terminal name -> operator symbol stored on the AST.
BINARY_OPERATOR_MAP = {
    "PLUS": "+",
    "MINUS": "-",
    "TIMES": "*",
    "DIVIDE": "/",
    "AND": "&&",
    "OR": "||",
    "EQUALS": "==",
    "NOTEQUALS": "!=",
    "LESS": "<",
    "GREATER": ">",
    "LESSEQ": "<=",
    "GREATEREQ": ">=",
}
UNARY_OPERATOR_MAP = {"MINUS": "-", "NOT": "!"}

# Output format of a single diagnostic line.
ERROR_FORMAT = "{line}:{col} ***ERROR*** {message}"
WARNING_FORMAT = "{line}:{col} ***WARNING*** {message}"

# Unparser indentation step for nested blocks.
INDENT_STEP = 4

# CLI stage key -> (pipeline stage name, description)
STAGE_MAP = {
    "1": ("ast", "Abstract Syntax Tree"),
    "2": ("name_analysis", "Name-Analysed AST and Global Symbol Table"),
}
