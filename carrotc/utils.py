"""
Utility functions for the Carrot compiler, including terminal coloring,
and a JSON artifact serializer.
"""

import dataclasses
import json

from lark import Token
from pydantic import BaseModel

from .semantic_analyser.core.symbol_table import SymbolTable


class TerminalColors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    RESET = "\033[0m"


class CompilerArtifactEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, BaseModel):
            return o.model_dump(mode="json")
        if isinstance(o, SymbolTable):
            return o.snapshot()
        # Field by field; dataclasses.asdict would deep-copy the AST.
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            return {f.name: getattr(o, f.name) for f in dataclasses.fields(o)}
        if isinstance(o, Token):
            return o.value
        if isinstance(o, set):
            return sorted(o)
        return super().default(o)
