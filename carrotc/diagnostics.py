"""
The diagnostic sink shared by the parser and the name analyser.

Diagnostics are written to standard error as soon as they are reported, one
line each, and are also kept in report order for programmatic inspection.
"""

import sys
from typing import List, Literal, Optional, TextIO

from pydantic import BaseModel

from .config.config import ERROR_FORMAT, WARNING_FORMAT
from .exceptions import ErrorCode
from .parser.core.classes import Position


class Diagnostic(BaseModel):
    severity: Literal["error", "warning"]
    code: ErrorCode
    pos: Position

    @property
    def message(self) -> str:
        return self.code.value

    def pretty(self) -> str:
        template = ERROR_FORMAT if self.severity == "error" else WARNING_FORMAT
        return template.format(line=self.pos.line, col=self.pos.col, message=self.message)


class ErrorReporter:
    def __init__(self, stream: Optional[TextIO] = None):
        # Resolved lazily so a redirected sys.stderr is honoured.
        self._stream = stream
        self.diagnostics: List[Diagnostic] = []

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stderr

    def fatal(self, pos: Position, code: ErrorCode) -> None:
        self._emit(Diagnostic(severity="error", code=code, pos=pos))

    def warn(self, pos: Position, code: ErrorCode) -> None:
        self._emit(Diagnostic(severity="warning", code=code, pos=pos))

    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    def _emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        print(diagnostic.pretty(), file=self.stream)
