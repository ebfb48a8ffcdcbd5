from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

from carrotc.diagnostics import Diagnostic, ErrorReporter
from carrotc.parser.core.classes import Program

from .name_analyser import NameAnalyser
from .symbol_table import SymbolTable


@dataclass
class NameAnalysisResult:
    """The outcome of name analysis over one program."""

    program: Program
    table: SymbolTable
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.table.is_error()


class SemanticAnalyser:
    """
    Orchestrates the semantic analysis phase of the compiler.
    """

    def __init__(
        self,
        program: Program,
        dump_stages: List[str] = [],
        stop_after_stage: Optional[str] = None,
        reporter: Optional[ErrorReporter] = None,
    ):
        self.program = program
        self.dump_stages = dump_stages
        self.stop_after_stage = stop_after_stage
        self.reporter = reporter or ErrorReporter()
        self.artifacts: Dict[str, Any] = {}
        self.results: List[Any] = []

    def run(self) -> NameAnalysisResult:
        """Executes the semantic analysis pipeline."""

        # --- Stage 2: Name Analysis ---
        # The global scope is the single scope a fresh table starts with.
        self._run_stage("name_analysis", analyse_names, self.program, self.reporter)
        return self.results[-1]

    def _run_stage(self, stage_name: str, stage_func, *args, **kwargs) -> Any:
        """Executes a single stage, stores its artifact, and returns the result."""
        result = stage_func(*args, **kwargs)
        self.artifacts[stage_name] = result
        self.results.append(result)
        return result


def analyse_names(program: Program, reporter: Optional[ErrorReporter] = None, stream: Optional[TextIO] = None) -> NameAnalysisResult:
    """Runs name analysis over `program` with a fresh global scope."""
    reporter = reporter or ErrorReporter(stream)
    table = SymbolTable()
    first_new = len(reporter.diagnostics)

    NameAnalyser(table, reporter).analyse(program)

    return NameAnalysisResult(program=program, table=table, diagnostics=reporter.diagnostics[first_new:])
