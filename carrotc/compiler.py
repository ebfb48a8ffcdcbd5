import json
import os
import traceback
from typing import Any, Dict, List, Optional, TextIO

from carrotc.parser.core.parser import parse_carrot
from carrotc.semantic_analyser.core.analyser import SemanticAnalyser

from .diagnostics import ErrorReporter
from .exceptions import CarrotError, InternalCompilerError
from .utils import CompilerArtifactEncoder

STDIN_PATH = "<stdin>"


class CompilationPipeline:
    """
    Runs the Carrot front-end as a chain of named stages:

    - "ast": source text to `Program` (syntax errors raise `CarrotError`)
    - "name_analysis": `Program` to `NameAnalysisResult`

    Each stage's product is kept in `artifacts` under the stage name, and the
    stages listed in `dump_stages` are also written next to the input file as
    `<input>.<stage>.json`. One `ErrorReporter` collects the parse warnings and
    the name-analysis diagnostics of the whole run.
    """

    def __init__(
        self,
        source_content: str,
        file_path: Optional[str],
        dump_stages: List[str] = [],
        stop_after_stage: Optional[str] = None,
        error_stream: Optional[TextIO] = None,
    ):
        self.source_content = source_content
        self.file_path = os.path.abspath(file_path) if file_path else STDIN_PATH
        self.dump_stages = dump_stages
        self.stop_after_stage = stop_after_stage
        self.reporter = ErrorReporter(error_stream)
        self.artifacts: Dict[str, Any] = {}

    def run(self) -> Any:
        try:
            program = self._stage("ast", parse_carrot, self.source_content, self.file_path, self.reporter)
            if self.stop_after_stage == "ast":
                return program

            analyser = SemanticAnalyser(program, self.dump_stages, self.stop_after_stage, self.reporter)
            result = analyser.run()
            for stage_name, artifact in analyser.artifacts.items():
                self._record(stage_name, artifact)
            return result

        except (CarrotError, InternalCompilerError):
            raise
        except Exception as e:
            traceback.print_exc()
            raise InternalCompilerError(f"An unexpected internal error occurred: {e}") from e

    def _stage(self, name: str, func, *args) -> Any:
        product = func(*args)
        self._record(name, product)
        return product

    def _record(self, name: str, product: Any) -> None:
        self.artifacts[name] = product
        if name in self.dump_stages:
            self.save_artifact(name, product)

    def artifact_path(self, name: str) -> str:
        base_name = "stdin_output" if self.file_path == STDIN_PATH else os.path.splitext(self.file_path)[0]
        return f"{base_name}.{name}.json"

    def save_artifact(self, name: str, data: Any):
        """Writes one stage's product as indented JSON."""
        output_path = self.artifact_path(name)
        print(f"--- Saving artifact '{name}' to {output_path} ---")

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, cls=CompilerArtifactEncoder)
        except OSError as e:
            print(f"Error: Could not save artifact '{name}': {e}")


def compile_carrot(
    script_content: str,
    file_path: Optional[str] = None,
    dump_stages: List[str] = [],
    stop_after_stage: Optional[str] = None,
    error_stream: Optional[TextIO] = None,
):
    """
    Parses and name-analyses a Carrot program.

    Returns the `Program` when stopping after "ast", otherwise the
    `NameAnalysisResult`.
    """
    pipeline = CompilationPipeline(script_content, file_path, dump_stages, stop_after_stage, error_stream)
    return pipeline.run()
