import argparse
import os
import sys
import time

from .compiler import compile_carrot
from .config.config import STAGE_MAP
from .exceptions import CarrotError
from .semantic_analyser.core.analyser import NameAnalysisResult
from .unparser import unparse
from .utils import TerminalColors


def build_arg_parser() -> argparse.ArgumentParser:
    stage_choices = ", ".join(f"'{key}' = {desc}" for key, (_, desc) in STAGE_MAP.items())

    parser = argparse.ArgumentParser(prog="carrotc", description="Parse and name-analyse a Carrot program.")
    parser.add_argument("input_file", nargs="?", default=None, help="Carrot source file. Reads stdin when omitted.")
    parser.add_argument(
        "-o",
        "--output",
        dest="output_file",
        help="Write the unparsed program, each identifier annotated with its binding, to this file.",
    )
    parser.add_argument(
        "-c",
        "--compile",
        type=str,
        choices=STAGE_MAP.keys(),
        help=f"Stop after a stage and save its JSON artifact next to the input ({stage_choices}).",
    )
    return parser


def _read_source(input_file):
    if input_file is None:
        return sys.stdin.read(), None
    path = os.path.abspath(input_file)
    with open(path, "r", encoding="utf-8") as f:
        return f.read(), path


def _write_unparsed(program, output_file: str) -> None:
    path = os.path.abspath(output_file)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(unparse(program))
    print(f"Annotated program written to {path}")


def _error(text: str) -> None:
    print(f"{TerminalColors.RED}{text}{TerminalColors.RESET}", file=sys.stderr)


def run(args) -> int:
    """Compiles according to the parsed arguments and returns the exit status."""
    display_name = args.input_file or "stdin"
    print(f"--- Analysing {display_name} ---")

    stop_after_stage, stage_desc = STAGE_MAP[args.compile] if args.compile else (None, None)

    try:
        source, source_path = _read_source(args.input_file)
        product = compile_carrot(
            source,
            file_path=source_path,
            dump_stages=[stop_after_stage] if stop_after_stage else [],
            stop_after_stage=stop_after_stage,
        )
    except CarrotError as e:
        _error(f"\n--- SYNTAX ERROR ---\n{e}")
        return 1
    except FileNotFoundError:
        _error(f"ERROR: Source file '{display_name}' not found.")
        return 1
    except Exception as e:
        _error("\n--- UNEXPECTED COMPILER ERROR ---")
        print("This may be a bug in the compiler. Please report it.", file=sys.stderr)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if isinstance(product, NameAnalysisResult):
        if not product.ok:
            error_count = sum(1 for d in product.diagnostics if d.severity == "error")
            _error(f"\n--- NAME ANALYSIS FAILED ({error_count} error(s)) ---")
            return 1
        program = product.program
    else:
        program = product

    if args.output_file:
        _write_unparsed(program, args.output_file)

    if stop_after_stage:
        print(f"\n{TerminalColors.GREEN}--- Stopped after stage '{args.compile}' ({stage_desc}) ---{TerminalColors.RESET}")
    else:
        print(f"\n{TerminalColors.GREEN}--- Name analysis successful ---{TerminalColors.RESET}")
    return 0


def main():
    start_time = time.perf_counter()
    parser = build_arg_parser()
    args = parser.parse_args()

    if not args.input_file and sys.stdin.isatty():
        parser.error("input_file is required when not reading from a pipe.")

    exit_code = run(args)

    duration = time.perf_counter() - start_time
    print(f"\n{TerminalColors.CYAN}--- Total Execution Time: {duration:.4f} seconds ---{TerminalColors.RESET}")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
