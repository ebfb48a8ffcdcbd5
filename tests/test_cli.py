import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from carrotc.cli import main


@pytest.fixture
def run_cli(monkeypatch):
    """Runs `carrotc` with the given arguments and returns its exit code."""

    def _run(*args):
        monkeypatch.setattr(sys, "argv", ["carrotc", *args])
        with pytest.raises(SystemExit) as exc_info:
            main()
        return exc_info.value.code

    return _run


def write_source(tmp_path, content, name="prog.carrot"):
    path = tmp_path / name
    path.write_text(content)
    return str(path)


def test_clean_program_exits_zero(tmp_path, run_cli, capsys):
    source = write_source(tmp_path, "int x;\nvoid main() { x = 1; }")

    exit_code = run_cli(source)

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Name analysis successful" in captured.out
    assert captured.err == ""


def test_name_errors_are_printed_and_exit_non_zero(tmp_path, run_cli, capsys):
    source = write_source(tmp_path, "void main() { x = 1; }")

    exit_code = run_cli(source)

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "1:15 ***ERROR*** Undeclared identifier" in captured.err.splitlines()


def test_output_file_receives_annotated_program(tmp_path, run_cli):
    # --- ARRANGE ---
    source = write_source(tmp_path, "int x;\nvoid main() { x = 1; }")
    output = tmp_path / "out" / "prog.unparsed"

    # --- ACT ---
    exit_code = run_cli(source, "-o", str(output))

    # --- ASSERT ---
    assert exit_code == 0
    assert output.read_text() == "int x;\nvoid main() {\n    x(int) = 1;\n}\n\n"


def test_output_file_is_not_written_when_analysis_fails(tmp_path, run_cli):
    source = write_source(tmp_path, "void main() { void v; }")
    output = tmp_path / "prog.unparsed"

    exit_code = run_cli(source, "-o", str(output))

    assert exit_code == 1
    assert not output.exists()


def test_syntax_error_exits_non_zero(tmp_path, run_cli, capsys):
    source = write_source(tmp_path, "void main() { int x }")

    exit_code = run_cli(source)

    assert exit_code == 1
    assert "SYNTAX ERROR" in capsys.readouterr().err


def test_missing_input_file_exits_non_zero(tmp_path, run_cli, capsys):
    exit_code = run_cli(str(tmp_path / "missing.carrot"))

    assert exit_code == 1
    assert "not found" in capsys.readouterr().err


@pytest.mark.parametrize(
    "stage_key, artifact",
    [
        pytest.param("1", "prog.ast.json", id="ast"),
        pytest.param("2", "prog.name_analysis.json", id="name_analysis"),
    ],
)
def test_compile_flag_saves_stage_artifact(tmp_path, run_cli, stage_key, artifact):
    source = write_source(tmp_path, "int x;")

    exit_code = run_cli(source, "-c", stage_key)

    assert exit_code == 0
    assert (tmp_path / artifact).exists()
