import pytest

from carrotc.diagnostics import ErrorReporter
from carrotc.exceptions import ErrorCode
from carrotc.parser.core.classes import *
from carrotc.parser.core.parser import parse_carrot
from carrotc.parser.utils.factory_helpers import *

from ..utils.assertion_helper import assert_asts_equal


def parse_body(stmts_code: str):
    """Parses `stmts_code` as the body of `void main()` and returns its statements."""
    program = parse_carrot(f"void main() {{ {stmts_code} }}")
    return program.decls[0].body.stmts


x = get_identifier("x")
y = get_identifier("y")


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("x = 1;", get_assign_stmt(x, get_int_literal(1)), id="assign"),
        pytest.param("x = y = 3;", get_assign_stmt(x, get_assign_exp(y, get_int_literal(3))), id="chained_assign"),
        pytest.param("x++;", PostIncStmt(loc=x), id="post_increment"),
        pytest.param("x--;", PostDecStmt(loc=x), id="post_decrement"),
        pytest.param("cin >> x;", ReadStmt(loc=x), id="read"),
        pytest.param('cout << "hi\\n";', WriteStmt(exp=get_string_literal('"hi\\n"')), id="write_string"),
        pytest.param("cout << x.y;", WriteStmt(exp=get_dot_access(x, "y")), id="write_dot_access"),
        pytest.param("f();", CallStmt(call=get_call_exp("f")), id="call_no_args"),
        pytest.param("f(1, x);", CallStmt(call=get_call_exp("f", [get_int_literal(1), x])), id="call_with_args"),
        pytest.param("return;", ReturnStmt(), id="bare_return"),
        pytest.param("return true;", ReturnStmt(exp=get_true_literal()), id="return_value"),
        pytest.param(
            "if (x) { int y; y = 1; }",
            IfStmt(condition=x, decls=[get_var_decl("int", "y")], stmts=[get_assign_stmt(y, get_int_literal(1))]),
            id="if",
        ),
        pytest.param(
            "if (x) { } else { x++; }",
            IfElseStmt(condition=x, then_decls=[], then_stmts=[], else_decls=[], else_stmts=[PostIncStmt(loc=x)]),
            id="if_else",
        ),
        pytest.param(
            "while (false) { bool y; }",
            WhileStmt(condition=get_false_literal(), decls=[get_var_decl("bool", "y")], stmts=[]),
            id="while",
        ),
        pytest.param(
            "repeat (3) { x--; }",
            RepeatStmt(condition=get_int_literal(3), decls=[], stmts=[PostDecStmt(loc=x)]),
            id="repeat",
        ),
    ],
)
def test_transform_statements(code, expected):
    (actual,) = parse_body(code)

    assert_asts_equal(actual, expected)


a = get_identifier("a")
b = get_identifier("b")
c = get_identifier("c")


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("1 + 2 * 3", get_binary_exp("+", get_int_literal(1), get_binary_exp("*", get_int_literal(2), get_int_literal(3))), id="mul_binds_tighter"),
        pytest.param("(1 + 2) * 3", get_binary_exp("*", get_binary_exp("+", get_int_literal(1), get_int_literal(2)), get_int_literal(3)), id="parentheses"),
        pytest.param("a - b - c", get_binary_exp("-", get_binary_exp("-", a, b), c), id="left_associative"),
        pytest.param("a / b", get_binary_exp("/", a, b), id="divide"),
        pytest.param("a || b && c", get_binary_exp("||", a, get_binary_exp("&&", b, c)), id="and_binds_tighter"),
        pytest.param("a + 1 < b", get_binary_exp("<", get_binary_exp("+", a, get_int_literal(1)), b), id="arith_binds_tighter_than_rel"),
        pytest.param("a == b && b != c", get_binary_exp("&&", get_binary_exp("==", a, b), get_binary_exp("!=", b, c)), id="equality"),
        pytest.param("a <= b", get_binary_exp("<=", a, b), id="less_eq"),
        pytest.param("a >= b", get_binary_exp(">=", a, b), id="greater_eq"),
        pytest.param("a > b", get_binary_exp(">", a, b), id="greater"),
        pytest.param("-a * b", get_binary_exp("*", get_unary_exp("-", a), b), id="unary_minus_binds_tighter"),
        pytest.param("!!a", get_unary_exp("!", get_unary_exp("!", a)), id="nested_not"),
        pytest.param("a.b.c", get_dot_access(get_dot_access(a, "b"), "c"), id="nested_dot_access"),
        pytest.param("f(a) + 1", get_binary_exp("+", get_call_exp("f", [a]), get_int_literal(1)), id="call_in_expression"),
        pytest.param("(a = 2)", get_assign_exp(a, get_int_literal(2)), id="assign_as_expression"),
    ],
)
def test_transform_expressions(code, expected):
    (actual,) = parse_body(f"cout << {code};")

    assert_asts_equal(actual.exp, expected)


def test_large_int_literal_is_clamped_with_warning():
    reporter = ErrorReporter()

    program = parse_carrot("void main() {\n  x = 99999999999;\n}", reporter=reporter)

    assign = program.decls[0].body.stmts[0].assign
    assert assign.rhs.value == 2**31 - 1
    (diagnostic,) = reporter.diagnostics
    assert diagnostic.severity == "warning"
    assert diagnostic.code == ErrorCode.INT_LITERAL_TOO_LARGE
    assert diagnostic.pos == Position(line=2, col=7)
    assert not reporter.has_errors()


def test_max_int_literal_is_kept_without_warning():
    reporter = ErrorReporter()

    program = parse_carrot("void main() { x = 2147483647; }", reporter=reporter)

    assert program.decls[0].body.stmts[0].assign.rhs.value == 2147483647
    assert reporter.diagnostics == []
