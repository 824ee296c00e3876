import math
import pytest
from core.exceptions import ParseError
from symbolic.ast_nodes import NEGATE, BinaryOp, Number, UnaryCall, Variable, free_variables, to_text, tree_depth
from symbolic.evaluator import evaluate
from symbolic.parser import parse, tokenize

def test_parse_polynomial_tree():
    tree = parse("x^2 - 4")
    assert tree == BinaryOp("-", BinaryOp("^", Variable("x"), Number(2.0)), Number(4.0))

def test_tokenize_skips_whitespace():
    kinds = [t.kind for t in tokenize(" 2 * sin( x ) ")]
    assert kinds == ["number", "op", "ident", "op", "ident", "op", "eof"]

def test_function_call_and_constant():
    tree = parse("sin(pi)")
    assert isinstance(tree, UnaryCall)
    assert tree.func == "sin"
    assert tree.arg == Number(math.pi, label="pi")

def test_unary_minus_binds_looser_than_power():
    assert parse("-x^2") == UnaryCall(NEGATE, BinaryOp("^", Variable("x"), Number(2.0)))
    assert evaluate("-2^2") == pytest.approx(-4.0)

def test_power_is_right_associative():
    assert evaluate("2^3^2") == pytest.approx(512.0)
    assert evaluate("(2^3)^2") == pytest.approx(64.0)

def test_negative_exponent():
    assert evaluate("2^-1") == pytest.approx(0.5)

@pytest.mark.parametrize("source, x, expected", [
    ("2x", 3, 6.0),
    ("2(x+1)", 1, 4.0),
    ("(x+1)(x-1)", 3, 8.0),
    ("3x^2", 2, 12.0),
    ("2pi", 0, 2 * math.pi),
    ("sin(x)cos(x)", 0.5, math.sin(0.5) * math.cos(0.5)),
])
def test_implicit_multiplication(source, x, expected):
    assert evaluate(source, {"x": x}) == pytest.approx(expected)

def test_modulo_is_floored():
    assert evaluate("7 % 3") == pytest.approx(1.0)
    assert evaluate("-7 % 3") == pytest.approx(2.0)

def test_scientific_notation_and_pi_symbol():
    assert evaluate("1.5e2 + .5") == pytest.approx(150.5)
    assert evaluate("π") == pytest.approx(math.pi)

def test_free_variables():
    assert free_variables(parse("a*x + b - sin(y) + pi")) == {"a", "x", "b", "y"}

@pytest.mark.parametrize("source", [
    "(x + 1",
    "x + 1)",
    "x +",
    "x $ 2",
    "foo(2)",
    "",
    "   ",
    "sin x",
    "x 2",
    "*3",
])
def test_malformed_expressions_raise_parse_error(source):
    with pytest.raises(ParseError):
        parse(source)

def test_parse_error_reports_position():
    with pytest.raises(ParseError) as info:
        parse("x + #")
    assert info.value.position == 4
    assert info.value.source == "x + #"

def test_parse_error_is_logged(dummy_logger):
    with pytest.raises(ParseError):
        parse("(x")
    assert any("Could not parse expression" in r.message for r in dummy_logger.records)

def test_non_string_source():
    with pytest.raises(ParseError):
        parse(42)

@pytest.mark.parametrize("source", [
    "x^2 - 4",
    "a - (b - c)",
    "2^3^2",
    "(2^3)^2",
    "-x^2",
    "x / (y * z)",
    "sin(x)^2",
    "x * -2",
    "a + -b",
    "-(x + 1)",
])
def test_rendered_text_parses_back_to_same_tree(source):
    tree = parse(source)
    assert parse(to_text(tree)) == tree

def test_render_minimal_parentheses():
    assert to_text(parse("x^2 - 4")) == "x^2 - 4"
    assert to_text(parse("-(x+1)")) == "-(x + 1)"
    assert to_text(parse("1.5*x")) == "1.5 * x"

@pytest.mark.parametrize("source", [
    "(" * 200 + "x" + ")" * 200,
    "-" * 1000 + "x",
    "sin(" * 150 + "x" + ")" * 150,
    "2^" * 300 + "2",
    " + ".join(["x"] * 1000),
])
def test_deeply_nested_expressions_raise_parse_error(source):
    with pytest.raises(ParseError, match="nested too deeply"):
        parse(source)

def test_moderate_nesting_is_accepted():
    assert evaluate("(" * 50 + "x" + ")" * 50, {"x": 2}) == pytest.approx(2.0)
    assert evaluate(" + ".join(["x"] * 50), {"x": 1}) == pytest.approx(50.0)

def test_tree_depth():
    assert tree_depth(Variable("x")) == 1
    assert tree_depth(parse("x^2 - 4")) == 3
    assert tree_depth(parse("-sin(x)")) == 3

def test_out_of_range_literal():
    with pytest.raises(ParseError, match="out of range"):
        parse("1e999 * x")
