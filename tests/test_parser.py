import pytest

from calc.ast      import BinaryOperation, Number, Operator
from calc.lexer    import Lexer
from calc.parser   import Parser, parse
from calc.reporter import ParseError

def tree(source):
    return parse(Lexer().tokenize(source))

@pytest.mark.parametrize("source, expected", [
    ("10",          "10"),
    ("1-2+3",       "(+ (- 1 2) 3)"),
    ("2+3*4",       "(+ 2 (* 3 4))"),
    ("8-3-2",       "(- (- 8 3) 2)"),
    ("8/4/2",       "(/ (/ 8 4) 2)"),
    ("(2+3)*4",     "(* (+ 2 3) 4)"),
    ("2*(3+4)*5",   "(* (* 2 (+ 3 4)) 5)"),
    ("((7))",       "7"),
    ("-3+5",        "(+ (- 0 3) 5)"),
    ("-(2+3)",      "(- 0 (+ 2 3))"),
    ("+5",          "5"),
    ("2*-3",        "(* 2 (- 0 3))"),
    ("-7/2",        "(/ (- 0 7) 2)"),
    (" 1 +\t2 ",    "(+ 1 2)"),
])
def test_tree_shape(source, expected):
    assert tree(source).pprint() == expected

def test_nodes():
    root = tree("1+2*3")

    assert root == BinaryOperation(
        Operator.ADD,
        Number(1),
        BinaryOperation(Operator.MUL, Number(2), Number(3)),
    )
    assert root.position == 1
    assert root.right.position == 3

def test_unary_minus_is_subtraction_from_zero():
    root = tree("-4")

    assert isinstance(root, BinaryOperation)
    assert root.operator == Operator.SUB
    assert root.left == Number(0)
    assert root.right == Number(4)

@pytest.mark.parametrize("source, message", [
    ("1+",      "expected a number, found end of input"),
    ("(1+2",    "expected ')', found end of input"),
    ("",        "expected a number, found end of input"),
    ("1 2",     "expected end of input, found '2'"),
    ("(1+2))",  "expected end of input, found ')'"),
    ("*1",      "expected a number, found '*'"),
    ("--1",     "expected a number, found '-'"),
    ("()",      "expected a number, found ')'"),
    ("1+*2",    "expected a number, found '*'"),
])
def test_syntax_errors(source, message):
    with pytest.raises(ParseError) as e:
        tree(source)
    assert str(e.value) == message

def test_error_position():
    with pytest.raises(ParseError) as e:
        tree("1 + (2 * )")
    assert e.value.position == 9

def test_consume_leaves_cursor_on_mismatch():
    parser = Parser(Lexer().tokenize("+1"))

    assert not parser.consume('-')
    assert parser.pos == 0
    assert parser.consume('+')
    assert parser.pos == 1
    assert not parser.at_eof()

    assert parser.expect_number().value == 1
    assert parser.at_eof()

def test_parser_requires_eof_terminated_tokens():
    with pytest.raises(AssertionError):
        Parser([])

def test_moderate_nesting():
    assert tree("(" * 50 + "7" + ")" * 50).pprint() == "7"
    assert tree("-(" * 50 + "7" + ")" * 50).evaluate() == 7

def test_nesting_too_deep():
    with pytest.raises(ParseError, match = "nested too deeply"):
        tree("(" * 300 + "1" + ")" * 300)

def test_long_chain_parses():
    assert tree("-".join(["1"] * 5000)).evaluate() == 1 - 4999
