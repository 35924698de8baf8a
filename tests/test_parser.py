import pytest

from finshell.ast import Binop, Unary, Value, VarAccess, VarAssign
from finshell.errors import FinshellError, InvalidSyntaxError
from finshell.lexer import tokenize
from finshell.parser import Parser, parse, parse_source
from finshell.tokens import TokenType


def ast(text):
    return parse_source('<test>', text)


def syntax_error(text):
    with pytest.raises(FinshellError) as exc_info:
        ast(text)
    err = exc_info.value.err
    assert isinstance(err, InvalidSyntaxError)
    return err


def test_subtraction_is_left_associative():
    node = ast('3-2-1')
    assert isinstance(node, Binop)
    assert node.op.type == TokenType.MINUS
    assert node.right.token.value == 1
    assert isinstance(node.left, Binop)
    assert node.left.left.token.value == 3
    assert node.left.right.token.value == 2


def test_multiplication_binds_tighter():
    assert str(ast('3*4+5/5')) == '[[INT:3, MULTIPLY, INT:4], PLUS, [INT:5, DIVIDE, INT:5]]'
    assert str(ast('2+3*4')) == '[INT:2, PLUS, [INT:3, MULTIPLY, INT:4]]'


def test_parentheses_group():
    assert str(ast('(2+3)*4')) == '[[INT:2, PLUS, INT:3], MULTIPLY, INT:4]'


def test_power_is_right_associative():
    assert str(ast('2^3^2')) == '[INT:2, POW, [INT:3, POW, INT:2]]'


def test_power_binds_tighter_than_multiplication():
    assert str(ast('2*3^2')) == '[INT:2, MULTIPLY, [INT:3, POW, INT:2]]'


def test_unary_operators():
    node = ast('-3')
    assert isinstance(node, Unary)
    assert node.op.type == TokenType.MINUS
    assert isinstance(node.operand, Value)
    assert str(ast('--+3')) == '[MINUS, [MINUS, [PLUS, INT:3]]]'
    assert str(ast('-2^2')) == '[[MINUS, INT:2], POW, INT:2]'


def test_variable_assignment_and_access():
    node = ast('muut x = y + 1')
    assert isinstance(node, VarAssign)
    assert node.name.value == 'x'
    assert isinstance(node.value, Binop)
    assert isinstance(node.value.left, VarAccess)
    assert node.value.left.name.value == 'y'


def test_node_spans():
    node = ast('12 * (3 + 4)')
    assert node.start.index == 0
    assert node.end.index == 11
    assert ast('-5').start.index == 0


def test_trailing_input_is_rejected():
    err = syntax_error('3+4)')
    assert err.message == "Expected '+', '-', '*', or '/'"
    assert err.start.index == 3


def test_missing_operator_between_operands():
    err = syntax_error('1 2')
    assert err.message == "Expected '+', '-', '*', or '/'"
    assert err.start.index == 2


def test_unclosed_parenthesis_points_at_opening_token():
    err = syntax_error('4 * (1 + 2')
    assert err.message == "Expected ')'"
    assert err.start.index == 4


@pytest.mark.parametrize('text, index', [('*3', 0), ('1+', 2), ('', 0), ('()', 1), ('1 + muut x = 2', 4)])
def test_expected_number(text, index):
    err = syntax_error(text)
    assert err.message == 'Expected Int or Float'
    assert err.start.index == index


def test_assignment_requires_identifier():
    assert syntax_error('muut 5 = 1').message == 'Expected Identifier'


def test_assignment_requires_equal():
    assert syntax_error('muut x 5').message == "Expected '='"


def test_parse_accepts_lexer_output():
    tokens = tokenize('<test>', '1 + 1')
    assert isinstance(parse(tokens), Binop)


def test_parser_requires_eof_token():
    tokens = tokenize('<test>', '1')
    with pytest.raises(ValueError):
        Parser(tokens[:-1])
