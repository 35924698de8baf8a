import pytest

from finshell.errors import DisallowedCharError, FinshellError, InvalidSyntaxError
from finshell.lark_parser import parse_with_lark
from finshell.parser import parse_source


@pytest.mark.parametrize('text', [
    '1+3.0',
    '3-2-1',
    '2+3*4',
    '4*(3-2)/(4-2)',
    '--3',
    '-2^2',
    '2^3^2',
    '3.',
    'muut x = 5',
    'muut _a1 = x * (y - 2.5)',
    'muutx + 1',
    '  7 /\t2 ',
    'muut xé = zero',
])
def test_same_ast_as_recursive_descent(text):
    assert parse_with_lark('<test>', text) == parse_source('<test>', text)


def test_positions_carry_source():
    node = parse_with_lark('calc.fin', 'a + 1', line=2)
    assert node.start.file_name == 'calc.fin'
    assert node.start.file_text == 'a + 1'
    assert node.start.line == 2
    assert node.right.token.start.column == 4


@pytest.mark.parametrize('text, index', [('2 $ 3', 2), ('1.2.3', 3), ('£', 0)])
def test_disallowed_character(text, index):
    with pytest.raises(FinshellError) as exc_info:
        parse_with_lark('<test>', text)
    err = exc_info.value.err
    assert isinstance(err, DisallowedCharError)
    assert err.message == text[index]
    assert (err.start.index, err.end.index) == (index, index + 1)


@pytest.mark.parametrize('text, message, index', [
    ('3+4)', "Expected '+', '-', '*', or '/'", 3),
    ('1 +', 'Expected Int or Float', 3),
    ('1 + muut x = 2', 'Expected Int or Float', 4),
    ('muut 5 = 1', 'Expected Identifier', 5),
    ('muut x 5', "Expected '='", 7),
])
def test_syntax_errors(text, message, index):
    with pytest.raises(FinshellError) as exc_info:
        parse_with_lark('<test>', text)
    err = exc_info.value.err
    assert isinstance(err, InvalidSyntaxError)
    assert err.message == message
    assert err.start.index == index


def test_unclosed_parenthesis():
    with pytest.raises(FinshellError) as exc_info:
        parse_with_lark('<test>', '(1 + 2')
    assert exc_info.value.err.message == "Expected ')'"


@pytest.mark.parametrize('text', ['1 2', 'x y', '1 = 2', '3 muut', '(1 + 2) 3'])
def test_trailing_input_matches_descent_message(text):
    with pytest.raises(FinshellError) as exc_info:
        parse_with_lark('<test>', text)
    with pytest.raises(FinshellError) as descent_info:
        parse_source('<test>', text)
    err = exc_info.value.err
    assert err.message == descent_info.value.err.message == "Expected '+', '-', '*', or '/'"
    assert err.start.index == descent_info.value.err.start.index


def test_missing_close_inside_parentheses():
    with pytest.raises(FinshellError) as exc_info:
        parse_with_lark('<test>', '(1 2')
    assert exc_info.value.err.message == "Expected ')'"


def test_integer_literal_out_of_range():
    with pytest.raises(FinshellError) as exc_info:
        parse_with_lark('<test>', '2 * 9223372036854775808')
    err = exc_info.value.err
    assert isinstance(err, InvalidSyntaxError)
    assert err.message == 'Integer literal out of range'
    assert (err.start.index, err.end.index) == (4, 23)
