import pytest

from finshell.context import Context
from finshell.errors import (
    DisallowedCharError,
    Error,
    FinshellError,
    InvalidSyntaxError,
    RunTimeError,
    string_with_arrows,
)
from finshell.interpreter import evaluate
from finshell.position import Position


def at(text, index, line=0, column=None, file_name='f'):
    return Position(index, line, index if column is None else column, file_name, text)


def test_arrows_single_line():
    text = '12 + abc'
    assert string_with_arrows(text, at(text, 5), at(text, 8)) == '12 + abc\n     ^^^'


def test_arrows_empty_span_gets_one_caret():
    text = '1 +'
    assert string_with_arrows(text, at(text, 3), at(text, 3)) == '1 +\n   ^'


def test_arrows_span_over_two_lines():
    text = 'ab\ncd'
    start = at(text, 1)
    end = at(text, 4, line=1, column=1)
    assert string_with_arrows(text, start, end) == 'ab\n ^\ncd\n^'


def test_arrows_span_ending_after_newline():
    text = '1\n2'
    start = at(text, 1)
    end = at(text, 2, line=1, column=0)
    assert string_with_arrows(text, start, end) == '1\n ^'


def test_arrows_pick_the_right_line():
    text = 'first\nx + $'
    start = at(text, 10, line=1, column=4)
    end = at(text, 11, line=1, column=5)
    assert string_with_arrows(text, start, end) == 'x + $\n    ^'


def test_arrows_drop_tabs():
    text = '\t1 $'
    assert '\t' not in string_with_arrows(text, at(text, 3), at(text, 4))


def test_error_rendering():
    text = '1 + £'
    err = DisallowedCharError(at(text, 4, file_name='<stdin>'), at(text, 5, file_name='<stdin>'), '£')
    assert err.as_string() == 'Disallowed Character: £, File <stdin>, line 1, col 4\n1 + £\n    ^'


def test_line_numbers_are_one_based():
    text = 'x'
    err = InvalidSyntaxError(at(text, 0, line=6, column=0), None, 'Expected Int or Float')
    assert err.end is err.start
    assert err.as_string().startswith('Invalid Syntax: Expected Int or Float, File f, line 7, col 0\n')


def test_error_without_position():
    err = Error(None, None, 'Invalid Syntax', 'oops')
    assert err.as_string() == 'Invalid Syntax: oops, File Unknown File, line -1, col -1'


def test_finshell_error_wraps_record():
    record = InvalidSyntaxError(None, None, "Expected ')'")
    ex = FinshellError(record)
    assert ex.err is record
    assert str(ex) == "Invalid Syntax: Expected ')'"
    assert ex.as_string() == record.as_string()


def test_runtime_error_traceback_in_root_context():
    with pytest.raises(FinshellError) as exc_info:
        evaluate('<stdin>', '5/0')
    assert exc_info.value.as_string() == (
        'Traceback (most recent call last):\n'
        '  File: <stdin> Line 1 Col 2, in <program>\n'
        'Division By Zero: Division by Zero, File <stdin>, line 1, col 2\n'
        '5/0\n'
        '  ^'
    )


def test_traceback_lists_outermost_frame_first():
    text = '1 + x'
    root = Context.root()
    child = root.child('inner', at(text, 4))
    err = RunTimeError(at(text, 2), at(text, 3), 'x is not defined', child)
    assert err.traceback() == (
        'Traceback (most recent call last):\n'
        '  File: f Line 1 Col 4, in <program>\n'
        '  File: f Line 1 Col 2, in inner\n'
    )
    assert err.as_string().endswith('Runtime Error: x is not defined, File f, line 1, col 2\n1 + x\n  ^')


def test_context_needs_parent_and_position_together():
    root = Context.root()
    with pytest.raises(ValueError):
        Context('orphan', parent=root)
    with pytest.raises(ValueError):
        Context('orphan', parent_pos=at('x', 0))


def test_traceback_rejects_parent_without_entry_position():
    text = 'x'
    child = Context.root().child('inner', at(text, 0))
    child._parent_pos = None
    err = RunTimeError(at(text, 0), at(text, 1), 'boom', child)
    with pytest.raises(ValueError, match='has a parent but no entry position'):
        err.traceback()
