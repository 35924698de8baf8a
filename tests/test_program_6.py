from pathlib import Path

from finshell.interpreter import Interpreter
from finshell.shell import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_syntax_errors(capsys):
    interp = Interpreter()
    assert not run_file(EXAMPLES / 'program_6.fin', interp)
    out = capsys.readouterr().out.strip()
    assert out == '\n'.join([
        "Invalid Syntax: Expected ')', File program_6.fin, line 1, col 0",
        '(1 + 2',
        '^',
        "Invalid Syntax: Expected '+', '-', '*', or '/', File program_6.fin, line 2, col 5",
        '3 + 4)',
        '     ^',
        'Disallowed Character: $, File program_6.fin, line 3, col 2',
        '2 $ 3',
        '  ^',
        '9',
        '81',
    ])
