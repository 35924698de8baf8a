"""Read-loop and batch runner for finshell.

Both feed one line at a time into the interpreter against a single
session context, so bindings made on one line are visible on the next.
A failing line prints its diagnostic and never affects later lines.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from .context import Context
from .errors import FinshellError
from .interpreter import Interpreter

PROMPT = '<finshell>> '
STDIN_NAME = '<stdin>'


def run_line(interpreter: Interpreter, file_name: str, text: str, context: Context, out: TextIO,
             err: Optional[TextIO] = None, line: int = 0) -> bool:
    """Evaluate one request and print its value or diagnostic.

    Returns True when the request produced a value.
    """
    try:
        result = interpreter.evaluate(file_name, text, context, line)
    except FinshellError as ex:
        print(ex.as_string(), file=err or out)
        return False
    print(result, file=out)
    return True


def shell_loop(interpreter: Interpreter, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
               context: Optional[Context] = None) -> Context:
    """Interactive loop: prompt, read a line, evaluate, repeat until EOF."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if context is None:
        context = Context.root()
    stdout.write(PROMPT)
    stdout.flush()
    for raw in stdin:
        text = raw.rstrip('\r\n')
        if text.strip():
            run_line(interpreter, STDIN_NAME, text, context, stdout)
        stdout.write(PROMPT)
        stdout.flush()
    stdout.write('\n')
    return context


def run_file(path: Path, interpreter: Interpreter, out: Optional[TextIO] = None, err: Optional[TextIO] = None,
             context: Optional[Context] = None) -> bool:
    """Evaluate every non-blank, non-comment line of a source file.

    Returns True when every line evaluated without error.
    """
    out = out or sys.stdout
    if context is None:
        context = Context.root()
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ok = True
    for line_no, text in enumerate(source.splitlines()):
        stripped = text.strip()
        if not stripped or stripped.startswith('#'):
            continue
        ok = run_line(interpreter, Path(path).name, text, context, out, err, line=line_no) and ok
    return ok
