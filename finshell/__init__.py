# finshell package
# This package provides a lexer, parsers and an interpreter for finshell arithmetic expressions.
from .context import Context, SymbolMap
from .errors import FinshellError
from .interpreter import Interpreter, evaluate, run_source
from .types import Float, Integer, Number

__all__ = [
    'Context',
    'SymbolMap',
    'FinshellError',
    'Interpreter',
    'evaluate',
    'run_source',
    'Float',
    'Integer',
    'Number',
]
