"""Grammar-driven front end for finshell, built on Lark.

This is an alternative to the hand-written lexer and recursive-descent
parser: the same language is described as a LALR grammar, and the Lark
parse tree is transformed into exactly the same `finshell.ast` nodes,
with the same token kinds and source spans. Lark failures are translated
into the usual finshell diagnostics, so callers cannot tell the two front
ends apart except by the wording of some syntax errors.
"""

from __future__ import annotations

from typing import Any

from lark import Lark, Transformer, v_args
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast import Binop, Node, Unary, Value, VarAccess, VarAssign
from .errors import DisallowedCharError, FinshellError, InvalidSyntaxError
from .position import Position
from .tokens import VAR_KEYWORD, Token, TokenType
from .types import parse_int_literal


FINSHELL_GRAMMAR = r"""
    ?start: statement

    ?statement: VAR IDENTIFIER "=" expression   -> var_assign
              | expression

    ?expression: term
               | expression (PLUS | MINUS) term  -> binop

    ?term: power
         | term (STAR | SLASH) power  -> binop

    ?power: factor
          | factor CARET power  -> binop

    ?factor: INT  -> value
           | FLOAT  -> value
           | IDENTIFIER  -> var_access
           | (PLUS | MINUS) factor  -> unary
           | "(" expression ")"

    VAR: "%s"
    IDENTIFIER: /[A-Za-z_](?:[^\W\d_]|[0-9_])*/
    FLOAT.2: /[0-9]+\.[0-9]*/
    INT: /[0-9]+/
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    CARET: "^"

    %%ignore /[ \t]+/
""" % VAR_KEYWORD


FINSHELL_PARSER = Lark(
    FINSHELL_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=False,
)

_OPERATORS = {
    'PLUS': TokenType.PLUS,
    'MINUS': TokenType.MINUS,
    'STAR': TokenType.MULTIPLY,
    'SLASH': TokenType.DIVIDE,
    'CARET': TokenType.POW,
}


class _Source:
    """Maps character offsets of one request to finshell positions."""

    def __init__(self, file_name: str, text: str, line: int):
        self.file_name = file_name
        self.text = text
        self.line = line

    def position(self, index: int) -> Position:
        line = self.line + self.text.count('\n', 0, index)
        column = index - (self.text.rfind('\n', 0, index) + 1)
        return Position(index, line, column, self.file_name, self.text)

    def token(self, tok: LarkToken, type_: TokenType, value: Any = None) -> Token:
        return Token(type_, value, self.position(tok.start_pos), self.position(tok.end_pos))


@v_args(inline=True)
class ASTBuilder(Transformer):
    """Transforms the Lark parse tree into finshell AST nodes."""

    def __init__(self, source: _Source):
        super().__init__()
        self.source = source

    def value(self, tok):
        if tok.type == 'INT':
            value = parse_int_literal(str(tok))
            if value is None:
                token = self.source.token(tok, TokenType.INT)
                raise FinshellError(InvalidSyntaxError(token.start, token.end, 'Integer literal out of range'))
            return Value(self.source.token(tok, TokenType.INT, value))
        return Value(self.source.token(tok, TokenType.FLOAT, float(tok)))

    def var_access(self, tok):
        return VarAccess(self.source.token(tok, TokenType.IDENTIFIER, str(tok)))

    def var_assign(self, _keyword, name, value):
        return VarAssign(self.source.token(name, TokenType.IDENTIFIER, str(name)), value)

    def unary(self, op, operand):
        return Unary(self.source.token(op, _OPERATORS[op.type]), operand)

    def binop(self, left, op, right):
        return Binop(left, self.source.token(op, _OPERATORS[op.type]), right)


def _syntax_message(expected, depth: int) -> str:
    """Pick the descent parser's wording for a LALR failure.

    The LALR tables merge lookaheads from inside and outside parentheses,
    so `RPAR` shows up in the expected set at top level too; `depth` (the
    number of unclosed '(' before the failure) decides between a missing
    ')' and leftover input.
    """
    expected = set(expected)
    if {'INT', 'FLOAT'} & expected:
        return 'Expected Int or Float'
    if 'IDENTIFIER' in expected:
        return 'Expected Identifier'
    if 'EQUAL' in expected:
        return "Expected '='"
    if depth > 0 and 'RPAR' in expected:
        return "Expected ')'"
    return "Expected '+', '-', '*', or '/'"


def parse_with_lark(file_name: str, text: str, line: int = 0) -> Node:
    """Parse one request with the Lark grammar. Raises `FinshellError`."""
    source = _Source(file_name, text, line)
    try:
        tree = FINSHELL_PARSER.parse(text)
    except UnexpectedCharacters as ex:
        start = source.position(ex.pos_in_stream)
        char = text[ex.pos_in_stream]
        raise FinshellError(DisallowedCharError(start, start.copy().advance(char), char)) from None
    except UnexpectedToken as ex:
        tok = ex.token
        if tok.type == '$END':
            start = end = source.position(len(text))
        else:
            start, end = source.position(tok.start_pos), source.position(tok.end_pos)
        # Every character before the failure lexed cleanly, so parentheses
        # there are exactly the LPAR/RPAR tokens.
        depth = text.count('(', 0, start.index) - text.count(')', 0, start.index)
        raise FinshellError(InvalidSyntaxError(start, end, _syntax_message(ex.expected, depth))) from None
    except UnexpectedInput:
        end = source.position(len(text))
        raise FinshellError(InvalidSyntaxError(end, end, 'Unexpected end of input')) from None
    try:
        return ASTBuilder(source).transform(tree)
    except VisitError as ex:
        if isinstance(ex.orig_exc, FinshellError):
            raise ex.orig_exc from None
        raise
