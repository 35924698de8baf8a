"""Recursive-descent parser for finshell.

Grammar, lowest to highest binding power:

    statement  := 'muut' IDENTIFIER '=' expression | expression
    expression := term (('+' | '-') term)*
    term       := power (('*' | '/') power)*
    power      := factor ('^' power)?
    factor     := INT | FLOAT | IDENTIFIER
                | ('+' | '-') factor
                | '(' expression ')'

`expression` and `term` share one left-associative folding helper; `power`
is right-associative. The parser consumes the whole token list: anything
left over after the top-level statement is a syntax error.
"""

from __future__ import annotations

from typing import Callable, Collection, List

from .ast import Binop, Node, Unary, Value, VarAccess, VarAssign
from .errors import FinshellError, InvalidSyntaxError
from .lexer import tokenize
from .tokens import VAR_KEYWORD, Token, TokenType


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError('token list must end with an EndOfFile token')
        self.tokens = tokens
        self.token_index = -1
        self.current_token = tokens[0]
        self.advance()

    def advance(self) -> Token:
        if self.token_index < len(self.tokens) - 1:
            self.token_index += 1
            self.current_token = self.tokens[self.token_index]
        return self.current_token

    def error(self, token: Token, message: str) -> FinshellError:
        return FinshellError(InvalidSyntaxError(token.start, token.end, message))

    def parse(self) -> Node:
        node = self.statement()
        if self.current_token.type != TokenType.EOF:
            raise self.error(self.current_token, "Expected '+', '-', '*', or '/'")
        return node

    def statement(self) -> Node:
        if self.current_token.matches(TokenType.KEYWORD, VAR_KEYWORD):
            self.advance()
            name = self.current_token
            if name.type != TokenType.IDENTIFIER:
                raise self.error(name, 'Expected Identifier')
            self.advance()
            if self.current_token.type != TokenType.EQUAL:
                raise self.error(self.current_token, "Expected '='")
            self.advance()
            return VarAssign(name, self.expression())
        return self.expression()

    def expression(self) -> Node:
        return self.binary_operation(self.term, (TokenType.PLUS, TokenType.MINUS))

    def term(self) -> Node:
        return self.binary_operation(self.power, (TokenType.MULTIPLY, TokenType.DIVIDE))

    def power(self) -> Node:
        base = self.factor()
        if self.current_token.type == TokenType.POW:
            op = self.current_token
            self.advance()
            return Binop(base, op, self.power())
        return base

    def factor(self) -> Node:
        token = self.current_token

        if token.type in (TokenType.INT, TokenType.FLOAT):
            self.advance()
            return Value(token)

        if token.type == TokenType.IDENTIFIER:
            self.advance()
            return VarAccess(token)

        if token.type in (TokenType.PLUS, TokenType.MINUS):
            self.advance()
            return Unary(token, self.factor())

        if token.type == TokenType.LPAREN:
            self.advance()
            node = self.expression()
            if self.current_token.type != TokenType.RPAREN:
                raise self.error(token, "Expected ')'")
            self.advance()
            return node

        raise self.error(token, 'Expected Int or Float')

    def binary_operation(self, operand: Callable[[], Node], operators: Collection[TokenType]) -> Node:
        left = operand()
        while self.current_token.type in operators:
            op = self.current_token
            self.advance()
            right = operand()
            left = Binop(left, op, right)
        return left


def parse(tokens: List[Token]) -> Node:
    """Build an AST from a token list produced by the lexer."""
    return Parser(tokens).parse()


def parse_source(file_name: str, text: str, line: int = 0) -> Node:
    """Tokenize and parse one request's source text."""
    return parse(tokenize(file_name, text, line))
