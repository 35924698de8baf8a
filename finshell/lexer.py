"""Lexer: turns one request's source text into a list of tokens."""

from __future__ import annotations

import string
from typing import List, Optional

from .errors import DisallowedCharError, FinshellError, InvalidSyntaxError
from .position import Position
from .tokens import KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenType
from .types import parse_int_literal

DIGITS = '0123456789'
WHITESPACE = ' \t'
LETTERS = string.ascii_letters + '_'
LETTERS_DIGITS = LETTERS + DIGITS


class Lexer:
    """Single-pass scanner over `text`.

    `line` lets a caller that evaluates a file line by line report the
    file's line numbers instead of always starting at zero.
    """

    def __init__(self, file_name: str, text: str, line: int = 0):
        self.text = text
        self.pos = Position(-1, line, -1, file_name, text)
        self.current_char: Optional[str] = None
        self.advance()

    def advance(self):
        self.pos.advance(self.current_char)
        self.current_char = self.text[self.pos.index] if self.pos.index < len(self.text) else None

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []

        while self.current_char is not None:
            char = self.current_char
            if char in WHITESPACE:
                self.advance()
            elif char in SINGLE_CHAR_TOKENS:
                start = self.pos.copy()
                self.advance()
                tokens.append(Token(SINGLE_CHAR_TOKENS[char], start=start, end=self.pos.copy()))
            elif char in DIGITS:
                tokens.append(self.make_number())
            elif char in LETTERS:
                tokens.append(self.make_identifier())
            else:
                start = self.pos.copy()
                self.advance()
                raise FinshellError(DisallowedCharError(start, self.pos.copy(), char))

        tokens.append(Token(TokenType.EOF, start=self.pos.copy(), end=self.pos.copy()))
        return tokens

    def make_number(self) -> Token:
        num_str = ''
        dot_count = 0
        start = self.pos.copy()

        while self.current_char is not None and (self.current_char in DIGITS or self.current_char == '.'):
            if self.current_char == '.':
                if dot_count == 1:
                    dot_start = self.pos.copy()
                    self.advance()
                    raise FinshellError(DisallowedCharError(dot_start, self.pos.copy(), '.'))
                dot_count += 1
            num_str += self.current_char
            self.advance()

        if dot_count == 0:
            value = parse_int_literal(num_str)
            if value is None:
                raise FinshellError(InvalidSyntaxError(start, self.pos.copy(), 'Integer literal out of range'))
            return Token(TokenType.INT, value, start, self.pos.copy())
        return Token(TokenType.FLOAT, float(num_str), start, self.pos.copy())

    def make_identifier(self) -> Token:
        id_str = ''
        start = self.pos.copy()

        # ASCII letter or '_' to start; any alphabetic character may follow.
        while self.current_char is not None and (self.current_char.isalpha() or self.current_char in LETTERS_DIGITS):
            id_str += self.current_char
            self.advance()

        token_type = TokenType.KEYWORD if id_str in KEYWORDS else TokenType.IDENTIFIER
        return Token(token_type, id_str, start, self.pos.copy())


def tokenize(file_name: str, text: str, line: int = 0) -> List[Token]:
    """Convert `text` into tokens, raising `FinshellError` on a bad character."""
    return Lexer(file_name, text, line).tokenize()
