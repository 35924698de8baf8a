"""Token definitions shared by both finshell front ends."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .position import Position


class TokenType(Enum):
    INT = 'Int'
    FLOAT = 'Float'
    PLUS = '+'
    MINUS = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    POW = '^'
    LPAREN = '('
    RPAREN = ')'
    EQUAL = '='
    IDENTIFIER = 'Identifier'
    KEYWORD = 'Keyword'
    EOF = 'EndOfFile'


# Reserved words. `muut` introduces a variable assignment.
VAR_KEYWORD = 'muut'
KEYWORDS = frozenset({VAR_KEYWORD})

SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MULTIPLY,
    '/': TokenType.DIVIDE,
    '^': TokenType.POW,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '=': TokenType.EQUAL,
}

# Token kinds that carry a literal payload in `Token.value`.
PAYLOAD_TYPES = frozenset({TokenType.INT, TokenType.FLOAT, TokenType.IDENTIFIER, TokenType.KEYWORD})


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any = None
    start: Optional[Position] = None
    end: Optional[Position] = None

    def matches(self, type_: TokenType, value: Any = None) -> bool:
        return self.type == type_ and (value is None or self.value == value)

    def __str__(self) -> str:
        if self.type in PAYLOAD_TYPES:
            return f"{self.type.name}:{self.value}"
        return self.type.name
