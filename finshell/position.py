"""Source positions for the finshell lexer.

A `Position` is a cursor over one piece of source text. The lexer copies
the cursor whenever a token starts or ends, so every token (and every
diagnostic built from it) can later recover the excerpt to underline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Position:
    index: int
    line: int
    column: int
    file_name: str
    # The full source is shared by every position derived from one run;
    # it is not part of equality or the repr.
    file_text: str = field(repr=False, compare=False)

    def advance(self, current_char: Optional[str] = None) -> 'Position':
        self.index += 1
        self.column += 1

        if current_char == '\n':
            self.line += 1
            self.column = 0

        return self

    def copy(self) -> 'Position':
        return Position(self.index, self.line, self.column, self.file_name, self.file_text)
