"""Diagnostics raised by the finshell pipeline.

Each stage reports its first failure as one of the error records below,
wrapped in a `FinshellError` exception. A record knows the span of source
text it refers to and can render itself with the offending excerpt
underlined by carets. Runtime errors additionally carry the evaluation
context they were raised in and prepend a traceback of the context chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .position import Position

if TYPE_CHECKING:
    from .context import Context


def string_with_arrows(text: str, start: Position, end: Position) -> str:
    """Return the source lines covered by `start`..`end` with carets below.

    The first line is underlined from `start.column`, the last line up to
    `end.column` and any line in between in full. Tabs are removed so the
    carets stay aligned with the text above them.
    """
    lines = []
    line_count = end.line - start.line + 1
    if line_count > 1 and end.column == 0:
        # The span stops right after a newline; nothing on the last line.
        line_count -= 1

    idx_start = text.rfind('\n', 0, start.index) + 1
    for i in range(line_count):
        idx_end = text.find('\n', idx_start)
        if idx_end < 0:
            idx_end = len(text)
        line = text[idx_start:idx_end]

        col_start = start.column if i == 0 else 0
        col_end = end.column if i == line_count - 1 else len(line)

        lines.append(line)
        lines.append(' ' * col_start + '^' * max(1, col_end - col_start))

        idx_start = idx_end + 1

    return '\n'.join(lines).replace('\t', '')


def _location(pos: Optional[Position]) -> str:
    if pos is None:
        return 'File Unknown File, line -1, col -1'
    return f'File {pos.file_name}, line {pos.line + 1}, col {pos.column}'


class Error:
    """Base diagnostic: a name, a message and an optional source span."""

    def __init__(self, start: Optional[Position], end: Optional[Position], name: str, message: str):
        self.start = start
        self.end = end if end is not None else start
        self.name = name
        self.message = message

    def as_string(self) -> str:
        result = f'{self.name}: {self.message}, {_location(self.start)}'
        if self.start is not None:
            result += '\n' + string_with_arrows(self.start.file_text, self.start, self.end)
        return result

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.message!r})'


class DisallowedCharError(Error):
    def __init__(self, start: Optional[Position], end: Optional[Position], message: str):
        super().__init__(start, end, 'Disallowed Character', message)


class InvalidSyntaxError(Error):
    def __init__(self, start: Optional[Position], end: Optional[Position], message: str = ''):
        super().__init__(start, end, 'Invalid Syntax', message)


class RunTimeError(Error):
    """Evaluation failure attributed to a context frame."""

    error_name = 'Runtime Error'

    def __init__(self, start: Optional[Position], end: Optional[Position], message: str, context: 'Context'):
        super().__init__(start, end, self.error_name, message)
        self.context = context

    def traceback(self) -> str:
        result = ''
        pos = self.start
        ctx = self.context

        while ctx is not None:
            if pos is None:
                where = 'File: Unknown File Line -1 Col -1'
            else:
                where = f'File: {pos.file_name} Line {pos.line + 1} Col {pos.column}'
            result = f'  {where}, in {ctx.display_name}\n' + result
            if ctx.parent is not None and ctx.parent_pos is None:
                raise ValueError(f'context {ctx.display_name!r} has a parent but no entry position')
            pos = ctx.parent_pos
            ctx = ctx.parent

        return 'Traceback (most recent call last):\n' + result

    def as_string(self) -> str:
        return self.traceback() + super().as_string()


class DivisionByZeroError(RunTimeError):
    error_name = 'Division By Zero'


class InvalidPowerError(RunTimeError):
    error_name = 'Invalid Power'


class FinshellError(Exception):
    """Exception used to propagate a finshell diagnostic out of a stage."""

    def __init__(self, err: Error):
        super().__init__(f'{err.name}: {err.message}')
        self.err = err

    def as_string(self) -> str:
        return self.err.as_string()
