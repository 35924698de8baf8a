"""Runtime values for finshell.

Evaluation produces one of two number kinds, `Integer` or `Float`. They
never convert into each other: arithmetic is only defined between two
numbers of the same kind (plus `Float ^ Integer`), and the interpreter
rejects every other pairing. Each number remembers the span of source
text and the context it was produced in, which is what division by zero,
negative powers and overflow are reported against.

`Integer` is a 64-bit signed integer: a result outside
`INT_MIN..INT_MAX` is an "Integer overflow" runtime error rather than a
silently widened Python int.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Optional

from .errors import DivisionByZeroError, FinshellError, InvalidPowerError, RunTimeError
from .position import Position

if TYPE_CHECKING:
    from .context import Context

INT_MAX = 2 ** 63 - 1
INT_MIN = -2 ** 63


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, as 64-bit signed division does."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def int_in_range(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


def parse_int_literal(digits: str) -> Optional[int]:
    """Value of a run of decimal digits, or None when it does not fit in 64 bits.

    The length is checked before converting so that very long literals never
    reach `int()`.
    """
    significant = digits.lstrip('0') or '0'
    if len(significant) > len(str(INT_MAX)):
        return None
    value = int(significant)
    return value if value <= INT_MAX else None


def checked_int_pow(base: int, exponent: int) -> int:
    """`base ** exponent` by repeated squaring; OverflowError once out of range."""
    result = 1
    while exponent:
        if exponent & 1:
            result *= base
            if not int_in_range(result):
                raise OverflowError('integer power out of range')
        exponent >>= 1
        if exponent:
            base *= base
            if not int_in_range(base):
                raise OverflowError('integer power out of range')
    return result


class Number:
    type_name = 'Number'

    def __init__(self, value: Any, start: Optional[Position] = None, end: Optional[Position] = None,
                 context: Optional['Context'] = None):
        self.value = value
        self.start = start
        self.end = end
        self.context = context

    def set_pos(self, start: Optional[Position] = None, end: Optional[Position] = None) -> 'Number':
        self.start = start
        self.end = end
        return self

    def set_context(self, context: Optional['Context'] = None) -> 'Number':
        self.context = context
        return self

    def copy(self) -> 'Number':
        return type(self)(self.value, self.start, self.end, self.context)

    def same_type(self, other: 'Number') -> bool:
        return type(self) is type(other)

    def _new(self, value: Any, other: 'Number') -> 'Number':
        return type(self)(value, context=self.context)

    def added_to(self, other: 'Number') -> 'Number':
        return self._new(self.value + other.value, other)

    def subbed_by(self, other: 'Number') -> 'Number':
        return self._new(self.value - other.value, other)

    def multed_by(self, other: 'Number') -> 'Number':
        return self._new(self.value * other.value, other)

    def dived_by(self, other: 'Number') -> 'Number':
        if other.value == 0:
            raise FinshellError(DivisionByZeroError(other.start, other.end, 'Division by Zero', other.context))
        return self._new(self._divide(self.value, other.value), other)

    def powed_by(self, other: 'Integer') -> 'Number':
        if other.value < 0:
            raise FinshellError(InvalidPowerError(other.start, other.end, 'Cannot raise to negative power',
                                                  other.context))
        return self._new(self._power(self.value, other.value, other), other)

    def negated(self) -> 'Number':
        raise NotImplementedError

    def _divide(self, a: Any, b: Any) -> Any:
        raise NotImplementedError

    def _power(self, base: Any, exponent: int, other: 'Number') -> Any:
        return base ** exponent

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.same_type(other) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.value!r})'


class Integer(Number):
    type_name = 'Integer'

    def __init__(self, value: int, start: Optional[Position] = None, end: Optional[Position] = None,
                 context: Optional['Context'] = None):
        super().__init__(int(value), start, end, context)

    def overflow(self, start: Optional[Position], end: Optional[Position]) -> FinshellError:
        return FinshellError(RunTimeError(start, end, 'Integer overflow', self.context))

    def _new(self, value: int, other: Number) -> 'Integer':
        if not int_in_range(value):
            raise self.overflow(self.start, other.end)
        return Integer(value, context=self.context)

    def negated(self) -> 'Integer':
        if not int_in_range(-self.value):
            raise self.overflow(self.start, self.end)
        return Integer(-self.value, context=self.context)

    def _divide(self, a: int, b: int) -> int:
        return truncating_div(a, b)

    def _power(self, base: int, exponent: int, other: Number) -> int:
        try:
            return checked_int_pow(base, exponent)
        except OverflowError:
            raise self.overflow(self.start, other.end) from None


class Float(Number):
    type_name = 'Float'

    def __init__(self, value: float, start: Optional[Position] = None, end: Optional[Position] = None,
                 context: Optional['Context'] = None):
        super().__init__(float(value), start, end, context)

    def negated(self) -> 'Float':
        return Float(-self.value, context=self.context)

    def _divide(self, a: float, b: float) -> float:
        return a / b

    def _power(self, base: float, exponent: int, other: Number) -> float:
        try:
            return base ** exponent
        except OverflowError:
            # Repeated multiplication saturates instead of raising.
            return -math.inf if base < 0 and exponent % 2 else math.inf
