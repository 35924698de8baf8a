"""Abstract Syntax Tree (AST) definitions for finshell.

Every node keeps the tokens it was built from so that the interpreter can
attribute results and errors to a span of the source text. Nodes are
created once by a parser and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .position import Position
from .tokens import Token


@dataclass
class Node:
    """Base class for all AST nodes."""

    @property
    def start(self) -> Optional[Position]:
        raise NotImplementedError

    @property
    def end(self) -> Optional[Position]:
        raise NotImplementedError


@dataclass
class Value(Node):
    token: Token  # Int or Float literal

    @property
    def start(self) -> Optional[Position]:
        return self.token.start

    @property
    def end(self) -> Optional[Position]:
        return self.token.end

    def __str__(self) -> str:
        return str(self.token)


@dataclass
class Unary(Node):
    op: Token
    operand: Node

    @property
    def start(self) -> Optional[Position]:
        return self.op.start

    @property
    def end(self) -> Optional[Position]:
        return self.operand.end

    def __str__(self) -> str:
        return f'[{self.op}, {self.operand}]'


@dataclass
class Binop(Node):
    left: Node
    op: Token
    right: Node

    @property
    def start(self) -> Optional[Position]:
        return self.left.start

    @property
    def end(self) -> Optional[Position]:
        return self.right.end

    def __str__(self) -> str:
        return f'[{self.left}, {self.op}, {self.right}]'


@dataclass
class VarAssign(Node):
    name: Token  # Identifier
    value: Node

    @property
    def start(self) -> Optional[Position]:
        return self.name.start

    @property
    def end(self) -> Optional[Position]:
        return self.value.end

    def __str__(self) -> str:
        return f'[{self.name} = {self.value}]'


@dataclass
class VarAccess(Node):
    name: Token  # Identifier

    @property
    def start(self) -> Optional[Position]:
        return self.name.start

    @property
    def end(self) -> Optional[Position]:
        return self.name.end

    def __str__(self) -> str:
        return str(self.name)
