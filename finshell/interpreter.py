"""Interpreter for finshell expressions.

This module ties the pipeline together: a request's source text is
tokenized, parsed into an AST (by the recursive-descent parser or the lark
grammar) and evaluated by walking the tree against a `Context`. Each stage
raises `FinshellError` on its first failure, so a request yields either a
`Number` or exactly one diagnostic.
"""

from __future__ import annotations

from typing import Optional

from .ast import Binop, Node, Unary, Value, VarAccess, VarAssign
from .context import Context
from .errors import FinshellError, RunTimeError
from .lark_parser import parse_with_lark
from .lexer import tokenize
from .parser import parse
from .tokens import Token, TokenType
from .types import Float, Integer, Number

FRONT_ENDS = ('descent', 'lark')

# operator -> (verb, preposition) used in type-mismatch messages
_ARITHMETIC = {
    TokenType.PLUS: ('add', 'with'),
    TokenType.MINUS: ('subtract', 'from'),
    TokenType.MULTIPLY: ('multiply', 'with'),
    TokenType.DIVIDE: ('divide', 'by'),
}


class Interpreter:
    """Tree-walking evaluator.

    The interpreter itself holds no program state; bindings live in the
    `Context` passed to `visit`/`evaluate`. It does own the debug log.
    """

    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', front_end: str = 'descent'):
        if front_end not in FRONT_ENDS:
            raise ValueError(f'unknown front end {front_end!r}; expected one of {FRONT_ENDS}')
        self.front_end = front_end
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Public API
    def parse(self, file_name: str, text: str, line: int = 0) -> Node:
        if self.front_end == 'lark':
            node = parse_with_lark(file_name, text, line)
        else:
            tokens = tokenize(file_name, text, line)
            if self.debug_level >= 2:
                self.debug('tokens: ' + ', '.join(str(t) for t in tokens))
            node = parse(tokens)
        if self.debug_level >= 2:
            self.debug(f'ast: {node}')
        return node

    def evaluate(self, file_name: str, text: str, context: Optional[Context] = None, line: int = 0) -> Number:
        """Evaluate one request. Raises `FinshellError` on the first failure."""
        if context is None:
            context = Context.root()
        if self.debug_level > 0:
            self.debug(f'evaluate {file_name}:{line + 1}: {text!r}')
        try:
            node = self.parse(file_name, text, line)
            result = self.visit(node, context)
        except FinshellError as ex:
            if self.debug_level > 0:
                self.debug(f'error: {ex}')
            raise
        if self.debug_level > 0:
            self.debug(f'result: {result.type_name} {result}')
        return result

    ###########################################################################
    # Node visitors
    ###########################################################################

    def visit(self, node: Node, context: Context) -> Number:
        if self.debug_level >= 3:
            self.debug(f'visit {type(node).__name__} {node} in {context.display_name}')
        if isinstance(node, Value):
            return self.visit_value(node, context)
        if isinstance(node, Unary):
            return self.visit_unary(node, context)
        if isinstance(node, Binop):
            return self.visit_binop(node, context)
        if isinstance(node, VarAssign):
            return self.visit_var_assign(node, context)
        if isinstance(node, VarAccess):
            return self.visit_var_access(node, context)
        raise TypeError(f'visit: unexpected node type {type(node).__name__}')

    def visit_value(self, node: Value, context: Context) -> Number:
        token = node.token
        if token.type == TokenType.INT:
            return Integer(token.value, token.start, token.end, context)
        if token.type == TokenType.FLOAT:
            return Float(token.value, token.start, token.end, context)
        raise self.runtime_error(token, f'Non value token {token} found inside a value node', context)

    def visit_unary(self, node: Unary, context: Context) -> Number:
        number = self.visit(node.operand, context)
        op = node.op
        if op.type == TokenType.MINUS:
            result = number.negated()
        elif op.type == TokenType.PLUS:
            result = number.copy()
        else:
            raise self.runtime_error(op, f"Invalid operator token '{op}'", context)
        return result.set_pos(node.start, node.end).set_context(context)

    def visit_binop(self, node: Binop, context: Context) -> Number:
        left = self.visit(node.left, context)
        right = self.visit(node.right, context)
        op = node.op

        if op.type in _ARITHMETIC:
            if not left.same_type(right):
                verb, prep = _ARITHMETIC[op.type]
                if op.type == TokenType.MINUS:
                    operands = f'{right} {prep} {left}'
                else:
                    operands = f'{left} {prep} {right}'
                raise self.runtime_error(op, f'Cannot {verb} {operands} due to different types', context)
            if op.type == TokenType.PLUS:
                result = left.added_to(right)
            elif op.type == TokenType.MINUS:
                result = left.subbed_by(right)
            elif op.type == TokenType.MULTIPLY:
                result = left.multed_by(right)
            else:
                result = left.dived_by(right)
        elif op.type == TokenType.POW:
            if not isinstance(right, Integer):
                raise self.runtime_error(op, f'Cannot raise {left} to {right}: the exponent must be an Integer',
                                         context)
            result = left.powed_by(right)
        else:
            raise self.runtime_error(op, f"Invalid operator token '{op}'", context)

        return result.set_pos(node.start, node.end).set_context(context)

    def visit_var_assign(self, node: VarAssign, context: Context) -> Number:
        name_tok = node.name
        if name_tok.type != TokenType.IDENTIFIER:
            raise self.runtime_error(name_tok, f'Invalid variable name {name_tok}', context)
        value = self.visit(node.value, context)
        if context.symbol_map is None:
            raise self.runtime_error(name_tok, 'No symbol table', context)
        context.symbol_map.set(name_tok.value, value)
        if self.debug_level >= 3:
            self.debug(f'bind {name_tok.value} = {value.type_name} {value} in {context.display_name}')
        return value

    def visit_var_access(self, node: VarAccess, context: Context) -> Number:
        name_tok = node.name
        if name_tok.type != TokenType.IDENTIFIER:
            raise self.runtime_error(name_tok, f'Invalid variable name {name_tok}', context)
        has_symbols, value = context.lookup(name_tok.value)
        if not has_symbols:
            raise self.runtime_error(name_tok, 'No symbol table', context)
        if value is None:
            raise self.runtime_error(name_tok, f'{name_tok.value} is not defined', context)
        return value.copy().set_pos(name_tok.start, name_tok.end).set_context(context)

    @staticmethod
    def runtime_error(token: Token, message: str, context: Context) -> FinshellError:
        return FinshellError(RunTimeError(token.start, token.end, message, context))


def evaluate(file_name: str, text: str, context: Optional[Context] = None) -> Number:
    """Evaluate `text` in `context` (a fresh root context when omitted)."""
    return Interpreter().evaluate(file_name, text, context)


def run_source(text: str, file_name: str = '<stdin>', debug_level: int = 0) -> Number:
    """Convenience wrapper evaluating one expression with its own interpreter."""
    with Interpreter(debug_level=debug_level) as interpreter:
        return interpreter.evaluate(file_name, text)
