"""JSON serialization/deserialization for finshell ASTs.

This module converts between finshell AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Tokens keep their kind,
payload and span; the file name and source text are stored once at the
top level and shared again by every position on the way back.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import Binop, Node, Unary, Value, VarAccess, VarAssign
from .position import Position
from .tokens import Token, TokenType


def position_to_obj(pos: Optional[Position]) -> Optional[Dict[str, int]]:
    if pos is None:
        return None
    return {"index": pos.index, "line": pos.line, "column": pos.column}


def token_to_obj(tok: Token) -> Dict[str, Any]:
    return {
        "kind": tok.type.name,
        "value": tok.value,
        "start": position_to_obj(tok.start),
        "end": position_to_obj(tok.end),
    }


def node_to_obj(node: Node) -> Dict[str, Any]:
    if isinstance(node, Value):
        return {"type": "Value", "token": token_to_obj(node.token)}
    if isinstance(node, Unary):
        return {"type": "Unary", "op": token_to_obj(node.op), "operand": node_to_obj(node.operand)}
    if isinstance(node, Binop):
        return {
            "type": "Binop",
            "left": node_to_obj(node.left),
            "op": token_to_obj(node.op),
            "right": node_to_obj(node.right),
        }
    if isinstance(node, VarAssign):
        return {"type": "VarAssign", "name": token_to_obj(node.name), "value": node_to_obj(node.value)}
    if isinstance(node, VarAccess):
        return {"type": "VarAccess", "name": token_to_obj(node.name)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_to_obj(node: Node) -> Dict[str, Any]:
    start = node.start
    return {
        "file_name": start.file_name if start else None,
        "file_text": start.file_text if start else None,
        "root": node_to_obj(node),
    }


class _Decoder:
    def __init__(self, file_name: Optional[str], file_text: Optional[str]):
        self.file_name = file_name or '<ast>'
        self.file_text = file_text or ''

    def position(self, obj: Optional[Dict[str, int]]) -> Optional[Position]:
        if obj is None:
            return None
        return Position(obj["index"], obj["line"], obj["column"], self.file_name, self.file_text)

    def token(self, obj: Dict[str, Any]) -> Token:
        try:
            kind = TokenType[obj["kind"]]
        except KeyError:
            raise ValueError(f"Unknown token kind: {obj.get('kind')}") from None
        return Token(kind, obj.get("value"), self.position(obj.get("start")), self.position(obj.get("end")))

    def node(self, obj: Any) -> Node:
        if not isinstance(obj, dict):
            raise TypeError("Invalid AST object")
        t = obj.get("type")
        if t == "Value":
            return Value(self.token(obj["token"]))
        if t == "Unary":
            return Unary(self.token(obj["op"]), self.node(obj["operand"]))
        if t == "Binop":
            return Binop(self.node(obj["left"]), self.token(obj["op"]), self.node(obj["right"]))
        if t == "VarAssign":
            return VarAssign(self.token(obj["name"]), self.node(obj["value"]))
        if t == "VarAccess":
            return VarAccess(self.token(obj["name"]))

        raise ValueError(f"Unknown AST node type: {t}")


def ast_from_obj(obj: Any) -> Node:
    if not isinstance(obj, dict) or "root" not in obj:
        raise TypeError("Invalid AST document")
    return _Decoder(obj.get("file_name"), obj.get("file_text")).node(obj["root"])
