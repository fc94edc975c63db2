"""JSON serialization/deserialization for the lll AST.

This module converts between lll statements/expressions and plain Python
dict/list structures suitable for JSON encoding. Tokens keep their kind,
payload and position so that diagnostics raised while running a loaded
AST point at the same source locations. Non-finite floats are tagged so
the output stays strict JSON.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from .ast import (
    Assign, Binary, Block, Constant, Expression, Group, Print, Stmt, Unary,
    VarDecl, Variable,
)
from .token import Token, TokenType
from .types import NIL, Identifier, NilVal


def value_to_obj(value: Any) -> Any:
    if isinstance(value, bool) or isinstance(value, str):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return value
        return {"__type__": "Float", "value": repr(value)}
    if isinstance(value, NilVal):
        return {"__type__": "Nil"}
    if isinstance(value, Identifier):
        return {"__type__": "Identifier", "name": value.name}
    raise TypeError(f"Unsupported value for serialization: {type(value).__name__}")


def value_from_obj(obj: Any) -> Any:
    if isinstance(obj, (bool, str)):
        return obj
    if isinstance(obj, (int, float)):
        return float(obj)
    if isinstance(obj, dict):
        tag = obj.get("__type__")
        if tag == "Float":
            return float(obj["value"])
        if tag == "Nil":
            return NIL
        if tag == "Identifier":
            return Identifier(obj["name"])
    raise TypeError(f"Invalid value object: {obj!r}")


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "kind": token.type.name,
        "literal": value_to_obj(token.literal),
        "offset": token.offset,
        "line": token.line,
    }


def token_from_obj(obj: Dict[str, Any]) -> Token:
    return Token(TokenType[obj["kind"]], value_from_obj(obj["literal"]), obj["offset"], obj["line"])


def name_from_obj(obj: Dict[str, Any]) -> Token:
    token = token_from_obj(obj)
    if not isinstance(token.literal, Identifier):
        raise TypeError(f"Invalid name token: {obj!r}")
    return token


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Statements
    if isinstance(node, Expression):
        return {"type": "Expression", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": token_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}

    # Expressions
    if isinstance(node, Constant):
        return {"type": "Constant", "value": value_to_obj(node.value)}
    if isinstance(node, Group):
        return {"type": "Group", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Unary):
        return {"type": "Unary", "op": token_to_obj(node.op), "operand": ast_to_obj(node.operand)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "op": token_to_obj(node.op),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Expression":
        return Expression(ast_from_obj(obj["expr"]))
    if t == "Print":
        return Print(ast_from_obj(obj["expr"]))
    if t == "VarDecl":
        return VarDecl(name_from_obj(obj["name"]), ast_from_obj(obj["initializer"]))
    if t == "Block":
        return Block([ast_from_obj(s) for s in obj["statements"]])
    if t == "Constant":
        return Constant(value_from_obj(obj["value"]))
    if t == "Group":
        return Group(ast_from_obj(obj["expr"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["op"]), ast_from_obj(obj["operand"]))
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["op"]), ast_from_obj(obj["right"]))
    if t == "Variable":
        return Variable(name_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(name_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    raise TypeError(f"Unknown AST node type: {t!r}")


def program_to_obj(statements: List[Stmt]) -> Dict[str, Any]:
    return {"type": "Program", "body": ast_to_obj(statements)}


def program_from_obj(obj: Dict[str, Any]) -> List[Stmt]:
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise TypeError("Invalid AST object: expected a Program")
    return ast_from_obj(obj["body"])
