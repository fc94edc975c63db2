"""Abstract Syntax Tree (AST) definitions for the lll language.

Expressions and statements are two closed families of dataclasses. The
interpreter and the JSON serializer dispatch on them exhaustively; any
other node type is a programming error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from .token import Token
from .types import Value


@dataclass
class Constant:
    value: Value


@dataclass
class Group:
    expr: 'Expr'


@dataclass
class Unary:
    op: Token
    operand: 'Expr'


@dataclass
class Binary:
    left: 'Expr'
    op: Token
    right: 'Expr'


@dataclass
class Variable:
    name: Token


@dataclass
class Assign:
    name: Token  # must come from a bare Variable
    value: 'Expr'


Expr = Union[Constant, Group, Unary, Binary, Variable, Assign]


@dataclass
class Expression:
    expr: Expr


@dataclass
class Print:
    expr: Expr


@dataclass
class VarDecl:
    name: Token
    initializer: Expr  # Constant(NIL) when omitted


@dataclass
class Block:
    statements: List['Stmt']


Stmt = Union[Expression, Print, VarDecl, Block]
