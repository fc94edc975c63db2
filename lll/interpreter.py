"""Tree-walking interpreter for the lll language.

Statements are executed in order against an `Environment`. A runtime
error aborts only the statement that raised it: the interpreter records
the diagnostic and moves on to the next statement. Expression evaluation
is plain recursion over the AST; the parser caps the nesting it accepts
and any remaining host stack exhaustion is reported as a diagnostic for
the offending statement.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Callable, Dict, List, Optional, TextIO

from .ast import (
    Assign, Binary, Block, Constant, Expr, Expression, Group, Print, Stmt,
    Unary, VarDecl, Variable,
)
from .environment import Environment
from .errors import Diagnostic, InternalError, LllRuntimeError
from .parser import parse_program
from .token import Token, TokenType
from .types import Identifier, Value, to_string, type_name


def report(diagnostics: List[Diagnostic], stream: Optional[TextIO] = None):
    """Write diagnostics to `stream` (stderr by default), one per line."""
    stream = stream if stream is not None else sys.stderr
    for diagnostic in diagnostics:
        print(str(diagnostic), file=stream)


def mismatch(op: Token, a: Value, b: Value) -> LllRuntimeError:
    return LllRuntimeError(Diagnostic.fatal(
        f"cannot {op.type.value} {type_name(a)} and {type_name(b)}", op))


def divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def same_kind(a: Value, b: Value, *kinds: type) -> bool:
    # bool has to be matched exactly, it never counts as a float
    return type(a) is type(b) and type(a) in kinds


def op_add(op: Token, a: Value, b: Value) -> Value:
    if same_kind(a, b, float, str):
        return a + b
    if same_kind(a, b, bool):
        return a or b
    raise mismatch(op, a, b)


def op_arithmetic(fn: Callable[[float, float], float]) -> Callable[[Token, Value, Value], Value]:
    def apply(op: Token, a: Value, b: Value) -> Value:
        if same_kind(a, b, float):
            return fn(a, b)
        raise mismatch(op, a, b)
    return apply


def op_equal(op: Token, a: Value, b: Value) -> bool:
    if same_kind(a, b, float, str, bool):
        return a == b
    raise mismatch(op, a, b)


def op_not_equal(op: Token, a: Value, b: Value) -> bool:
    return not op_equal(op, a, b)


def op_compare(fn: Callable[[Any, Any], bool]) -> Callable[[Token, Value, Value], bool]:
    def apply(op: Token, a: Value, b: Value) -> bool:
        if same_kind(a, b, float, bool):
            return fn(a, b)
        if same_kind(a, b, str):
            # strings are ordered by length, not lexicographically
            return fn(len(a), len(b))
        raise mismatch(op, a, b)
    return apply


BINARY_OPERATORS: Dict[TokenType, Callable[[Token, Value, Value], Value]] = {
    TokenType.Plus: op_add,
    TokenType.Minus: op_arithmetic(lambda a, b: a - b),
    TokenType.Star: op_arithmetic(lambda a, b: a * b),
    TokenType.Slash: op_arithmetic(divide),
    TokenType.EqualEqual: op_equal,
    TokenType.BangEqual: op_not_equal,
    TokenType.Greater: op_compare(lambda a, b: a > b),
    TokenType.GreaterEqual: op_compare(lambda a, b: a >= b),
    TokenType.Less: op_compare(lambda a, b: a < b),
    TokenType.LessEqual: op_compare(lambda a, b: a <= b),
}


class Interpreter:
    """Core interpreter that executes lll statements."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', report_errors: bool = False):
        self.environment = Environment()
        self.diagnostics: List[Diagnostic] = []
        self.report_errors = report_errors
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def record(self, diagnostic: Diagnostic):
        self.diagnostics.append(diagnostic)
        self.debug(f"diagnostic {diagnostic}")
        if self.report_errors:
            report([diagnostic])

    # Public API
    def interpret(self, statements: List[Stmt]) -> List[Diagnostic]:
        """Execute `statements`, returning the diagnostics raised meanwhile."""
        start = len(self.diagnostics)
        for stmt in statements:
            if self.debug_level >= 1:
                self.debug(f"execute {type(stmt).__name__}")
            try:
                self.execute(stmt)
            except LllRuntimeError as e:
                self.record(e.diagnostic)
            except RecursionError:
                self.record(Diagnostic.fatal("maximum nesting depth exceeded"))
        return self.diagnostics[start:]

    def execute(self, stmt: Stmt):
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expr)
            return
        if isinstance(stmt, Print):
            value = self.evaluate(stmt.expr)
            try:
                text = to_string(value)
            except TypeError as e:
                raise InternalError(Diagnostic.fatal(f"internal error: {e}"))
            print(text, end='')
            return
        if isinstance(stmt, VarDecl):
            value = self.evaluate(stmt.initializer)
            self.environment.define(stmt.name.literal.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {stmt.name.literal.name}: {type_name(value)} = {value!r}")
            return
        if isinstance(stmt, Block):
            with self.environment.enter_block() as scope:
                if self.debug_level >= 3:
                    self.debug(f"enter scope {scope}")
                for inner in stmt.statements:
                    self.execute(inner)
            if self.debug_level >= 3:
                self.debug(f"leave scope {scope}")
            return
        raise NotImplementedError(f"execute: unexpected node type {type(stmt)}")

    def evaluate(self, expr: Expr) -> Value:
        if isinstance(expr, Constant):
            if isinstance(expr.value, Identifier):
                raise InternalError(Diagnostic.fatal(
                    f"internal error: identifier {expr.value.name} used as a value"))
            return expr.value
        if isinstance(expr, Group):
            return self.evaluate(expr.expr)
        if isinstance(expr, Variable):
            return self.environment.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {expr.name.literal.name}: {type_name(value)} = {value!r}")
            return value
        if isinstance(expr, Unary):
            return self.apply_unary_op(expr.op, self.evaluate(expr.operand))
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.apply_binary_op(expr.op, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr)}")

    def apply_unary_op(self, op: Token, operand: Value) -> Value:
        if op.type is TokenType.Minus:
            if type(operand) is float:
                return 0.0 - operand
            raise LllRuntimeError(Diagnostic.fatal(f"cannot negate {type_name(operand)}", op))
        if op.type is TokenType.Bang:
            if type(operand) is bool:
                return not operand
            raise LllRuntimeError(Diagnostic.fatal(f"cannot invert {type_name(operand)}", op))
        raise InternalError(Diagnostic.fatal("internal error: unknown unary operator", op))

    def apply_binary_op(self, op: Token, a: Value, b: Value) -> Value:
        fn = BINARY_OPERATORS.get(op.type)
        if fn is None:
            raise InternalError(Diagnostic.fatal("internal error: unknown binary operator", op))
        return fn(op, a, b)


def run_source(source: str, interpreter: Optional[Interpreter] = None) -> List[Diagnostic]:
    """Lex, parse and execute `source`.

    Statements that parsed cleanly are executed even when other statements
    had syntax errors. Returns every diagnostic in the order the stages
    produced them. UnterminatedStringError propagates to the caller.
    """
    if interpreter is None:
        interpreter = Interpreter()
    statements, diagnostics = parse_program(source)
    for diagnostic in diagnostics:
        interpreter.debug(f"diagnostic {diagnostic}")
    if interpreter.report_errors:
        report(diagnostics)
    return diagnostics + interpreter.interpret(statements)


def run_program(source: str, debug_level: int = 0) -> List[Diagnostic]:
    """Convenience function to run an lll program from a source string."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return run_source(source, interpreter)
    finally:
        interpreter.close()
