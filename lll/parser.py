"""Parser for the lll language.

A recursive-descent parser with one method per precedence level:

    program     -> declaration* EOF
    declaration -> "var" IDENT ("=" expression)? ";" | statement
    statement   -> "print" expression ";" | block | expression ";"
    block       -> "{" declaration* "}"
    expression  -> assignment
    assignment  -> IDENT "=" assignment | equality
    equality    -> comparison (("!=" | "==") comparison)*
    comparison  -> term (("<" | "<=" | ">" | ">=") term)*
    term        -> factor (("+" | "-") factor)*
    factor      -> unary (("*" | "/") unary)*
    unary       -> ("-" | "!") unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil" | IDENT
                 | "(" expression ")"

Errors are raised as `ParseError` and caught in `declaration`, which
records the diagnostic, drops the broken statement and skips ahead to the
next statement boundary (panic mode). One pass therefore reports every
independent syntax error in the input.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import List, Optional, Sequence, Tuple

from .ast import (
    Assign, Binary, Block, Constant, Expr, Expression, Group, Print, Stmt,
    Unary, VarDecl, Variable,
)
from .errors import Diagnostic, ParseError
from .lexer import tokenize
from .token import STATEMENT_KEYWORDS, Token, TokenType
from .types import NIL


# Deepest nesting of groups, unary operators, assignments and blocks the
# parser accepts. Keeps both parsing and evaluation well inside the
# interpreter's recursion limit.
MAX_NESTING_DEPTH = 32

EQUALITY_OPS = (TokenType.BangEqual, TokenType.EqualEqual)
COMPARISON_OPS = (TokenType.Less, TokenType.LessEqual, TokenType.Greater, TokenType.GreaterEqual)
TERM_OPS = (TokenType.Minus, TokenType.Plus)
FACTOR_OPS = (TokenType.Slash, TokenType.Star)
UNARY_OPS = (TokenType.Minus, TokenType.Bang)
CONSTANT_TOKENS = (TokenType.Number, TokenType.String, TokenType.True_, TokenType.False_, TokenType.Nil)


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type is not TokenType.Eof:
            raise ValueError("token list must end with an Eof token")
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.diagnostics: List[Diagnostic] = []

    # Token cursor
    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def at_end(self) -> bool:
        return self.peek().type is TokenType.Eof

    def advance(self) -> Token:
        if not self.at_end():
            self.pos += 1
        return self.previous()

    def check(self, kind: TokenType) -> bool:
        return self.peek().type is kind

    def match(self, kinds: Sequence[TokenType]) -> bool:
        if self.peek().type in kinds:
            self.advance()
            return True
        return False

    def consume(self, kind: TokenType, message: Optional[str] = None) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(message or f"expected {kind}", self.peek())

    def error(self, message: str, token: Token) -> ParseError:
        return ParseError(Diagnostic.fatal(message, token))

    @contextmanager
    def nested(self):
        if self.depth >= MAX_NESTING_DEPTH:
            raise self.error("maximum nesting depth exceeded", self.peek())
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def synchronize(self):
        """Discard tokens until a likely statement boundary.

        One token is always discarded first, so recovery makes progress
        even when the failed statement consumed nothing.
        """
        self.advance()
        while not self.at_end():
            if self.previous().type is TokenType.Semicolon:
                return
            if self.peek().type in STATEMENT_KEYWORDS:
                return
            self.advance()

    # Statements
    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match((TokenType.Var,)):
                return self.var_declaration()
            return self.statement()
        except ParseError as e:
            self.diagnostics.append(e.diagnostic)
            self.synchronize()
            return None

    def var_declaration(self) -> VarDecl:
        name = self.consume(TokenType.Identifier, "expected variable name")
        initializer: Expr = Constant(NIL)
        if self.match((TokenType.Equal,)):
            initializer = self.expression()
        self.consume(TokenType.Semicolon, "expected Semicolon after variable declaration")
        return VarDecl(name, initializer)

    def statement(self) -> Stmt:
        if self.match((TokenType.Print,)):
            value = self.expression()
            self.consume(TokenType.Semicolon, "expected Semicolon after value")
            return Print(value)
        if self.match((TokenType.LeftBrace,)):
            return Block(self.block())
        expr = self.expression()
        self.consume(TokenType.Semicolon, "expected Semicolon after expression")
        return Expression(expr)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        with self.nested():
            while not self.check(TokenType.RightBrace) and not self.at_end():
                stmt = self.declaration()
                if stmt is not None:
                    statements.append(stmt)
            self.consume(TokenType.RightBrace, "expected RightBrace after block")
        return statements

    # Expressions
    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()
        if self.match((TokenType.Equal,)):
            equals = self.previous()
            with self.nested():
                value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise self.error("invalid assignment target", equals)
        return expr

    def binary(self, operand, ops: Tuple[TokenType, ...]) -> Expr:
        expr = operand()
        while self.match(ops):
            op = self.previous()
            right = operand()
            expr = Binary(expr, op, right)
        return expr

    def equality(self) -> Expr:
        return self.binary(self.comparison, EQUALITY_OPS)

    def comparison(self) -> Expr:
        return self.binary(self.term, COMPARISON_OPS)

    def term(self) -> Expr:
        return self.binary(self.factor, TERM_OPS)

    def factor(self) -> Expr:
        return self.binary(self.unary, FACTOR_OPS)

    def unary(self) -> Expr:
        if self.match(UNARY_OPS):
            op = self.previous()
            with self.nested():
                operand = self.unary()
            return Unary(op, operand)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(CONSTANT_TOKENS):
            return Constant(self.previous().literal)
        if self.match((TokenType.Identifier,)):
            return Variable(self.previous())
        if self.match((TokenType.LeftParen,)):
            with self.nested():
                expr = self.expression()
            self.consume(TokenType.RightParen, "expected RightParen after expression")
            return Group(expr)
        raise self.error("expected expression", self.peek())


def parse_tokens(tokens: List[Token]) -> Tuple[List[Stmt], List[Diagnostic]]:
    parser = Parser(tokens)
    statements = parser.parse()
    return statements, parser.diagnostics


def parse_program(source: str) -> Tuple[List[Stmt], List[Diagnostic]]:
    """Lex and parse `source`.

    Returns the statements that parsed cleanly together with every lexer
    and parser diagnostic, in that order. Raises UnterminatedStringError
    if the lexer aborts.
    """
    tokens, lex_diagnostics = tokenize(source)
    statements, parse_diagnostics = parse_tokens(tokens)
    return statements, lex_diagnostics + parse_diagnostics
