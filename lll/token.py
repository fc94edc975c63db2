"""Token vocabulary shared by the lexer, parser and interpreter.

A `Token` records its kind, the lexical value it carries (see
`lll.types`), the offset of the first character of its lexeme and the
1-based line that character sits on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


# Keyword that introduces a variable declaration.
DECLARATION_KEYWORD = 'var'


class TokenType(Enum):
    # Single-character tokens.
    LeftParen = '('
    RightParen = ')'
    LeftBrace = '{'
    RightBrace = '}'
    Comma = ','
    Dot = '.'
    Minus = '-'
    Plus = '+'
    Semicolon = ';'
    Slash = '/'
    Star = '*'

    # One or two character tokens.
    Bang = '!'
    BangEqual = '!='
    Equal = '='
    EqualEqual = '=='
    Greater = '>'
    GreaterEqual = '>='
    Less = '<'
    LessEqual = '<='

    # Literals.
    Identifier = 'identifier'
    String = 'string'
    Number = 'number'

    # Keywords.
    And = 'and'
    Class = 'class'
    Else = 'else'
    False_ = 'false'
    Fun = 'fun'
    For = 'for'
    If = 'if'
    Nil = 'nil'
    Or = 'or'
    Print = 'print'
    Return = 'return'
    Super = 'super'
    This = 'this'
    True_ = 'true'
    Var = DECLARATION_KEYWORD
    While = 'while'

    Eof = 'eof'

    def __str__(self) -> str:
        # Diagnostics show the kind name, e.g. "token Semicolon".
        return self.name.rstrip('_')


KEYWORDS: Dict[str, TokenType] = {
    'and': TokenType.And,
    'class': TokenType.Class,
    'else': TokenType.Else,
    'false': TokenType.False_,
    'for': TokenType.For,
    'fun': TokenType.Fun,
    'if': TokenType.If,
    'nil': TokenType.Nil,
    'or': TokenType.Or,
    'print': TokenType.Print,
    'return': TokenType.Return,
    'super': TokenType.Super,
    'this': TokenType.This,
    'true': TokenType.True_,
    DECLARATION_KEYWORD: TokenType.Var,
    'while': TokenType.While,
}

# Tokens that can begin a statement; the parser resynchronizes on them.
STATEMENT_KEYWORDS = frozenset({
    TokenType.Class,
    TokenType.Fun,
    TokenType.Var,
    TokenType.For,
    TokenType.If,
    TokenType.While,
    TokenType.Print,
    TokenType.Return,
})


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: Any
    offset: int
    line: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal!r}, offset={self.offset}, line={self.line})"
