"""Lexer for the lll language.

The lexer walks the source once with a single forward cursor and one
character of lookahead. It recognizes punctuation and operators, string
and number literals, identifiers and keywords, and skips whitespace and
``//`` comments. Unknown characters are reported as warnings and skipped.
An unterminated string raises `UnterminatedStringError`, which ends the
whole run.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import Diagnostic, UnterminatedStringError
from .token import KEYWORDS, Token, TokenType
from .types import NIL, Identifier


SINGLE_CHAR_TOKENS = {
    '(': TokenType.LeftParen,
    ')': TokenType.RightParen,
    '{': TokenType.LeftBrace,
    '}': TokenType.RightBrace,
    ',': TokenType.Comma,
    '.': TokenType.Dot,
    '-': TokenType.Minus,
    '+': TokenType.Plus,
    ';': TokenType.Semicolon,
    '*': TokenType.Star,
}

# first char -> (one-char kind, kind when followed by '=')
EQUAL_SUFFIX_TOKENS = {
    '!': (TokenType.Bang, TokenType.BangEqual),
    '=': (TokenType.Equal, TokenType.EqualEqual),
    '>': (TokenType.Greater, TokenType.GreaterEqual),
    '<': (TokenType.Less, TokenType.LessEqual),
}

WHITESPACE = ' \t\r\n'


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_ident_start(c: str) -> bool:
    return c.isalpha() or c == '_'


def is_ident_part(c: str) -> bool:
    return c.isalnum() or c == '_'


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.start = 0
        self.start_line = 1
        self.tokens: List[Token] = []
        self.diagnostics: List[Diagnostic] = []

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self) -> Optional[str]:
        if self.at_end():
            return None
        return self.source[self.pos]

    def advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        if c == '\n':
            self.line += 1
        return c

    def match(self, expected: str) -> bool:
        if self.peek() != expected:
            return False
        self.advance()
        return True

    def add_token(self, kind: TokenType, literal=NIL):
        self.tokens.append(Token(kind, literal, self.start, self.start_line))

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source. No end-of-input token is appended."""
        while not self.at_end():
            self.start = self.pos
            self.start_line = self.line
            self.scan_token()
        return self.tokens

    def scan_token(self):
        c = self.advance()
        if c in WHITESPACE:
            return
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if c in EQUAL_SUFFIX_TOKENS:
            single, double = EQUAL_SUFFIX_TOKENS[c]
            self.add_token(double if self.match('=') else single)
            return
        if c == '/':
            if self.match('/'):
                while not self.at_end() and self.peek() != '\n':
                    self.advance()
            else:
                self.add_token(TokenType.Slash)
            return
        if c == '"':
            self.string()
            return
        if is_digit(c):
            self.number()
            return
        if is_ident_start(c):
            self.identifier()
            return
        self.diagnostics.append(Diagnostic.warn(f"unexpected character {c!r}, line {self.start_line}"))

    def string(self):
        while not self.at_end():
            c = self.advance()
            if c == '\\' and not self.at_end():
                # escaped character never closes the string
                self.advance()
                continue
            if c == '"':
                # value excludes both quotes; escapes stay raw
                self.add_token(TokenType.String, self.source[self.start + 1:self.pos - 1])
                return
        raise UnterminatedStringError(Diagnostic.fatal(f"unterminated string, line {self.start_line}"))

    def number(self):
        seen_dot = False
        while not self.at_end():
            c = self.peek()
            if c == '.' and not seen_dot:
                seen_dot = True
            elif not is_digit(c):
                break
            self.advance()
        self.add_token(TokenType.Number, float(self.source[self.start:self.pos]))

    def identifier(self):
        while not self.at_end() and is_ident_part(self.peek()):
            self.advance()
        text = self.source[self.start:self.pos]
        kind = KEYWORDS.get(text)
        if kind is None:
            self.add_token(TokenType.Identifier, Identifier(text))
        elif kind is TokenType.True_:
            self.add_token(kind, True)
        elif kind is TokenType.False_:
            self.add_token(kind, False)
        else:
            self.add_token(kind)


def tokenize(source: str) -> Tuple[List[Token], List[Diagnostic]]:
    """Scan `source` and terminate the token list with an explicit Eof."""
    lexer = Lexer(source)
    tokens = list(lexer.scan_tokens())
    tokens.append(Token(TokenType.Eof, NIL, len(source), lexer.line))
    return tokens, lexer.diagnostics
