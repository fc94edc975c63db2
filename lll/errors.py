from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lll.token import Token


class Severity(Enum):
    WARN = 'WARN'
    FATAL = 'FATAL'


@dataclass(frozen=True)
class Diagnostic:
    """A message produced by the lexer, parser or interpreter."""
    severity: Severity
    message: str
    token: Optional[Token] = None

    @classmethod
    def fatal(cls, message: str, token: Optional[Token] = None) -> 'Diagnostic':
        return cls(Severity.FATAL, message, token)

    @classmethod
    def warn(cls, message: str, token: Optional[Token] = None) -> 'Diagnostic':
        return cls(Severity.WARN, message, token)

    def __str__(self) -> str:
        if self.token is None:
            return f"{self.severity.value}: {self.message}"
        return f"{self.severity.value}: {self.message}, line {self.token.line}, token {self.token.type}"


class LllError(Exception):
    """Base exception carrying an lll diagnostic."""
    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class ParseError(LllError):
    """Raised inside the parser; recovered from at statement boundaries."""


class LllRuntimeError(LllError):
    """Aborts the statement being executed."""


class InternalError(LllRuntimeError):
    """An invariant of the evaluator was violated."""


class UnterminatedStringError(LllError):
    """A string literal ran into the end of input.

    No stage catches this; it terminates the whole run.
    """
    exit_code = 69
