# lll language package
# This package provides a lexer, parser and tree-walking interpreter for lll.
from .errors import Diagnostic, LllError, Severity, UnterminatedStringError
from .interpreter import Interpreter, run_program, run_source
from .parser import parse_program

__all__ = [
    'Diagnostic',
    'Interpreter',
    'LllError',
    'Severity',
    'UnterminatedStringError',
    'parse_program',
    'run_program',
    'run_source',
]
