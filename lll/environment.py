from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from lll.errors import Diagnostic, LllRuntimeError
from lll.token import Token
from lll.types import Value


@dataclass
class Scope:
    parent: Optional[int]
    values: Dict[str, Value] = field(default_factory=dict)


class Environment:
    """Chain of scopes stored in an arena and addressed by index.

    Scope 0 is the global scope. Entering a block pushes a scope whose
    parent is the current one; leaving it drops that scope and makes the
    previous one current again. Bindings are never copied, so assignments
    to outer variables made from inside a block stay visible afterwards.
    """
    def __init__(self):
        self.scopes: List[Scope] = [Scope(parent=None)]
        self.current = 0

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def chain(self) -> Iterator[Scope]:
        index: Optional[int] = self.current
        while index is not None:
            scope = self.scopes[index]
            yield scope
            index = scope.parent

    @contextmanager
    def enter_block(self):
        previous = self.current
        self.scopes.append(Scope(parent=previous))
        self.current = len(self.scopes) - 1
        try:
            yield self.current
        finally:
            del self.scopes[self.current:]
            self.current = previous

    def define(self, name: str, value: Value):
        self.scopes[self.current].values[name] = value

    def get(self, name: Token) -> Value:
        key = name.literal.name
        for scope in self.chain():
            if key in scope.values:
                return scope.values[key]
        raise LllRuntimeError(Diagnostic.fatal(f"identifier not found: {key}", name))

    def assign(self, name: Token, value: Value) -> Value:
        key = name.literal.name
        for scope in self.chain():
            if key in scope.values:
                scope.values[key] = value
                return value
        raise LllRuntimeError(Diagnostic.fatal(f"assignment to undeclared variable: {key}", name))
