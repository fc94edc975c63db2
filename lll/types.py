"""Value model for lll.

Tokens and the interpreter share one family of values:

* ``Float``  - a Python ``float``
* ``String`` - a Python ``str``
* ``Bool``   - a Python ``bool``
* ``Nil``    - the `NIL` singleton
* ``Identifier`` - an `Identifier` instance

`Identifier` only ever appears as the lexical payload of a name token.
It is not a legal runtime value; `to_string` refuses to render it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union
import math


class NilVal:
    """Marker object for the lll `nil` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()


@dataclass(frozen=True)
class Identifier:
    """Lexical payload of an identifier token."""
    name: str

    def __repr__(self) -> str:
        return f"Identifier({self.name!r})"


Value = Union[float, str, bool, NilVal, Identifier]


def type_name(value: Any) -> str:
    """Return the lll kind name of a value."""
    if isinstance(value, bool):
        return 'Bool'
    if isinstance(value, float):
        return 'Float'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, NilVal):
        return 'Nil'
    if isinstance(value, Identifier):
        return 'Identifier'
    return type(value).__name__


def format_float(value: float) -> str:
    """Render a float the way lll prints numbers.

    Whole numbers drop their fractional part (``3``), other values use the
    shortest decimal text that round-trips, and no exponent notation is
    ever produced (``1e21`` prints as ``1000000000000000000000``).
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def to_string(value: Any) -> str:
    """Convert a runtime value to the text `print` writes.

    Strings have every two-character ``\\n`` sequence replaced by a real
    newline. Raises TypeError for anything that is not a runtime value;
    the interpreter turns that into an internal error.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value.replace('\\n', '\n')
    if isinstance(value, NilVal):
        return 'nil'
    raise TypeError(f"cannot render {type_name(value)} value {value!r}")
