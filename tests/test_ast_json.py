import json
import math

import pytest

from lll.ast import Constant, Print
from lll.ast_json import (
    ast_from_obj, ast_to_obj, program_from_obj, program_to_obj, value_from_obj,
    value_to_obj,
)
from lll.interpreter import Interpreter
from lll.parser import parse_program
from lll.types import NIL, Identifier

SOURCE = '''
var x = 1 + 2 * 3;
{ var x = -x; x = x / 2; print x; }
print (x >= 7) == !false;
print "done\\n";
'''


def test_program_survives_json(capsys):
    statements, diagnostics = parse_program(SOURCE)
    assert diagnostics == []
    text = json.dumps(program_to_obj(statements))
    loaded = program_from_obj(json.loads(text))
    assert loaded == statements

    Interpreter().interpret(loaded)
    assert capsys.readouterr().out == '-3.5truedone\n'


def test_tokens_keep_positions():
    statements, _ = parse_program('\n\nprint a;')
    obj = ast_to_obj(statements[0])
    assert obj == {
        'type': 'Print',
        'expr': {
            'type': 'Variable',
            'name': {'kind': 'Identifier', 'literal': {'__type__': 'Identifier', 'name': 'a'}, 'offset': 8, 'line': 3},
        },
    }


def test_special_values_are_tagged():
    assert value_to_obj(NIL) == {'__type__': 'Nil'}
    assert value_to_obj(math.inf) == {'__type__': 'Float', 'value': 'inf'}
    assert math.isnan(value_from_obj(value_to_obj(math.nan)))
    assert value_from_obj(value_to_obj(NIL)) is NIL
    assert value_from_obj(3) == 3.0
    assert value_from_obj(True) is True
    assert value_from_obj({'__type__': 'Identifier', 'name': 'n'}) == Identifier('n')


def test_constant_with_nil():
    node = Print(Constant(NIL))
    assert ast_from_obj(json.loads(json.dumps(ast_to_obj(node)))) == node


def test_invalid_objects():
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(TypeError):
        ast_from_obj({'type': 'While'})
    with pytest.raises(TypeError):
        ast_from_obj('print')
    with pytest.raises(TypeError):
        program_from_obj({'type': 'Block', 'statements': []})
    with pytest.raises(TypeError):
        value_from_obj({'__type__': 'Array'})


@pytest.mark.parametrize('node_type, extra', [
    ('Variable', {}),
    ('VarDecl', {'initializer': {'type': 'Constant', 'value': 1.0}}),
    ('Assign', {'value': {'type': 'Constant', 'value': 1.0}}),
])
def test_name_tokens_must_carry_identifiers(node_type, extra):
    name = {'kind': 'Identifier', 'literal': 'x', 'offset': 0, 'line': 1}
    with pytest.raises(TypeError):
        ast_from_obj({'type': node_type, 'name': name, **extra})
