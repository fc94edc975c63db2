import pytest

from lll.ast import Constant, Print
from lll.interpreter import Interpreter, run_program, run_source
from lll.types import Identifier


def run(source, capsys):
    diagnostics = run_program(source)
    return capsys.readouterr().out, [str(d) for d in diagnostics]


@pytest.mark.parametrize('source, expected', [
    ('print 10 - 4;', '6'),
    ('print 2 * 3.5;', '7'),
    ('print 1 / 4;', '0.25'),
    ('print 0.1 + 0.2;', '0.30000000000000004'),
    ('print 1 / 0;', 'inf'),
    ('print -1 / 0;', '-inf'),
    ('print 0 / 0;', 'NaN'),
    ('print 1000000 * 1000000 * 1000000 * 1000;', '1000000000000000000000'),
    ('print 1 / 10000000;', '0.0000001'),
    ('print "a" + "b";', 'ab'),
    ('print false + false;', 'false'),
    ('print false + true;', 'true'),
    ('print 2 > 1;', 'true'),
    ('print 2 <= 1;', 'false'),
    ('print 3 == 3;', 'true'),
    ('print 1 != 2;', 'true'),
    ('print "a" != "a";', 'false'),
    ('print "abc" > "zz";', 'true'),
    ('print "b" <= "aa";', 'true'),
    ('print "aa" < "b";', 'false'),
    ('print true > false;', 'true'),
    ('print false >= true;', 'false'),
    ('print true == false;', 'false'),
    ('print --2;', '2'),
    ('print !!true;', 'true'),
    ('print "a\\nb";', 'a\nb'),
    ('print nil;', 'nil'),
])
def test_operators_and_rendering(source, expected, capsys):
    out, errors = run(source, capsys)
    assert errors == []
    assert out == expected


@pytest.mark.parametrize('source, message', [
    ('print 1 + "a";', 'FATAL: cannot + Float and String, line 1, token Plus'),
    ('print "a" - "b";', 'FATAL: cannot - String and String, line 1, token Minus'),
    ('print true * true;', 'FATAL: cannot * Bool and Bool, line 1, token Star'),
    ('print "a" / 2;', 'FATAL: cannot / String and Float, line 1, token Slash'),
    ('print nil + nil;', 'FATAL: cannot + Nil and Nil, line 1, token Plus'),
    ('print 1 == "1";', 'FATAL: cannot == Float and String, line 1, token EqualEqual'),
    ('print nil == nil;', 'FATAL: cannot == Nil and Nil, line 1, token EqualEqual'),
    ('print true != 1;', 'FATAL: cannot != Bool and Float, line 1, token BangEqual'),
    ('print 1 < true;', 'FATAL: cannot < Float and Bool, line 1, token Less'),
    ('print -"a";', 'FATAL: cannot negate String, line 1, token Minus'),
    ('print !1;', 'FATAL: cannot invert Float, line 1, token Bang'),
    ('print -nil;', 'FATAL: cannot negate Nil, line 1, token Minus'),
])
def test_runtime_type_errors(source, message, capsys):
    out, errors = run(source, capsys)
    assert out == ''
    assert errors == [message]


def test_declarations(capsys):
    out, errors = run('var a; print a; var a = 2; print a;', capsys)
    assert errors == []
    assert out == 'nil2'


def test_assignment_yields_assigned_value(capsys):
    out, errors = run('var a; var b; a = b = 3; print a + b;', capsys)
    assert errors == []
    assert out == '6'


def test_nested_block_shadowing(capsys):
    out, errors = run('{ var x = 1; { var x = 2; print x; } print x; }', capsys)
    assert errors == []
    assert out == '21'


def test_runtime_error_in_block_restores_scope(capsys):
    out, errors = run('var x = "g"; { var x = "l"; print y; } print x;', capsys)
    assert out == 'g'
    assert errors == ['FATAL: identifier not found: y, line 1, token Identifier']


def test_runtime_error_stops_rest_of_statement_only(capsys):
    out, errors = run('{ print 1; print y; print 2; } print 3;', capsys)
    assert out == '13'
    assert len(errors) == 1


def test_undeclared_assignment_does_not_declare(capsys):
    out, errors = run('x = 1;\nprint x;\nvar x = 5;\nprint x;', capsys)
    assert out == '5'
    assert errors == [
        'FATAL: assignment to undeclared variable: x, line 1, token Identifier',
        'FATAL: identifier not found: x, line 2, token Identifier',
    ]


def test_bindings_persist_across_runs_with_one_interpreter(capsys):
    interpreter = Interpreter()
    assert run_source('var total = 1;', interpreter) == []
    assert run_source('total = total + 41;', interpreter) == []
    assert run_source('print total;', interpreter) == []
    assert capsys.readouterr().out == '42'


def test_identifier_value_is_an_internal_error(capsys):
    interpreter = Interpreter()
    diagnostics = interpreter.interpret([Print(Constant(Identifier('x')))])
    assert capsys.readouterr().out == ''
    assert [str(d) for d in diagnostics] == ['FATAL: internal error: identifier x used as a value']


def test_host_stack_exhaustion_is_reported(capsys):
    source = 'print 1' + ' + 1' * 5000 + ';\nprint "still running";'
    out, errors = run(source, capsys)
    assert out == 'still running'
    assert errors == ['FATAL: maximum nesting depth exceeded']


def test_report_errors_writes_to_stderr(capsys):
    interpreter = Interpreter(report_errors=True)
    run_source('print 1 @;\nprint nope;', interpreter)
    captured = capsys.readouterr()
    assert captured.out == '1'
    assert captured.err.splitlines() == [
        "WARN: unexpected character '@', line 1",
        'FATAL: identifier not found: nope, line 2, token Identifier',
    ]


def test_debug_trace(tmp_path, capsys):
    debug_file = tmp_path / 'debug.txt'
    interpreter = Interpreter(debug_level=3, debug_file=str(debug_file))
    run_source('var a = 1; { a = 2; } print b;', interpreter)
    interpreter.close()
    trace = debug_file.read_text(encoding='utf-8')
    assert 'execute VarDecl' in trace
    assert 'declare a: Float = 1.0' in trace
    assert 'assign a: Float = 2.0' in trace
    assert 'enter scope 1' in trace
    assert 'leave scope 1' in trace
    assert 'diagnostic FATAL: identifier not found: b' in trace


def test_broken_declaration_does_not_run_its_tail(capsys):
    out, errors = run('var x = print 1;\nprint x;', capsys)
    assert out == ''
    assert errors == [
        'FATAL: expected expression, line 1, token Print',
        'FATAL: identifier not found: x, line 2, token Identifier',
    ]
