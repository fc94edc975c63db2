from pathlib import Path

from lll.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_booleans_and_nil(capsys):
    with open(EXAMPLES / 'program_8.lll', 'r', encoding='utf-8') as f:
        source = f.read()
    diagnostics = run_program(source)
    out = capsys.readouterr().out
    assert diagnostics == []
    assert out == 'true\nfalse\ntrue\ntrue\nnil'
