from pathlib import Path

from lll.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_outer_mutation(capsys):
    with open(EXAMPLES / 'program_4.lll', 'r', encoding='utf-8') as f:
        source = f.read()
    diagnostics = run_program(source)
    out = capsys.readouterr().out
    assert diagnostics == []
    assert out == 'inner\n11'
