"""Interactive mode: read a line, run it, report diagnostics, repeat.

One `Interpreter` lives for the whole session, so variables declared on
one line are visible on the following ones.
"""

import builtins

from .interpreter import Interpreter, run_source

PROMPT = '> '


class Session:
    def __init__(self, interpreter: Interpreter):
        self.interpreter = interpreter

    def run_line(self, line: str):
        return run_source(line, self.interpreter)

    def loop(self):
        """Run lines until end of input. UnterminatedStringError propagates."""
        while True:
            try:
                line = builtins.input(PROMPT)
            except EOFError:
                print()
                return
            if line.strip() == '':
                continue
            self.run_line(line)


def run_interactive(debug_level: int = 0):
    interpreter = Interpreter(debug_level=debug_level, report_errors=True)
    try:
        Session(interpreter).loop()
    finally:
        interpreter.close()
