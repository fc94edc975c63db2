"""CLI entry point for the lll interpreter.

Usage:
    python -m lll [-v|-vv|-vvv]                  interactive mode
    python -m lll [-v...] <program_file>         run a program
    python -m lll [-v...] --emit-ast <program_file>
    python -m lll [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given program and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Diagnostics go to stderr. A run that
stops on an unterminated string exits with status 69.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import program_from_obj, program_to_obj
from .errors import Diagnostic, UnterminatedStringError
from .interpreter import Interpreter, report, run_source
from .parser import parse_program
from .repl import run_interactive

USAGE = "USE: lll [source file]"


def read_source(path: Path) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError:
        print(f"FATAL: cannot read {path}", file=sys.stderr)
        sys.exit(1)


def too_deep(path: Path):
    report([Diagnostic.fatal(f"maximum nesting depth exceeded in {path}")])
    sys.exit(1)


def emit_ast(program_file: Path):
    statements, diagnostics = parse_program(read_source(program_file))
    report(diagnostics)
    try:
        text = json.dumps(program_to_obj(statements), ensure_ascii=False, indent=2)
    except RecursionError:
        too_deep(program_file)
    out_path = program_file.with_name(program_file.name + '.ast.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        out.write(text)
    print(str(out_path))


def run_ast(ast_path: Path, debug_level: int):
    try:
        statements = program_from_obj(json.loads(read_source(ast_path)))
    except (ValueError, TypeError, KeyError) as e:
        print(f"FATAL: invalid AST file {ast_path}: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        too_deep(ast_path)
    interpreter = Interpreter(debug_level=debug_level, report_errors=True)
    try:
        interpreter.interpret(statements)
    finally:
        interpreter.close()


def run_file(program_file: Path, debug_level: int):
    source = read_source(program_file)
    interpreter = Interpreter(debug_level=debug_level, report_errors=True)
    try:
        run_source(source, interpreter)
    finally:
        interpreter.close()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='lll', description="lll language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='*', help='program file to execute; omit for interactive mode')
    args = parser.parse_args(argv)

    if len(args.program) > 1 or (args.program and (args.emit_ast or args.ast)):
        print(USAGE, file=sys.stderr)
        print(f"INFO: provided args {args.program}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.emit_ast:
            emit_ast(Path(args.emit_ast))
        elif args.ast:
            run_ast(Path(args.ast), args.v)
        elif args.program:
            run_file(Path(args.program[0]), args.v)
        else:
            run_interactive(args.v)
    except UnterminatedStringError as e:
        sys.stdout.flush()
        print(str(e.diagnostic), file=sys.stderr)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == '__main__':
    main()
