"""CLI entry point for the Karou Script interpreter.

Usage:
    python -m karou [-v|-vv|-vvv] [-a] <program_file>
    python -m karou [-v...] [-a] -e "<code>"
    python -m karou [-v...] -i

Options:
  -v                 Increase debug verbosity (can be repeated)
  -a, --ast          Print the Abstract Syntax Tree before running
  -e, --eval CODE    Evaluate code directly instead of reading a file
  -i, --interactive  Run in interactive mode

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. In interactive mode the line
`trigger <elementId>` fires a registered onClick handler.
"""

import argparse
import sys
from pathlib import Path

from .interpreter import Interpreter
from .parser import parse_program

INTERACTIVE_HELP = """Commands:
  help - Show this help
  exit - Exit interactive mode
  trigger <elementId> - Trigger an onClick event
  Or enter Karou Script code directly"""


def parse_source(source: str):
    """Parse source text, reporting errors to stderr. Returns None on failure."""
    program, errors = parse_program(source)
    if errors:
        print("Parse errors:", file=sys.stderr)
        for error in errors:
            print(f"  {error}", file=sys.stderr)
        return None
    return program


def run_source(source: str, interpreter: Interpreter, show_ast: bool = False) -> bool:
    program = parse_source(source)
    if program is None:
        return False
    if show_ast:
        print("=== Abstract Syntax Tree ===")
        print(program)
    print("=== Execution Output ===")
    interpreter.interpret(program)
    return True


def interactive_mode(interpreter: Interpreter) -> None:
    print("Karou Script Interactive Mode")
    print("Type 'exit' to quit, 'help' for commands")
    while True:
        try:
            line = input("karou> ")
        except EOFError:
            break
        line = line.strip()
        if line in ('exit', 'quit'):
            break
        if line == 'help':
            print(INTERACTIVE_HELP)
            continue
        if line == 'trigger' or line.startswith('trigger '):
            interpreter.trigger_event(line[len('trigger'):].strip())
            continue
        if not line:
            continue
        run_source(line, interpreter)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='karou', description="Karou Script interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-a', '--ast', action='store_true', help='print the Abstract Syntax Tree')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-e', '--eval', metavar='CODE', help='evaluate code directly')
    group.add_argument('-i', '--interactive', action='store_true', help='run in interactive mode')
    parser.add_argument('program', nargs='?', help='Karou program file (.ks) to execute')
    args = parser.parse_args(argv)

    with Interpreter(debug_level=args.v) as interpreter:
        if args.interactive:
            interactive_mode(interpreter)
            return

        # Direct evaluation: parse errors are reported but not fatal
        if args.eval is not None:
            run_source(args.eval, interpreter, show_ast=args.ast)
            return

        if not args.program:
            parser.error('missing program file; or use --eval/--interactive')
        program_file = Path(args.program)
        try:
            source = program_file.read_text(encoding='utf-8')
        except OSError:
            print(f"Error: Could not open file '{program_file}'", file=sys.stderr)
            sys.exit(1)
        if not run_source(source, interpreter, show_ast=args.ast):
            sys.exit(1)


if __name__ == '__main__':
    main()
