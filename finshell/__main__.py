"""CLI entry point for the finshell interpreter.

Usage:
    python -m finshell [-v|-vv|-vvv] [--parser {descent,lark}] [program_file]
    python -m finshell [-v...] -c <expression>
    python -m finshell [-v...] --emit-ast <program_file>
    python -m finshell [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  -c            Evaluate a single expression and print its value
  --parser      Front end used to parse input (default: descent)
  --emit-ast    Parse the single expression in the given file and emit an AST JSON file
  --ast         Evaluate a previously emitted AST JSON file

Without a program file or -c, an interactive shell is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .context import Context
from .errors import FinshellError
from .interpreter import FRONT_ENDS, Interpreter
from .shell import run_file, shell_loop


def _require_file(path: Path) -> None:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)


def _read_source(path: Path) -> str:
    _require_file(path)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='finshell', description="finshell expression interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--parser', choices=FRONT_ENDS, default='descent', help='front end used to parse input')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-c', metavar='EXPRESSION', dest='command', help='evaluate one expression and exit')
    group.add_argument('--emit-ast', metavar='FIN_FILE', help='emit AST JSON for the expression in the given file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='evaluate an AST from a JSON file')
    parser.add_argument('program', nargs='?', help='finshell source file (.fin) to run line by line')
    args = parser.parse_args(argv)

    with Interpreter(debug_level=args.v, front_end=args.parser) as interpreter:
        # Single expression
        if args.command is not None:
            try:
                result = interpreter.evaluate('<command>', args.command)
            except FinshellError as e:
                print(e.as_string(), file=sys.stderr)
                sys.exit(1)
            print(result)
            return

        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            source = _read_source(program_file).strip()
            try:
                node = interpreter.parse(program_file.name, source)
            except FinshellError as e:
                print(e.as_string(), file=sys.stderr)
                sys.exit(1)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(node), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Evaluate from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            data = json.loads(_read_source(ast_path))
            node = ast_from_obj(data)
            try:
                result = interpreter.visit(node, Context.root())
            except FinshellError as e:
                print(e.as_string(), file=sys.stderr)
                sys.exit(1)
            print(result)
            return

        # Run a source file line by line
        if args.program:
            program_file = Path(args.program)
            _require_file(program_file)
            if not run_file(program_file, interpreter, err=sys.stderr):
                sys.exit(1)
            return

        # Default: interactive shell
        print("Starting Shell")
        shell_loop(interpreter)


if __name__ == '__main__':
    main()
