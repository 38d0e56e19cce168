"""Command-line driver for the Cluck compiler.

Reads one source file, prints the token stream, the AST and the compiled
instructions, and optionally writes the binary instruction image. Any other
number of positional arguments does nothing and exits successfully.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .lexer import Lexer
from .parser import Parser
from .ast import ASTPrinter
from .codegen import CodeGenerator
from .errors import SourceError, CompileError


logger = logging.getLogger(__name__)

DUMPS = ("tokens", "ast", "code")

EXIT_OK = 0
EXIT_SOURCE_ERROR = 1
EXIT_INTERNAL_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cluck",
        description="Compile a Cluck source file to stack-machine instructions.",
        exit_on_error=False,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH",
                        help="source file (exactly one)")
    parser.add_argument("--dump", action="append", choices=DUMPS,
                        help="what to print (repeatable; default: all)")
    parser.add_argument("-o", "--output", type=Path,
                        help="write the binary instruction image here")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def _error(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def run(source: str, dumps: List[str], output: Optional[Path] = None) -> int:
    """Run the pipeline over source text, printing the requested dumps."""
    try:
        if "tokens" in dumps:
            print(f"Tokens: {Lexer(source).tokenize()!r}")

        ast = Parser(Lexer(source)).parse()
        if "ast" in dumps:
            print(f"AST:\n{ASTPrinter().print(ast)}\n")

        bytecode = CodeGenerator().generate(ast)
        if "code" in dumps:
            print(f"Bytecode:\n{bytecode.disassemble()}")
    except SourceError as e:
        _error(e.render())
        return EXIT_SOURCE_ERROR
    except CompileError as e:
        _error(f"error: {e}")
        return EXIT_INTERNAL_ERROR

    if output is not None:
        try:
            output.write_bytes(bytecode.serialize())
        except (OSError, ValueError) as e:
            _error(f"error: cannot write {output}: {e}")
            return EXIT_SOURCE_ERROR
        logger.info("Wrote %d instructions to %s", len(bytecode), output)

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    # Unrecognised arguments count as paths; a malformed command line is a no-op
    try:
        args, extra = build_parser().parse_known_args(argv)
    except argparse.ArgumentError:
        return EXIT_OK
    paths = args.paths + extra

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if len(paths) != 1:
        return EXIT_OK

    path = Path(paths[0])
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _error(f"error: cannot read {path}: {e}")
        return EXIT_SOURCE_ERROR

    logger.debug("Compiling %s (%d characters)", path, len(source))
    return run(source, args.dump or list(DUMPS), args.output)


if __name__ == "__main__":
    sys.exit(main())
