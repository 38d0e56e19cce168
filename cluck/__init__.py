"""
Cluck Compiler Package

Compiles source code of a small stack language built on the Chicken
statement words into a flat list of stack-machine instructions.
"""

import logging

from .tokens import Token, TokenType
from .lexer import Lexer
from .ast import *
from .parser import Parser
from .bytecode import Bytecode, Instruction, OpCode
from .codegen import CodeGenerator
from .errors import (CluckError, SourceError, LexError, ParseError,
                     CompileError, UnsupportedFeature)

__version__ = "0.1.0"
__all__ = [
    "Token",
    "TokenType",
    "Lexer",
    "Parser",
    "Bytecode",
    "Instruction",
    "OpCode",
    "CodeGenerator",
    "CluckError",
    "SourceError",
    "LexError",
    "ParseError",
    "CompileError",
    "UnsupportedFeature",
    "parse_source",
    "compile_source",
    "compile_file",
]

logger = logging.getLogger(__name__)


def parse_source(source: str) -> SequenceStmt:
    """
    Parse Cluck source code into an AST.

    Raises:
        LexError, ParseError: On the first malformed token or statement
    """
    return Parser(Lexer(source)).parse()


def compile_source(source: str) -> Bytecode:
    """
    Compile Cluck source code to an instruction list.

    Args:
        source: Cluck source code string

    Returns:
        Bytecode holding the instructions in program order

    Raises:
        SourceError: If lexing or parsing fails
        CompileError: If the tree uses a construct with no code generation
    """
    ast = parse_source(source)

    codegen = CodeGenerator()
    bytecode = codegen.generate(ast)

    logger.debug("Compiled %d statements into %d instructions",
                 len(ast.statements), len(bytecode))
    return bytecode


def compile_file(filepath: str) -> Bytecode:
    """
    Compile a Cluck source file to an instruction list.

    Args:
        filepath: Path to the source file
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()
    return compile_source(source)
