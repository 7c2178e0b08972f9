# Karou Script language package
# This package provides a lexer, parser and tree-walking interpreter for Karou Script.
from .interpreter import run_program, compile_module, Interpreter
from .parser import parse_program, Parser
from .lexer import Lexer
from .errors import KarouError, ErrorVal, ParseError

__all__ = [
    'run_program',
    'compile_module',
    'parse_program',
    'Parser',
    'Lexer',
    'Interpreter',
    'KarouError',
    'ErrorVal',
    'ParseError',
]
