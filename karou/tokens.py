"""Token definitions for Karou Script.

A token is the smallest lexical unit produced by the lexer: a kind from
the closed `TokenType` enumeration, the literal text it was built from,
and the line/column of its first character.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenType(Enum):
    # Literals
    NUMBER = 'NUMBER'
    IDENTIFIER = 'IDENTIFIER'
    STRING = 'STRING'

    # Keywords
    PRINT = 'PRINT'
    LET = 'LET'
    FUNCTION = 'FUNCTION'
    IF = 'IF'
    ELSE = 'ELSE'
    WHILE = 'WHILE'
    RETURN = 'RETURN'
    ONCLICK = 'ONCLICK'

    # Operators
    EQUALS = 'EQUALS'
    PLUS = 'PLUS'
    MINUS = 'MINUS'
    STAR = 'STAR'
    SLASH = 'SLASH'

    # Delimiters
    OPEN_PAREN = 'OPEN_PAREN'
    CLOSE_PAREN = 'CLOSE_PAREN'
    OPEN_BRACE = 'OPEN_BRACE'
    CLOSE_BRACE = 'CLOSE_BRACE'
    SEMICOLON = 'SEMICOLON'
    COMMA = 'COMMA'

    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal!r}, {self.line}:{self.column})"


# Read-only after import.
KEYWORDS: Dict[str, TokenType] = {
    'let': TokenType.LET,
    'print': TokenType.PRINT,
    'function': TokenType.FUNCTION,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'while': TokenType.WHILE,
    'return': TokenType.RETURN,
    'onClick': TokenType.ONCLICK,
}

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '=': TokenType.EQUALS,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '(': TokenType.OPEN_PAREN,
    ')': TokenType.CLOSE_PAREN,
    '{': TokenType.OPEN_BRACE,
    '}': TokenType.CLOSE_BRACE,
    ';': TokenType.SEMICOLON,
    ',': TokenType.COMMA,
}


def lookup_ident(word: str) -> TokenType:
    """Classify a word as a keyword or a plain identifier."""
    return KEYWORDS.get(word, TokenType.IDENTIFIER)
