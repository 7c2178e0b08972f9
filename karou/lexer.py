"""Lexer for Karou Script.

The lexer hands out one token per `next_token()` call, so the parser can
pull tokens lazily and never holds more than its two-token window. Once
the input is exhausted every further call returns an EOF token.

Usage:
    lexer = Lexer(source)
    tok = lexer.next_token()

Or for streaming:
    for tok in Lexer(source):
        process(tok)
"""

from __future__ import annotations

import string
from typing import Iterator, List

from .tokens import Token, TokenType, SINGLE_CHAR_TOKENS, lookup_ident

WHITESPACE = ' \t\n\r'
DIGITS = frozenset(string.digits)
IDENT_START = frozenset(string.ascii_letters + '_')
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + '_')


class Lexer:
    """Tokenizer for Karou Script source text."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return

    def tokenize(self) -> List[Token]:
        """Return every remaining token, ending with EOF."""
        return list(self)

    @property
    def ch(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ''

    def advance(self, n: int = 1):
        for _ in range(n):
            if self.pos >= len(self.source):
                return
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self):
        while self.ch and self.ch in WHITESPACE:
            self.advance()

    def next_token(self) -> Token:
        self.skip_whitespace()
        line, column = self.line, self.column
        c = self.ch

        if c == '':
            return Token(TokenType.EOF, '', line, column)
        if c in SINGLE_CHAR_TOKENS:
            self.advance()
            return Token(SINGLE_CHAR_TOKENS[c], c, line, column)
        if c == '"':
            return Token(TokenType.STRING, self.read_string(), line, column)
        if c in DIGITS:
            return Token(TokenType.NUMBER, self.read_number(), line, column)
        if c in IDENT_START:
            word = self.read_identifier()
            return Token(lookup_ident(word), word, line, column)

        self.advance()
        return Token(TokenType.ILLEGAL, c, line, column)

    def read_string(self) -> str:
        # No escapes. A missing closing quote takes the rest of the input.
        self.advance()
        start = self.pos
        while self.ch and self.ch != '"':
            self.advance()
        value = self.source[start:self.pos]
        if self.ch == '"':
            self.advance()
        return value

    def read_number(self) -> str:
        # Dots are taken as written; '1.2.3' is rejected later by the parser.
        start = self.pos
        while self.ch and (self.ch in DIGITS or self.ch == '.'):
            self.advance()
        return self.source[start:self.pos]

    def read_identifier(self) -> str:
        start = self.pos
        while self.ch and self.ch in IDENT_CHARS:
            self.advance()
        return self.source[start:self.pos]


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return Lexer(source).tokenize()
