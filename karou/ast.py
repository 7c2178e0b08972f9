"""Abstract Syntax Tree (AST) definitions for Karou Script.

The AST classes defined in this module represent the syntactic structure
of parsed Karou programs. Every node owns its children outright; nothing
is shared between two parents. `str(node)` renders a node back to
source-like text for AST dumps and diagnostics. Rendering is purely
structural and never fails.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


def _number_source(value: float) -> str:
    # Exact digits without an exponent, so the lexer reads back the same float.
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def _indent(text: str, prefix: str = '  ') -> str:
    return '\n'.join(prefix + line for line in text.split('\n'))


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Expression(Node):
    pass


@dataclass
class Statement(Node):
    pass


# Expressions

@dataclass
class NumberLiteral(Expression):
    value: float

    def __str__(self) -> str:
        return _number_source(self.value)


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class Identifier(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class BinaryExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class CallExpression(Expression):
    callee: Expression
    arguments: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ', '.join(str(arg) for arg in self.arguments)
        return f"{self.callee}({args})"


# Statements

@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return f"{self.expression};"


@dataclass
class LetStatement(Statement):
    name: str
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class BlockStatement(Statement):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.statements:
            return '{\n}'
        body = '\n'.join(_indent(str(stmt)) for stmt in self.statements)
        return '{\n' + body + '\n}'


@dataclass
class FunctionDeclaration(Statement):
    name: str
    parameters: List[str] = field(default_factory=list)
    body: BlockStatement = field(default_factory=BlockStatement)

    def __str__(self) -> str:
        return f"function {self.name}({', '.join(self.parameters)}) {self.body}"


@dataclass
class OnClickStatement(Statement):
    element_id: str
    body: BlockStatement = field(default_factory=BlockStatement)

    def __str__(self) -> str:
        return f'onClick("{self.element_id}") {self.body}'


@dataclass
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return ''.join(f"{stmt}\n" for stmt in self.statements)
