"""Tree-walking interpreter for Karou Script.

The interpreter walks a `Program` produced by the parser. It keeps a
chain of `Environment` scopes, the most recently computed value and a
table of `onClick` handlers that outlive a single `interpret()` call.

Runtime conditions (undefined variables, unsupported calls, division by
zero) are raised internally as `KarouError`. By default they are caught
where they happen, reported on the error stream and replaced by the
number 0 so the rest of the program still runs. Pass `strict=True` to
let them propagate instead.
"""

from __future__ import annotations

import sys
from typing import Callable, Dict, List, Optional, TextIO

from .ast import (
    Program, Node, ExpressionStatement, LetStatement, BlockStatement,
    FunctionDeclaration, OnClickStatement, NumberLiteral, StringLiteral,
    Identifier, BinaryExpression, CallExpression,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import ErrorVal, KarouError
from .parser import parse_program
from .types import Value, to_number, to_string, type_name


class Interpreter:
    """Core interpreter that executes Karou AST."""
    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt', strict: bool = False,
                 announce_to_out: bool = False):
        self.global_env = Environment()
        self.environment = self.global_env
        self.last_value: Value = 0.0
        self.event_handlers: Dict[str, Callable[[], None]] = {}
        self.declared_functions: List[str] = []
        self.diagnostics: List[ErrorVal] = []
        self.builtins: Dict[str, BuiltinFunction] = {}
        self.out = out
        self.err = err
        self.strict = strict
        self.announce_to_out = announce_to_out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.register_builtins()

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    # Streams are looked up on every write so a redirected sys.stdout is honoured.
    def _out(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def _err(self) -> TextIO:
        return self.err if self.err is not None else sys.stderr

    def announce(self, msg: str):
        stream = self._out() if self.announce_to_out else self._err()
        print(msg, file=stream)
        self.debug(msg)

    def recover(self, ex: KarouError) -> Value:
        """Report a runtime condition and return the substitute value."""
        if self.strict:
            raise ex
        self.diagnostics.append(ex.err)
        print(f"Runtime error: {ex.err.message}", file=self._err())
        self.debug(f"{ex.err.name}: {ex.err.message}")
        return 0.0

    def register_builtins(self):
        def std_print(args: List[Value]) -> Value:
            if args:
                print(to_string(args[0]), file=self._out())
            return 0.0

        self.builtins['print'] = BuiltinFunction('print', 1, std_print)

    # Public API
    def interpret(self, program: Program):
        for stmt in program.statements:
            self.execute(stmt)

    def trigger_event(self, element_id: str):
        handler = self.event_handlers.get(element_id)
        if handler is None:
            self.debug(f"no handler registered for element: {element_id}", level=2)
            return
        self.debug(f"trigger {element_id}")
        handler()

    def register_event_handler(self, element_id: str, handler: Callable[[], None]):
        self.event_handlers[element_id] = handler

    def execute(self, node: Node):
        if isinstance(node, ExpressionStatement):
            self.evaluate(node.expression)
            return
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value)
            self.environment.define(node.name, value)
            self.debug(f"let {node.name}: {type_name(value)} = {to_string(value)}", level=2)
            return
        if isinstance(node, BlockStatement):
            self.execute_block(node, Environment(parent=self.environment))
            return
        if isinstance(node, FunctionDeclaration):
            self.declared_functions.append(node.name)
            self.announce(f"Function '{node.name}' declared (not yet executable)")
            return
        if isinstance(node, OnClickStatement):
            self.register_onclick(node)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_block(self, block: BlockStatement, env: Environment):
        previous = self.environment
        self.environment = env
        try:
            for stmt in block.statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    def register_onclick(self, node: OnClickStatement):
        # The scope is captured by reference: later bindings in it are visible.
        captured = self.environment
        body = node.body

        def handler():
            self.execute_block(body, Environment(parent=captured))

        self.register_event_handler(node.element_id, handler)
        self.announce(f"Event handler registered for element: {node.element_id}")

    def evaluate(self, node: Node) -> Value:
        if isinstance(node, NumberLiteral):
            value: Value = node.value
        elif isinstance(node, StringLiteral):
            value = node.value
        elif isinstance(node, Identifier):
            try:
                value = self.environment.get(node.name)
            except KarouError as ex:
                value = self.recover(ex)
        elif isinstance(node, BinaryExpression):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            try:
                value = self.apply_binary_op(node.operator, left, right)
            except KarouError as ex:
                value = self.recover(ex)
            self.debug(f"{to_string(left)} {node.operator} {to_string(right)} -> {to_string(value)}", level=3)
        elif isinstance(node, CallExpression):
            try:
                value = self.call(node)
            except KarouError as ex:
                value = self.recover(ex)
        else:
            raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")
        self.last_value = value
        return value

    def call(self, node: CallExpression) -> Value:
        builtin = None
        if isinstance(node.callee, Identifier):
            builtin = self.builtins.get(node.callee.name)
        if builtin is None:
            raise KarouError(ErrorVal('UnsupportedError', f'Function calls not yet supported: {node.callee}'))
        arguments = node.arguments if builtin.arity is None else node.arguments[:builtin.arity]
        args = [self.evaluate(arg) for arg in arguments]
        return builtin.fn(args)

    def apply_binary_op(self, op: str, a: Value, b: Value) -> Value:
        if op == '+':
            if isinstance(a, str) or isinstance(b, str):
                return to_string(a) + to_string(b)
            return to_number(a) + to_number(b)
        if op == '-':
            return to_number(a) - to_number(b)
        if op == '*':
            return to_number(a) * to_number(b)
        if op == '/':
            divisor = to_number(b)
            if divisor == 0.0:
                raise KarouError(ErrorVal('ZeroDivisionError', 'Division by zero'))
            return to_number(a) / divisor
        raise KarouError(ErrorVal('UnsupportedError', f'unsupported operator {op}'))


def run_program(source: str, **options) -> Interpreter:
    """Convenience function to parse and run a Karou program from a source string.

    Raises `KarouError` with a `SyntaxError` condition if the source does
    not parse. Keyword options are passed to `Interpreter`. The
    interpreter is returned so callers can inspect its state or trigger
    events.
    """
    program, errors = parse_program(source)
    if errors:
        message = '; '.join(str(e) for e in errors)
        raise KarouError(ErrorVal('SyntaxError', message))
    interpreter = Interpreter(**options)
    interpreter.interpret(program)
    return interpreter


def compile_module(file_path: str, **options) -> Interpreter:
    """Parse and run a Karou file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, **options)
