"""Parser for Karou Script.

The parser is a recursive-descent parser with precedence climbing for
binary operators. It keeps exactly two tokens of lookahead, `cur_token`
and `peek_token`, pulled lazily from a `Lexer`.

Syntax errors never abort a parse. Each one is appended to `errors` as a
`ParseError(line, message)` and the offending statement is dropped; the
main loop then moves on by a single token and tries again. Callers must
check `errors` before trusting the returned `Program`.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from .ast import (
    Program, Statement, Expression, ExpressionStatement, LetStatement,
    BlockStatement, FunctionDeclaration, OnClickStatement, NumberLiteral,
    StringLiteral, Identifier, BinaryExpression, CallExpression,
)
from .errors import ParseError
from .lexer import Lexer
from .tokens import Token, TokenType

LOWEST = 0

# Deepest allowed nesting of parentheses, calls and blocks combined.
MAX_NESTING = 100

# Tokens missing from this table are not binary operators and end the climb.
PRECEDENCES: Dict[TokenType, int] = {
    TokenType.PLUS: 1,
    TokenType.MINUS: 1,
    TokenType.STAR: 2,
    TokenType.SLASH: 2,
}


class Parser:
    def __init__(self, source: Union[str, Lexer]):
        self.lexer = source if isinstance(source, Lexer) else Lexer(source)
        self.errors: List[ParseError] = []
        self.depth = 0
        self.cur_token = Token(TokenType.ILLEGAL, '')
        self.peek_token = Token(TokenType.ILLEGAL, '')
        # Fill both lookahead slots.
        self.next_token()
        self.next_token()

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the next token has the given type, else record an error."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.add_error(f"Expected {token_type}, got {self.peek_token.type}")
        return False

    def add_error(self, message: str):
        self.errors.append(ParseError(self.cur_token.line, message))

    def get_errors(self) -> List[ParseError]:
        return list(self.errors)

    def enter_nesting(self, what: str) -> bool:
        if self.depth >= MAX_NESTING:
            self.add_error(f"{what} nested too deeply")
            return False
        self.depth += 1
        return True

    def peek_precedence(self) -> int:
        return PRECEDENCES.get(self.peek_token.type, LOWEST)

    def cur_precedence(self) -> int:
        return PRECEDENCES.get(self.cur_token.type, LOWEST)

    # Statements

    def parse_program(self) -> Program:
        program = Program()
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Optional[Statement]:
        token_type = self.cur_token.type
        if token_type == TokenType.LET:
            return self.parse_let_statement()
        if token_type == TokenType.FUNCTION:
            return self.parse_function_declaration()
        if token_type == TokenType.ONCLICK:
            return self.parse_onclick_statement()
        if token_type == TokenType.OPEN_BRACE:
            return self.parse_block_statement()
        if token_type == TokenType.SEMICOLON:
            # stray semicolon
            return None
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        name = self.cur_token.literal
        if not self.expect_peek(TokenType.EQUALS):
            return None
        self.next_token()
        value = self.parse_expression()
        if value is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return LetStatement(name, value)

    def parse_function_declaration(self) -> Optional[FunctionDeclaration]:
        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        name = self.cur_token.literal
        if not self.expect_peek(TokenType.OPEN_PAREN):
            return None
        parameters = self.parse_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.CLOSE_PAREN):
            return None
        if not self.expect_peek(TokenType.OPEN_BRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionDeclaration(name, parameters, body)

    def parse_parameters(self) -> Optional[List[str]]:
        parameters: List[str] = []
        if self.peek_token_is(TokenType.CLOSE_PAREN):
            return parameters
        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        parameters.append(self.cur_token.literal)
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENTIFIER):
                return None
            parameters.append(self.cur_token.literal)
        return parameters

    def parse_onclick_statement(self) -> Optional[OnClickStatement]:
        if not self.expect_peek(TokenType.OPEN_PAREN):
            return None
        if not self.expect_peek(TokenType.STRING):
            return None
        element_id = self.cur_token.literal
        if not self.expect_peek(TokenType.CLOSE_PAREN):
            return None
        if not self.expect_peek(TokenType.OPEN_BRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None
        return OnClickStatement(element_id, body)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        expr = self.parse_expression()
        if expr is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expr)

    def parse_block_statement(self) -> Optional[BlockStatement]:
        # cur_token is the opening brace.
        if not self.enter_nesting("Block"):
            return None
        try:
            return self._parse_block_body()
        finally:
            self.depth -= 1

    def _parse_block_body(self) -> BlockStatement:
        block = BlockStatement()
        self.next_token()
        while not self.cur_token_is(TokenType.CLOSE_BRACE):
            if self.cur_token_is(TokenType.EOF):
                self.add_error(f"Expected {TokenType.CLOSE_BRACE}, got {TokenType.EOF}")
                break
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()
        return block

    # Expressions (precedence climbing)

    def parse_expression(self, precedence: int = LOWEST) -> Optional[Expression]:
        if not self.enter_nesting("Expression"):
            return None
        try:
            return self._parse_binary(precedence)
        finally:
            self.depth -= 1

    def _parse_binary(self, precedence: int) -> Optional[Expression]:
        left = self.parse_primary_expression()
        if left is None:
            return None
        while (not self.peek_token_is(TokenType.SEMICOLON)
               and precedence < self.peek_precedence()):
            self.next_token()
            operator = self.cur_token.literal
            op_precedence = self.cur_precedence()
            self.next_token()
            # Same precedence on the right keeps equal operators left-associative.
            right = self.parse_expression(op_precedence)
            if right is None:
                return None
            left = BinaryExpression(left, operator, right)
        return left

    def parse_primary_expression(self) -> Optional[Expression]:
        token = self.cur_token
        if token.type == TokenType.NUMBER:
            try:
                return NumberLiteral(float(token.literal))
            except ValueError:
                self.add_error(f"Invalid number literal: {token.literal}")
                return None
        if token.type == TokenType.STRING:
            return StringLiteral(token.literal)
        if token.type in (TokenType.IDENTIFIER, TokenType.PRINT):
            ident = Identifier(token.literal)
            if self.peek_token_is(TokenType.OPEN_PAREN):
                return self.parse_call_expression(ident)
            return ident
        if token.type == TokenType.OPEN_PAREN:
            self.next_token()
            expr = self.parse_expression()
            if expr is None:
                return None
            if not self.expect_peek(TokenType.CLOSE_PAREN):
                return None
            return expr
        self.add_error(f"Unexpected token: {token.literal or token.type}")
        return None

    def parse_call_expression(self, callee: Expression) -> Optional[CallExpression]:
        call = CallExpression(callee)
        self.next_token()  # cur_token is now '('
        if self.peek_token_is(TokenType.CLOSE_PAREN):
            self.next_token()
            return call
        self.next_token()
        arg = self.parse_expression()
        if arg is None:
            return None
        call.arguments.append(arg)
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression()
            if arg is None:
                return None
            call.arguments.append(arg)
        if not self.expect_peek(TokenType.CLOSE_PAREN):
            return None
        return call


def parse_program(source: str) -> Tuple[Program, List[ParseError]]:
    """Parse Karou source code into a Program AST.

    Never raises. The returned error list is empty exactly when the parse
    succeeded.
    """
    parser = Parser(source)
    program = parser.parse_program()
    return program, parser.get_errors()
