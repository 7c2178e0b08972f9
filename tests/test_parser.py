from karou.ast import (
    BinaryExpression, BlockStatement, CallExpression, ExpressionStatement,
    FunctionDeclaration, Identifier, LetStatement, NumberLiteral,
    OnClickStatement, StringLiteral,
)
from karou.errors import ParseError
from karou.lexer import Lexer
from karou.parser import Parser, parse_program


def parse_ok(source):
    program, errors = parse_program(source)
    assert errors == []
    return program.statements


def test_let_with_precedence():
    stmts = parse_ok('let x = 2 + 3 * 4;')
    assert stmts == [
        LetStatement('x', BinaryExpression(
            NumberLiteral(2.0), '+',
            BinaryExpression(NumberLiteral(3.0), '*', NumberLiteral(4.0)),
        )),
    ]


def test_equal_precedence_is_left_associative():
    stmts = parse_ok('1 - 2 - 3; 8 / 4 * 2; 1 + 2 * 3 - 4')
    assert [str(s.expression) for s in stmts] == [
        '((1 - 2) - 3)',
        '((8 / 4) * 2)',
        '((1 + (2 * 3)) - 4)',
    ]


def test_parentheses_override_precedence():
    stmts = parse_ok('(1 + 2) * 3;')
    assert str(stmts[0].expression) == '((1 + 2) * 3)'


def test_semicolons_are_optional():
    stmts = parse_ok('let a = 1 let b = a\nprint(b)')
    assert [type(s) for s in stmts] == [LetStatement, LetStatement, ExpressionStatement]


def test_stray_semicolons_are_skipped():
    assert parse_ok(';; let a = 1;;') == [LetStatement('a', NumberLiteral(1.0))]


def test_calls():
    stmts = parse_ok('print(); foo(1, "a", b);')
    assert stmts[0].expression == CallExpression(Identifier('print'), [])
    assert stmts[1].expression == CallExpression(
        Identifier('foo'), [NumberLiteral(1.0), StringLiteral('a'), Identifier('b')])


def test_function_declaration():
    stmts = parse_ok('function add(a, b) { print(a + b); }')
    assert stmts == [FunctionDeclaration('add', ['a', 'b'], BlockStatement([
        ExpressionStatement(CallExpression(
            Identifier('print'),
            [BinaryExpression(Identifier('a'), '+', Identifier('b'))],
        )),
    ]))]


def test_function_without_parameters():
    stmts = parse_ok('function noop() {}')
    assert stmts == [FunctionDeclaration('noop', [], BlockStatement([]))]


def test_onclick_statement():
    stmts = parse_ok('onClick("btn") { print("clicked"); }')
    assert stmts == [OnClickStatement('btn', BlockStatement([
        ExpressionStatement(CallExpression(Identifier('print'), [StringLiteral('clicked')])),
    ]))]


def test_bare_block():
    stmts = parse_ok('{ let x = 1; { let y = 2; } }')
    assert stmts == [BlockStatement([
        LetStatement('x', NumberLiteral(1.0)),
        BlockStatement([LetStatement('y', NumberLiteral(2.0))]),
    ])]


def test_let_without_name_records_errors():
    program, errors = parse_program('let = 5;')
    assert errors[0] == ParseError(1, 'Expected IDENTIFIER, got EQUALS')
    assert 'Unexpected token: =' in [e.message for e in errors]
    assert not any(isinstance(s, LetStatement) for s in program.statements)


def test_error_reports_line():
    _, errors = parse_program('let a = 1;\nlet = 2;')
    assert errors[0].line == 2
    assert str(errors[0]) == 'Line 2: Expected IDENTIFIER, got EQUALS'


def test_onclick_needs_string_id():
    _, errors = parse_program('onClick(btn) { }')
    assert errors[0].message == 'Expected STRING, got IDENTIFIER'


def test_invalid_number_literal():
    program, errors = parse_program('let n = 1.2.3;')
    assert [e.message for e in errors] == ['Invalid number literal: 1.2.3']
    assert not any(isinstance(s, LetStatement) for s in program.statements)


def test_unterminated_block():
    program, errors = parse_program('onClick("x") { print(1);')
    assert errors[-1].message == 'Expected CLOSE_BRACE, got EOF'
    assert program.statements[0].body.statements[0].expression.arguments == [NumberLiteral(1.0)]


def test_unterminated_string_ends_parse():
    program, errors = parse_program('print("abc')
    assert [e.message for e in errors] == ['Expected CLOSE_PAREN, got EOF']
    assert program.statements == []


def test_garbage_never_raises():
    program, errors = parse_program('@@ } ) let')
    assert program.statements == []
    assert len(errors) == 5


def test_parser_accepts_lexer():
    parser = Parser(Lexer('let a = "s";'))
    program = parser.parse_program()
    assert parser.get_errors() == []
    assert program.statements == [LetStatement('a', StringLiteral('s'))]


def test_empty_source():
    program, errors = parse_program('   ')
    assert program.statements == []
    assert errors == []


def test_deep_nesting_is_an_error_not_a_crash():
    program, errors = parse_program('print(' + '(' * 600 + '1' + ')' * 600 + ');')
    assert 'Expression nested too deeply' in [e.message for e in errors]

    program, errors = parse_program('(' * 1500)
    assert program.statements == []
    assert 'Expression nested too deeply' in [e.message for e in errors]

    program, errors = parse_program('{' * 600 + '}' * 600)
    assert 'Block nested too deeply' in [e.message for e in errors]


def test_moderate_nesting_parses():
    stmts = parse_ok('let x = ' + '(' * 50 + '7' + ')' * 50 + ';' + '{' * 50 + '}' * 50)
    assert stmts[0] == LetStatement('x', NumberLiteral(7.0))
    assert isinstance(stmts[1], BlockStatement)
