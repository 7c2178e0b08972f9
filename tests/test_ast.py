import io

from karou.ast import (
    BinaryExpression, BlockStatement, CallExpression, ExpressionStatement,
    Identifier, NumberLiteral, OnClickStatement, Program, StringLiteral,
)
from karou.interpreter import Interpreter
from karou.parser import parse_program


def render(source):
    program, errors = parse_program(source)
    assert errors == []
    return str(program)


def test_expression_rendering():
    expr = BinaryExpression(NumberLiteral(2.5), '*', CallExpression(Identifier('f'), [
        StringLiteral('a'), NumberLiteral(3.0)]))
    assert str(expr) == '(2.5 * f("a", 3))'


def test_let_and_program_rendering():
    assert render('let x = 2 + 3 * 4') == 'let x = (2 + (3 * 4));\n'


def test_block_rendering_indents_children():
    assert render('onClick("btn") { print("hi"); }') == 'onClick("btn") {\n  print("hi");\n}\n'
    assert render('function f(a, b) { let c = a; }') == 'function f(a, b) {\n  let c = a;\n}\n'


def test_nested_blocks_indent_every_line():
    block = BlockStatement([BlockStatement([ExpressionStatement(Identifier('x'))])])
    assert str(block) == '{\n  {\n    x;\n  }\n}'


def test_empty_nodes():
    assert str(BlockStatement()) == '{\n}'
    assert str(OnClickStatement('b')) == 'onClick("b") {\n}'
    assert str(Program()) == ''


def test_render_then_reparse_keeps_structure_and_values():
    source = '''
        let a = 1 - 2 - 3;
        let b = (1 - 2) * 3 + 4 / 2;
        let c = "s" + 1 * 2;
        { let a = 10; }
        let d = a * b;
    '''
    first, errors = parse_program(source)
    assert errors == []
    second, errors = parse_program(str(first))
    assert errors == []
    assert second == first

    values = []
    for program in (first, second):
        interp = Interpreter(out=io.StringIO(), err=io.StringIO())
        interp.interpret(program)
        values.append(interp.global_env.values)
    assert values[0] == values[1] == {'a': -4.0, 'b': -1.0, 'c': 's2', 'd': 4.0}


def test_number_literals_render_exact_digits():
    assert str(NumberLiteral(14.0)) == '14'
    assert str(NumberLiteral(0.0000001)) == '0.0000001'
    assert str(NumberLiteral(1.2345678)) == '1.2345678'
    assert str(NumberLiteral(1e16)) == '10000000000000000'


def test_fractional_literals_survive_render_and_reparse():
    source = 'let a = 0.0000001 * 10000000; let b = 1.2345678 * 100000000; let c = 0.1 + 0.2;'
    first, errors = parse_program(source)
    assert errors == []
    second, errors = parse_program(str(first))
    assert errors == []
    assert second == first

    values = []
    for program in (first, second):
        interp = Interpreter(out=io.StringIO(), err=io.StringIO())
        interp.interpret(program)
        values.append(interp.global_env.values)
    assert values[0] == values[1]
