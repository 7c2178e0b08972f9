from pathlib import Path

from karou.interpreter import Interpreter
from karou.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_onclick_sees_later_bindings(capsys):
    source = (EXAMPLES / 'program_5.ks').read_text(encoding='utf-8')
    ast, errors = parse_program(source)
    assert errors == []
    interp = Interpreter()
    interp.interpret(ast)
    captured = capsys.readouterr()
    # registering a handler prints nothing on stdout
    assert captured.out == ''
    assert 'Event handler registered for element: btn' in captured.err

    interp.trigger_event('btn')
    interp.trigger_event('missing')
    captured = capsys.readouterr()
    assert captured.out.strip() == 'clicked 2'
    assert captured.err == ''
    assert interp.diagnostics == []
