from pytest import fixture

from sycalc.context import AngleMode, Context
from sycalc.lexer import tokenize
from sycalc.machine import evaluate
from sycalc.parser import to_postfix


@fixture
def radians() -> Context:
    return Context(angle_mode=AngleMode.RADIANS)


@fixture
def degrees() -> Context:
    return Context(angle_mode=AngleMode.DEGREES)


@fixture
def calc(radians):
    '''
    Run line through the whole pipeline.

    Radians and empty memory unless told otherwise.
    '''
    def calc(line: str, context: Context = radians) -> float:
        return evaluate(to_postfix(tokenize(line)), context)
    return calc
