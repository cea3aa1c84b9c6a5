'''
Operator and function table tests
'''

import math

from sycalc import registry
from sycalc.context import AngleMode, Context
from sycalc.util import DomainError, DivisionByZero

from pytest import approx, raises


def test_operator_table():
    assert {s: (o.precedence, o.right_assoc, o.arity)
            for s, o in registry.OPERATORS.items()} == {
        '+': (2, False, 2),
        '-': (2, False, 2),
        '*': (3, False, 2),
        '/': (3, False, 2),
        '%': (3, False, 2),
        '^': (4, True, 2),
    }


def test_outranks():
    plus, times, power = map(registry.operator, '+*^')
    assert times.outranks(plus)
    assert not plus.outranks(times)
    # Left associative: equal precedence pops
    assert plus.outranks(registry.operator('-'))
    # Right associative: it doesn't
    assert not power.outranks(power)


def test_operator_apply():
    assert registry.operator('-').apply(5, 3) == 2
    with raises(DivisionByZero):
        registry.operator('/').apply(1, 0)


def test_function_lookup_any_case():
    assert registry.function('NCR') is registry.function('nCr')
    assert registry.function('nope') is None


def test_user_visible_names():
    assert 'nCr' in registry.FUNCTION_NAMES
    assert 'uminus' not in registry.FUNCTION_NAMES
    assert registry.isfunction('Sqrt')
    assert not registry.isfunction('uplus')
    assert registry.isconstant('PI')
    assert not registry.isconstant('tau')


def test_arity():
    assert registry.function('sin').arity == 1
    assert {name
            for name, spec in registry.FUNCTIONS.items()
            if spec.arity == 2} == {'pow', 'ncr', 'npr', 'gcd', 'lcm'}


def test_constants():
    context = Context(memory=42)
    assert registry.constant('pi')(context) == math.pi
    assert registry.constant('e')(context) == math.e
    assert registry.constant('M')(context) == 42


def test_angle_conversion():
    degrees = Context(angle_mode=AngleMode.DEGREES)
    assert registry.function('tan').apply([45], degrees) == approx(1)
    assert registry.function('atan').apply([1], degrees) == approx(45)
    assert registry.function('atan').apply([1], Context()) == \
        approx(math.pi / 4)


def test_domain_checked_before_rule():
    with raises(DomainError):
        registry.function('ln').apply([-1], Context())


def test_results_are_floats():
    assert type(registry.function('gcd').apply([4, 6], Context())) is float
    assert type(registry.function('floor').apply([2.5], Context())) is float


def test_floor_of_infinity():
    assert registry.function('floor').apply([math.inf], Context()) == \
        math.inf


def test_format_number():
    assert registry.format_number(1 / 3) == '0.3333333333'
    assert registry.format_number(1e20) == '1e+20'
    assert registry.format_number(120.0) == '120'


def test_finite_keeps_name():
    assert registry.function('floor').rule.__name__ == 'floor'
    assert registry.function('ceil').rule.__name__ == 'ceil'
