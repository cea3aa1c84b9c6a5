'''
What every operator, function and constant means.

Read-only lookup tables, keyed case-insensitively. The parser only cares about
precedence and associativity; the machine about arity and the rules.
'''

from collections import namedtuple
from functools import reduce, wraps
import operator as op
import math

from .util import (wrap_domain_errors, DomainError, DivisionByZero,
                   ModuloByZero)


class OperatorSpec(namedtuple('OperatorSpec',
                              'symbol precedence right_assoc arity rule')):
    __slots__ = ()

    @wrap_domain_errors('Math error: invalid operands to {0.symbol}')
    def apply(self, left, right):
        return self.rule(left, right)

    def outranks(self, other):
        '''
        Return True if self, sitting on the operator stack, is to be output
        before other is pushed.
        '''
        if self.precedence == other.precedence:
            return not other.right_assoc
        return self.precedence > other.precedence


class FunctionSpec(namedtuple('FunctionSpec',
                              'name arity rule domain angle')):
    '''
    A named function.

    :param domain: Predicate over the arguments, or None if total.
    :param angle: 'in' if the argument is an angle, 'out' if the result is,
                  None if indifferent to angle mode.
    '''
    __slots__ = ()

    @wrap_domain_errors('Math error: invalid argument to {0.name}')
    def apply(self, args, context):
        if self.domain is not None and not self.domain(*args):
            raise DomainError('Math error: {} outside domain of {}'.format(
                ', '.join(map(format_number, args)), self.name))
        if self.angle == 'in' and context.degrees:
            args = [math.radians(arg) for arg in args]
        result = self.rule(*args)
        if self.angle == 'out' and context.degrees:
            result = math.degrees(result)
        return float(result)


def format_number(n, precision=10):
    '''
    printf %g style, like the results the calculator prints.
    '''
    return '{0:.{1}g}'.format(n, precision)


def _nearest(x):
    '''
    Round half away from zero, to a Python int.
    '''
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _isodd(n):
    return float(n).is_integer() and n % 2 == 1


def _pow(base, exponent):
    '''
    Real exponentiation that never goes complex or raises.

    NaN when undefined, signed infinity on overflow or pole.
    '''
    try:
        return math.pow(base, exponent)
    except OverflowError:
        pass
    except ValueError:
        # Negative base, fractional exponent
        if base != 0:
            return math.nan
    # Overflow, or the pole at zero
    if math.copysign(1, base) < 0 and _isodd(exponent):
        return -math.inf
    return math.inf


def _divide(left, right):
    if right == 0:
        raise DivisionByZero()
    return left / right


def _modulo(left, right):
    if right == 0:
        raise ModuloByZero()
    return math.fmod(left, right)


def _isfactorable(x):
    rounded = math.floor(x + 0.5)
    # 171! is past the largest float
    return x >= 0 and abs(x - rounded) <= 1e-9 and rounded <= 170


def _factorial(x):
    return reduce(op.mul, range(2, _nearest(x) + 1), 1.0)


def _iscombinatorial(n, k):
    n, k = _nearest(n), _nearest(k)
    return n >= 0 and k >= 0 and k <= n


def _combinations(n, k):
    n, k = _nearest(n), _nearest(k)
    k = min(k, n - k)
    result = 1.0
    for i in range(1, k + 1):
        result = result * (n - k + i) / i
        if math.isinf(result):
            break
    return result


def _permutations(n, k):
    n, k = _nearest(n), _nearest(k)
    result = 1.0
    for i in range(k):
        result *= n - i
        if math.isinf(result):
            break
    return result


def _gcd(a, b):
    a, b = abs(_nearest(a)), abs(_nearest(b))
    while b:
        a, b = b, a % b
    return a


def _lcm(a, b):
    a, b = _nearest(a), _nearest(b)
    if a == 0 or b == 0:
        return 0
    return abs(a // _gcd(a, b) * b)


def _finite(f):
    '''
    Leave infinities alone; math.floor() and math.ceil() refuse them.
    '''
    @wraps(f)
    def wrapped(x):
        return f(x) if math.isfinite(x) else x
    return wrapped


OPERATORS = {
    spec.symbol: spec
    for spec
    in [OperatorSpec('+', 2, False, 2, op.add),
        OperatorSpec('-', 2, False, 2, op.sub),
        OperatorSpec('*', 3, False, 2, op.mul),
        OperatorSpec('/', 3, False, 2, _divide),
        OperatorSpec('%', 3, False, 2, _modulo),
        OperatorSpec('^', 4, True, 2, _pow)]
}


def _positive(x):
    return x > 0


def _nonnegative(x):
    return x >= 0


FUNCTIONS = {
    spec.name.lower(): spec
    for spec
    in [
        # Unary signs. The parser makes these up; users can't spell them.
        FunctionSpec('uplus', 1, op.pos, None, None),
        FunctionSpec('uminus', 1, op.neg, None, None),

        # Trigonometry
        FunctionSpec('sin', 1, math.sin, None, 'in'),
        FunctionSpec('cos', 1, math.cos, None, 'in'),
        FunctionSpec('tan', 1, math.tan, None, 'in'),
        FunctionSpec('asin', 1, math.asin, None, 'out'),
        FunctionSpec('acos', 1, math.acos, None, 'out'),
        FunctionSpec('atan', 1, math.atan, None, 'out'),
        FunctionSpec('sinh', 1, math.sinh, None, None),
        FunctionSpec('cosh', 1, math.cosh, None, None),
        FunctionSpec('tanh', 1, math.tanh, None, None),

        # Powers and logarithms
        FunctionSpec('sqrt', 1, math.sqrt, _nonnegative, None),
        FunctionSpec('cbrt', 1, math.cbrt, None, None),
        FunctionSpec('ln', 1, math.log, _positive, None),
        FunctionSpec('log', 1, math.log10, _positive, None),
        FunctionSpec('exp', 1, math.exp, None, None),
        FunctionSpec('pow', 2, _pow, None, None),

        # Rounding
        FunctionSpec('abs', 1, math.fabs, None, None),
        FunctionSpec('floor', 1, _finite(math.floor), None, None),
        FunctionSpec('ceil', 1, _finite(math.ceil), None, None),

        # Combinatorics and number theory
        FunctionSpec('fact', 1, _factorial, _isfactorable, None),
        FunctionSpec('factorial', 1, _factorial, _isfactorable, None),
        FunctionSpec('nCr', 2, _combinations, _iscombinatorial, None),
        FunctionSpec('nPr', 2, _permutations, _iscombinatorial, None),
        FunctionSpec('gcd', 2, _gcd, None, None),
        FunctionSpec('lcm', 2, _lcm, None, None),
    ]
}

# Names a user may type.
FUNCTION_NAMES = tuple(spec.name
                       for name, spec
                       in FUNCTIONS.items()
                       if name not in {'uplus', 'uminus'})

CONSTANTS = {
    'pi': lambda context: math.pi,
    'e': lambda context: math.e,
    # Memory recall
    'm': lambda context: context.memory,
}
CONSTANT_NAMES = 'pi', 'e', 'M'


def operator(symbol):
    '''
    Return OperatorSpec for symbol, None if not an operator.
    '''
    return OPERATORS.get(symbol)


def function(name):
    '''
    Return FunctionSpec for name, in any case, None if no such function.
    '''
    return FUNCTIONS.get(name.lower())


def constant(name):
    '''
    Return the context -> value resolver for name, None if no such constant.
    '''
    return CONSTANTS.get(name.lower())


def isfunction(name):
    return name.lower() in FUNCTIONS and \
        name.lower() not in {'uplus', 'uminus'}


def isconstant(name):
    return name.lower() in CONSTANTS
