from functools import wraps


class CalcError(Exception):
    '''
    Base of everything that aborts a single expression.

    args[0] is the message shown to the user.
    '''
    internal = False


class TokenizeError(CalcError):
    pass


class UnexpectedCharacter(TokenizeError):
    def __init__(self, char, position):
        super().__init__("Unexpected character {0!r} at position {1}"
                         .format(char, position))
        self.char = char
        self.position = position


class ParseError(CalcError):
    pass


class MisplacedComma(ParseError):
    def __init__(self):
        super().__init__('Misplaced comma or mismatched parentheses')


class MismatchedParens(ParseError):
    def __init__(self):
        super().__init__('Mismatched parentheses')


class EvalError(CalcError):
    pass


class UnknownConstant(EvalError):
    def __init__(self, name):
        super().__init__('Unknown constant: {}'.format(name))
        self.name = name


class UnknownFunction(EvalError):
    def __init__(self, name):
        super().__init__('Unknown function: {}'.format(name))
        self.name = name


class DomainError(EvalError):
    pass


class DivisionByZero(EvalError):
    def __init__(self):
        super().__init__('Math error: division by zero')


class ModuloByZero(EvalError):
    def __init__(self):
        super().__init__('Math error: modulo by zero')


class MalformedSequence(EvalError):
    '''
    Postfix sequence the machine can't reduce to a single value.

    Points at the converter rather than the user, hence internal.
    '''
    internal = True


def wrap_domain_errors(fmt):
    '''
    Decorator that converts math library failures to DomainErrors.

    Passes through CalcErrors. fmt is formatted with the wrapped function's
    arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except (ValueError, OverflowError) as e:
                raise DomainError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
