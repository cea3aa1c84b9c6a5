from collections import deque
import logging

from . import registry
from .context import Context
from .lexer import TokenKind
from .util import (MalformedSequence, UnknownConstant, UnknownFunction)


logger = logging.getLogger(__name__)


class Machine:
    '''
    Arithmetic stack machine.

    Takes postfix tokens and runs them against one evaluation's context.
    Throw it away afterwards.
    '''

    def __init__(self, context=None):
        '''
        Create empty stack machine.

        :param context: Angle mode and memory to evaluate with.
        '''
        self.context = Context() if context is None else context
        self.stack = deque()

    def run(self, rpn):
        '''
        Feed all tokens, and return the single value they leave.
        '''
        for token in rpn:
            self.feed(token)
        if len(self.stack) != 1:
            raise self._malformed('Stack has {} elements after evaluation'
                                  .format(len(self.stack)))
        return self.stack.pop()

    def feed(self, token):
        '''
        Stack or run one token.
        '''
        kind = getattr(token, 'kind', None)
        if kind is TokenKind.NUMBER:
            self._pshstack(token.value)
        elif kind is TokenKind.CONSTANT:
            resolve = registry.constant(token.text)
            if resolve is None:
                raise UnknownConstant(token.text)
            self._pshstack(resolve(self.context))
        elif kind is TokenKind.OPERATOR:
            spec = registry.operator(token.text)
            if spec is None:
                raise self._malformed('Unknown operator: {}'.format(token))
            left, right = reversed(self._popstack(spec.arity))
            self._pshstack(spec.apply(left, right))
        elif kind is TokenKind.FUNCTION:
            spec = registry.function(token.text)
            if spec is None:
                raise UnknownFunction(token.text)
            # If you don't reverse, you'll do pow(2, 9) when you say pow(9, 2).
            args = list(reversed(self._popstack(spec.arity)))
            self._pshstack(spec.apply(args, self.context))
        else:
            raise self._malformed(
                'Unexpected token in postfix: {!r}'.format(token))

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise self._malformed(
                'Less than {} element(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]

    def _malformed(self, message):
        logger.debug('malformed postfix sequence: %s', message)
        return MalformedSequence(message)


def evaluate(rpn, context=None):
    '''
    Return value of postfix tokens, under context.
    '''
    return Machine(context).run(rpn)
