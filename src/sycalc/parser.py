import logging

from . import registry
from .lexer import TokenKind
from .util import MisplacedComma, MismatchedParens


logger = logging.getLogger(__name__)


class Parser:
    '''
    Shunting-yard: reorder infix tokens into postfix (RPN).

    Holds no state between calls to postfix().
    '''

    # What, before a + or -, makes it a sign rather than an operator.
    UNARY_AFTER = frozenset({TokenKind.OPERATOR,
                             TokenKind.LPAREN,
                             TokenKind.COMMA,
                             TokenKind.FUNCTION})
    # Unary operators, as pseudo-functions the machine knows about.
    UNARY = {
        '+': 'uplus',
        '-': 'uminus',
    }

    def isunary(self, token, previous):
        '''
        Return True if operator token is a sign, given the token before it.
        '''
        if token.text not in type(self).UNARY:
            return False
        return previous is None or previous.kind in type(self).UNARY_AFTER

    def postfix(self, tokens):
        '''
        Return tokens in postfix order.

        Parentheses and commas are consumed; unary signs come out as
        functions.
        '''
        output = []
        stack = []
        previous = None
        for token in tokens:
            kind = token.kind
            if kind in {TokenKind.NUMBER, TokenKind.CONSTANT}:
                output.append(token)
            elif kind is TokenKind.FUNCTION:
                stack.append(token)
            elif kind is TokenKind.COMMA:
                self._popuntilparen(stack, output, MisplacedComma)
            elif kind is TokenKind.OPERATOR:
                if self.isunary(token, previous):
                    stack.append(token._replace(
                        kind=TokenKind.FUNCTION,
                        text=type(self).UNARY[token.text]))
                else:
                    self._pushoperator(token, stack, output)
            elif kind is TokenKind.LPAREN:
                stack.append(token)
            elif kind is TokenKind.RPAREN:
                self._popuntilparen(stack, output, MismatchedParens)
                stack.pop()
                # Close function's argument list
                if stack and stack[-1].kind is TokenKind.FUNCTION:
                    output.append(stack.pop())
            previous = token

        while stack:
            top = stack.pop()
            if top.kind in {TokenKind.LPAREN, TokenKind.RPAREN}:
                raise MismatchedParens()
            output.append(top)
        logger.debug('postfix: %s', ' '.join(map(str, output)))
        return output

    def _popuntilparen(self, stack, output, error):
        '''
        Move operators to output until a left parenthesis is on top.

        The parenthesis stays. Raise error if there's none.
        '''
        while stack and stack[-1].kind is not TokenKind.LPAREN:
            output.append(stack.pop())
        if not stack:
            raise error()

    def _pushoperator(self, token, stack, output):
        '''
        Push binary operator, first outputting whatever binds tighter.
        '''
        incoming = registry.operator(token.text)
        while stack:
            top = stack[-1]
            if top.kind is TokenKind.FUNCTION:
                # Functions bind tighter than any operator
                output.append(stack.pop())
            elif top.kind is TokenKind.OPERATOR and \
                    registry.operator(top.text).outranks(incoming):
                output.append(stack.pop())
            else:
                break
        stack.append(token)


def to_postfix(tokens):
    '''
    Return list of tokens in postfix order.
    '''
    return Parser().postfix(tokens)


__all__ = 'Parser', 'to_postfix'
