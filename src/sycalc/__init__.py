'''
Infix scientific calculator.

Supports plain old arithmetic, trigonometry in radians or degrees, logarithms,
factorials and combinatorics, pi, e and a memory slot. Not intended to be a
computer algebra system!

Lines go through three stages:

- the Lexer cuts them into tokens,
- the Parser reorders tokens into postfix (shunting-yard),
- the Machine runs the postfix tokens on a stack.

The registry says what every operator and function means. The Calculator and
CLI are just commands around that.
'''

# TODO: Implicit multiplication, as in 2pi or 3(4+5)

from .calculator import Calculator
from .cli import CLI
from .context import AngleMode, Context
from .lexer import Lexer, Token, TokenKind, tokenize
from .machine import Machine, evaluate
from .parser import Parser, to_postfix
from .util import CalcError


__all__ = ('Lexer', 'Parser', 'Machine', 'Calculator', 'CLI',
           'Token', 'TokenKind', 'AngleMode', 'Context', 'CalcError',
           'tokenize', 'to_postfix', 'evaluate')
