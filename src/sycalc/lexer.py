from collections import namedtuple
from enum import Enum
from functools import reduce
import logging
import operator

import regex

from . import registry
from .util import UnexpectedCharacter


logger = logging.getLogger(__name__)


class TokenKind(Enum):
    NUMBER = 'number'
    OPERATOR = 'operator'
    FUNCTION = 'function'
    CONSTANT = 'constant'
    LPAREN = 'lparen'
    RPAREN = 'rparen'
    COMMA = 'comma'


class Token(namedtuple('Token', 'kind text value position')):
    '''
    One lexeme.

    value is only set on numbers. Names are resolved later, by the machine.
    '''
    __slots__ = ()

    def __new__(cls, kind, text, value=None, position=None):
        return super().__new__(cls, kind, text, value, position)

    @property
    def name(self):
        '''
        Case-insensitive identity of functions and constants.
        '''
        return self.text.lower()

    def __str__(self):
        return self.text


class Lexer:
    '''
    Lexer for the infix *regular* grammar.

    For consistency with the Parser, needs to be instantiated, despite holding
    no internal state.
    '''
    # Number. Digits and at most one dot, on either side of which there may be
    # nothing, but not on both.
    NUMBER = r'''
              (?:
                  # 1, 12, 1. (notice trailing dot), 1.3
                  [0-9]+
                  (?:
                      \.
                      [0-9]*
                  )?
              )|(?:
                  # .2
                  \.
                  [0-9]+
              )
              '''
    # Function or constant name; nCr, pi, M, log10.5 (which is no function).
    IDENTIFIER = r'''
                  [A-Za-z_$]
                  [A-Za-z0-9_$.]*
                  '''

    assert not [operator
                for operator
                in registry.OPERATORS
                if len(operator) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, registry.OPERATORS)) + r')'
    SPACE = r'\s+'

    # All possible lexemes. Group names are TokenKind values, plus space.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))|' \
             r'(?<comma>,)|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    def lex(self, line):
        '''
        Take a line and yield all tokens.

        Raises on the first character that starts no lexeme.
        '''
        position = 0
        while position < len(line):
            match = type(self).PATTERN.match(line, position)
            if match is None:
                raise UnexpectedCharacter(line[position], position)
            position = match.end()
            if match.lastgroup != 'space':
                yield self.token(match)

    def token(self, match):
        '''
        Make Token of lexeme match.
        '''
        group = match.lastgroup
        text = match.group(group)
        position = match.start()
        if group == 'number':
            return Token(TokenKind.NUMBER, text, float(text), position)
        elif group == 'identifier':
            # Unknown names are taken to be functions. Only evaluating them
            # tells.
            if registry.isconstant(text) and not registry.isfunction(text):
                return Token(TokenKind.CONSTANT, text, None, position)
            return Token(TokenKind.FUNCTION, text, None, position)
        return Token(TokenKind(group), text, None, position)


def tokenize(line):
    '''
    Return list of all tokens in line.
    '''
    tokens = list(Lexer().lex(line))
    logger.debug('tokens: %s', ' '.join(map(str, tokens)))
    return tokens
