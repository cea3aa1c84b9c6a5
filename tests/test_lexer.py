'''
Infix lexer tests
'''

import regex

from sycalc.util import UnexpectedCharacter
from sycalc.lexer import Lexer, Token, TokenKind, tokenize

from pytest import raises


def kinds(tokens):
    return [(t.kind, t.text) for t in tokens]


def test_number_operator_number():
    tokens = tokenize('3+4')
    assert kinds(tokens) == [(TokenKind.NUMBER, '3'),
                             (TokenKind.OPERATOR, '+'),
                             (TokenKind.NUMBER, '4')]
    assert [t.value for t in tokens] == [3.0, None, 4.0]


def test_numbers():
    assert [t.value for t in tokenize('12 .5 1. 0.25')] == [12, .5, 1, .25]


def test_second_dot_starts_new_number():
    assert [t.text for t in tokenize('1.2.3')] == ['1.2', '.3']


def test_whitespace_skipped_positions_kept():
    tokens = tokenize(' sin ( 30 )\t')
    assert [t.text for t in tokens] == ['sin', '(', '30', ')']
    assert [t.position for t in tokens] == [1, 5, 7, 10]


def test_structure():
    assert [t.kind for t in tokenize('(,)')] == [TokenKind.LPAREN,
                                                 TokenKind.COMMA,
                                                 TokenKind.RPAREN]


def test_all_operators():
    tokens = tokenize('+-*/%^')
    assert {t.kind for t in tokens} == {TokenKind.OPERATOR}
    assert ''.join(t.text for t in tokens) == '+-*/%^'


def test_functions_case_insensitive():
    tokens = tokenize('nCr NCR Sqrt')
    assert {t.kind for t in tokens} == {TokenKind.FUNCTION}
    assert [t.name for t in tokens] == ['ncr', 'ncr', 'sqrt']


def test_constants():
    tokens = tokenize('pi E M m')
    assert {t.kind for t in tokens} == {TokenKind.CONSTANT}


def test_unknown_identifier_is_function():
    tokens = tokenize('$x_1.y2')
    assert kinds(tokens) == [(TokenKind.FUNCTION, '$x_1.y2')]


def test_identifier_stops_at_operator():
    assert kinds(tokenize('pi*e')) == [(TokenKind.CONSTANT, 'pi'),
                                       (TokenKind.OPERATOR, '*'),
                                       (TokenKind.CONSTANT, 'e')]


def test_unexpected_character():
    with raises(UnexpectedCharacter,
                match=regex.escape("Unexpected character '#' at position 2")):
        tokenize('3 # 4')


def test_lone_dot():
    with raises(UnexpectedCharacter) as e:
        tokenize('3 . 4')
    assert e.value.char == '.'
    assert e.value.position == 2


def test_lex_yields_until_bad():
    l = Lexer()
    matches = l.lex('1+@')
    assert next(matches).value == 1
    assert next(matches).text == '+'
    with raises(UnexpectedCharacter):
        next(matches)


def test_empty():
    assert tokenize('') == []
    assert tokenize('   ') == []


def test_token_defaults():
    token = Token(TokenKind.LPAREN, '(')
    assert token.value is None
    assert token.position is None
    assert str(token) == '('


def test_only_ascii_digits():
    with raises(UnexpectedCharacter) as e:
        tokenize('\N{ARABIC-INDIC DIGIT THREE}+1')
    assert e.value.position == 0
