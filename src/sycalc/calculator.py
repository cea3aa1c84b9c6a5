'''
Line-at-a-time calculator: commands around the expression pipeline.

Owns everything that outlives one expression: the angle mode, the memory slot
and the history. Expressions themselves only ever see a Context.
'''

from collections import deque
import logging

import regex

from . import registry
from .context import AngleMode, Context
from .lexer import tokenize
from .machine import evaluate
from .parser import to_postfix
from .util import CalcError


logger = logging.getLogger(__name__)


class Quit(Exception):
    '''
    Raised by the exit and quit commands.
    '''


class Calculator:
    '''
    Dispatches lines to commands, or evaluates them.

    handle() returns what to print, and raises CalcError on bad input.
    '''

    PRECISION = 10
    HISTORY_SIZE = 256

    # m+ 5, m-2.5. Lower case only: M+5 is an expression.
    MEMORY = regex.compile(r'm(?<sign>[+-])(?<value>.*)')
    # !!, !3
    RECALL = regex.compile(r'!(?:(?<last>!)|(?<index>[0-9]+))')
    MODES = {
        'rad': AngleMode.RADIANS,
        'deg': AngleMode.DEGREES,
    }

    def __init__(self, context=None):
        '''
        Create calculator with empty history.

        :param context: Initial angle mode and memory.
        '''
        self.context = Context() if context is None else context
        self.history = deque(maxlen=type(self).HISTORY_SIZE)

    @property
    def memory(self):
        return self.context.memory

    @property
    def angle_mode(self):
        return self.context.angle_mode

    def handle(self, line):
        '''
        Run one line, return output text or None.
        '''
        line = line.strip()
        if not line:
            return None
        words = line.split()
        name = words[0].lower()
        command = type(self).COMMANDS.get(name)
        if command is not None:
            if len(words) > 1 and name not in type(self).TAKES_ARGUMENTS:
                raise CalcError('Usage: {}'.format(name))
            return command(self, *words[1:])
        elif line.startswith('?'):
            return self.help()
        match = type(self).MEMORY.fullmatch(line)
        if match:
            return self.memadd(match.group('sign'), match.group('value'))
        match = type(self).RECALL.fullmatch(line)
        if match:
            return self.recall(None if match.group('last')
                               else int(match.group('index')))
        return self.calculate(line)

    def calculate(self, line):
        '''
        Evaluate expression, remembering it if it lexes.
        '''
        tokens = tokenize(line)
        self.history.append(line)
        rpn = to_postfix(tokens)
        result = evaluate(rpn, self.context)
        logger.debug('%s = %r', line, result)
        return 'Result: ' + self.format(result)

    def format(self, n):
        return registry.format_number(n, type(self).PRECISION)

    def help(self, *_):
        '''
        Return help text: everything a line may be.
        '''
        return '\n'.join([
            'sycalc - Help:',
            'Basic usage: <number> <operator> <number>  (e.g. 3 + 4)',
            'Operators: ' + ' '.join(registry.OPERATORS),
            'Functions: ' + ' '.join(registry.FUNCTION_NAMES),
            'Constants: ' + ' '.join(registry.CONSTANT_NAMES)
            + ' (memory recall)',
            'Angle mode: mode rad|deg (currently {})'.format(self.angle_mode),
            'Memory: m+ <value>, m- <value>, mr (recall), mc (clear)',
            'History: h (show), h <n> (show last n), !<n> (recall n), '
            '!! (repeat last)',
            'Help: ? or help',
            'Quit: exit or quit',
        ])

    def mode(self, *args):
        '''
        Switch angle mode.
        '''
        if len(args) != 1 or args[0].lower() not in type(self).MODES:
            raise CalcError('Usage: mode rad|deg')
        self.context = self.context._replace(
            angle_mode=type(self).MODES[args[0].lower()])
        return 'Angle mode set to {}'.format(self.angle_mode)

    def memadd(self, sign, value):
        '''
        Add value to, or subtract it from, memory.
        '''
        try:
            value = float(value)
        except ValueError:
            raise CalcError('Invalid memory operation') from None
        if sign == '-':
            value = -value
        self.context = self.context._replace(memory=self.memory + value)
        return 'Memory slot {}: {}'.format(
            'added to' if sign == '+' else 'subtracted from',
            self.format(abs(value)))

    def memrecall(self, *_):
        return 'Memory recall: ' + self.format(self.memory)

    def memclear(self, *_):
        self.context = self.context._replace(memory=0.0)
        return 'Memory cleared'

    def showhistory(self, *args):
        '''
        Return numbered history, all of it or the last n entries.
        '''
        try:
            n = int(args[0]) if args else len(self.history)
        except ValueError:
            raise CalcError('Usage: h [n]') from None
        first = max(len(self.history) - max(n, 0), 0)
        return '\n'.join('{}: {}'.format(i + 1, self.history[i])
                         for i in range(first, len(self.history))) or None

    def recall(self, index=None):
        '''
        Re-run history entry index (1-based), or the last one.
        '''
        if index is None:
            index = len(self.history)
        if not 1 <= index <= len(self.history):
            raise CalcError('No such history entry')
        return self.calculate(self.history[index - 1])

    def quit(self, *_):
        raise Quit()

    # Commands that may be followed by more words; the rest must stand alone.
    TAKES_ARGUMENTS = frozenset({'mode', 'h'})
    # First word of a line to command.
    COMMANDS = {
        'help': help,
        'mode': mode,
        'mr': memrecall,
        'mc': memclear,
        'h': showhistory,
        'exit': quit,
        'quit': quit,
    }
