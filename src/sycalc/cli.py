from os import isatty, path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory

from .calculator import Calculator, Quit
from .context import AngleMode, Context
from .lexer import Lexer, tokenize
from .parser import to_postfix
from .util import CalcError


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def _history(self):
        if self.history_file is None:
            return InMemoryHistory()
        return FileHistory(path.expanduser(self.history_file))

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    history=self._history(),
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.sycalc_history'
    BANNER = 'sycalc - Type ? or help for help'
    LOG_FORMAT = '%(levelname)s:%(name)s: %(message)s'

    def dumper(self):
        '''
        Dump tokens and postfix form of each line.
        '''
        print('<kind>\t<text>\t<value>')
        for line in self.args.expressions:
            try:
                tokens = tokenize(line.strip())
                for token in tokens:
                    print(token.kind.value,
                          repr(token.text),
                          token.value,
                          sep='\t')
                print('postfix:', *to_postfix(tokens))
            except CalcError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Run calculator on every line.
        '''
        angle_mode = AngleMode.DEGREES if self.args.degrees \
            else AngleMode.RADIANS
        calculator = Calculator(Context(angle_mode=angle_mode))
        if self._interactive():
            print(self.BANNER)
        for line in self.args.expressions:
            try:
                output = calculator.handle(line)
            except Quit:
                break
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                if e.internal:
                    logger.error('internal error evaluating %r: %s',
                                 line.strip(), e)
                elif self.args.verbose:
                    logger.debug('failed on %r', line.strip(), exc_info=e)
                print(e.args[0], file=sys.stderr)
                continue
            if output is not None:
                print(output)
        if self._interactive():
            print('Goodbye!')

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(
                prompt=self.args.prompt or self.DEFAULT_PROMPT,
                history_file=self.args.history_file or None)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix scientific calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-d', '--degrees',
                                          action='store_true',
                                          help='start in degree mode')
        self.argument_parser.add_argument('--history-file',
                                          default=self.HISTORY_FILE,
                                          help='empty for no persistent '
                                               'history')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format=self.LOG_FORMAT,
            stream=sys.stderr)
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()
