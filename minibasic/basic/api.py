"""
MiniBASIC - api.py
Session API

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import logging

from .base import error
from .base.codestream import TokenStream
from .converter import tokeniser
from .parser import statements
from .values import randomiser
from . import evaluator
from . import interpreter
from . import iostreams


class Session(object):
    """Public API to BASIC session."""

    def __init__(
            self, max_steps=0, seed=None, input_stream=None, output_stream=None,
            stop_on_space=True
        ):
        """Set up session object."""
        self._max_steps = max_steps
        self._stop_on_space = stop_on_space
        self._randomiser = randomiser.Randomiser(seed)
        self._parser = statements.Parser()
        self._input = iostreams.InputStream(input_stream)
        # optional live copy of program output, e.g. to stdout
        self._output_stream = output_stream
        self._hook = None
        # current program
        self.program = None
        # runtime error of the last run, if any
        self.error = None
        # state left by the last run
        self.state = None
        self._output = u''

    def __enter__(self):
        """Context guard."""
        return self

    def __exit__(self, ex_type, ex_val, tb):
        """Context guard."""
        self.close()

    def close(self):
        """Release resources."""
        self._input.close()

    def parse(self, source):
        """Parse program source, given as a string or an iterable of lines."""
        if isinstance(source, str):
            lines = source.splitlines()
        else:
            lines = [_line.rstrip(u'\r\n') for _line in source]
        return self._parser.parse_program(lines)

    def load(self, program):
        """Set the current program."""
        self.program = program

    def run(self, program=None):
        """Run the current program; return the runtime error or None."""
        if program is not None:
            self.load(program)
        if self.program is None:
            raise ValueError('no program loaded')
        output = io.StringIO()
        output_stream = iostreams.OutputStream(output)
        if self._output_stream is not None:
            output_stream.add_stream(self._output_stream)
        interp = interpreter.Interpreter(
            self.program, output_stream, self._input, self._randomiser,
            max_steps=self._max_steps, stop_on_space=self._stop_on_space
        )
        interp.step = self._hook
        self.error = None
        try:
            interp.run()
        except error.BASICError as e:
            e.line = self.program.get_line_number(e.pos)
            logging.debug(u'Runtime error in line %s: %s', e.line, e.message)
            self.error = e
        self.state = interp.state
        self._output = output.getvalue()
        return self.error

    def execute(self, source):
        """Parse and run a program; return its output. A program with syntax errors is not run."""
        self.load(self.parse(source))
        self.error = None
        self._output = u''
        if self.program.errors:
            return u''
        self.run()
        return self._output

    def evaluate(self, expression):
        """Evaluate a BASIC expression in the state of the last run, or a fresh one."""
        ins = TokenStream(tokeniser.Tokeniser().tokenise_line(expression))
        expr = self._parser.parse_expression(ins)
        if not ins.at_end():
            ins.fail(error.EXTRA_TOKENS)
        state = self.state or interpreter.RunState()
        return evaluator.Evaluator(self._randomiser).evaluate(state, expr)

    @property
    def output(self):
        """Text written by the last run."""
        return self._output

    def get_variable(self, name):
        """Get a scalar variable, or the flat contents of an array if name ends in ()."""
        name = name.upper()
        state = self.state or interpreter.RunState()
        if name.endswith(u'()'):
            return state.arrays.view_full_buffer(name[:-2])
        return state.scalars.get(name)

    def set_hook(self, step_function):
        """Install a callable invoked with (line number, statement) before each statement."""
        self._hook = step_function
