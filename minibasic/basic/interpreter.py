"""
MiniBASIC - interpreter.py
BASIC interpreter

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from collections import namedtuple
import logging

from .base import error
from .base import tokens as tk
from .memory import scalars
from .memory import arrays
from .parser import userfunctions
from . import evaluator
from . import program as prog
from . import values


# GOSUB record: position to resume at
ReturnFrame = namedtuple('ReturnFrame', ['line', 'stmt'])
# FOR record: loop variable, increment, limit and position of the loop body
LoopFrame = namedtuple('LoopFrame', ['name', 'step', 'stop', 'line', 'stmt'])


class RunState(object):
    """Mutable state of a single run."""

    def __init__(self):
        """Create empty state."""
        self.scalars = scalars.Scalars()
        self.arrays = arrays.Arrays()
        self.functions = userfunctions.UserFunctionManager()
        # GOSUB and FOR frames
        self.stack = []
        # DATA pool and READ pointer
        self.data = []
        self.data_pointer = 0
        # position of the next statement to execute
        self.line = 0
        self.stmt = 0
        # program line of the statement being executed
        self.current = None
        # number of statements executed
        self.steps = 0


class Interpreter(object):
    """BASIC interpreter."""

    def __init__(
            self, program, output_stream, input_stream, randomiser,
            max_steps=0, stop_on_space=True
        ):
        """Initialise interpreter."""
        if program.errors:
            raise ValueError('program with syntax errors cannot be run')
        self._program = program
        self._output = output_stream
        self._input = input_stream
        self._randomiser = randomiser
        self._evaluator = evaluator.Evaluator(randomiser)
        # statement budget, 0 for unlimited
        self._max_steps = max_steps
        # INPUT with a prompt splits tokens on spaces
        self._stop_on_space = stop_on_space
        # state of the last run
        self.state = None
        # additional operations on program step (debugging)
        self.step = None
        self._init_statements()

    def _init_statements(self):
        """Initialise statement handlers."""
        self._statements = {
            tk.LET: self.let_,
            tk.IF: self.if_,
            tk.GOTO: self.goto_,
            tk.GOSUB: self.gosub_,
            tk.RETURN: self.return_,
            tk.FOR: self.for_,
            tk.NEXT: self.next_,
            tk.PRINT: self.print_,
            tk.INPUT: self.input_,
            tk.DIM: self.dim_,
            tk.DEF: self.def_fn_,
            tk.READ: self.read_,
            tk.DATA: self.data_,
            tk.RESTORE: self.restore_,
            tk.REM: self.rem_,
            tk.END: self.end_,
        }
        missing = set(tk.OPCODES) - set(self._statements)
        if missing:
            raise NotImplementedError('no handler for %s' % ', '.join(sorted(missing)))

    def run(self):
        """Execute the program from the start with a fresh state."""
        state = RunState()
        self.state = state
        self._randomiser.clear()
        self._extract_data(state)
        with self._input:
            try:
                while state.line < len(self._program):
                    self._step(state)
            except error.Exit:
                pass
            finally:
                self._output.flush()
        return state

    def _step(self, state):
        """Fetch, advance and execute one statement."""
        if self._max_steps and state.steps >= self._max_steps:
            logging.warning('Execution limit of %d statements reached', self._max_steps)
            raise error.BASICError(error.EXECUTION_LIMIT, self._max_steps, pos=state.line)
        state.steps += 1
        state.current = state.line
        statement = self._program.get_statement(state.line, state.stmt)
        state.line, state.stmt = self._advance(state.line, state.stmt)
        if self.step:
            self.step(self._program.get_line_number(state.current), statement)
        try:
            handler = self._statements[statement.opcode]
        except KeyError:
            raise error.BASICError(error.NOT_IMPLEMENTED, statement.opcode, pos=state.current)
        try:
            handler(state, statement.args)
        except error.BASICError as e:
            if e.pos is None:
                e.pos = state.current
            raise

    def _advance(self, line, stmt):
        """Position of the statement following the given one."""
        stmt += 1
        if stmt >= len(self._program.lines[line]):
            return line + 1, 0
        return line, stmt

    def _evaluate(self, state, expr):
        """Evaluate an expression in the run state."""
        return self._evaluator.evaluate(state, expr)

    def _assign(self, state, lvalue, value):
        """Store a value in a scalar or array element."""
        if lvalue.indices is None:
            state.scalars.set(lvalue.name, value)
        else:
            index = [self._evaluate(state, _expr) for _expr in lvalue.indices]
            state.arrays.set(lvalue.name, index, value)

    def _extract_data(self, state):
        """Collect DATA values in program order."""
        for index, line in enumerate(self._program.lines):
            for stmt_index, statement in enumerate(line):
                if statement.opcode != tk.DATA:
                    continue
                if stmt_index > 0:
                    raise error.BASICError(error.DATA_NOT_FIRST, pos=index)
                try:
                    state.data.extend(self._evaluate(state, _expr) for _expr in statement.args)
                except error.BASICError as e:
                    e.pos = index
                    raise

    ###########################################################################
    # assignment

    def let_(self, state, args):
        """LET: assign value to variable or array element."""
        lvalue, expr = args
        # the value is computed before the subscripts
        self._assign(state, lvalue, self._evaluate(state, expr))

    ###########################################################################
    # branches

    def if_(self, state, args):
        """IF: skip the rest of the line if the condition is false."""
        condition, = args
        if not values.is_true(self._evaluate(state, condition)):
            state.line, state.stmt = state.current + 1, 0

    def jump(self, state, target):
        """Jump to the label a target expression evaluates to."""
        label = values.to_label(self._evaluate(state, target))
        try:
            state.line, state.stmt = self._program.labels[label], 0
        except KeyError:
            raise error.BASICError(error.NO_SUCH_LABEL, label)

    def goto_(self, state, args):
        """GOTO: jump to label."""
        target, = args
        self.jump(state, target)

    def gosub_(self, state, args):
        """GOSUB: jump to subroutine."""
        target, = args
        state.stack.append(ReturnFrame(state.line, state.stmt))
        self.jump(state, target)

    def return_(self, state, args):
        """RETURN: resume after the last GOSUB, dropping any open loops."""
        while state.stack:
            frame = state.stack.pop()
            if isinstance(frame, ReturnFrame):
                state.line, state.stmt = frame.line, frame.stmt
                return
        raise error.BASICError(error.RETURN_WITHOUT_GOSUB)

    ###########################################################################
    # loops

    def for_(self, state, args):
        """FOR: initialise a loop."""
        name, start, stop, step = args
        start = values.pass_number(self._evaluate(state, start))
        stop = values.pass_number(self._evaluate(state, stop))
        step = values.pass_number(self._evaluate(state, step))
        if step <= 0:
            raise error.BASICError(error.STEP_NOT_POSITIVE)
        # initialise loop variable
        state.scalars.set(name, start)
        if start > stop:
            # empty loop: continue after the matching NEXT
            state.line, state.stmt = self._find_next(state, name)
            return
        state.stack.append(LoopFrame(name, step, stop, state.line, state.stmt))

    def _find_next(self, state, name):
        """Helper function for FOR: find position after matching NEXT."""
        depth = 0
        for index, stmt_index in self._program.positions((state.line, state.stmt)):
            statement = self._program.get_statement(index, stmt_index)
            if statement.opcode == tk.FOR:
                depth += 1
            elif statement.opcode == tk.NEXT:
                if depth:
                    depth -= 1
                elif statement.args[0] == name:
                    return self._advance(index, stmt_index)
        raise error.BASICError(error.FOR_WITHOUT_NEXT, name)

    def next_(self, state, args):
        """NEXT: iterate a loop."""
        name, = args
        if (
                not state.stack or not isinstance(state.stack[-1], LoopFrame)
                or state.stack[-1].name != name
            ):
            raise error.BASICError(error.NEXT_WITHOUT_FOR, name)
        frame = state.stack[-1]
        counter = values.add(values.pass_number(state.scalars.get(name)), frame.step)
        if counter > frame.stop:
            # loop ends; the variable keeps its last value
            state.stack.pop()
            return
        state.scalars.set(name, counter)
        state.line, state.stmt = frame.line, frame.stmt

    ###########################################################################
    # console

    def print_(self, state, args):
        """PRINT: write values to the output."""
        for expr in args:
            self._output.write(values.to_repr(self._evaluate(state, expr)))

    def input_(self, state, args):
        """INPUT: write prompts and read tokens into variables."""
        has_prompt = any(isinstance(_arg, prog.Term) for _arg in args)
        stop_on_space = self._stop_on_space and has_prompt
        for arg in args:
            if isinstance(arg, prog.Term):
                self._output.write(arg.value)
            else:
                self._output.flush()
                token = self._input.read_token(stop_on_space)
                self._assign(state, arg, values.from_repr(token))

    ###########################################################################
    # declarations

    def dim_(self, state, args):
        """DIM: allocate arrays."""
        for lvalue in args:
            dimensions = [self._evaluate(state, _expr) for _expr in lvalue.indices]
            state.arrays.allocate(lvalue.name, dimensions)

    def def_fn_(self, state, args):
        """DEF FN: define a function."""
        name, body = args
        state.functions.define(name, body)

    ###########################################################################
    # data

    def read_(self, state, args):
        """READ: assign values from the DATA pool."""
        for lvalue in args:
            if state.data_pointer >= len(state.data):
                raise error.BASICError(error.OUT_OF_DATA)
            value = state.data[state.data_pointer]
            state.data_pointer += 1
            self._assign(state, lvalue, value)

    def data_(self, state, args):
        """DATA: values have been collected before the run."""

    def restore_(self, state, args):
        """RESTORE: rewind the DATA pointer."""
        state.data_pointer = 0

    ###########################################################################
    # other statements

    def rem_(self, state, args):
        """REM: comment."""

    def end_(self, state, args):
        """END: end the program."""
        raise error.Exit()
