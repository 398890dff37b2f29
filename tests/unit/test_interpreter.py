"""
MiniBASIC test.interpreter
unit tests for program execution

(c) 2020--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from minibasic import Session
from minibasic.basic import interpreter
from minibasic.basic import iostreams
from minibasic.basic.program import Program
from minibasic.basic.values.randomiser import Randomiser
from minibasic.basic.base import tokens as tk
from tests.unit.utils import TestCase, run_tests


class InterpreterTest(TestCase):
    """Unit tests for the interpreter."""

    tag = u'interpreter'

    def _run(self, *lines, **kwargs):
        """Run program lines; return output and runtime error message."""
        with Session(**kwargs) as s:
            output = s.execute(lines)
            assert not s.program.errors, s.program.errors
            if s.error:
                return output, (s.error.line, s.error.message)
            return output, None

    # end-to-end scenarios

    def test_for_loop(self):
        """Count with FOR and NEXT."""
        assert self._run(
            u'10 FOR I=1 TO 3', u'20 PRINT I', u'30 NEXT I', u'40 END'
        ) == (u'1\n2\n3\n', None)

    def test_conditional_loop(self):
        """Loop with IF and GOTO."""
        assert self._run(
            u'10 LET X=0', u'20 X=X+1', u'30 IF X<3 THEN GOTO 20', u'40 PRINT X'
        ) == (u'3\n', None)

    def test_read_data(self):
        """READ values from DATA."""
        assert self._run(
            u'10 DATA 1,2,3', u'20 READ A,B,C', u'30 PRINT A+B+C'
        ) == (u'6\n', None)

    def test_array(self):
        """Store and retrieve an array element."""
        assert self._run(
            u'10 DIM A(2,2)', u'20 LET A(1,1)=9', u'30 PRINT A(1,1)'
        ) == (u'9\n', None)

    def test_missing_label(self):
        """Jump to a label that does not exist."""
        assert self._run(u'10 GOTO 99', u'20 PRINT "x"') == (
            u'', (1, u'No such label: 99')
        )

    # flow control

    def test_end(self):
        """END stops the program."""
        assert self._run(u'10 PRINT 1', u'20 END', u'30 PRINT 2') == (u'1\n', None)

    def test_if(self):
        """A false condition skips the rest of the line."""
        assert self._run(
            u'10 IF 0 THEN PRINT "a": PRINT "b"', u'20 PRINT "c"'
        ) == (u'c\n', None)
        assert self._run(
            u'10 IF 1 THEN PRINT "a": PRINT "b"', u'20 PRINT "c"'
        ) == (u'a\nb\nc\n', None)
        assert self._run(
            u'10 IF "a" < "b" THEN PRINT "lt"'
        ) == (u'lt\n', None)

    def test_if_then_number(self):
        """THEN followed by a label jumps."""
        assert self._run(
            u'10 X=1', u'20 IF X THEN 40', u'30 PRINT "no"', u'40 PRINT "yes"'
        ) == (u'yes\n', None)

    def test_computed_goto(self):
        """A numeric jump target is a label."""
        assert self._run(
            u'10 GOTO 10+20', u'20 PRINT "skip"', u'030 PRINT "here"'
        ) == (u'here\n', None)

    def test_word_label(self):
        """Jump to a word label."""
        assert self._run(
            u'10 GOTO done', u'20 PRINT "skip"', u'done: PRINT "end"'
        ) == (u'end\n', None)

    def test_gosub(self):
        """GOSUB and RETURN."""
        assert self._run(
            u'10 GOSUB 100', u'20 PRINT "back"', u'30 END',
            u'100 PRINT "sub"', u'110 RETURN'
        ) == (u'sub\nback\n', None)

    def test_gosub_mid_line(self):
        """RETURN resumes at the statement after GOSUB."""
        assert self._run(
            u'10 GOSUB 100: PRINT "back"', u'20 END', u'100 PRINT "sub";', u'110 RETURN'
        ) == (u'subback\n', None)

    def test_return_drops_loops(self):
        """RETURN discards loops opened in the subroutine."""
        assert self._run(
            u'10 GOSUB 100', u'20 PRINT "ok"', u'30 END',
            u'100 FOR I=1 TO 3', u'110 RETURN'
        ) == (u'ok\n', None)

    def test_return_without_gosub(self):
        """RETURN needs a GOSUB."""
        assert self._run(u'10 PRINT 1', u'20 RETURN') == (u'1\n', (2, u'RETURN without GOSUB'))

    # loops

    def test_for_step(self):
        """FOR with STEP; the variable keeps its last value."""
        assert self._run(
            u'10 FOR I=1 TO 10 STEP 4', u'20 PRINT I; " ";', u'30 NEXT I', u'40 PRINT I'
        ) == (u'1 5 9 9\n', None)

    def test_for_skip(self):
        """A loop whose start exceeds its limit runs zero times."""
        assert self._run(
            u'10 FOR I=5 TO 1', u'20 PRINT "in"', u'30 NEXT I', u'40 PRINT I'
        ) == (u'5\n', None)
        assert self._run(
            u'10 FOR I=2 TO 1', u'20 FOR J=1 TO 2', u'30 NEXT J', u'40 NEXT I',
            u'50 PRINT "done"'
        ) == (u'done\n', None)

    def test_nested_loops(self):
        """Nested FOR loops."""
        assert self._run(
            u'10 FOR I=1 TO 2: FOR J=1 TO 2', u'20 PRINT I*10+J;",";',
            u'30 NEXT J: NEXT I'
        ) == (u'11,12,21,22,', None)

    def test_loop_errors(self):
        """Loop error messages."""
        assert self._run(u'10 FOR I=3 TO 1') == (u'', (1, u'FOR without NEXT: I'))
        assert self._run(u'10 FOR I=1 TO 2 STEP 0') == (u'', (1, u'FOR step should be positive'))
        assert self._run(
            u'10 FOR I=1 TO 2 STEP -1'
        ) == (u'', (1, u'FOR step should be positive'))
        assert self._run(u'10 NEXT I') == (u'', (1, u'NEXT without FOR: I'))
        assert self._run(u'10 FOR I=1 TO 2', u'20 NEXT J') == (u'', (2, u'NEXT without FOR: J'))

    # values and expressions

    def test_print(self):
        """PRINT separators and number formats."""
        assert self._run(u'10 PRINT 1,2') == (u'1 2\n', None)
        assert self._run(u'10 PRINT 1;2;') == (u'12', None)
        assert self._run(u'10 PRINT 1/4, -2^2, 2^-1') == (u'0.25 4 0.5\n', None)
        assert self._run(u'10 PRINT 7 MOD 3, 2*3+1') == (u'1 7\n', None)

    def test_strings(self):
        """String variables and concatenation."""
        assert self._run(
            u'10 A$="n=": PRINT A$+5', u'20 PRINT LEFT$("hello",2); MID$("hello",2,3)'
        ) == (u'n=5\nhell\n', None)

    def test_multiple_statements(self):
        """Statements separated by colons."""
        assert self._run(u'10 A=1: B=2: PRINT A+B') == (u'3\n', None)

    def test_runtime_errors(self):
        """Runtime errors report the source line."""
        assert self._run(u'10 PRINT 1/0') == (u'', (1, u'Division by zero'))
        assert self._run(u'10 PRINT "a" - 1') == (u'', (1, u'Type mismatch'))
        assert self._run(u'', u'10 PRINT Q') == (u'', (2, u'Variable not defined: Q'))
        assert self._run(u'10 DIM A(2)', u'20 A(2)=1') == (u'', (2, u'Index#0 out of range: 2'))
        assert self._run(u'10 B(1)=1') == (u'', (1, u'Array not defined: B'))
        assert self._run(u'10 DIM A(1): DIM A(1)') == (u'', (1, u"Array 'A' already exists"))

    # data

    def test_restore(self):
        """RESTORE rewinds the DATA pointer."""
        assert self._run(
            u'10 DATA 1, 2', u'20 READ A', u'30 RESTORE', u'40 READ B, C',
            u'50 PRINT A, B, C'
        ) == (u'1 1 2\n', None)

    def test_data_anywhere(self):
        """DATA lines are collected in program order wherever they are."""
        assert self._run(
            u'10 READ A$, B', u'20 PRINT A$; B', u'30 END', u'40 DATA "x", 5'
        ) == (u'x5\n', None)

    def test_data_errors(self):
        """DATA error messages."""
        assert self._run(u'10 DATA 1', u'20 READ A, B') == (u'', (2, u'Out of DATA'))
        assert self._run(u'10 PRINT 1: DATA 2') == (
            u'', (1, u'DATA should be the first statement of its line')
        )

    # user functions

    def test_def_fn(self):
        """User-defined functions."""
        assert self._run(u'10 DEF FNA(X) = X*X+1', u'20 PRINT FNA(3)') == (u'10\n', None)
        assert self._run(
            u'10 Y=2', u'20 DEF FNB(X)=X*Y', u'30 PRINT FNB(5)'
        ) == (u'10\n', None)

    def test_def_fn_parameter(self):
        """The parameter does not affect a variable of the same name."""
        assert self._run(
            u'10 X=7', u'20 DEF FNA(X)=X+1', u'30 PRINT FNA(1), X'
        ) == (u'2 7\n', None)

    def test_def_fn_nested(self):
        """Each call has its own parameter."""
        assert self._run(
            u'10 DEF FNA(X)=X+1', u'20 DEF FNB(X)=FNA(X)*2+X', u'30 PRINT FNB(3)'
        ) == (u'11\n', None)

    def test_def_fn_errors(self):
        """User function error messages."""
        assert self._run(u'10 DEF FNA(X)=FNA(X)', u'20 PRINT FNA(1)') == (
            u'', (2, u'Out of memory')
        )
        assert self._run(u'10 DEF FNA(X)=1', u'20 DEF FNA(X)=2') == (
            u'', (2, u'Function FNA already defined')
        )
        assert self._run(u'10 PRINT FNZ(1)') == (u'', (1, u'Undefined user function: FNZ'))

    # input

    def test_input(self):
        """INPUT with and without a prompt."""
        assert self._run(
            u'10 INPUT "N"; N', u'20 INPUT S$', u'30 PRINT N*2, S$',
            input_stream=u'5\nhello world\n'
        ) == (u'N10 hello world\n', None)

    def test_input_split_on_space(self):
        """With a prompt, tokens are separated by spaces."""
        assert self._run(
            u'10 INPUT "?", A, B', u'20 PRINT A+B', input_stream=u'1 2\n'
        ) == (u'?3\n', None)

    def test_input_overflow(self):
        """Numeric input out of range stops at the INPUT statement."""
        assert self._run(
            u'10 INPUT A', u'20 PRINT A', input_stream=u'1e999\n'
        ) == (u'', (1, u'Overflow'))

    def test_input_past_end(self):
        """Reading beyond the input is an error."""
        assert self._run(u'10 INPUT A', input_stream=u'') == (u'', (1, u'Input past end'))

    # limits

    def test_execution_limit(self):
        """The statement budget stops endless loops."""
        assert self._run(u'10 GOTO 10', max_steps=10) == (
            u'', (1, u'Execution limit reached: 10 statements')
        )

    def test_rnd_seed(self):
        """A seeded run is repeatable."""
        with Session(seed=1) as s:
            first = s.execute(u'10 PRINT RND(1)')
            assert s.execute(u'10 PRINT RND(1)') == first
            assert 0. <= float(first) < 1.

    def test_all_opcodes_handled(self):
        """Every statement opcode has a handler."""
        interp = interpreter.Interpreter(
            Program(), iostreams.OutputStream(), iostreams.InputStream(), Randomiser()
        )
        assert set(interp._statements) == set(tk.OPCODES)

    def test_syntax_errors_not_run(self):
        """A program with syntax errors cannot be run."""
        with Session() as s:
            with self.assertRaises(ValueError):
                s.run(s.parse(u'10 FOR'))


if __name__ == '__main__':
    run_tests()
