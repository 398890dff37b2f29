"""
MiniBASIC test.main
unit tests for main script

(c) 2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import json
from contextlib import redirect_stdout
from unittest import mock

from minibasic import main
from tests.unit.utils import TestCase, run_tests


class MainTest(TestCase):
    """Unit tests for main script."""

    tag = u'main'

    def _write(self, name, text):
        """Write a file to the output dir."""
        path = self.output_path(name)
        with io.open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return path

    def _main(self, *args):
        """Call main; return exit code and standard output."""
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(*args)
        return code, output.getvalue()

    def test_version(self):
        """Test version call."""
        code, output = self._main(u'-v')
        assert code == 0
        assert output.startswith(u'MiniBASIC 1.0.0'), output

    def test_debug_version(self):
        """Test debug version call."""
        code, output = self._main(u'-v', u'--debug')
        assert code == 0
        assert u'Python' in output, output

    def test_usage(self):
        """Test usage call."""
        code, output = self._main(u'-h')
        assert code == 0
        assert output.startswith(u'Usage:'), output

    def test_run(self):
        """Run a program file."""
        prog = self._write(u'hello.bas', u'10 PRINT "hello"\n20 END\n')
        assert self._main(prog) == (0, u'hello\n')

    def test_runtime_error(self):
        """A runtime error is reported with its source line."""
        prog = self._write(u'error.bas', u'10 PRINT 1\n20 GOTO 99\n')
        assert self._main(prog) == (1, u'1\nRuntime error (line #2): No such label: 99\n')

    def test_syntax_errors(self):
        """Syntax errors are listed and the program is not run."""
        prog = self._write(u'syntax.bas', u'10 PRINT (\n20 FOR\n30 PRINT 1\n')
        assert self._main(prog) == (2, (
            u'Code not executed because of parse errors:\n'
            u'    Line #1: Expression expected\n'
            u'    Line #2: Garbage instead of variable in FOR\n'
        ))

    def test_input_file(self):
        """INPUT reads from a file."""
        prog = self._write(u'input.bas', u'10 INPUT "x"; A\n20 PRINT A*2\n')
        inp = self._write(u'input.txt', u'21\n')
        assert self._main(prog, u'--input=%s' % inp) == (0, u'x42\n')

    def test_program_from_stdin(self):
        """Without a program file, the program is read from standard input."""
        with mock.patch('sys.stdin', io.StringIO(u'10 PRINT 3\n')):
            assert self._main(u'--max-steps=10') == (0, u'3\n')

    def test_max_steps(self):
        """The statement budget is set from the command line."""
        prog = self._write(u'loop.bas', u'10 GOTO 10\n')
        assert self._main(prog, u'-m', u'5') == (
            1, u'Runtime error (line #1): Execution limit reached: 5 statements\n'
        )

    def test_dump_and_load(self):
        """Export a program and run the export."""
        prog = self._write(u'dump.bas', u'10 FOR I=1 TO 2: PRINT I;: NEXT I\n')
        dump = self.output_path(u'dump.json')
        assert self._main(prog, u'--dump=%s' % dump) == (0, u'')
        with io.open(dump, 'r', encoding='utf-8') as f:
            assert json.load(f)[u'labels'] == {u'10': 0}
        assert self._main(u'--load-dump=%s' % dump) == (0, u'12')

    def test_dump_syntax_errors(self):
        """A program with syntax errors is not exported."""
        prog = self._write(u'bad.bas', u'10 NEXT\n')
        dump = self.output_path(u'bad.json')
        code, _ = self._main(prog, u'--dump=%s' % dump)
        assert code == 2


if __name__ == '__main__':
    run_tests()
