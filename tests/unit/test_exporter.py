"""
MiniBASIC test.exporter
unit tests for program export and import

(c) 2020--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import json

from minibasic import Session
from minibasic.basic.converter import exporter
from minibasic.basic.parser.statements import Parser
from tests.unit.utils import TestCase, run_tests


PROGRAM = u'''\
10 DIM A(4)
20 DEF FNS(X) = X*X
30 FOR I = 0 TO 3: A(I) = FNS(I): NEXT I
40 READ N$
50 INPUT "Go"; G
60 IF A(3) = 9 THEN GOSUB sub
70 PRINT N$; A(2), LEFT$("abc", 2)
80 END
sub: PRINT "nine"
90 RETURN
100 DATA "squares"
'''


class ExporterTest(TestCase):
    """Unit tests for the program exporter."""

    tag = u'exporter'

    def test_document(self):
        """The export has code, labels, line numbers and errors."""
        program = Parser().parse_program([u'10 PRINT 1', u'', u'x: GOTO 10', u'20 FOR'])
        doc = exporter.export_program(program)
        assert doc[u'labels'] == {u'10': 0, u'X': 1, u'20': 2}
        assert doc[u'lines'] == {u'0': 1, u'1': 3}
        assert doc[u'errors'] == [[4, u'Garbage instead of variable in FOR']]
        assert doc[u'code'][0] == [[u'PRINT', [[u'n', 1.]], [[u'q', u'\n']]]]
        assert doc[u'code'][1] == [[u'GOTO', [[u'n', 10.]]]]

    def test_terms(self):
        """Calls and array references carry their argument count."""
        program = Parser().parse_program([u'A(1) = LEFT$(B$, 1)'])
        statement, = exporter.export_program(program)[u'code'][0]
        assert statement == [
            u'LET',
            {u'name': u'A', u'indices': [[[u'n', 1.]]]},
            [[u'v', u'B$'], [u'n', 1.], [u'f', u'LEFT', 2]],
        ]

    def test_json_round_trip(self):
        """An imported program runs like the original."""
        with Session(input_stream=u'1\n') as s:
            original = s.parse(PROGRAM)
            assert not original.errors
            text = exporter.to_json(original, indent=1)
            # the export is plain json
            json.loads(text)
            imported = exporter.from_json(text)
            assert imported.lines == original.lines
            assert imported.labels == original.labels
            assert imported.line_numbers == original.line_numbers
        with Session(input_stream=u'1\n') as s:
            s.run(imported)
            assert s.error is None, s.error
            assert s.output == u'Gonine\nsquares4 ab\n'

    def test_errors_round_trip(self):
        """Syntax errors survive the round trip."""
        program = Parser().parse_program([u'10 PRINT (', u'20 PRINT'])
        imported = exporter.from_json(exporter.to_json(program))
        assert imported.errors == program.errors


if __name__ == '__main__':
    run_tests()
