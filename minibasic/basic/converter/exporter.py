"""
MiniBASIC - exporter.py
Export parsed programs to JSON and import them again

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import json

from ..base import tokens as tk
from .. import program as prog
from ..data import VERSION


# term kinds that carry an argument count
_COUNTED = (tk.T_ARRAY, tk.T_FUNCTION, tk.T_USER_FUNCTION)


def _export_term(term):
    """Term as a list: [kind, value] or [kind, name, nargs]."""
    if term.kind in _COUNTED:
        return [term.kind, term.value, term.nargs]
    return [term.kind, term.value]

def _export_arg(arg):
    """Statement operand as a JSON value."""
    if isinstance(arg, prog.Term):
        return _export_term(arg)
    elif isinstance(arg, prog.Lvalue):
        indices = None
        if arg.indices is not None:
            indices = [_export_arg(_index) for _index in arg.indices]
        return {u'name': arg.name, u'indices': indices}
    elif isinstance(arg, tuple):
        # expression
        return [_export_term(_term) for _term in arg]
    # name
    return arg

def export_program(program):
    """Structural dump of a program, sufficient to run it without parsing."""
    return {
        u'version': VERSION,
        u'code': [
            [[_stmt.opcode] + [_export_arg(_arg) for _arg in _stmt.args] for _stmt in _line]
            for _line in program.lines
        ],
        u'labels': dict(program.labels),
        u'lines': {u'%d' % _index: _number for _index, _number in program.line_numbers.items()},
        u'errors': [[_err.line, _err.message] for _err in program.errors],
    }


def _import_term(record):
    """Term from its list form."""
    kind, value = record[0], record[1]
    if kind in _COUNTED:
        return prog.Term(kind, value, int(record[2]))
    elif kind == tk.T_NUMBER:
        return prog.number_term(value)
    elif kind == tk.T_OPERATOR:
        return prog.operator_term(value)
    elif kind in (tk.T_STRING, tk.T_VARIABLE, tk.T_PARAMETER):
        return prog.Term(kind, value, 0)
    raise ValueError('unknown term kind %r' % (kind,))

def _import_arg(record):
    """Statement operand from its JSON form."""
    if isinstance(record, dict):
        indices = record[u'indices']
        if indices is not None:
            indices = tuple(_import_arg(_index) for _index in indices)
        return prog.Lvalue(record[u'name'], indices)
    elif isinstance(record, list):
        if record and isinstance(record[0], list):
            return tuple(_import_term(_term) for _term in record)
        # a single term is an INPUT prompt
        return _import_term(record)
    return record

def import_program(document):
    """Rebuild a program from its structural dump."""
    program = prog.Program()
    for index, line in enumerate(document[u'code']):
        statements = [
            prog.Statement(_record[0], tuple(_import_arg(_arg) for _arg in _record[1:]))
            for _record in line
        ]
        program.add_line(statements, int(document[u'lines'][u'%d' % index]))
    program.labels.update(
        (_label, int(_index)) for _label, _index in document[u'labels'].items()
    )
    for line, message in document.get(u'errors', ()):
        program.add_error(line, message)
    return program


def to_json(program, indent=None):
    """Export a program to a JSON string."""
    return json.dumps(export_program(program), indent=indent)

def from_json(text):
    """Import a program from a JSON string."""
    return import_program(json.loads(text))
