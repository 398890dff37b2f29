"""
MiniBASIC - program.py
Parsed program: lines of statements, labels and diagnostics

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from collections import namedtuple

from .base import error
from .base import tokens as tk


# one element of a postfix expression
# nargs is the number of operands consumed from the stack by arrays and calls
Term = namedtuple('Term', ['kind', 'value', 'nargs'])

# assignable target; indices is None for a scalar, or a tuple of expressions
Lvalue = namedtuple('Lvalue', ['name', 'indices'])

# opcode and operands
Statement = namedtuple('Statement', ['opcode', 'args'])

# syntax error record
ParseError = namedtuple('ParseError', ['line', 'message'])


def number_term(value):
    """Numeric literal."""
    return Term(tk.T_NUMBER, float(value), 0)

def string_term(text):
    """String literal."""
    return Term(tk.T_STRING, text, 0)

def variable_term(name):
    """Scalar variable reference."""
    return Term(tk.T_VARIABLE, name, 0)

def array_term(name, nargs):
    """Array element reference; the subscripts precede it in the stream."""
    return Term(tk.T_ARRAY, name, nargs)

def operator_term(symbol):
    """Binary operator."""
    return Term(tk.T_OPERATOR, symbol, 2)

def function_term(name, nargs):
    """Built-in function call."""
    return Term(tk.T_FUNCTION, name, nargs)

def user_function_term(name):
    """User-defined function call."""
    return Term(tk.T_USER_FUNCTION, name, 1)

def parameter_term():
    """Reference to the parameter of the user function being evaluated."""
    return Term(tk.T_PARAMETER, None, 0)


class Program(object):
    """BASIC program."""

    def __init__(self):
        """Initialise program."""
        # list of lines, each a list of statements
        self.lines = []
        # label text to program line index
        self.labels = {}
        # program line index to 1-based source line number
        self.line_numbers = {}
        # collected syntax errors
        self.errors = []

    def __len__(self):
        """Number of program lines."""
        return len(self.lines)

    def __repr__(self):
        """Listing of the parsed program (for debugging)."""
        output = []
        labels = dict((index, label) for label, index in self.labels.items())
        for index, line in enumerate(self.lines):
            output.append('%d [%05d] %s%s' % (
                index, self.line_numbers[index],
                '%s: ' % labels[index] if index in labels else '',
                ' : '.join(
                    '%s %r' % (stmt.opcode, list(stmt.args)) if stmt.args else stmt.opcode
                    for stmt in line
                )
            ))
        return '\n'.join(output)

    def add_label(self, label):
        """Bind a label to the next program line."""
        if label in self.labels:
            raise error.BASICSyntaxError(error.DUPLICATE_LABEL, label)
        self.labels[label] = len(self.lines)

    def add_line(self, statements, source_line):
        """Store a parsed line."""
        self.line_numbers[len(self.lines)] = source_line
        self.lines.append(statements)

    def add_error(self, source_line, message):
        """Record a syntax error."""
        self.errors.append(ParseError(source_line, message))

    def get_line_number(self, index):
        """Get source line number for a program line index."""
        if index is None:
            return None
        try:
            return self.line_numbers[index]
        except KeyError:
            return None

    def get_statement(self, index, stmt_index):
        """Retrieve a statement by position."""
        return self.lines[index][stmt_index]

    def positions(self, start=(0, 0)):
        """Iterate over statement positions from start, in program order."""
        index, stmt_index = start
        while index < len(self.lines):
            while stmt_index < len(self.lines[index]):
                yield index, stmt_index
                stmt_index += 1
            index, stmt_index = index + 1, 0
