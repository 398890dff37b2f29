"""
MiniBASIC - error.py
Error constants and exceptions

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

# runtime error constants
NEXT_WITHOUT_FOR = 1
FOR_WITHOUT_NEXT = 2
RETURN_WITHOUT_GOSUB = 3
OUT_OF_DATA = 4
ILLEGAL_FUNCTION_CALL = 5
OVERFLOW = 6
OUT_OF_MEMORY = 7
NO_SUCH_LABEL = 8
INDEX_OUT_OF_RANGE = 9
DUPLICATE_ARRAY = 10
DIVISION_BY_ZERO = 11
NON_INTEGER_INDEX = 12
TYPE_MISMATCH = 13
NEGATIVE_INDEX = 14
WRONG_SUBSCRIPT_COUNT = 15
UNDEFINED_VARIABLE = 16
UNDEFINED_ARRAY = 17
UNDEFINED_USER_FUNCTION = 18
DUPLICATE_FUNCTION = 19
STEP_NOT_POSITIVE = 20
DATA_NOT_FIRST = 21
INPUT_PAST_END = 22
EXECUTION_LIMIT = 23
NOT_IMPLEMENTED = 24

# syntax error constants
LEXICAL_ERROR = 1
COMMAND_EXPECTED = 2
EXTRA_TOKENS = 3
DUPLICATE_LABEL = 4
PRINT_DELIMITER = 5
COMMA_EXPECTED = 6
THEN_EXPECTED = 7
JUMP_WITHOUT_LABEL = 8
FOR_VARIABLE = 9
FOR_EQUALS = 10
FOR_TO = 11
NEXT_VARIABLE_MISSING = 12
NEXT_VARIABLE = 13
DEF_NAME_EXPECTED = 14
DEF_NAME_INVALID = 15
DEF_OPEN_PARENTHESIS = 16
DEF_PARAMETER = 17
DEF_CLOSE_PARENTHESIS = 18
DEF_EQUALS = 19
END_OF_STATEMENT = 20
END_OF_ASSIGNMENT = 21
ASSIGNMENT_EXPECTED = 22
VARIABLE_EXPECTED = 23
FUNCTION_NOT_EXPECTED = 24
END_OF_ARGUMENTS = 25
GARBAGE_IN_ARGUMENTS = 26
WRONG_ARGUMENT_COUNT = 27
EXPRESSION_EXPECTED = 28
BROKEN_EXPRESSION = 29
MISSING_PARENTHESIS = 30
EXTRA_MINUS = 31
DIM_PARENTHESIS = 32
EXPRESSION_TOO_DEEP = 33

# lexical messages, carried in error tokens
UNCLOSED_STRING = u'Unclosed string literal'
UNRECOGNISED_CHARACTER = u'Unrecognized character at position %d'

# shorthand
IFC = ILLEGAL_FUNCTION_CALL


class Interrupt(Exception):
    """Base type for exceptions."""

    message = u''

    def __repr__(self):
        """String representation of exception."""
        return u'%s(%r)' % (type(self).__name__, self.message)

    def __str__(self):
        """Message text."""
        return self.message

    def get_message(self, line_number=None):
        """Error message."""
        if line_number is not None:
            return u'%s in %i' % (self.message, line_number)
        return self.message


class Exit(Interrupt):
    """END statement: stop the run."""
    message = u'Exit'


class BASICError(Interrupt):
    """Runtime error."""

    default_message = u'Unprintable error'
    messages = {
        1: u'NEXT without FOR: %s',
        2: u'FOR without NEXT: %s',
        3: u'RETURN without GOSUB',
        4: u'Out of DATA',
        5: u'Illegal function call',
        6: u'Overflow',
        7: u'Out of memory',
        8: u'No such label: %s',
        9: u'Index#%d out of range: %s',
        10: u"Array '%s' already exists",
        11: u'Division by zero',
        12: u'Non-integer array index: %s',
        13: u'Type mismatch',
        14: u'Negative array index: %s',
        15: u'Wrong number of subscripts, should be %d',
        16: u'Variable not defined: %s',
        17: u'Array not defined: %s',
        18: u'Undefined user function: %s',
        19: u'Function %s already defined',
        20: u'FOR step should be positive',
        21: u'DATA should be the first statement of its line',
        22: u'Input past end',
        23: u'Execution limit reached: %d statements',
        24: u'Command not implemented: %s',
    }

    def __init__(self, value, *args, **kwargs):
        """Initialise error."""
        Interrupt.__init__(self)
        self.err = value
        # program line index where the error occurred
        self.pos = kwargs.get('pos')
        # 1-based source line number, filled in when the error is surfaced
        self.line = None
        try:
            template = self.messages[self.err]
        except KeyError:
            self.message = self.default_message
        else:
            self.message = template % args if args else template


class BASICSyntaxError(BASICError):
    """Syntax error, aborts parsing of the current source line."""

    messages = {
        1: u'%s',
        2: u'Command or Variable expected',
        3: u'Extra tokens at the end of statement',
        4: u'Duplicate label: %s',
        5: u'Delimiter in PRINT expected',
        6: u'Comma in %s expected',
        7: u'THEN expected after IF and expression',
        8: u'%s without label',
        9: u'Garbage instead of variable in FOR',
        10: u'equals sign expected in FOR',
        11: u'TO expected in FOR',
        12: u'NEXT without variable',
        13: u'Garbage instead of variable in NEXT',
        14: u'Custom function name expected after DEF',
        15: u'Custom function name should be FNx where x = A..Z',
        16: u'Expected "(" after function name',
        17: u'Function argument name expected',
        18: u'Expected ")" after function parameter',
        19: u'Expected "=" after function name and parameter',
        20: u'Unexpected end of statement',
        21: u'Unexpected end of assignment',
        22: u'Assignment operator expected',
        23: u'Variable expected',
        24: u"Function %s isn't expected here",
        25: u'Unexpected end of %s',
        26: u'Garbage in %s',
        27: u'Function %s expects %d argument(s)',
        28: u'Expression expected',
        29: u'Broken expression syntax',
        30: u'Missing closing parenthesis ")"',
        31: u'Unexpected extra minus sign',
        32: u'Dimensions expected after array name %s',
        33: u'Expression too complex',
    }


def throw_if(bool, err=IFC, *args):
    """Raise a runtime error if condition is met."""
    if bool:
        raise BASICError(err, *args)
