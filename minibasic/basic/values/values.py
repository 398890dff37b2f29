"""
MiniBASIC - values.py
Runtime values, operators, built-in functions and conversions

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import math
import re

from ..base import error


# runtime values are either Number (Python float) or Text (Python str)
NUMBER = float
TEXT = str

# CHR accepts printable ascii only
CHR_MIN, CHR_MAX = 32, 127

# above this, integral floats are shown in exponent form
_MAX_INTEGRAL_REPR = 1e16

# decimal number, as accepted from INPUT
_NUMBER_REPR = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')


###############################################################################
# type checks

def check_value(inp):
    """Raise TypeError if not a runtime value."""
    if not isinstance(inp, (NUMBER, TEXT)):
        raise TypeError('%s is not of class Number or Text' % type(inp))

def pass_string(inp, err=error.TYPE_MISMATCH):
    """Check if variable is Text."""
    check_value(inp)
    if not isinstance(inp, TEXT):
        raise error.BASICError(err)
    return inp

def pass_number(inp, err=error.TYPE_MISMATCH):
    """Check if variable is a Number."""
    check_value(inp)
    if not isinstance(inp, NUMBER):
        raise error.BASICError(err)
    return inp

def to_integer(inp):
    """Truncate a Number to a Python int."""
    return int(pass_number(inp))

def is_true(inp):
    """BASIC truthiness: nonzero Number or nonempty Text."""
    check_value(inp)
    if isinstance(inp, TEXT):
        return inp != u''
    return inp != 0

def from_bool(boo):
    """Convert Python boolean to a Number."""
    return 1. if boo else 0.


###############################################################################
# representations

def to_repr(inp):
    """Text representation of a value, as PRINT shows it."""
    check_value(inp)
    if isinstance(inp, TEXT):
        return inp
    if inp.is_integer() and abs(inp) < _MAX_INTEGRAL_REPR:
        return u'%d' % (inp,)
    return repr(inp)

def from_repr(word):
    """Convert input text to a value: Number if it looks numeric, Text otherwise."""
    if _NUMBER_REPR.match(word):
        # 1e999 is numeric but out of range
        return _check_float(float(word))
    return word

def to_label(inp):
    """Label text for a jump target value."""
    check_value(inp)
    if isinstance(inp, NUMBER) and inp.is_integer():
        return u'%d' % (inp,)
    return to_repr(inp)


###############################################################################
# floating-point error handling

def _check_float(result):
    """Raise Overflow for non-finite results."""
    if math.isinf(result) or math.isnan(result):
        raise error.BASICError(error.OVERFLOW)
    return result

def _call_float_function(fn, *args):
    """Apply a Python math function to Numbers, converting its errors."""
    args = [pass_number(_arg) for _arg in args]
    try:
        result = fn(*args)
    except ZeroDivisionError:
        raise error.BASICError(error.DIVISION_BY_ZERO)
    except OverflowError:
        raise error.BASICError(error.OVERFLOW)
    except ValueError:
        # math domain errors such as SQR(-1)
        raise error.BASICError(error.IFC)
    # python may return complex values for some real functions
    if isinstance(result, complex):
        raise error.BASICError(error.IFC)
    return _check_float(float(result))


###############################################################################
# binary operators

def add(left, right):
    """Add two numbers or concatenate; Text on either side means concatenation."""
    check_value(left)
    check_value(right)
    if isinstance(left, TEXT) or isinstance(right, TEXT):
        return to_repr(left) + to_repr(right)
    return _check_float(left + right)

def sub(left, right):
    """Subtract two numbers."""
    return _call_float_function(lambda x, y: x - y, left, right)

def mul(left, right):
    """Multiply two numbers."""
    return _call_float_function(lambda x, y: x * y, left, right)

def div(left, right):
    """Divide two numbers."""
    return _call_float_function(lambda x, y: x / y, left, right)

def mod_(left, right):
    """Remainder of two numbers, with the sign of the dividend."""
    if pass_number(right) == 0:
        raise error.BASICError(error.DIVISION_BY_ZERO)
    return _call_float_function(math.fmod, left, right)

def pow(left, right):
    """Left to the power of right."""
    if pass_number(left) == 0 and pass_number(right) < 0:
        raise error.BASICError(error.DIVISION_BY_ZERO)
    return _call_float_function(math.pow, left, right)

def _compare(left, right):
    """Order two values of the same type, Type mismatch otherwise."""
    check_value(left)
    check_value(right)
    if type(left) is not type(right):
        raise error.BASICError(error.TYPE_MISMATCH)
    return (left > right) - (left < right)

def eq(left, right):
    """Strict equality: values of different type are never equal."""
    check_value(left)
    check_value(right)
    return from_bool(type(left) is type(right) and left == right)

def neq(left, right):
    """Strict inequality."""
    return from_bool(not eq(left, right))

def gt(left, right):
    """Greater than."""
    return from_bool(_compare(left, right) > 0)

def gte(left, right):
    """Greater than or equal."""
    return from_bool(_compare(left, right) >= 0)

def lt(left, right):
    """Less than."""
    return from_bool(_compare(left, right) < 0)

def lte(left, right):
    """Less than or equal."""
    return from_bool(_compare(left, right) <= 0)

def and_(left, right):
    """Logical AND."""
    return from_bool(is_true(left) and is_true(right))

def or_(left, right):
    """Logical OR."""
    return from_bool(is_true(left) or is_true(right))


###############################################################################
# numeric functions

def abs_(args):
    """ABS: absolute value."""
    num, = args
    return abs(pass_number(num))

def sgn_(args):
    """SGN: sign."""
    num, = args
    num = pass_number(num)
    return from_bool(num > 0) - from_bool(num < 0)

def int_(args):
    """INT: round towards negative infinity."""
    num, = args
    return _call_float_function(math.floor, num)

def sqr_(args):
    """SQR: square root."""
    num, = args
    return _call_float_function(math.sqrt, num)

def exp_(args):
    """EXP: exponential."""
    num, = args
    return _call_float_function(math.exp, num)

def sin_(args):
    """SIN: sine."""
    num, = args
    return _call_float_function(math.sin, num)

def cos_(args):
    """COS: cosine."""
    num, = args
    return _call_float_function(math.cos, num)

def tan_(args):
    """TAN: tangent."""
    num, = args
    return _call_float_function(math.tan, num)

def atn_(args):
    """ATN: arctangent."""
    num, = args
    return _call_float_function(math.atan, num)

def log_(args):
    """LOG: natural logarithm."""
    num, = args
    if pass_number(num) <= 0:
        raise error.BASICError(error.IFC)
    return _call_float_function(math.log, num)


###############################################################################
# string functions

def len_(args):
    """LEN: length of string."""
    s, = args
    return float(len(pass_string(s)))

def asc_(args):
    """ASC: ordinal of first character."""
    s, = args
    s = pass_string(s)
    error.throw_if(not s)
    return float(ord(s[0]))

def chr_(args):
    """CHR: character for ordinal; empty outside the printable range."""
    num, = args
    num = to_integer(num)
    if not (CHR_MIN <= num <= CHR_MAX):
        return u''
    return chr(num)

def left_(args):
    """LEFT: substring of num characters at the start of string."""
    s, num = args
    s, stop = pass_string(s), to_integer(num)
    error.throw_if(stop < 0)
    return s[:stop]

def right_(args):
    """RIGHT: substring of num characters at the end of string."""
    s, num = args
    s, num = pass_string(s), to_integer(num)
    error.throw_if(num < 0)
    if num == 0:
        return u''
    return s[-num:]

def mid_(args):
    """MID: substring of given length starting at 1-based position."""
    s, start, num = args
    s, start, num = pass_string(s), to_integer(start), to_integer(num)
    error.throw_if(start < 1 or num < 0)
    return s[start-1:start-1+num]
