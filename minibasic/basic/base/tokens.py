"""
MiniBASIC - tokens.py
Token kinds, keywords, opcodes and expression term kinds

(c) 2014--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import re
from collections import namedtuple


# ascii constants
DIGITS = u'0123456789'
UPPERCASE = u'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
LOWERCASE = UPPERCASE.lower()
LETTERS = UPPERCASE + LOWERCASE
ALPHANUMERIC = LETTERS + DIGITS

# string type sigil on names
SIGIL = u'$'
# quote character for string literals
QUOTE = u'"'

# token kinds
WORD = u'w'
NUMBER = u'n'
STRING = u'q'
OPERATOR = u'o'
PUNCTUATION = u'p'
ERROR = u'e'

# lexical unit: kind tag and literal text
Token = namedtuple('Token', ['kind', 'text'])

# statement keywords, also used as opcodes
END = u'END'
FOR = u'FOR'
NEXT = u'NEXT'
DATA = u'DATA'
INPUT = u'INPUT'
DIM = u'DIM'
READ = u'READ'
LET = u'LET'
GOTO = u'GOTO'
IF = u'IF'
RESTORE = u'RESTORE'
GOSUB = u'GOSUB'
RETURN = u'RETURN'
REM = u'REM'
PRINT = u'PRINT'
DEF = u'DEF'

# non-statement keywords
THEN = u'THEN'
TO = u'TO'
STEP = u'STEP'
AND = u'AND'
OR = u'OR'
MOD = u'MOD'

OPCODES = (
    LET, IF, GOTO, GOSUB, RETURN, FOR, NEXT, PRINT,
    INPUT, DIM, DEF, READ, DATA, RESTORE, REM, END,
)
KEYWORDS = frozenset(OPCODES + (THEN, TO, STEP, AND, OR, MOD))

# operator symbols as produced by the lexer
O_GE = u'>='
O_LE = u'<='
O_NE = u'<>'
O_GT = u'>'
O_LT = u'<'
O_EQ = u'='
O_PLUS = u'+'
O_MINUS = u'-'
O_TIMES = u'*'
O_DIV = u'/'
O_CARET = u'^'
# operator symbols only found in compiled expressions
O_MOD = u'%'
O_AND = u'&'
O_OR = u'|'

# longest first, so that >= is not read as >
OPERATORS = (
    O_GE, O_LE, O_NE, O_GT, O_LT, O_EQ,
    O_PLUS, O_MINUS, O_TIMES, O_DIV, O_CARET,
)
RELATIONAL = (O_EQ, O_GT, O_LT, O_GE, O_LE, O_NE)

# punctuation
COMMA = u','
SEMICOLON = u';'
COLON = u':'
LPAREN = u'('
RPAREN = u')'
PUNCTUATION_MARKS = (COMMA, SEMICOLON, COLON, LPAREN, RPAREN)

# expression term kinds
T_NUMBER = u'n'
T_STRING = u'q'
T_VARIABLE = u'v'
T_ARRAY = u'a'
T_OPERATOR = u'o'
T_FUNCTION = u'f'
T_USER_FUNCTION = u'u'
T_PARAMETER = u'p'

# built-in functions and their number of arguments
FUNCTIONS = {
    u'ABS': 1, u'ATN': 1, u'COS': 1, u'EXP': 1, u'INT': 1, u'LOG': 1,
    u'RND': 1, u'SIN': 1, u'SGN': 1, u'SQR': 1, u'TAN': 1,
    u'ASC': 1, u'CHR': 1, u'LEN': 1,
    u'LEFT': 2, u'RIGHT': 2, u'MID': 3,
}

# user-defined functions: FN followed by one letter
USER_FUNCTION_NAME = re.compile(u'^FN[A-Z]$')


def function_name(word):
    """Canonical built-in function name for a word, or None; LEFT$ and LEFT are the same."""
    name = word[:-1] if word.endswith(SIGIL) else word
    if name in FUNCTIONS:
        return name
    return None

def is_user_function_name(word):
    """Check if a word names a user-defined function."""
    return USER_FUNCTION_NAME.match(word) is not None
