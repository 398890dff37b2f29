"""
MiniBASIC - operators.py
Numeric and string operators

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from ..base import tokens as tk
from .. import values


# multiplicative operators as compiled: MOD is stored as %
MULTIPLICATIVE = {
    tk.O_TIMES: tk.O_TIMES,
    tk.O_DIV: tk.O_DIV,
    tk.MOD: tk.O_MOD,
}

ADDITIVE = (tk.O_PLUS, tk.O_MINUS)

# binary operators, by compiled symbol
BINARY = {
    tk.O_CARET: values.pow,
    tk.O_TIMES: values.mul,
    tk.O_DIV: values.div,
    tk.O_MOD: values.mod_,
    tk.O_PLUS: values.add,
    tk.O_MINUS: values.sub,
    tk.O_GT: values.gt,
    tk.O_LT: values.lt,
    tk.O_EQ: values.eq,
    tk.O_GE: values.gte,
    tk.O_LE: values.lte,
    tk.O_NE: values.neq,
    tk.O_AND: values.and_,
    tk.O_OR: values.or_,
}
