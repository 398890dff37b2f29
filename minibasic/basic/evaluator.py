"""
MiniBASIC - evaluator.py
Postfix expression evaluator

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .base import error
from .base import tokens as tk
from .parser import operators as op
from . import values


class Evaluator(object):
    """Stack machine for compiled expressions."""

    def __init__(self, randomiser):
        """Initialise function tables."""
        self._randomiser = randomiser
        self._init_functions()

    def _init_functions(self):
        """Initialise built-in functions."""
        self._functions = {
            u'ABS': values.abs_,
            u'ATN': values.atn_,
            u'COS': values.cos_,
            u'EXP': values.exp_,
            u'INT': values.int_,
            u'LOG': values.log_,
            u'RND': self._randomiser.rnd_,
            u'SIN': values.sin_,
            u'SGN': values.sgn_,
            u'SQR': values.sqr_,
            u'TAN': values.tan_,
            u'ASC': values.asc_,
            u'CHR': values.chr_,
            u'LEN': values.len_,
            u'LEFT': values.left_,
            u'RIGHT': values.right_,
            u'MID': values.mid_,
        }
        self._terms = {
            tk.T_NUMBER: self._push_literal,
            tk.T_STRING: self._push_literal,
            tk.T_VARIABLE: self._push_variable,
            tk.T_PARAMETER: self._push_parameter,
            tk.T_ARRAY: self._push_array_element,
            tk.T_OPERATOR: self._apply_operator,
            tk.T_FUNCTION: self._call_function,
            tk.T_USER_FUNCTION: self._call_user_function,
        }

    def evaluate(self, state, expr, param=None):
        """Evaluate a postfix expression; param is the bound user function argument."""
        stack = []
        for term in expr:
            self._terms[term.kind](state, stack, term, param)
        if len(stack) != 1:
            raise ValueError('malformed expression leaves %d values on the stack' % len(stack))
        return stack[0]

    @staticmethod
    def _pop(stack, count):
        """Pop count values, first pushed first."""
        if count > len(stack):
            raise ValueError('malformed expression: stack underflow')
        args = stack[len(stack)-count:]
        del stack[len(stack)-count:]
        return args

    def _push_literal(self, state, stack, term, param):
        """Push a number or string literal."""
        stack.append(term.value)

    def _push_variable(self, state, stack, term, param):
        """Push the value of a scalar variable."""
        stack.append(state.scalars.get(term.value))

    def _push_parameter(self, state, stack, term, param):
        """Push the argument of the user function being evaluated."""
        error.throw_if(param is None)
        stack.append(param)

    def _push_array_element(self, state, stack, term, param):
        """Pop subscripts and push an array element."""
        index = self._pop(stack, term.nargs)
        stack.append(state.arrays.get(term.value, index))

    def _apply_operator(self, state, stack, term, param):
        """Apply a binary operator."""
        left, right = self._pop(stack, 2)
        stack.append(op.BINARY[term.value](left, right))

    def _call_function(self, state, stack, term, param):
        """Call a built-in function."""
        args = self._pop(stack, term.nargs)
        stack.append(self._functions[term.value](args))

    def _call_user_function(self, state, stack, term, param):
        """Call a user-defined function."""
        arg, = self._pop(stack, 1)
        fn = state.functions.get(term.value)
        stack.append(fn.evaluate(self, state, arg))
