"""
MiniBASIC - userfunctions.py
User-defined functions.

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from ..base import error
from ..base import tokens as tk
from .. import program as prog


def bind_parameter(body, param):
    """Replace references to the formal parameter by parameter slot terms."""
    return tuple(
        prog.parameter_term() if term.kind == tk.T_VARIABLE and term.value == param else term
        for term in body
    )


class UserFunction(object):
    """User-defined function."""

    def __init__(self, name, body):
        """Define function."""
        self.name = name
        self._body = body
        self._is_evaluating = False

    def evaluate(self, evaluator, state, arg):
        """Evaluate user-defined function with its own parameter binding."""
        # recursion is not allowed as there's no way to terminate it
        if self._is_evaluating:
            raise error.BASICError(error.OUT_OF_MEMORY)
        self._is_evaluating = True
        try:
            return evaluator.evaluate(state, self._body, param=arg)
        finally:
            self._is_evaluating = False


class UserFunctionManager(object):
    """User-defined function handler."""

    def __init__(self):
        """Initialise functions."""
        self._fn_dict = {}

    def get(self, fnname):
        """Retrieve function by name."""
        try:
            return self._fn_dict[fnname]
        except KeyError:
            raise error.BASICError(error.UNDEFINED_USER_FUNCTION, fnname)

    def define(self, fnname, body):
        """Define a function; redefinition is an error."""
        if fnname in self._fn_dict:
            raise error.BASICError(error.DUPLICATE_FUNCTION, fnname)
        self._fn_dict[fnname] = UserFunction(fnname, body)
