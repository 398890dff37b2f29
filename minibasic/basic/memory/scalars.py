"""
MiniBASIC - scalars.py
Scalar variable management

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from ..base import error
from .. import values


class Scalars(object):
    """Scalar variables."""

    def __init__(self):
        """Initialise scalars."""
        self._vars = {}

    def set(self, name, value):
        """Assign a value to a variable."""
        values.check_value(value)
        self._vars[name] = value

    def get(self, name):
        """Retrieve the value of a scalar variable; it must have been assigned."""
        try:
            return self._vars[name]
        except KeyError:
            raise error.BASICError(error.UNDEFINED_VARIABLE, name)
