"""
MiniBASIC - arrays.py
Array variable management

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from functools import reduce
import operator

from ..base import error
from .. import values


class Arrays(object):

    def __init__(self):
        """Initialise arrays."""
        self.clear()

    def __contains__(self, varname):
        """Check if an array has been dimensioned."""
        return varname in self._dims

    def __iter__(self):
        """Return an iterable over all array names."""
        return iter(self._dims)

    def __repr__(self):
        """Debugging representation of array dictionary."""
        return '\n'.join(
            '%s%s: %r' % (n, list(v), self._buffers[n])
            for n, v in sorted(self._dims.items())
        )

    def clear(self):
        """Clear arrays."""
        self._dims = {}
        self._buffers = {}

    @staticmethod
    def _check_subscript(value):
        """Convert a subscript value to a Python int; it must be a non-negative integer."""
        value = values.pass_number(value)
        if not value.is_integer():
            raise error.BASICError(error.NON_INTEGER_INDEX, values.to_repr(value))
        if value < 0:
            raise error.BASICError(error.NEGATIVE_INDEX, values.to_repr(value))
        return int(value)

    def index(self, index, dimensions):
        """Return the flat row-major index for a given subscript list."""
        index = [self._check_subscript(_i) for _i in index]
        if len(index) != len(dimensions):
            raise error.BASICError(error.WRONG_SUBSCRIPT_COUNT, len(dimensions))
        bigindex = 0
        for i, (sub, dim) in enumerate(zip(index, dimensions)):
            if sub >= dim:
                raise error.BASICError(error.INDEX_OUT_OF_RANGE, i, sub)
            bigindex = bigindex * dim + sub
        return bigindex

    @staticmethod
    def array_len(dimensions):
        """Return the flat length for given dimensions."""
        return reduce(operator.mul, dimensions, 1)

    def dimensions(self, name):
        """Return the dimensions of an array."""
        try:
            return self._dims[name]
        except KeyError:
            raise error.BASICError(error.UNDEFINED_ARRAY, name)

    def allocate(self, name, dimensions):
        """
        Allocate array space for an array of given dimensions.
        Raise errors if duplicate name or illegal dimension value.
        """
        dimensions = tuple(self._check_subscript(_d) for _d in dimensions)
        if name in self._dims:
            raise error.BASICError(error.DUPLICATE_ARRAY, name)
        self._dims[name] = dimensions
        # elements are initialised to zero
        self._buffers[name] = [0.] * self.array_len(dimensions)

    def get(self, name, index):
        """Retrieve the value of an array element."""
        dimensions = self.dimensions(name)
        return self._buffers[name][self.index(index, dimensions)]

    def set(self, name, index, value):
        """Assign a value to an array element."""
        values.check_value(value)
        dimensions = self.dimensions(name)
        self._buffers[name][self.index(index, dimensions)] = value

    def view_full_buffer(self, name):
        """Return a copy of the flat storage of an array, for inspection."""
        self.dimensions(name)
        return list(self._buffers[name])
