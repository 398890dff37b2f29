"""
MiniBASIC - randomiser.py
Random number generator

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import random

from . import values


class Randomiser(object):
    """Pseudo-random source for RND."""

    def __init__(self, seed=None):
        """Initialise the random number generator."""
        self._seed = seed
        self.clear()

    def clear(self):
        """Reset the random number generator to its initial seed."""
        self._generator = random.Random(self._seed)

    def rnd_(self, args):
        """RND: pseudo-random Number in [0, 1); the argument is checked but ignored."""
        num, = args
        values.pass_number(num)
        return self._generator.random()
