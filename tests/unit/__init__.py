"""
MiniBASIC tests.unit
unit tests

(c) 2015--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import os
import sys
import logging

# make minibasic package accessible
HERE = os.path.dirname(os.path.abspath(__file__))
sys.path = [os.path.join(HERE, '..', '..')] + sys.path


# unittest verbosity, increase for more info on what is running
VERBOSITY = 1


def run_unit_tests(loud=False):
    """Discover and run the unit tests; return True if all passed."""
    import unittest
    sys.stderr.write('Running unit tests: ')
    if not loud:
        logging.disable(logging.CRITICAL)
    try:
        suite = unittest.loader.defaultTestLoader.discover(HERE, 'test*.py', os.path.join(HERE, '..', '..'))
        runner = unittest.TextTestRunner(verbosity=VERBOSITY)
        result = runner.run(suite)
    finally:
        logging.disable(logging.NOTSET)
    return result.wasSuccessful()
