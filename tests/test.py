#!/usr/bin/env python3
"""
MiniBASIC test script

(c) 2015--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import os
import sys
from contextlib import contextmanager

from .unit import run_unit_tests

# specify locations relative to this file
HERE = os.path.dirname(os.path.abspath(__file__))


def contained(arglist, elem):
    try:
        arglist.remove(elem)
    except ValueError:
        return False
    return True

def parse_args():
    args = sys.argv[1:]
    loud = contained(args, '--loud')
    cover = contained(args, '--coverage')
    return {
        'loud': loud,
        'coverage': cover,
    }


class Coverage(object):

    def __init__(self, cover):
        self._on = cover

    @contextmanager
    def track(self):
        if self._on:
            import coverage
            cov = coverage.coverage(omit=[os.path.join(HERE, '*'), '/usr/local/lib/*'])
            cov.start()
            yield self
            cov.stop()
            cov.save()
            cov.html_report()
        else:
            yield


def test_main():
    arg_dict = parse_args()
    with Coverage(arg_dict['coverage']).track():
        success = run_unit_tests(loud=arg_dict['loud'])
    return 0 if success else 1

if __name__ == '__main__':
    sys.exit(test_main())
