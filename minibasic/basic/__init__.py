"""
MiniBASIC - interpreter for line-numbered BASIC programs

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .data import NAME, VERSION, AUTHOR, COPYRIGHT
from .api import Session
from .base.error import *

__version__ = VERSION
