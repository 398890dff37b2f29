#!/usr/bin/env python3
"""
MiniBASIC install script for source distribution

(c) 2015--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import os
import json
from io import open

from setuptools import find_packages, setup


###############################################################################
# get descriptions and version number

# file location
HERE = os.path.abspath(os.path.dirname(__file__))

# obtain metadata without importing the package (to avoid breaking sdist install)
with open(os.path.join(HERE, 'minibasic', 'basic', 'data', 'meta.json'), 'r') as meta:
    _METADATA = json.load(meta)
    VERSION = _METADATA['version']
    AUTHOR = _METADATA['author']
    DESCRIPTION = _METADATA['description']


###############################################################################
# setup parameters

SETUP_OPTIONS = dict(
    name='minibasic',
    version=VERSION,
    author=AUTHOR,
    description=DESCRIPTION,
    license='GPLv3',
    python_requires='>=3.9',

    # contents
    # only include subpackages of minibasic: exclude tests etc
    packages=find_packages(include=['minibasic', 'minibasic.*']),
    package_data={
        'minibasic.basic.data': ['meta.json', 'USAGE.txt'],
    },
    # test runner coverage option
    extras_require={
        'test': ['coverage'],
    },
    # launchers
    entry_points=dict(
        console_scripts=['minibasic=minibasic:main'],
    ),
)

###############################################################################
# run the setup

# perform the installation
setup(**SETUP_OPTIONS)
