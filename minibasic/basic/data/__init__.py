"""
MiniBASIC - data

(c) 2021--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from importlib import resources
import json

# copyright metadata
_METADATA = json.loads(resources.files(__package__).joinpath('meta.json').read_bytes())
NAME, VERSION, AUTHOR, COPYRIGHT = (_METADATA[_key] for _key in (
    'name', 'version', 'author', 'copyright'
))


def read_usage():
    """Command-line usage text."""
    return resources.files(__package__).joinpath('USAGE.txt').read_text(
        encoding='utf-8', errors='replace'
    )
