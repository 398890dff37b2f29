"""
MiniBASIC - interpreter for line-numbered BASIC programs

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import sys
import logging

from . import config
from .basic import Session
from .basic import NAME, VERSION, COPYRIGHT
from .basic.data import read_usage
from .basic.converter import exporter


# exit codes
EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_SYNTAX_ERROR = 2


def main(*arguments):
    """Initialise, parse arguments and perform requested operations; return exit code."""
    # get settings and prepare logging
    settings = config.Settings(arguments)
    if settings.version:
        # print version and exit
        _show_version(settings)
    elif settings.help:
        # print usage and exit
        _show_usage()
    else:
        return _run_program(settings)
    return EXIT_OK


def _show_usage():
    """Show usage description."""
    sys.stdout.write(read_usage())

def _show_version(settings):
    """Show version with optional debugging details."""
    sys.stdout.write(u'%s %s\n%s\n' % (NAME, VERSION, COPYRIGHT))
    if settings.debug:
        sys.stdout.write(u'Python %s on %s\n' % (sys.version.split()[0], sys.platform))


def _trace(line_number, statement):
    """Log each statement as it executes."""
    logging.debug(u'[%s] %s', line_number, statement.opcode)


def _read_text(name):
    """Read a whole text file, or standard input if no name is given."""
    if not name:
        return sys.stdin.read()
    with io.open(name, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


def _open_input(settings):
    """Choose the source of INPUT tokens."""
    if settings.input:
        return io.open(settings.input, 'r', encoding='utf-8', errors='replace')
    if settings.program or settings.load_dump:
        # program came from a file, so standard input is free for INPUT
        return sys.stdin
    # standard input holds the program; nothing is left for INPUT
    return None


def _run_program(settings):
    """Load, parse and run a program with standard i/o."""
    input_stream = _open_input(settings)
    try:
        with Session(
                input_stream=input_stream, output_stream=sys.stdout,
                **settings.session_params
            ) as session:
            if settings.load_dump:
                program = exporter.from_json(_read_text(settings.load_dump))
            else:
                program = session.parse(_read_text(settings.program))
            if program.errors:
                sys.stdout.write(u'Code not executed because of parse errors:\n')
                for err in program.errors:
                    sys.stdout.write(u'    Line #%d: %s\n' % (err.line, err.message))
                return EXIT_SYNTAX_ERROR
            if settings.dump:
                with io.open(settings.dump, 'w', encoding='utf-8') as f:
                    f.write(exporter.to_json(program, indent=1))
                return EXIT_OK
            if settings.debug:
                session.set_hook(_trace)
            error = session.run(program)
            if error:
                sys.stdout.write(u'Runtime error (line #%s): %s\n' % (error.line, error.message))
                return EXIT_RUNTIME_ERROR
            return EXIT_OK
    finally:
        if input_stream not in (None, sys.stdin):
            input_stream.close()
