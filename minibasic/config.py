"""
MiniBASIC - config.py
Configuration file and command-line options parser

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import os
import sys
import logging
import configparser


# config file read from the current directory if no --config is given
CONFIG_NAME = u'MINIBASIC.INI'
# section holding the settings that apply without a preset
CONFIG_SECTION = u'minibasic'

# format for log files
LOGGING_FORMAT = u'[%(asctime)s.%(msecs)04d] %(levelname)s: %(message)s'
LOGGING_FORMATTER = logging.Formatter(fmt=LOGGING_FORMAT, datefmt=u'%H:%M:%S')

# bool strings
TRUES = (u'YES', u'TRUE', u'ON', u'1')
FALSES = (u'NO', u'FALSE', u'OFF', u'0')


##############################################################################
# options

PRESETS = {
    # guard against runaway programs
    u'limited': {
        u'max-steps': u'1000000',
    },
    # reproducible random numbers
    u'repeatable': {
        u'seed': u'0',
    },
}

# single-letter flags and the long option they stand for
SHORT_ARGS = {
    u'd': u'debug',
    u'h': u'help',
    u'v': u'version',
    u'i': u'input',
    u'm': u'max-steps',
    u's': u'seed',
}

# key under which the program file name is stored
PROGRAM = 0

ARGUMENTS = {
    u'input': {u'type': u'string', u'default': u'', },
    u'max-steps': {u'type': u'int', u'default': 0, },
    u'seed': {u'type': u'int', u'default': None, },
    u'stop-on-space': {u'type': u'bool', u'default': True, },
    u'dump': {u'type': u'string', u'default': u'', },
    u'load-dump': {u'type': u'string', u'default': u'', },
    u'config': {u'type': u'string', u'default': u'', },
    u'preset': {u'type': u'string', u'default': u'', },
    u'logfile': {u'type': u'string', u'default': u'', },
    u'debug': {u'type': u'bool', u'default': False, },
    u'help': {u'type': u'bool', u'default': False, },
    u'version': {u'type': u'bool', u'default': False, },
}


def _takes_value(name):
    """Option is followed by a value rather than being a switch."""
    return name in ARGUMENTS and ARGUMENTS[name][u'type'] != u'bool'


##########################################################################
# logging

class Lumberjack(object):
    """Root logger setup; messages are held back until the log stream is known."""

    def __init__(self):
        self._held = io.StringIO()
        self._handler = self._attach(self._held)
        logging.getLogger().setLevel(logging.INFO)

    def _attach(self, stream):
        """Route root logger output to a stream."""
        handler = logging.StreamHandler(stream)
        handler.setFormatter(LOGGING_FORMATTER)
        logging.getLogger().addHandler(handler)
        return handler

    def reset(self):
        """Drop all handlers from the root logger."""
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)

    def prepare(self, logfile, debug):
        """Log to the log file or stderr, at DEBUG level if requested."""
        self.reset()
        logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)
        if logfile:
            stream = io.open(logfile, 'w', encoding='utf_8', errors='replace')
        else:
            stream = sys.stderr
        # messages logged while parsing the options
        stream.write(self._held.getvalue())
        self._attach(stream)


##########################################################################
# settings

class Settings(object):
    """Options for a MiniBASIC run, from the command line and config file."""

    def __init__(self, arguments=None):
        if not arguments:
            arguments = sys.argv[1:]
        lumberjack = Lumberjack()
        try:
            self._options = ArgumentParser().retrieve_options(list(arguments))
        except Exception:
            # don't leave messages stuck in the holding buffer
            lumberjack.reset()
            raise
        lumberjack.prepare(self.get('logfile'), self.get('debug'))

    def get(self, name):
        """Value of an option, or its default if not given."""
        value = self._options.get(name)
        if value is None or value == u'':
            if name == PROGRAM:
                return u''
            return ARGUMENTS[name][u'default']
        return value

    @property
    def session_params(self):
        """Parameters for the interpreter session."""
        return {
            'max_steps': self.get('max-steps'),
            'seed': self.get('seed'),
            'stop_on_space': self.get('stop-on-space'),
        }

    @property
    def program(self):
        """Program file name, empty for standard input."""
        return self.get(PROGRAM)

    @property
    def input(self):
        """INPUT source file name, empty for standard input."""
        return self.get('input')

    @property
    def dump(self):
        """File to write the program export to."""
        return self.get('dump')

    @property
    def load_dump(self):
        """Program export file to run instead of source."""
        return self.get('load-dump')

    @property
    def version(self):
        return self.get('version')

    @property
    def help(self):
        return self.get('help')

    @property
    def debug(self):
        return self.get('debug')


##############################################################################
# argument parsing

class ArgumentParser(object):
    """Parse MiniBASIC config file and command-line arguments."""

    def retrieve_options(self, argv):
        """Merge presets, config file and command line into typed options."""
        command_line = self._read_command_line(argv)
        sections = dict(PRESETS)
        config_file = command_line.pop(u'config', None) or (
            CONFIG_NAME if os.path.exists(CONFIG_NAME) else None
        )
        if config_file:
            sections.update(self._read_config_file(config_file))
        args = {}
        for preset in command_line.pop(u'preset', u'').split(u','):
            preset = preset.strip()
            if not preset:
                continue
            if preset in sections:
                args.update(sections[preset])
            else:
                logging.warning(u'Ignored undefined preset `%s`', preset)
        args.update(sections.get(CONFIG_SECTION, {}))
        for name in [_k for _k in args if _k not in ARGUMENTS]:
            logging.warning(
                u'Ignored unrecognised option `%s=%s` in configuration file', name, args.pop(name)
            )
        args.update(command_line)
        return {_k: self._convert(_k, _v) for _k, _v in args.items()}

    def _read_command_line(self, argv):
        """Turn the argument list into a dictionary of option strings."""
        args = {}
        argv = list(argv)
        while argv:
            arg = argv.pop(0)
            if arg == u'--':
                # everything after this is the program file
                if argv:
                    self._set_program(args, argv.pop(0))
                continue
            if not arg.startswith(u'-') or arg == u'-':
                self._set_program(args, arg)
                continue
            if arg.startswith(u'--'):
                name, equals, value = arg[2:].partition(u'=')
            elif arg[1:] in SHORT_ARGS:
                name, equals, value = SHORT_ARGS[arg[1:]], u'', u''
            else:
                logging.warning(u'Ignored unrecognised option `%s`', arg)
                continue
            if name not in ARGUMENTS:
                logging.warning(u'Ignored unrecognised command-line argument `%s`', arg)
                continue
            if not equals and _takes_value(name) and argv and not argv[0].startswith(u'-'):
                value = argv.pop(0)
            args[name] = value
        return args

    def _set_program(self, args, name):
        """Record the program file; only one is allowed."""
        if PROGRAM in args:
            logging.warning(u'Ignored surplus positional command-line argument `%s`', name)
        else:
            args[PROGRAM] = name

    def _read_config_file(self, config_file):
        """Read the sections of a config file, ignoring leading whitespace."""
        config = configparser.RawConfigParser(allow_no_value=True)
        try:
            # utf_8_sig skips a byte order mark
            with io.open(config_file, 'r', encoding='utf_8_sig', errors='replace') as f:
                config.read_string(u''.join(_line.lstrip(u' \t') for _line in f))
        except (configparser.Error, IOError):
            logging.warning(
                u'Error in configuration file `%s`. Configuration not loaded.', config_file
            )
            return {}
        return {_header: dict(config.items(_header)) for _header in config.sections()}

    ##########################################################################
    # type conversions

    def _convert(self, name, value):
        """Convert an option string to the option's type."""
        if name not in ARGUMENTS:
            return value
        kind = ARGUMENTS[name][u'type']
        if kind == u'int':
            return self._to_int(name, value)
        elif kind == u'bool':
            return self._to_bool(name, value)
        return value

    def _to_bool(self, name, value):
        """Empty (switch given without value) means True."""
        if value is None or value == u'':
            return True
        if value.upper() in TRUES:
            return True
        elif value.upper() in FALSES:
            return False
        logging.warning(u'Boolean option `%s=%s` interpreted as `%s=True`', name, value, name)
        return True

    def _to_int(self, name, value):
        if value:
            try:
                return int(value)
            except ValueError:
                logging.warning(
                    u'Option `%s=%s` ignored: value should be an integer', name, value
                )
        return None
