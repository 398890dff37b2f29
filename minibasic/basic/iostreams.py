"""
MiniBASIC - iostreams.py
Input/output streams

(c) 2014--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io

from .base import error


# line break characters end a token in every mode
LINE_BREAKS = u'\r\n'


class OutputStream(object):
    """Append-only text sink copying to any number of writable streams."""

    def __init__(self, *streams):
        """Initialise the output streams."""
        self._streams = []
        for stream in streams:
            self.add_stream(stream)

    def add_stream(self, stream):
        """Attach an output stream."""
        if not hasattr(stream, 'write'):
            raise TypeError('output stream %r has no write method' % (stream,))
        self._streams.append(stream)

    def write(self, text):
        """Write text to all attached streams."""
        for stream in self._streams:
            stream.write(text)

    def flush(self):
        """Flush all attached streams, where supported."""
        for stream in self._streams:
            if hasattr(stream, 'flush'):
                stream.flush()


class InputStream(object):
    """Pull-based source of input tokens, to be acquired with a with-block."""

    def __init__(self, stream=None):
        """Initialise from a readable stream, a string, or nothing."""
        # we own and close streams we create
        self._owned = isinstance(stream, str)
        if stream is None:
            stream = u''
        if isinstance(stream, str):
            stream = io.StringIO(stream)
        elif isinstance(stream, io.BufferedIOBase):
            stream = io.TextIOWrapper(stream, encoding='utf-8', errors='replace')
        self._stream = stream
        self._active = False

    def __enter__(self):
        """Acquire the stream for the duration of a run."""
        self._active = True
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Release the stream."""
        self._active = False

    def close(self):
        """Close the stream, if it is ours."""
        if self._owned:
            self._stream.close()

    def _read_char(self):
        """Read one character; empty at end of input."""
        return self._stream.read(1)

    def read_token(self, stop_on_space=True):
        """
        Read the next token, skipping leading whitespace and line breaks.
        The token ends at a line break, or at any whitespace if stop_on_space is set.
        """
        if not self._active:
            raise ValueError('input stream must be acquired before reading')
        c = self._read_char()
        while c and c.isspace():
            c = self._read_char()
        if not c:
            raise error.BASICError(error.INPUT_PAST_END)
        chars = []
        while c and c not in LINE_BREAKS and not (stop_on_space and c.isspace()):
            chars.append(c)
            c = self._read_char()
        return u''.join(chars)
