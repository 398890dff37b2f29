"""
MiniBASIC - codestream.py
Token stream utilities for the parser

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from . import error
from . import tokens as tk


class TokenStream(object):
    """Stream of tokens from one source line."""

    def __init__(self, tokens):
        """Initialise the stream."""
        self._tokens = list(tokens)
        self._pos = 0

    def __len__(self):
        """Number of tokens left."""
        return len(self._tokens) - self._pos

    def peek(self, offset=0):
        """Peek next token, or one further ahead; None at end of line."""
        if self._pos + offset < len(self._tokens):
            return self._tokens[self._pos + offset]
        return None

    def read(self):
        """Read next token, None at end of line."""
        token = self.peek()
        if token is not None:
            self._pos += 1
        return token

    def read_rest(self):
        """Read all remaining tokens."""
        rest = self._tokens[self._pos:]
        self._pos = len(self._tokens)
        return rest

    def peek_is(self, kind, in_range=None, offset=0):
        """Check if next token is of the given kind and, optionally, text."""
        token = self.peek(offset)
        return (
            token is not None and token.kind == kind
            and (in_range is None or token.text in in_range)
        )

    def read_if(self, kind, in_range=None):
        """Read if next token matches, return it or None."""
        if self.peek_is(kind, in_range):
            return self.read()
        return None

    def at_end(self):
        """Check for end of line."""
        return self.peek() is None

    def at_end_statement(self):
        """Check for end of line or statement delimiter."""
        return self.at_end() or self.peek_is(tk.PUNCTUATION, (tk.COLON,))

    def require_read(self, kind, in_range, err, *args):
        """Read a token and raise syntax error if it does not match."""
        if not self.peek_is(kind, in_range):
            self.fail(err, *args)
        return self.read()

    def require_kind(self, kind, err, *args):
        """Read a token and raise syntax error if not of the given kind."""
        return self.require_read(kind, None, err, *args)

    def fail(self, err, *args):
        """Raise syntax error at the next token; a lexical error takes precedence."""
        token = self.peek()
        if token is not None and token.kind == tk.ERROR:
            raise error.BASICSyntaxError(error.LEXICAL_ERROR, token.text)
        raise error.BASICSyntaxError(err, *args)
