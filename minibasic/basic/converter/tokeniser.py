"""
MiniBASIC - tokeniser.py
Split plain-text BASIC source lines into tokens

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from ..base import tokens as tk
from ..base.tokens import DIGITS, LETTERS, ALPHANUMERIC, Token
from ..base import error


class Tokeniser(object):
    """BASIC lexer."""

    def tokenise_line(self, line):
        """Convert a source line to a list of tokens."""
        tokens = []
        pos = 0
        while True:
            # skip whitespace between tokens
            while pos < len(line) and line[pos].isspace():
                pos += 1
            if pos >= len(line):
                break
            c = line[pos]
            if c in LETTERS:
                token, pos = self._read_word(line, pos)
            elif c in DIGITS:
                token, pos = self._read_number(line, pos)
            elif c == tk.QUOTE:
                token, pos = self._read_string(line, pos)
            else:
                token, pos = self._read_symbol(line, pos)
            tokens.append(token)
            # nothing can follow a lexical error
            if token.kind == tk.ERROR:
                break
        return tokens

    def _read_word(self, line, pos):
        """Read a keyword or name, folded to upper case."""
        end = pos + 1
        while end < len(line) and line[end] in ALPHANUMERIC:
            end += 1
        if line[end:end+1] == tk.SIGIL:
            end += 1
        return Token(tk.WORD, line[pos:end].upper()), end

    def _read_number(self, line, pos):
        """Read an integer literal."""
        end = pos + 1
        while end < len(line) and line[end] in DIGITS:
            end += 1
        return Token(tk.NUMBER, line[pos:end]), end

    def _read_string(self, line, pos):
        """Read a quoted string literal; a doubled quote stands for one quote."""
        chars = []
        end = pos + 1
        while True:
            close = line.find(tk.QUOTE, end)
            if close < 0:
                return Token(tk.ERROR, error.UNCLOSED_STRING), len(line)
            chars.append(line[end:close])
            end = close + 1
            if line[end:end+1] != tk.QUOTE:
                return Token(tk.STRING, u''.join(chars)), end
            chars.append(tk.QUOTE)
            end += 1

    def _read_symbol(self, line, pos):
        """Read an operator or punctuation mark."""
        for symbol in tk.OPERATORS:
            if line.startswith(symbol, pos):
                return Token(tk.OPERATOR, symbol), pos + len(symbol)
        if line[pos] in tk.PUNCTUATION_MARKS:
            return Token(tk.PUNCTUATION, line[pos]), pos + 1
        return Token(tk.ERROR, error.UNRECOGNISED_CHARACTER % (pos + 1,)), len(line)
