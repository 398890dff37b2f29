"""
MiniBASIC - statements.py
Statement parser

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging
from functools import partial

from ..base import error
from ..base import tokens as tk
from ..base.codestream import TokenStream
from ..converter import tokeniser
from .. import program as prog
from . import expressions
from . import userfunctions


class Parser(object):
    """BASIC statement parser."""

    def __init__(self):
        """Initialise statement context."""
        self._tokeniser = tokeniser.Tokeniser()
        # expression parser
        self.expression_parser = expressions.ExpressionParser()
        # initialise syntax parser tables
        self._init_syntax()

    def parse_program(self, lines):
        """Parse source lines into a program, collecting syntax errors per line."""
        program = prog.Program()
        for number, line in enumerate(lines, 1):
            try:
                self.parse_line(program, line, number)
            except error.BASICSyntaxError as e:
                logging.debug(u'Syntax error in line %d: %s', number, e.message)
                program.add_error(number, e.message)
        return program

    def parse_line(self, program, line, number):
        """Parse one source line and add its statements to the program."""
        ins = TokenStream(self._tokeniser.tokenise_line(line))
        if ins.at_end():
            return
        label = self._strip_label(ins)
        if label is not None:
            program.add_label(label)
        statements = []
        while not ins.at_end():
            statement = self.parse_statement(ins)
            statements.append(statement)
            if statement.opcode == tk.IF:
                # THEN acts as a statement separator
                if len(ins) == 1 and ins.peek_is(tk.NUMBER):
                    # IF ... THEN 100 is short for IF ... THEN GOTO 100
                    statements.append(prog.Statement(
                        tk.GOTO, ((prog.number_term(ins.read().text),),)
                    ))
                continue
            if not ins.at_end() and not ins.read_if(tk.PUNCTUATION, (tk.COLON,)):
                ins.fail(error.EXTRA_TOKENS)
        if statements:
            program.add_line(statements, number)

    def _strip_label(self, ins):
        """Remove a leading label, either a number or a word followed by a colon."""
        if ins.peek_is(tk.NUMBER):
            # 010 and 10 are the same label
            return u'%d' % (int(ins.read().text),)
        # keywords are never labels, so PRINT: PRINT is two statements
        token = ins.peek()
        is_label = ins.peek_is(tk.PUNCTUATION, (tk.COLON,), offset=1)
        if token.kind == tk.WORD and token.text not in tk.KEYWORDS and is_label:
            ins.read()
            ins.read()
            return token.text
        return None

    def parse_statement(self, ins):
        """Parse a single statement."""
        token = ins.peek()
        if token is None or token.kind != tk.WORD:
            ins.fail(error.COMMAND_EXPECTED)
        if token.text in self._simple:
            ins.read()
            opcode = token.text
        else:
            # implicit LET
            opcode = tk.LET
        return prog.Statement(opcode, tuple(self._simple[opcode](ins)))

    def parse_expression(self, ins):
        """Parse an expression."""
        return self.expression_parser.parse_expression(ins)

    ###########################################################################

    def _init_syntax(self):
        """Initialise syntax parsers."""
        self._simple = {
            tk.LET: self._parse_let,
            tk.IF: self._parse_if,
            tk.GOTO: partial(self._parse_jump, command=tk.GOTO),
            tk.GOSUB: partial(self._parse_jump, command=tk.GOSUB),
            tk.RETURN: self._parse_nothing,
            tk.FOR: self._parse_for,
            tk.NEXT: self._parse_next,
            tk.PRINT: self._parse_print,
            tk.INPUT: self._parse_input,
            tk.DIM: self._parse_dim,
            tk.DEF: self._parse_def,
            tk.READ: self._parse_read,
            tk.DATA: self._parse_data,
            tk.RESTORE: self._parse_nothing,
            tk.REM: self._skip_line,
            tk.END: self._parse_nothing,
        }

    ###########################################################################
    # statements that have no arguments

    def _parse_nothing(self, ins):
        """Parse nothing."""
        return
        yield # pragma: no cover

    def _skip_line(self, ins):
        """Ignore the rest of the line."""
        ins.read_rest()
        return
        yield # pragma: no cover

    ###########################################################################
    # flow control

    def _parse_if(self, ins):
        """Parse IF syntax; the rest of the line is the THEN clause."""
        yield self.parse_expression(ins)
        ins.require_read(tk.WORD, (tk.THEN,), error.THEN_EXPECTED)

    def _parse_jump(self, ins, command):
        """Parse GOTO or GOSUB syntax."""
        if ins.at_end():
            raise error.BASICSyntaxError(error.JUMP_WITHOUT_LABEL, command)
        word = ins.read_if(tk.WORD)
        if word:
            # a bare word is the label itself, not a variable
            yield (prog.string_term(word.text),)
        else:
            yield self.parse_expression(ins)

    def _parse_for(self, ins):
        """Parse FOR syntax."""
        # read variable
        yield ins.require_kind(tk.WORD, error.FOR_VARIABLE).text
        ins.require_read(tk.OPERATOR, (tk.O_EQ,), error.FOR_EQUALS)
        yield self.parse_expression(ins)
        ins.require_read(tk.WORD, (tk.TO,), error.FOR_TO)
        yield self.parse_expression(ins)
        if ins.read_if(tk.WORD, (tk.STEP,)):
            yield self.parse_expression(ins)
        else:
            yield (prog.number_term(1),)

    def _parse_next(self, ins):
        """Parse NEXT syntax."""
        if ins.at_end():
            raise error.BASICSyntaxError(error.NEXT_VARIABLE_MISSING)
        yield ins.require_kind(tk.WORD, error.NEXT_VARIABLE).text

    ###########################################################################
    # assignment and declarations

    def _parse_let(self, ins):
        """Parse LET statement."""
        if len(ins) < 3:
            raise error.BASICSyntaxError(error.END_OF_STATEMENT)
        yield self.expression_parser.parse_lvalue(ins)
        if ins.at_end():
            raise error.BASICSyntaxError(error.END_OF_ASSIGNMENT)
        ins.require_read(tk.OPERATOR, (tk.O_EQ,), error.ASSIGNMENT_EXPECTED)
        yield self.parse_expression(ins)

    def _parse_dim(self, ins):
        """Parse DIM syntax."""
        while True:
            name = ins.require_kind(tk.WORD, error.VARIABLE_EXPECTED).text
            if not ins.read_if(tk.PUNCTUATION, (tk.LPAREN,)):
                ins.fail(error.DIM_PARENTHESIS, name)
            yield prog.Lvalue(name, tuple(
                self.expression_parser.parse_arguments(ins, u'array subscripts')
            ))
            if not ins.read_if(tk.PUNCTUATION, (tk.COMMA,)):
                break

    def _parse_def(self, ins):
        """Parse DEF FN syntax."""
        name = ins.require_kind(tk.WORD, error.DEF_NAME_EXPECTED).text
        if not tk.is_user_function_name(name):
            raise error.BASICSyntaxError(error.DEF_NAME_INVALID)
        yield name
        ins.require_read(tk.PUNCTUATION, (tk.LPAREN,), error.DEF_OPEN_PARENTHESIS)
        param = ins.require_kind(tk.WORD, error.DEF_PARAMETER).text
        ins.require_read(tk.PUNCTUATION, (tk.RPAREN,), error.DEF_CLOSE_PARENTHESIS)
        ins.require_read(tk.OPERATOR, (tk.O_EQ,), error.DEF_EQUALS)
        yield userfunctions.bind_parameter(self.parse_expression(ins), param)

    ###########################################################################
    # console and data statements

    def _parse_print(self, ins):
        """Parse PRINT syntax; a comma prints a space, a trailing semicolon suppresses the newline."""
        delim = None
        while not ins.at_end_statement():
            yield self.parse_expression(ins)
            delim = None
            if ins.at_end_statement():
                break
            delim = ins.require_read(
                tk.PUNCTUATION, (tk.COMMA, tk.SEMICOLON), error.PRINT_DELIMITER
            ).text
            if delim == tk.COMMA:
                yield (prog.string_term(u' '),)
        if delim != tk.SEMICOLON:
            yield (prog.string_term(u'\n'),)

    def _parse_input(self, ins):
        """Parse INPUT syntax: prompt literals and variables."""
        while not ins.at_end_statement():
            token = ins.read_if(tk.STRING)
            if token:
                yield prog.string_term(token.text)
                delimiters = (tk.COMMA, tk.SEMICOLON)
            else:
                yield self.expression_parser.parse_lvalue(ins)
                delimiters = (tk.COMMA,)
            if ins.at_end_statement():
                break
            ins.require_read(tk.PUNCTUATION, delimiters, error.COMMA_EXPECTED, tk.INPUT)

    def _parse_read(self, ins):
        """Parse READ syntax."""
        while not ins.at_end_statement():
            yield self.expression_parser.parse_lvalue(ins)
            if ins.at_end_statement():
                break
            ins.require_read(tk.PUNCTUATION, (tk.COMMA,), error.COMMA_EXPECTED, tk.READ)

    def _parse_data(self, ins):
        """Parse DATA syntax."""
        while not ins.at_end_statement():
            yield self.parse_expression(ins)
            if ins.at_end_statement():
                break
            ins.require_read(tk.PUNCTUATION, (tk.COMMA,), error.COMMA_EXPECTED, tk.DATA)
