"""
MiniBASIC - expressions.py
Expression parser: recursive descent to postfix terms

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from ..base import tokens as tk
from ..base import error
from .. import program as prog
from . import operators as op


# deepest nesting of parentheses, function calls and negations
MAX_NESTING = 40


class ExpressionParser(object):
    """Expression parser."""

    def __init__(self):
        self._depth = 0

    def parse_expression(self, ins):
        """Parse an expression and return its terms in postfix order."""
        return tuple(self._parse_or(ins))

    def _parse_or(self, ins):
        """Logical OR, lowest precedence."""
        terms = self._parse_and(ins)
        while ins.read_if(tk.WORD, (tk.OR,)):
            terms += self._parse_and(ins)
            terms.append(prog.operator_term(tk.O_OR))
        return terms

    def _parse_and(self, ins):
        """Logical AND."""
        terms = self._parse_comparison(ins)
        while ins.read_if(tk.WORD, (tk.AND,)):
            terms += self._parse_comparison(ins)
            terms.append(prog.operator_term(tk.O_AND))
        return terms

    def _parse_comparison(self, ins):
        """Single relational comparison; comparisons do not chain."""
        terms = self._parse_sum(ins)
        token = ins.read_if(tk.OPERATOR, tk.RELATIONAL)
        if token:
            terms += self._parse_sum(ins)
            terms.append(prog.operator_term(token.text))
        return terms

    def _parse_sum(self, ins):
        """Addition and subtraction."""
        terms = self._parse_product(ins)
        while True:
            token = ins.read_if(tk.OPERATOR, op.ADDITIVE)
            if not token:
                return terms
            terms += self._parse_product(ins)
            terms.append(prog.operator_term(token.text))

    def _parse_product(self, ins):
        """Multiplication, division and MOD."""
        terms = self._parse_power(ins)
        while True:
            token = (
                ins.read_if(tk.OPERATOR, (tk.O_TIMES, tk.O_DIV))
                or ins.read_if(tk.WORD, (tk.MOD,))
            )
            if not token:
                return terms
            terms += self._parse_power(ins)
            terms.append(prog.operator_term(op.MULTIPLICATIVE[token.text]))

    def _parse_power(self, ins):
        """Exponentiation, right-associative."""
        terms = self._parse_value(ins)
        count = 0
        while ins.read_if(tk.OPERATOR, (tk.O_CARET,)):
            terms += self._parse_value(ins)
            count += 1
        # a^b^c is a b c ^ ^
        terms += [prog.operator_term(tk.O_CARET)] * count
        return terms

    def _parse_value(self, ins):
        """Primary value, possibly negated."""
        if self._depth >= MAX_NESTING:
            raise error.BASICSyntaxError(error.EXPRESSION_TOO_DEEP)
        self._depth += 1
        try:
            return self._parse_primary(ins)
        finally:
            self._depth -= 1

    def _parse_primary(self, ins):
        token = ins.peek()
        if token is None:
            raise error.BASICSyntaxError(error.EXPRESSION_EXPECTED)
        if token.kind == tk.NUMBER:
            ins.read()
            return [prog.number_term(token.text)]
        elif token.kind == tk.STRING:
            ins.read()
            return [prog.string_term(token.text)]
        elif token.kind == tk.WORD:
            return self.parse_variable(ins, allow_functions=True)
        elif ins.read_if(tk.PUNCTUATION, (tk.LPAREN,)):
            terms = self._parse_or(ins)
            if not ins.read_if(tk.PUNCTUATION, (tk.RPAREN,)):
                ins.fail(error.MISSING_PARENTHESIS)
            return terms
        elif ins.read_if(tk.OPERATOR, (tk.O_MINUS,)):
            # negation binds to the primary only, so -2^2 is 4
            if ins.peek_is(tk.OPERATOR, (tk.O_MINUS,)):
                raise error.BASICSyntaxError(error.EXTRA_MINUS)
            terms = [prog.number_term(0)]
            terms += self._parse_value(ins)
            terms.append(prog.operator_term(tk.O_MINUS))
            return terms
        ins.fail(error.BROKEN_EXPRESSION)

    def parse_variable(self, ins, allow_functions=False):
        """
        Parse a name, with subscripts or arguments if followed by a parenthesis.
        Returns the subscript or argument terms followed by the reference term.
        """
        token = ins.require_kind(tk.WORD, error.VARIABLE_EXPECTED)
        name = token.text
        if not ins.read_if(tk.PUNCTUATION, (tk.LPAREN,)):
            return [prog.variable_term(name)]
        function = tk.function_name(name)
        is_user_function = tk.is_user_function_name(name)
        if function or is_user_function:
            if not allow_functions:
                raise error.BASICSyntaxError(error.FUNCTION_NOT_EXPECTED, name)
            what = u'function arguments'
        else:
            what = u'array subscripts'
        arguments = self.parse_arguments(ins, what)
        count = len(arguments)
        terms = [_term for _arg in arguments for _term in _arg]
        if function:
            arity = tk.FUNCTIONS[function]
            if count != arity:
                raise error.BASICSyntaxError(error.WRONG_ARGUMENT_COUNT, name, arity)
            terms.append(prog.function_term(function, count))
        elif is_user_function:
            if count != 1:
                raise error.BASICSyntaxError(error.WRONG_ARGUMENT_COUNT, name, 1)
            terms.append(prog.user_function_term(name))
        else:
            terms.append(prog.array_term(name, count))
        return terms

    def parse_arguments(self, ins, what):
        """Parse comma-separated expressions up to the closing parenthesis."""
        arguments = [tuple(self._parse_or(ins))]
        while True:
            if ins.at_end():
                raise error.BASICSyntaxError(error.END_OF_ARGUMENTS, what)
            if not ins.peek_is(tk.PUNCTUATION, (tk.COMMA, tk.RPAREN)):
                ins.fail(error.GARBAGE_IN_ARGUMENTS, what)
            if ins.read().text == tk.RPAREN:
                return arguments
            arguments.append(tuple(self._parse_or(ins)))

    def parse_lvalue(self, ins):
        """Parse an assignable target: scalar name or array element."""
        token = ins.require_kind(tk.WORD, error.VARIABLE_EXPECTED)
        name = token.text
        if not ins.read_if(tk.PUNCTUATION, (tk.LPAREN,)):
            return prog.Lvalue(name, None)
        if tk.function_name(name) or tk.is_user_function_name(name):
            raise error.BASICSyntaxError(error.FUNCTION_NOT_EXPECTED, name)
        return prog.Lvalue(name, tuple(self.parse_arguments(ins, u'array subscripts')))
