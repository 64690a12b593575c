"""Operand list parsing mixin for the outputs and inputs sections."""

from .tokens import TokenType
from . import ast_nodes as ast
from .constraints import normalize_output, check_input

TT = TokenType


class OperandMixin:
    """Mixin providing ``"constraint"(expr), ...`` list parsing."""

    def _parse_operand(self):
        """Parse one ``"constraint" ( expr )`` item.

        Returns ``(constraint, constraint_location, expr)``; the location is
        that of the constraint literal, where constraint errors point.
        """
        constraint, _style = self._parse_str()
        where = self._last_location()
        self._expect(TT.LPAREN)
        expr = self._parse_expr()
        self._expect(TT.RPAREN)
        return constraint, where, expr

    def _parse_outputs(self, outputs):
        while not self._at_section_end():
            if outputs:
                self._eat(TT.COMMA)
            constraint, where, expr = self._parse_operand()
            stored, read_write, error = normalize_output(constraint)
            if error:
                self.sink.report_error(where, error)
            outputs.append(ast.OutputOperand(
                constraint=stored, expr=expr, read_write=read_write,
                line=where.line, col=where.col))

    def _parse_inputs(self, inputs):
        while not self._at_section_end():
            if inputs:
                self._eat(TT.COMMA)
            constraint, where, expr = self._parse_operand()
            error = check_input(constraint)
            if error:
                self.sink.report_error(where, error)
            inputs.append(ast.InputOperand(
                constraint=constraint, expr=expr,
                line=where.line, col=where.col))
