"""Section state machine and directive builder for asm! directives."""

import logging
from enum import Enum

from .tokens import TokenType
from . import ast_nodes as ast
from .parser_base import ParserBase, AsmParseError
from .expression_parser import ExpressionMixin
from .operand_parser import OperandMixin
from .option_parser import OptionMixin
from .expansion import ExpansionTable, ExpansionKind
from .keywords import ASM_MACRO_NAME

TT = TokenType

logger = logging.getLogger(__name__)


class Section(Enum):
    """Directive sections, in the only order they may be visited."""
    TEMPLATE = 0
    OUTPUTS = 1
    INPUTS = 2
    CLOBBERS = 3
    OPTIONS = 4
    DONE = 5

    def advance(self, by=1):
        """Move forward *by* sections, saturating at ``DONE``."""
        if by not in (1, 2):
            raise ValueError(f"sections advance by 1 or 2, not {by}")
        return Section(min(self.value + by, Section.DONE.value))


# How far each boundary token moves the state machine.
_BOUNDARY_STEP = {
    TT.COLON: 1,
    TT.COLONCOLON: 2,   # `::` is two boundaries with nothing between them
}


class ExpansionResult:
    """Outcome of expanding one directive: the node plus its diagnostics.

    ``node`` is an ``InlineAsm`` on success and a ``DummyExpr`` when the
    directive could not be built.  Non-fatal diagnostics accompany a usable
    ``InlineAsm``.
    """

    __slots__ = ('node', 'diagnostics')

    def __init__(self, node, diagnostics=None):
        self.node = node
        self.diagnostics = diagnostics or []

    @property
    def ok(self):
        return isinstance(self.node, ast.InlineAsm)

    @property
    def errors(self):
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self):
        return [d for d in self.diagnostics if not d.is_error]

    def __repr__(self):
        return (f"ExpansionResult({type(self.node).__name__}, "
                f"errors={len(self.errors)}, warnings={len(self.warnings)})")


class Parser(OptionMixin, OperandMixin, ExpressionMixin, ParserBase):
    """Parser for the argument tokens of a single ``asm!`` invocation."""

    def __init__(self, tokens, filename="<input>", call_site=None,
                 expansions=None, sink=None):
        super().__init__(tokens, filename=filename, sink=sink)
        self.call_site = call_site or self._location(self._peek(0))
        self.expansions = expansions if expansions is not None else ExpansionTable()

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------
    def parse(self):
        """Run the section state machine and build the directive.

        Structural errors (missing parenthesis, a non-string where a
        string literal is required) raise ``AsmParseError``.
        """
        logger.debug("expanding asm! at %s (%d tokens)", self.call_site, self.length)
        template = None
        template_style = None
        outputs = []
        inputs = []
        clobbers = []
        flags = ast.OptionFlags()

        state = Section.TEMPLATE
        while state is not Section.DONE:
            if state is Section.TEMPLATE:
                expr = self._parse_expr()
                if not isinstance(expr, ast.StringLiteral):
                    return self._fail(expr, "inline assembly must be a string literal")
                template, template_style = expr.value, expr.style
                if not self._at_section_end():
                    return self._fail(
                        self._cur(),
                        "expected `:`, `::` or end of input after the assembly template")
            elif state is Section.OUTPUTS:
                self._parse_outputs(outputs)
            elif state is Section.INPUTS:
                self._parse_inputs(inputs)
            elif state is Section.CLOBBERS:
                self._parse_clobbers(clobbers)
            elif state is Section.OPTIONS:
                self._parse_option(flags)
            state = self._next_section(state)

        if not self._at_eof():
            self.sink.report_warning(
                self._location(),
                "unexpected tokens after the options section, ignoring them")

        return ExpansionResult(
            self._build(template, template_style, outputs, inputs, clobbers, flags),
            self.sink.diagnostics)

    def _next_section(self, state):
        """Consume boundaries after a section's content and pick the next state.

        Consecutive boundaries skip the sections between them.  Any other
        token leaves the state unchanged, so the current section's parser
        runs again (the options section takes one keyword per pass).
        """
        while True:
            t = self._cur()
            if t.type == TT.EOF:
                return Section.DONE
            step = _BOUNDARY_STEP.get(t.type)
            if step is None:
                return state
            self._advance()
            state = state.advance(step)
            if state is Section.DONE:
                return state

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def _build(self, template, template_style, outputs, inputs, clobbers, flags):
        expn_id = self.expansions.record_expansion(
            self.call_site, ASM_MACRO_NAME, ExpansionKind.MACRO_BANG)
        logger.debug("recorded asm! expansion %d at %s", expn_id, self.call_site)
        return ast.InlineAsm(
            template=template,
            template_style=template_style,
            outputs=outputs,
            inputs=inputs,
            clobbers=clobbers,
            flags=flags,
            provenance=expn_id,
            line=self.call_site.line,
            col=self.call_site.col,
        )

    def _fail(self, where, message):
        """Report a fatal error for this directive and return a placeholder."""
        location = self._location(where) if where is not None else self._last_location()
        self.sink.report_error(location, message)
        return ExpansionResult(
            ast.DummyExpr(message=message,
                          line=self.call_site.line, col=self.call_site.col),
            self.sink.diagnostics)


__all__ = ['Parser', 'Section', 'ExpansionResult', 'AsmParseError']
