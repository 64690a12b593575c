"""Base class for the asm! parser: error type and token stream helpers."""

from .tokens import TokenType, Token, BOUNDARIES
from .diagnostics import DiagnosticSink, SourceLocation

TT = TokenType


class AsmParseError(Exception):
    """Structural parse error with source location."""
    def __init__(self, msg, line=0, col=0):
        self.msg = msg
        self.line = line
        self.col = col
        super().__init__(f"L{line}:{col}: {msg}")


class ParserBase:
    """Token stream management shared by the section parsers.

    The helpers here are the cursor the section parsers pull from: the
    current token, consume-if-equal (``_eat``), expect-or-fail
    (``_expect``) and the string literal sub-parser (``_parse_str``).
    """

    def __init__(self, tokens, filename="<input>", sink=None):
        self.tokens = tokens
        self.pos = 0
        self.length = len(tokens)
        self.filename = filename
        self.sink = sink if sink is not None else DiagnosticSink()
        self._last = None

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------
    def _cur(self):
        if self.pos < self.length:
            tok = self.tokens[self.pos]
            if tok.type == TT.ERROR:
                raise AsmParseError(tok.value, tok.line, tok.col)
            return tok
        return self._eof()

    def _peek(self, offset=1):
        p = self.pos + offset
        if p < self.length:
            return self.tokens[p]
        return self._eof()

    def _eof(self):
        # Synthesized EOF sits just after the last real token.
        if self.tokens:
            last = self.tokens[-1]
            return Token(TT.EOF, '', last.line, last.col)
        return Token(TT.EOF, '', 0, 0)

    def _advance(self):
        tok = self._cur()
        if self.pos < self.length:
            self.pos += 1
        self._last = tok
        return tok

    def _at(self, tt):
        return self._cur().type == tt

    def _at_eof(self):
        return self._cur().type == TT.EOF

    def _at_section_end(self):
        """True at end of input or at a ``:``/``::`` boundary."""
        t = self._cur().type
        return t == TT.EOF or t in BOUNDARIES

    def _match(self, tt):
        if self._cur().type == tt:
            return self._advance()
        return None

    def _eat(self, tt):
        return self._match(tt) is not None

    def _expect(self, tt):
        tok = self._match(tt)
        if tok is None:
            c = self._cur()
            raise AsmParseError(
                f"Expected {tt.name}, got {c.type.name}({c.value!r})",
                c.line, c.col)
        return tok

    def _parse_str(self):
        """Consume a string literal and return ``(text, style)``."""
        c = self._cur()
        if c.type != TT.STRING:
            raise AsmParseError(
                f"Expected string literal, got {c.type.name}({c.value!r})",
                c.line, c.col)
        self._advance()
        return c.value, c.style

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------
    def _loc(self):
        t = self._cur()
        return {'line': t.line, 'col': t.col}

    def _location(self, token=None):
        return SourceLocation.of(token or self._cur(), self.filename)

    def _last_location(self):
        """Location of the most recently consumed token."""
        return self._location(self._last or self._cur())
