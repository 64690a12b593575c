"""Diagnostics collected while expanding an asm! directive.

Diagnostics are never raised.  Each directive owns a ``DiagnosticSink``
that accumulates errors and warnings in report order so that a caller can
render the whole batch for one invocation at once.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


class SourceLocation:
    """A line/column position in a named source."""
    __slots__ = ('filename', 'line', 'col')

    def __init__(self, filename="<input>", line=0, col=0):
        self.filename = filename
        self.line = line
        self.col = col

    @classmethod
    def of(cls, token, filename="<input>"):
        return cls(filename, token.line, token.col)

    def __eq__(self, other):
        if not isinstance(other, SourceLocation):
            return NotImplemented
        return (self.filename, self.line, self.col) == \
            (other.filename, other.line, other.col)

    def __hash__(self):
        return hash((self.filename, self.line, self.col))

    def __str__(self):
        return f"{self.filename}:L{self.line}:{self.col}"

    def __repr__(self):
        return f"SourceLocation({self.filename!r}, {self.line}, {self.col})"


class Diagnostic:
    __slots__ = ('severity', 'message', 'location')

    def __init__(self, severity, message, location=None):
        self.severity = severity
        self.message = message
        self.location = location or SourceLocation()

    @property
    def is_error(self):
        return self.severity is Severity.ERROR

    @property
    def line(self):
        return self.location.line

    @property
    def col(self):
        return self.location.col

    def __str__(self):
        return f"{self.location}: {self.severity.value}: {self.message}"

    def __repr__(self):
        return f"Diagnostic({self.severity.name}, {self.message!r}, {self.location!r})"


class DiagnosticSink:
    """Fire-and-continue collector for one directive's diagnostics."""

    def __init__(self):
        self.diagnostics = []

    def report_error(self, location, message):
        self._report(Diagnostic(Severity.ERROR, message, location))

    def report_warning(self, location, message):
        self._report(Diagnostic(Severity.WARNING, message, location))

    def _report(self, diag):
        logger.debug("%s", diag)
        self.diagnostics.append(diag)

    @property
    def errors(self):
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self):
        return [d for d in self.diagnostics if not d.is_error]

    def has_errors(self):
        return any(d.is_error for d in self.diagnostics)

    def __len__(self):
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)
