"""inline_asm - a recoverable parser for ``asm!`` inline assembly directives."""

from .lexer import Lexer
from .parser import Parser, Section, ExpansionResult
from .parser_base import AsmParseError
from .diagnostics import Diagnostic, DiagnosticSink, Severity, SourceLocation
from .expansion import ExpansionTable, ExpansionInfo, ExpansionKind
from .expander import expand_source, find_invocations
from .keywords import ASM_OPTIONS
from . import ast_nodes as ast


def expand_asm(tokens, call_site=None, expansions=None, filename="<input>"):
    """Expand one directive from its already tokenized argument stream.

    Returns an ``ExpansionResult``.  Structural errors raise
    ``AsmParseError``.
    """
    parser = Parser(tokens, filename=filename, call_site=call_site,
                    expansions=expansions)
    return parser.parse()


def parse_asm(text, filename="<input>", expansions=None):
    """Tokenize *text* (the contents of ``asm!( ... )``) and expand it."""
    lexer = Lexer(text, filename=filename)
    return expand_asm(lexer.tokens(), expansions=expansions, filename=filename)


class ValidationResult:
    """Result of directive validation, containing validity status and diagnostics."""

    __slots__ = ('valid', 'errors', 'warnings')

    def __init__(self, valid, errors=None, warnings=None):
        self.valid = valid
        self.errors = errors or []
        self.warnings = warnings or []

    def __bool__(self):
        return self.valid

    def __repr__(self):
        if self.valid:
            return "ValidationResult(valid=True)"
        return f"ValidationResult(valid=False, errors={self.errors!r})"


def validate_asm(text, filename="<input>"):
    """Check whether *text* is a well-formed directive.

    Returns a ``ValidationResult`` whose boolean value indicates validity.
    ``errors`` and ``warnings`` hold rendered diagnostic strings.  Unlike
    ``parse_asm`` this never raises: structural parse errors are reported
    as errors.
    """
    if not text or not text.strip():
        return ValidationResult(False, ["Directive is empty"])

    try:
        result = parse_asm(text, filename=filename)
    except AsmParseError as exc:
        return ValidationResult(False, [f"{filename}:{exc}"])

    errors = [str(d) for d in result.errors]
    warnings = [str(d) for d in result.warnings]
    return ValidationResult(result.ok and not errors, errors, warnings)


def is_valid_asm(text, filename="<input>"):
    """Return ``True`` if *text* is a valid directive, ``False`` otherwise."""
    return validate_asm(text, filename).valid


__all__ = [
    'expand_asm', 'parse_asm', 'validate_asm', 'is_valid_asm',
    'expand_source', 'find_invocations',
    'ValidationResult', 'ExpansionResult', 'Parser', 'Section', 'Lexer',
    'AsmParseError', 'Diagnostic', 'DiagnosticSink', 'Severity',
    'SourceLocation', 'ExpansionTable', 'ExpansionInfo', 'ExpansionKind',
    'ASM_OPTIONS', 'ast',
]
