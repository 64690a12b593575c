"""Host-side expansion: find ``asm!( ... )`` invocations in source text."""

import logging

from .tokens import TokenType, Token
from . import ast_nodes as ast
from .lexer import Lexer
from .diagnostics import DiagnosticSink, SourceLocation
from .expansion import ExpansionTable
from .keywords import ASM_MACRO_NAME
from .parser import Parser, ExpansionResult
from .parser_base import AsmParseError

TT = TokenType

logger = logging.getLogger(__name__)

_OPEN_TO_CLOSE = {
    TT.LPAREN: TT.RPAREN,
    TT.LBRACKET: TT.RBRACKET,
    TT.LBRACE: TT.RBRACE,
}
_CLOSERS = frozenset(_OPEN_TO_CLOSE.values())


class Invocation:
    """One ``asm!`` call found in a token stream."""
    __slots__ = ('call_site', 'tokens', 'balanced')

    def __init__(self, call_site, tokens, balanced=True):
        self.call_site = call_site
        self.tokens = tokens
        self.balanced = balanced


def find_invocations(tokens, filename="<input>"):
    """Yield every ``asm ! <delimited group>`` in *tokens*.

    Each invocation's token list holds the group's contents followed by an
    EOF token placed at the closing delimiter.
    """
    i = 0
    n = len(tokens)
    while i < n:
        t = tokens[i]
        if (t.type == TT.IDENT and t.value == ASM_MACRO_NAME
                and i + 2 < n
                and tokens[i + 1].type == TT.BANG
                and tokens[i + 2].type in _OPEN_TO_CLOSE):
            call_site = SourceLocation.of(t, filename)
            end = _matching_close(tokens, i + 2)
            if end is None:
                yield Invocation(call_site, [], balanced=False)
                return
            close = tokens[end]
            args = list(tokens[i + 3:end])
            args.append(Token(TT.EOF, '', close.line, close.col))
            yield Invocation(call_site, args)
            i = end + 1
            continue
        i += 1


def _matching_close(tokens, open_index):
    stack = []
    for j in range(open_index, len(tokens)):
        tt = tokens[j].type
        if tt in _OPEN_TO_CLOSE:
            stack.append(_OPEN_TO_CLOSE[tt])
        elif tt in _CLOSERS:
            if not stack or stack[-1] != tt:
                return None
            stack.pop()
            if not stack:
                return j
    return None


def expand_source(text, filename="<input>", expansions=None):
    """Expand every ``asm!`` invocation in *text*, in source order.

    A structural or lexical error inside one invocation becomes an error
    result for that invocation; the remaining invocations are still expanded.
    """
    if expansions is None:
        expansions = ExpansionTable()
    results = []
    tokens = Lexer(text, filename=filename, recover=True).tokens()
    for inv in find_invocations(tokens, filename=filename):
        if not inv.balanced:
            results.append(_error_result(
                inv.call_site, "unterminated asm! invocation"))
            continue
        parser = Parser(inv.tokens, filename=filename,
                        call_site=inv.call_site, expansions=expansions)
        try:
            results.append(parser.parse())
        except AsmParseError as exc:
            logger.debug("asm! at %s failed to parse: %s", inv.call_site, exc)
            location = SourceLocation(filename, exc.line, exc.col)
            results.append(_error_result(
                location, exc.msg, call_site=inv.call_site, sink=parser.sink))
    return results


def _error_result(location, message, call_site=None, sink=None):
    sink = sink if sink is not None else DiagnosticSink()
    sink.report_error(location, message)
    site = call_site or location
    return ExpansionResult(
        ast.DummyExpr(message=message, line=site.line, col=site.col),
        sink.diagnostics)
