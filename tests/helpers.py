"""Shared test utility functions for inline_asm tests."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from inline_asm import parse_asm
from inline_asm.ast_nodes import *


def parse_ok(text: str) -> InlineAsm:
    """Parse text, assert it produced a directive, return the node."""
    result = parse_asm(text, filename="<test>")
    assert isinstance(result.node, InlineAsm), \
        f"Expected InlineAsm, got {type(result.node).__name__}: {result.diagnostics}"
    return result.node


def parse_clean(text: str) -> InlineAsm:
    """Parse text and assert no diagnostics were produced."""
    result = parse_asm(text, filename="<test>")
    assert not result.diagnostics, f"Unexpected diagnostics: {result.diagnostics}"
    assert isinstance(result.node, InlineAsm)
    return result.node


def messages(result) -> list:
    """Diagnostic messages of a result, in report order."""
    return [d.message for d in result.diagnostics]


def assert_node_type(node, expected_type, **field_checks):
    """Assert node type and optionally check field values."""
    assert isinstance(node, expected_type), \
        f"Expected {expected_type.__name__}, got {type(node).__name__}"
    for field, expected in field_checks.items():
        actual = getattr(node, field, None)
        assert actual == expected, \
            f"{field}: expected {expected!r}, got {actual!r}"


def _slots(node):
    for cls in type(node).__mro__:
        for slot in getattr(cls, '__slots__', ()):
            yield slot


def ast_equal(a, b) -> bool:
    """Recursively compare two AST nodes for structural equality.

    Ignores line/col position info and expansion provenance.
    """
    if type(a) != type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(ast_equal(x, y) for x, y in zip(a, b))
    if not isinstance(a, AstNode):
        return a == b
    for slot in _slots(a):
        if slot in ('line', 'col', 'provenance'):
            continue
        if not ast_equal(getattr(a, slot, None), getattr(b, slot, None)):
            return False
    return True
