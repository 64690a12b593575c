"""Tier 1 unit tests: diagnostics collection and rendering."""

import sys
import logging
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from inline_asm import parse_asm
from inline_asm.diagnostics import (
    Diagnostic, DiagnosticSink, Severity, SourceLocation,
)


class TestRendering:
    def test_error_str(self):
        d = Diagnostic(Severity.ERROR, "output operand constraint lacks '=' or '+'",
                       SourceLocation("kernel.rs", 12, 8))
        assert str(d) == "kernel.rs:L12:8: error: output operand constraint lacks '=' or '+'"

    def test_warning_str(self):
        d = Diagnostic(Severity.WARNING, "unrecognized option", SourceLocation("a.rs", 1, 2))
        assert str(d) == "a.rs:L1:2: warning: unrecognized option"

    def test_default_location(self):
        d = Diagnostic(Severity.ERROR, "boom")
        assert str(d).startswith("<input>:L0:0:")

    def test_location_equality(self):
        assert SourceLocation("f", 1, 2) == SourceLocation("f", 1, 2)
        assert SourceLocation("f", 1, 2) != SourceLocation("f", 1, 3)


class TestSink:
    def test_collects_in_order(self):
        sink = DiagnosticSink()
        sink.report_warning(SourceLocation(), "first")
        sink.report_error(SourceLocation(), "second")
        assert [d.message for d in sink] == ["first", "second"]
        assert len(sink) == 2
        assert [d.message for d in sink.errors] == ["second"]
        assert [d.message for d in sink.warnings] == ["first"]
        assert sink.has_errors()

    def test_reports_are_logged(self, caplog):
        sink = DiagnosticSink()
        with caplog.at_level(logging.DEBUG, logger="inline_asm"):
            sink.report_warning(SourceLocation("x.rs", 3, 4), "unrecognized option")
        assert "x.rs:L3:4: warning: unrecognized option" in caplog.text


class TestBatching:
    def test_all_diagnostics_for_one_directive(self):
        result = parse_asm(
            '"nop" : "r"(a) : "=r"(b) : "volatile" : "foo"', filename="batch.rs")
        assert result.ok
        assert [(d.severity, d.message) for d in result.diagnostics] == [
            (Severity.ERROR, "output operand constraint lacks '=' or '+'"),
            (Severity.ERROR, "input operand constraint contains '='"),
            (Severity.WARNING, "expected a clobber, found an option"),
            (Severity.WARNING, "unrecognized option"),
        ]
        assert all(d.location.filename == "batch.rs" for d in result.diagnostics)

    def test_clean_directive_has_no_diagnostics(self):
        result = parse_asm('"nop" : "=r"(a) : "r"(b) : "eax" : "volatile"')
        assert result.diagnostics == []
