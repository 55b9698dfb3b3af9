#!/usr/bin/env python3
"""
Tests for diagnostic formatting and the exception hierarchy.
"""

from cstreduce.shared.errors import (
    Error,
    ErrorReporter,
    ReducerError,
    ReducerSourceError,
    ReducerStateError,
    UnsupportedConstructError,
    _use_color,
)
from cstreduce.shared.source_location import SourceLocation

LOOP_SOURCE = "int main() {\n    for (;;) { }\n}"


def _loop_error(**kwargs) -> Error:
    return Error(
        message="unsupported construct 'for_statement'",
        location=SourceLocation("loop.c", 2, 5, end_line=2, end_column=17),
        code="R0001",
        **kwargs,
    )


class TestFormatting:

    def test_snippet_with_span(self):
        reporter = ErrorReporter({"loop.c": LOOP_SOURCE})
        rendered = reporter.format_error(_loop_error(label="here"), color=False)
        assert rendered.split("\n") == [
            "error[R0001]: unsupported construct 'for_statement'",
            " --> loop.c:2:5",
            "  |",
            "2 |     for (;;) { }",
            "  |     ^^^^^^^^^^^^ here",
        ]

    def test_span_guessed_without_end_column(self):
        reporter = ErrorReporter({"loop.c": LOOP_SOURCE})
        error = Error(message="m", location=SourceLocation("loop.c", 2, 5), code="R0001")
        last = reporter.format_error(error, color=False).split("\n")[-1]
        assert last == "  |     ^^^"

    def test_help_and_note(self):
        reporter = ErrorReporter({"loop.c": LOOP_SOURCE})
        rendered = reporter.format_error(
            _loop_error(help="only declarations are reduced", note="stopped on enter"),
            color=False,
        )
        lines = rendered.split("\n")
        assert lines[-3:] == [
            "  |",
            "  = help: only declarations are reduced",
            "  = note: stopped on enter",
        ]

    def test_unknown_source_file(self):
        rendered = ErrorReporter({}).format_error(_loop_error(), color=False)
        assert rendered.split("\n") == [
            "error[R0001]: unsupported construct 'for_statement'",
            " --> loop.c:2:5",
        ]

    def test_missing_location(self):
        rendered = ErrorReporter({}).format_error(Error(message="m", location=None), color=False)
        assert rendered == "error: m\n --> <unknown location>"

    def test_summary(self):
        reporter = ErrorReporter({"loop.c": LOOP_SOURCE})
        reporter.report(_loop_error())
        reporter.report_error("second", None, code="R0002")
        rendered = reporter.format_all_errors(color=False)
        assert rendered.endswith("error: aborting due to 2 previous errors")
        assert "error[R0002]: second" in rendered
        assert reporter.has_errors()

    def test_summary_singular(self):
        reporter = ErrorReporter({})
        reporter.report_error("only", None)
        assert reporter.format_all_errors(color=False).endswith("aborting due to 1 previous error")

    def test_print_errors(self, capsys, no_color):
        reporter = ErrorReporter({})
        reporter.print_errors()
        assert capsys.readouterr().err == ""
        reporter.report_error("boom", None)
        reporter.print_errors()
        assert "error: boom" in capsys.readouterr().err


class TestColor:

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert not _use_color()

    def test_explicit_opt_out(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CSTREDUCE_COLOR", "never")
        assert not _use_color()

    def test_default_on(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CSTREDUCE_COLOR", raising=False)
        assert _use_color()

    def test_color_codes(self):
        rendered = ErrorReporter({}).format_error(Error(message="m", location=None), color=True)
        assert "\033[31m" in rendered
        assert rendered.endswith("<unknown location>")


class TestExceptions:

    def test_base_error(self):
        error = ReducerError("bad", SourceLocation("f.c", 1, 2))
        assert str(error) == "bad\n --> f.c:1:2"
        assert str(ReducerError("bad")) == "bad"

    def test_source_error_renders_snippet(self, no_color):
        error = UnsupportedConstructError(
            "unsupported construct 'for_statement'",
            location=SourceLocation("loop.c", 2, 5, end_line=2, end_column=17),
            error_code="R0001",
            source_code=LOOP_SOURCE,
        )
        assert isinstance(error, ReducerSourceError)
        assert isinstance(error, ReducerError)
        assert "2 |     for (;;) { }" in str(error)
        assert error.to_error().code == "R0001"

    def test_source_error_default_code(self):
        assert ReducerSourceError("x").error_code == "R0002"

    def test_state_error(self):
        error = ReducerStateError("cannot leave the root context")
        assert str(error) == "[R9999] cannot leave the root context"
        assert not isinstance(error, ReducerError)
