"""
Error Reporting

Diagnostics for reductions that stop early, rendered in the rustc style:

    error[R0002]: unsupported construct 'for_statement'
     --> loop.c:2:5
      |
    2 |     for (;;) { }
      |     ^^^^^^^^^^^^ not handled inside 'compound_statement'
      |
      = help: only function definitions, scalar parameters and ...
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

from .source_location import SourceLocation
from ..utils.config import (
    COLOR_DISABLED_VALUES,
    COLOR_ENV_VAR,
    INTERNAL_ERROR_CODE,
    PARSE_ERROR_CODE,
    UNSUPPORTED_CONSTRUCT_CODE,
)


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get(COLOR_ENV_VAR, "").lower()
    if explicit in COLOR_DISABLED_VALUES:
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color or not codes:
        return text
    return "".join(codes) + text + _RESET


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """A single diagnostic collected by an ErrorReporter."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: Error,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """Render one diagnostic, with a source snippet when the file text is known."""
    out: List[str] = []

    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    loc = error.location
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    source = source_files.get(loc.file)
    if source is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    gutter_width = max(len(str(loc.line)), 1)
    pad = " " * (gutter_width + 1)

    out.append(_style(" " * gutter_width + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(pad + "|", _BOLD, _BLUE, color=color))

    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    out.append(_style(str(loc.line).rjust(gutter_width) + " | ", _BOLD, _BLUE, color=color) + code_line)

    col_start = max(loc.column, 1) - 1
    # A span running past the first line is underlined to the end of that line
    if loc.end_line == loc.line and loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    elif loc.end_line > loc.line:
        span_len = len(code_line.rstrip()) - col_start
    else:
        span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + "^" * max(1, span_len)
    if error.label:
        carets += f" {error.label}"
    out.append(_style(pad + "| ", _BOLD, _BLUE, color=color) + _style(carets, _BOLD, _RED, color=color))

    _append_annotations(out, error, gutter_width, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when end_column is unavailable."""
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ";", ",", "(", ")", "{", "}"):
            break
        length += 1
    return max(1, length)


def _append_annotations(out: List[str], error: Error, gutter_width: int, color: bool) -> None:
    if not (error.help or error.note):
        return
    pad = " " * (gutter_width + 1)
    out.append(_style(pad + "|", _BOLD, _BLUE, color=color))
    for title, text in (("help", error.help), ("note", error.note)):
        if text:
            out.append(
                _style(f"{pad}= ", _BOLD, _CYAN, color=color)
                + _style(f"{title}: ", _BOLD, color=color)
                + text
            )


def _summary(count: int, color: bool) -> str:
    text = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
    return _style("error", _BOLD, _RED, color=color) + _style(f": {text}", _BOLD, color=color)


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """Collects diagnostics for one or more source files and renders them."""

    def __init__(self, source_files: Dict[str, str]):
        self.source_files = source_files
        self.errors: List[Error] = []

    def report(self, error: Error) -> None:
        self.errors.append(error)

    def report_error(
        self,
        message: str,
        location: Optional[SourceLocation],
        code: Optional[str] = None,
        help: Optional[str] = None,
        note: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.report(Error(message=message, location=location, code=code,
                          help=help, note=note, label=label))

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        parts.append(_summary(len(self.errors), use_color))
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def print_errors(self) -> None:
        if self.errors:
            print(self.format_all_errors(), file=sys.stderr)


# ============================================================================
# Exception Classes
# ============================================================================

class ReducerError(Exception):
    """Base exception for all cstreduce errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message}\n --> {self.location}"
        return self.message


class ReducerSourceError(ReducerError):
    """
    Error caused by the input source (as opposed to a bug in cstreduce).

    Carries everything needed to render a full diagnostic; str() renders it.
    """
    def __init__(self,
                 message: str,
                 location: Optional[SourceLocation] = None,
                 error_code: str = UNSUPPORTED_CONSTRUCT_CODE,
                 source_code: Optional[str] = None,
                 help: Optional[str] = None,
                 note: Optional[str] = None,
                 label: Optional[str] = None):
        super().__init__(message, location)
        self.error_code = error_code
        self.source_code = source_code
        self.help_text = help
        self.note_text = note
        self.label_text = label

    def to_error(self) -> Error:
        return Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            help=self.help_text,
            note=self.note_text,
            label=self.label_text,
        )

    def __str__(self):
        source_files: Dict[str, str] = {}
        if self.source_code is not None and self.location:
            source_files[self.location.file] = self.source_code
        return _format_diagnostic(self.to_error(), source_files, color=_use_color())


class ParseError(ReducerSourceError):
    """The CST producer rejected the source text."""
    def __init__(self, message: str, source_file: str,
                 location: Optional[SourceLocation] = None,
                 source_code: Optional[str] = None):
        super().__init__(message, location, error_code=PARSE_ERROR_CODE, source_code=source_code)
        self.source_file = source_file


class UnsupportedConstructError(ReducerSourceError):
    """Raised when an aborted reduction is unwrapped."""


class ReducerStateError(Exception):
    """
    Internal automaton state violated a structural precondition.

    Never caused by well-formed nesting of supported constructs; the reducer
    does not recover from it.
    """
    def __init__(self, message: str, error_code: str = INTERNAL_ERROR_CODE):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"
