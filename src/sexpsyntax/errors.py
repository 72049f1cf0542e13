"""Error codes, source-context rendering, and error types."""

from __future__ import annotations

from enum import IntEnum

from sexpsyntax.tokens import Position

# Span excerpts longer than this many lines are elided in the middle.
MAX_VERBATIM_SPAN = 5

ELLIPSIS = "..."


class ErrorCode(IntEnum):
    """Stable numeric error codes (bit flags)."""

    UNEXPECTED_CLOSING_DELIMITER = 1
    UNCLOSED_DELIMITER = 2
    DELIM_MISMATCH = 4
    UNTERMINATED_STRING = 8
    UNTERMINATED_MULTI_LINE_COMMENT = 16


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------


def _header(code: ErrorCode) -> str:
    return f"error[{int(code)}]:\n"


def render_point(text: str, line: int, column: int, code: ErrorCode, message: str) -> str:
    """Render a diagnostic that points at a single character.

    ::

        error[2]:
          |
        3 |   ( a
          |   ^ unclosed delimiter
    """
    lines = text.split("\n")
    source_line = lines[line] if 0 <= line < len(lines) else ""

    line_number = str(line + 1)
    blank_gutter = " " * len(line_number)

    return (
        f"{_header(code)}"
        f"{blank_gutter} |\n"
        f"{line_number} | {source_line} \n"
        f"{blank_gutter} | {' ' * column}^ {message}"
    )


def render_span(
    text: str,
    start: Position,
    end: Position,
    code: ErrorCode,
    start_note: str,
    end_note: str,
) -> str:
    """Render a diagnostic running from *start* to *end*.

    A ``v--`` marker sits above the start column and a ``^--`` marker below
    the end column. Spans of up to ``MAX_VERBATIM_SPAN`` extra lines are shown
    in full; longer ones show two lines at each end around an elision row.
    """
    lines = text.split("\n")

    gutter_width = max(len(str(start.line + 1)), len(str(end.line + 1)), len(ELLIPSIS))
    blank_gutter = " " * gutter_width

    def row(line: int) -> str:
        source_line = lines[line] if 0 <= line < len(lines) else ""
        return f"{str(line + 1).rjust(gutter_width)} | {source_line} \n"

    out = [
        _header(code),
        f"{blank_gutter} | {' ' * start.column}v-- {start_note}\n",
    ]

    if start.line == end.line:
        out.append(row(end.line))
    elif end.line - start.line <= MAX_VERBATIM_SPAN:
        for line in range(start.line, end.line + 1):
            out.append(row(line))
    else:
        out.append(row(start.line))
        out.append(row(start.line + 1))
        out.append(f"{ELLIPSIS.rjust(gutter_width)} | {ELLIPSIS}\n")
        out.append(row(end.line - 1))
        out.append(row(end.line))

    out.append(f"{blank_gutter} | {' ' * end.column}^-- {end_note}\n")
    return "".join(out)


# ----------------------------------------------------------------------
# Exceptions
# ----------------------------------------------------------------------


class SyntaxDiagnosticError(Exception):
    """Base for errors raised from a failed tokenize/parse result."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        start: Position,
        end: Position,
        nesting_level: int | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.start = start
        self.end = end
        self.nesting_level = nesting_level
        super().__init__(message)

    def format(self, filename: str = "input") -> str:
        """Return the rendered message with a ``-->`` locator line."""
        header, _, body = self.message.partition("\n")
        locator = f" --> {filename}:{self.start.line + 1}:{self.start.column + 1}"
        return f"{header}\n{locator}\n{body}".rstrip("\n")


class LexError(SyntaxDiagnosticError):
    """Raised for a tokenization failure."""


class ParseError(SyntaxDiagnosticError):
    """Raised for a structural (delimiter) failure."""


class InternalError(RuntimeError):
    """An invariant of the tokenizer or parser itself was violated.

    Never caused by input text; indicates a defect.
    """
