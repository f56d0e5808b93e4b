"""
Diagnostic formatters for CLI.

JSON records go straight to stdout; everything here is written to stderr.
"""

from rich.console import Console
from rich.text import Text

from elb_log_parser.application.ports import SkipReporter
from elb_log_parser.core.exceptions import (
    ElbLogError,
    MalformedLineError,
    ParseError,
    SchemaMismatchError,
)
from elb_log_parser.core.tokenizer import token_spans

__all__ = [
    "render_parse_error",
    "report_parse_error",
    "report_error",
    "make_skip_reporter",
]


SKIP_STYLE = "yellow"
FATAL_STYLE = "red"
HIGHLIGHT_STYLE = "bold bright_red underline"
TRAILING_STYLE = "grey35"


def _failure_span(error: ParseError, line: str) -> tuple[int, int] | None:
    """Slice of the line where parsing went wrong, if it lies within the line."""
    if isinstance(error, MalformedLineError):
        if error.position < len(line):
            return error.position, error.position + 1
        return None
    if isinstance(error, SchemaMismatchError) and error.actual > error.expected:
        spans = token_spans(line)
        if len(spans) > error.expected:
            # First field past the end of the layout.
            return spans[error.expected]
    return None


def render_parse_error(error: ParseError, skipping: bool, terminal: bool) -> Text:
    """
    Render a parse error for the error stream.

    Off a terminal this is a single line that is easy to grep. On a
    terminal the offending line is shown below the message with the point
    of failure highlighted: the opening quote of an unterminated field,
    the first surplus field, or the end of a line that is missing fields.

    Args:
        error: Parse error with its location attached
        skipping: Whether the line is being skipped or aborts the run
        terminal: Whether the error stream is an interactive terminal

    Returns:
        Rich Text ready to print
    """
    if not terminal:
        prefix = "Skipping error: " if skipping else "Error: "
        return Text(prefix + str(error))

    if skipping:
        text = Text("Failed to parse following line, skipping:", style=SKIP_STYLE)
    else:
        text = Text("Failed to parse following line:", style=FATAL_STYLE)
    text.append(f"\n  {error}\n    ")

    line = (error.line or "").rstrip()
    span = _failure_span(error, line)
    if span is not None:
        start, end = span
        text.append(line[:start])
        text.append(line[start:end], style=HIGHLIGHT_STYLE)
        text.append(line[end:], style=TRAILING_STYLE)
    else:
        text.append(line)
        if isinstance(error, SchemaMismatchError):
            text.append(" ", style=HIGHLIGHT_STYLE)
    text.append("\n")
    return text


def report_parse_error(console: Console, error: ParseError, skipping: bool) -> None:
    """Print a parse error on the given console."""
    console.print(render_parse_error(error, skipping, console.is_terminal))


def report_error(console: Console, error: ElbLogError | OSError) -> None:
    """Print a fatal, non-parse error."""
    text = Text("Error:", style=FATAL_STYLE)
    text.append(f" {error}")
    console.print(text)


def make_skip_reporter(console: Console) -> SkipReporter:
    """Build the callback the use case calls for each skipped line."""

    def report(error: ParseError) -> None:
        report_parse_error(console, error, skipping=True)

    return report
