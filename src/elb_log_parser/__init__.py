"""
elb-log-parser - Convert AWS load balancer access logs to newline-delimited JSON.

Supports Application Load Balancer (ALB) and Classic Load Balancer logs,
plain or gzip-compressed, from a file, a directory tree, or stdin.

Usage:
    from elb_log_parser import parse_line, convert

    # Parse a single line
    record = parse_line(line, log_format="alb")
    print(record["elb_status_code"])

    # Convert a directory of logs to JSON lines on stdout
    summary = convert("logs/", log_format="classic-lb", skip_parse_errors=True)
"""

__version__ = "0.1.0"

import sys
from pathlib import Path
from typing import TextIO

from elb_log_parser.core.models import (
    InputDescriptor,
    RawLine,
    ParsedRecord,
    ParseOutcome,
    ConvertConfig,
    ConversionSummary,
)
from elb_log_parser.core.schema import LogFormat, ALB_FIELDS, CLASSIC_LB_FIELDS
from elb_log_parser.core.tokenizer import tokenize
from elb_log_parser.core.exceptions import (
    ElbLogError,
    InputError,
    InputNotFoundError,
    PermissionDeniedError,
    DecodeError,
    ParseError,
    MalformedLineError,
    SchemaMismatchError,
    ConfigurationError,
)
from elb_log_parser.infrastructure import DecompressingLineSource, discover_inputs
from elb_log_parser.application import ConvertLogsUseCase

__all__ = [
    # Version
    "__version__",
    # Core models
    "InputDescriptor",
    "RawLine",
    "ParsedRecord",
    "ParseOutcome",
    "ConvertConfig",
    "ConversionSummary",
    "LogFormat",
    "ALB_FIELDS",
    "CLASSIC_LB_FIELDS",
    "tokenize",
    # Exceptions
    "ElbLogError",
    "InputError",
    "InputNotFoundError",
    "PermissionDeniedError",
    "DecodeError",
    "ParseError",
    "MalformedLineError",
    "SchemaMismatchError",
    "ConfigurationError",
    # Sources
    "DecompressingLineSource",
    "discover_inputs",
    # Use case
    "ConvertLogsUseCase",
    # Convenience functions
    "parse_line",
    "convert",
]


def parse_line(line: str, log_format: str | LogFormat = "alb") -> ParsedRecord:
    """
    Parse one log line into a record.

    Args:
        line: Raw log line
        log_format: "alb" or "classic-lb"

    Returns:
        ParsedRecord keyed by field name

    Raises:
        MalformedLineError: If a quoted field is not closed
        SchemaMismatchError: If the field count does not match the format
    """
    from elb_log_parser.core.schema import parse_line as _parse_line

    return _parse_line(line, LogFormat.from_name(log_format))


def convert(
    path: str | Path,
    sink: TextIO | None = None,
    log_format: str | LogFormat = "alb",
    skip_parse_errors: bool = False,
    workers: int | None = None,
) -> ConversionSummary:
    """
    Convert every log under a path to JSON lines.

    Args:
        path: Directory, file, or "-" for stdin
        sink: Text stream for the output (default: stdout)
        log_format: "alb" or "classic-lb"
        skip_parse_errors: Drop unparsable lines instead of aborting
        workers: Files parsed in parallel (default: CPU count)

    Returns:
        ConversionSummary with file, record and skipped-line counts
    """
    options = {"log_format": LogFormat.from_name(log_format), "skip_parse_errors": skip_parse_errors}
    if workers is not None:
        options["workers"] = workers

    use_case = ConvertLogsUseCase(
        ConvertConfig(**options),
        sink=sink if sink is not None else sys.stdout,
    )
    return use_case.execute(discover_inputs(path))
