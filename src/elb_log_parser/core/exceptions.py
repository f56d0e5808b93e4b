"""
Custom exceptions for elb-log-parser.
"""

__all__ = [
    "ElbLogError",
    "InputError",
    "InputNotFoundError",
    "PermissionDeniedError",
    "DecodeError",
    "ParseError",
    "MalformedLineError",
    "SchemaMismatchError",
    "ConfigurationError",
]


class ElbLogError(Exception):
    """Base exception for all elb-log-parser errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class InputError(ElbLogError):
    """Raised when an input path cannot be discovered or opened."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class InputNotFoundError(InputError):
    """Raised when an input path does not exist."""

    def __init__(self, path: str):
        super().__init__(f"No such file or directory: {path}", path=path)


class PermissionDeniedError(InputError):
    """Raised when an input path is not readable."""

    def __init__(self, path: str):
        super().__init__(f"Permission denied: {path}", path=path)


class DecodeError(ElbLogError):
    """Raised when a compressed input stream is corrupt or truncated."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to decompress {source}: {reason}")
        self.source = source
        self.reason = reason


class ParseError(ElbLogError):
    """
    Raised when a log line cannot be turned into a record.

    The location (source and line number) is usually unknown where the
    error is raised and is attached later with locate().
    """

    def __init__(
        self,
        message: str,
        line: str | None = None,
        source: str | None = None,
        line_number: int | None = None,
    ):
        super().__init__(message)
        self.line = line
        self.source = source
        self.line_number = line_number

    def locate(self, source: str, line_number: int) -> "ParseError":
        """Attach the originating file and line number, returning self."""
        self.source = source
        self.line_number = line_number
        return self

    @property
    def location(self) -> str | None:
        if self.source is None:
            return None
        if self.line_number is None:
            return self.source
        return f"{self.source}:{self.line_number}"

    def __str__(self) -> str:
        location = self.location
        if location:
            return f"{location}: {self.message}"
        return self.message


class MalformedLineError(ParseError):
    """Raised when a quoted field is never closed."""

    def __init__(self, line: str, position: int):
        super().__init__(
            f"Unterminated quote starting at column {position + 1}",
            line=line,
        )
        self.position = position


class SchemaMismatchError(ParseError):
    """Raised when a line has the wrong number of fields for the log format."""

    def __init__(self, format_name: str, expected: int, actual: int, line: str | None = None):
        super().__init__(
            f"Expected {expected} fields for {format_name} log, found {actual}",
            line=line,
        )
        self.format_name = format_name
        self.expected = expected
        self.actual = actual


class ConfigurationError(ElbLogError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key
