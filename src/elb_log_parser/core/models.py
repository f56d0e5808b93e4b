"""
Core data models for elb-log-parser.

These types carry a log line from the moment it is read until its JSON
text is written out.
"""

import json
import os
import sys
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, TYPE_CHECKING

from elb_log_parser.core.exceptions import ConfigurationError, ParseError

if TYPE_CHECKING:
    from elb_log_parser.core.schema import LogFormat

__all__ = [
    "STDIN_NAME",
    "InputDescriptor",
    "RawLine",
    "ParsedRecord",
    "ParseOutcome",
    "ConvertConfig",
    "ConversionSummary",
]


STDIN_NAME = "<stdin>"


@dataclass(frozen=True)
class InputDescriptor:
    """
    A concrete input to convert: a file on disk or standard input.

    Attributes:
        path: Path of the file, or None for standard input
    """
    path: Path | None = None

    @classmethod
    def stdin(cls) -> "InputDescriptor":
        return cls(path=None)

    @property
    def is_stdin(self) -> bool:
        return self.path is None

    @property
    def name(self) -> str:
        """Identifier used in diagnostics."""
        return STDIN_NAME if self.path is None else str(self.path)

    def open(self) -> IO[bytes]:
        """
        Open the input for binary reading.

        Standard input is shared with the process; callers must not close it.
        """
        if self.path is None:
            return sys.stdin.buffer
        return open(self.path, "rb")


@dataclass(frozen=True)
class RawLine:
    """A single line of text together with where it came from."""
    text: str
    source: str
    line_number: int


class ParsedRecord(Mapping):
    """
    One log line's fields, keyed by field name in schema order.

    Read-only once built. Values are the tokens exactly as they appeared
    in the log, quotes included.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str] | Iterable[tuple[str, str]]):
        self._fields = dict(fields)

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ParsedRecord({self._fields!r})"

    def to_dict(self) -> dict[str, str]:
        """Return a mutable copy of the fields."""
        return dict(self._fields)

    def to_json(self) -> str:
        """Serialize as one compact JSON object."""
        return json.dumps(self._fields, ensure_ascii=False, separators=(",", ":"))


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing one RawLine: either a record or an error."""
    line: RawLine
    record: ParsedRecord | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _default_workers() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class ConvertConfig:
    """
    Settings for one conversion run.

    Attributes:
        log_format: Dialect of every input line
        skip_parse_errors: Report and drop bad lines instead of aborting
        workers: Number of files parsed in parallel
        channel_capacity: Records buffered per file before its worker waits
    """
    log_format: "LogFormat"
    skip_parse_errors: bool = False
    workers: int = field(default_factory=_default_workers)
    channel_capacity: int = 1024

    def validate(self) -> "ConvertConfig":
        """Check the settings, returning self so calls can be chained."""
        if self.workers < 1:
            raise ConfigurationError(
                f"workers must be >= 1, got {self.workers}",
                config_key="workers",
            )
        if self.channel_capacity < 1:
            raise ConfigurationError(
                f"channel_capacity must be >= 1, got {self.channel_capacity}",
                config_key="channel_capacity",
            )
        return self


@dataclass
class ConversionSummary:
    """Counters collected during a conversion run."""
    files: int = 0
    records: int = 0
    skipped: int = 0
