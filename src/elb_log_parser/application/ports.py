"""
Port interfaces for the application layer.

These are the interfaces that infrastructure adapters must implement.
They define the contract between the conversion use case and the outside world.
"""

from typing import Callable, Iterator, Protocol, runtime_checkable

from elb_log_parser.core.exceptions import ParseError
from elb_log_parser.core.models import InputDescriptor

__all__ = [
    "LineSourcePort",
    "LineSourceFactory",
    "SkipReporter",
]


@runtime_checkable
class LineSourcePort(Protocol):
    """
    Port for line source adapters.

    Implementations provide decoded text lines from one input:
    - Plain or gzip-compressed files
    - Stdin
    """

    def read_lines(self) -> Iterator[str]:
        """Read lines (without terminators) from the source."""
        ...

    def metadata(self) -> dict[str, str]:
        """Get source metadata (path, type, compression, etc.)."""
        ...


# Builds the line source for one discovered input.
LineSourceFactory = Callable[[InputDescriptor], LineSourcePort]

# Receives parse errors that were skipped instead of aborting the run.
SkipReporter = Callable[[ParseError], None]
