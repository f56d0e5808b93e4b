"""
Source adapters for elb-log-parser.

These find the inputs to convert and read lines from them.
"""

from elb_log_parser.infrastructure.sources.decompress import (
    GZIP_MAGIC,
    DecompressingLineSource,
    sniff_gzip,
)
from elb_log_parser.infrastructure.sources.discovery import (
    STDIN_PATH,
    discover_inputs,
)

__all__ = [
    "GZIP_MAGIC",
    "DecompressingLineSource",
    "sniff_gzip",
    "STDIN_PATH",
    "discover_inputs",
]
