"""
Infrastructure layer for elb-log-parser.

Contains adapters that implement the ports defined in the application layer.
These connect the conversion pipeline to files and standard input.
"""

from elb_log_parser.infrastructure.sources import (
    GZIP_MAGIC,
    DecompressingLineSource,
    sniff_gzip,
    STDIN_PATH,
    discover_inputs,
)

__all__ = [
    # Sources
    "GZIP_MAGIC",
    "DecompressingLineSource",
    "sniff_gzip",
    "STDIN_PATH",
    "discover_inputs",
]
