"""
Application layer for elb-log-parser.

Contains the use case that drives a conversion run over infrastructure adapters.
This layer coordinates the flow; parsing rules live in the core package.
"""

from elb_log_parser.application.convert_logs import ConvertLogsUseCase, parse_raw_line
from elb_log_parser.application.ports import LineSourcePort, LineSourceFactory, SkipReporter

__all__ = [
    "ConvertLogsUseCase",
    "parse_raw_line",
    "LineSourcePort",
    "LineSourceFactory",
    "SkipReporter",
]
