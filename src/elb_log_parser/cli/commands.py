"""
CLI commands using the application layer use case.

This module wires the discovery and line source adapters to the
conversion use case and maps its outcome to an exit code.
"""

import os
import sys
from typing import TextIO

from rich.console import Console

from elb_log_parser.application.convert_logs import ConvertLogsUseCase
from elb_log_parser.core.exceptions import ElbLogError, ParseError
from elb_log_parser.core.models import ConvertConfig
from elb_log_parser.core.schema import LogFormat
from elb_log_parser.infrastructure import discover_inputs
from elb_log_parser.cli.output import make_skip_reporter, report_error, report_parse_error

__all__ = ["build_config", "convert_command"]


def build_config(
    log_format: str,
    skip_parse_errors: bool,
    workers: int | None,
) -> ConvertConfig:
    """
    Build and validate the run configuration from CLI values.

    Raises:
        ConfigurationError: If a value is out of range
    """
    options = {
        "log_format": LogFormat.from_name(log_format),
        "skip_parse_errors": skip_parse_errors,
    }
    if workers is not None:
        options["workers"] = workers
    return ConvertConfig(**options).validate()


def convert_command(
    path: str,
    config: ConvertConfig,
    error_console: Console,
    sink: TextIO | None = None,
) -> int:
    """
    Execute the conversion.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    use_case = ConvertLogsUseCase(
        config,
        sink=sink if sink is not None else sys.stdout,
        on_skip=make_skip_reporter(error_console),
    )

    try:
        use_case.execute(discover_inputs(path))
    except ParseError as e:
        report_parse_error(error_console, e, skipping=False)
        return 1
    except ElbLogError as e:
        report_error(error_console, e)
        return 1
    except BrokenPipeError:
        # The reader went away (e.g. `| head`); silence the final flush.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    except OSError as e:
        report_error(error_console, e)
        return 1

    return 0
