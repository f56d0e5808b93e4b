"""
Main CLI entry point for elb-log-parser.

Uses the application layer use case and infrastructure adapters.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from elb_log_parser import __version__
from elb_log_parser.core.exceptions import ConfigurationError
from elb_log_parser.core.schema import LogFormat

PROG_NAME = "elb-log-parser"
COMPLETE_VAR = "_ELB_LOG_PARSER_COMPLETE"
COMPLETION_SHELLS = ["bash", "zsh", "fish"]

error_console = Console(stderr=True, soft_wrap=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


def _print_completion(ctx: click.Context, param: click.Parameter, value: str | None) -> None:
    if not value or ctx.resilient_parsing:
        return

    from click.shell_completion import get_completion_class

    completion_class = get_completion_class(value)
    completion = completion_class(ctx.command, {}, PROG_NAME, COMPLETE_VAR)
    click.echo(completion.source())
    ctx.exit()


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)
@click.version_option(__version__, "-V", "--version", prog_name=PROG_NAME)
@click.argument("path", required=False, type=click.Path(allow_dash=True))
@click.option(
    "--type", "-t", "log_format",
    type=click.Choice([member.value for member in LogFormat]),
    default=LogFormat.ALB.value,
    show_default=True,
    help="Type of load balancer."
)
@click.option(
    "--skip-parse-errors", is_flag=True,
    help="Report unparsable lines on stderr and keep going."
)
@click.option(
    "--workers", "-j", type=int, default=None,
    envvar="ELB_LOG_PARSER_WORKERS", show_envvar=True,
    help="Number of files parsed in parallel (default: CPU count)."
)
@click.option("--verbose", "-v", is_flag=True, help="Print debug logging on stderr.")
@click.option(
    "--completion",
    type=click.Choice(COMPLETION_SHELLS),
    callback=_print_completion,
    expose_value=False,
    is_eager=True,
    help="Print a shell completion script and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    path: str | None,
    log_format: str,
    skip_parse_errors: bool,
    workers: int | None,
    verbose: bool,
) -> None:
    """
    Convert AWS load balancer access logs to newline-delimited JSON.

    PATH is a directory of logs (searched recursively), a single log
    file, or "-" to read from stdin. Gzip-compressed logs are detected
    and decompressed automatically.

    Examples:

    \b
        elb-log-parser logs/
        elb-log-parser -t classic-lb access.log
        zcat app.log.gz | elb-log-parser -
        elb-log-parser --skip-parse-errors logs/ > records.jsonl
    """
    from elb_log_parser.cli.commands import build_config, convert_command

    if path is None:
        raise click.UsageError("Missing argument 'PATH'.", ctx=ctx)

    try:
        config = build_config(log_format, skip_parse_errors, workers)
    except ConfigurationError as e:
        raise click.UsageError(e.message, ctx=ctx) from e

    configure_logging(verbose=verbose)
    exit_code = convert_command(path=path, config=config, error_console=error_console)
    ctx.exit(exit_code)


if __name__ == "__main__":
    cli()
