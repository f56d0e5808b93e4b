"""
Field layouts of the supported load balancer log formats.

Each format is pure data: an ordered tuple of field names. Turning tokens
into a record is the same zip for every format, so adding a format means
adding a tuple and an enum member.

References:
    https://docs.aws.amazon.com/elasticloadbalancing/latest/application/load-balancer-access-logs.html
    https://docs.aws.amazon.com/elasticloadbalancing/latest/classic/access-log-collection.html
"""

from enum import Enum
from typing import Sequence

from elb_log_parser.core.exceptions import ConfigurationError, SchemaMismatchError
from elb_log_parser.core.models import ParsedRecord
from elb_log_parser.core.tokenizer import tokenize

__all__ = [
    "ALB_FIELDS",
    "CLASSIC_LB_FIELDS",
    "LogFormat",
    "build_record",
    "parse_line",
]


ALB_FIELDS: tuple[str, ...] = (
    "type",
    "timestamp",
    "elb",
    "client_port",
    "target_port",
    "request_processing_time",
    "target_processing_time",
    "response_processing_time",
    "elb_status_code",
    "target_status_code",
    "received_bytes",
    "sent_bytes",
    "request",
    "user_agent",
    "ssl_cipher",
    "ssl_protocol",
    "target_group_arn",
    "trace_id",
    "domain_name",
    "chosen_cert_arn",
    "matched_rule_priority",
    "request_creation_time",
    "actions_executed",
)

CLASSIC_LB_FIELDS: tuple[str, ...] = (
    "timestamp",
    "elb",
    "client_port",
    "backend_port",
    "request_processing_time",
    "backend_processing_time",
    "response_processing_time",
    "elb_status_code",
    "backend_status_code",
    "received_bytes",
    "sent_bytes",
    "request",
    "user_agent",
    "ssl_cipher",
    "ssl_protocol",
)


class LogFormat(Enum):
    """Supported load balancer log dialects."""
    ALB = "alb"
    CLASSIC_LB = "classic-lb"

    @classmethod
    def from_name(cls, name: "str | LogFormat") -> "LogFormat":
        """
        Resolve a format from its CLI name ("alb", "classic-lb").

        Raises:
            ConfigurationError: If the name is not a known format
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(name.strip().lower().replace("_", "-"))
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"Unknown log format: {name!r} (expected one of: {known})",
                config_key="log_format",
            ) from None

    @property
    def fields(self) -> tuple[str, ...]:
        return _FIELDS[self]

    @property
    def field_count(self) -> int:
        return len(_FIELDS[self])


_FIELDS: dict[LogFormat, tuple[str, ...]] = {
    LogFormat.ALB: ALB_FIELDS,
    LogFormat.CLASSIC_LB: CLASSIC_LB_FIELDS,
}


def build_record(
    log_format: LogFormat,
    tokens: Sequence[str],
    line: str | None = None,
) -> ParsedRecord:
    """
    Map tokens onto the field names of a log format.

    Args:
        log_format: Format whose field layout applies
        tokens: Tokens of one line, in line order
        line: Original line, kept on the error for diagnostics

    Returns:
        ParsedRecord with one entry per field

    Raises:
        SchemaMismatchError: If the token count does not match the format
    """
    if len(tokens) != log_format.field_count:
        raise SchemaMismatchError(
            log_format.value,
            expected=log_format.field_count,
            actual=len(tokens),
            line=line,
        )
    return ParsedRecord(zip(log_format.fields, tokens))


def parse_line(line: str, log_format: LogFormat) -> ParsedRecord:
    """Tokenize a line and map it onto the format's fields."""
    return build_record(log_format, tokenize(line), line=line)
