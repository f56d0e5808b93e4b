"""
Core data models, formats and tokenizer for elb-log-parser.
"""

from elb_log_parser.core.models import (
    STDIN_NAME,
    InputDescriptor,
    RawLine,
    ParsedRecord,
    ParseOutcome,
    ConvertConfig,
    ConversionSummary,
)
from elb_log_parser.core.schema import (
    ALB_FIELDS,
    CLASSIC_LB_FIELDS,
    LogFormat,
    build_record,
    parse_line,
)
from elb_log_parser.core.tokenizer import token_spans, tokenize
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

__all__ = [
    "STDIN_NAME",
    "InputDescriptor",
    "RawLine",
    "ParsedRecord",
    "ParseOutcome",
    "ConvertConfig",
    "ConversionSummary",
    "ALB_FIELDS",
    "CLASSIC_LB_FIELDS",
    "LogFormat",
    "build_record",
    "parse_line",
    "tokenize",
    "token_spans",
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
]
