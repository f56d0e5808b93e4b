"""
Quote-aware tokenizer for load balancer access log lines.

ELB writes fields separated by single spaces. Fields that may contain
spaces (the request line, the user agent, the trace id, ...) are wrapped
in double quotes, with embedded quotes escaped by a backslash.

Example:
    >>> tokenize('a "b c" d')
    ['a', '"b c"', 'd']
"""

from elb_log_parser.core.exceptions import MalformedLineError

__all__ = ["tokenize", "token_spans", "SEPARATOR", "QUOTE", "ESCAPE"]


SEPARATOR = " "
QUOTE = '"'
ESCAPE = "\\"


def token_spans(line: str) -> list[tuple[int, int]]:
    """
    Locate the tokens of a log line.

    Runs of spaces separate tokens and never produce empty tokens. A token
    that starts with a double quote extends to the matching closing quote
    and keeps both quote characters. Inside quotes a backslash escapes the
    next character. A quote in the middle of an unquoted token is literal.

    Args:
        line: Raw log line, without its line terminator

    Returns:
        (start, end) slice bounds of each token, in line order

    Raises:
        MalformedLineError: If a quoted token is not closed before end of line
    """
    length = len(line)
    spans: list[tuple[int, int]] = []
    i = 0

    while i < length:
        char = line[i]
        if char == SEPARATOR:
            i += 1
            continue

        start = i
        if char == QUOTE:
            i += 1
            while i < length:
                char = line[i]
                if char == ESCAPE:
                    i += 2
                    continue
                if char == QUOTE:
                    break
                i += 1
            else:
                raise MalformedLineError(line, start)
            i += 1
        else:
            i = line.find(SEPARATOR, i)
            if i == -1:
                i = length

        spans.append((start, i))

    return spans


def tokenize(line: str) -> list[str]:
    """
    Split a raw log line into its fields.

    Args:
        line: Raw log line, with or without its line terminator

    Returns:
        List of tokens in line order

    Raises:
        MalformedLineError: If a quoted token is not closed before end of line
    """
    line = line.rstrip("\r\n")
    return [line[start:end] for start, end in token_spans(line)]
