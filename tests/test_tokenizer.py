"""
Tests for the quote-aware log line tokenizer.
"""

import pytest

from elb_log_parser.core.exceptions import MalformedLineError, ParseError
from elb_log_parser.core.tokenizer import token_spans, tokenize


class TestTokenize:
    """Tests for tokenize()."""

    def test_empty_line(self):
        """An empty line has no tokens."""
        assert tokenize("") == []
        assert tokenize("   ") == []

    def test_single_token(self):
        assert tokenize("hello") == ["hello"]

    def test_space_separated(self):
        assert tokenize("a b c") == ["a", "b", "c"]

    def test_runs_of_spaces_are_one_separator(self):
        """Consecutive spaces never produce empty tokens."""
        assert tokenize("a   b  c") == ["a", "b", "c"]

    def test_leading_and_trailing_spaces(self):
        assert tokenize("  a b  ") == ["a", "b"]

    def test_line_terminator_ignored(self):
        assert tokenize("a b\n") == ["a", "b"]
        assert tokenize("a b\r\n") == ["a", "b"]

    def test_quoted_token_keeps_quotes(self):
        """Quoted tokens keep both quote characters and inner spaces."""
        assert tokenize('a "b c" d') == ["a", '"b c"', "d"]

    def test_quoted_token_with_multiple_inner_spaces(self):
        assert tokenize('"- - - "') == ['"- - - "']

    def test_empty_quoted_token(self):
        assert tokenize('a "" b') == ["a", '""', "b"]

    def test_escaped_quote_inside_quotes(self):
        """A backslash-escaped quote does not close the token."""
        line = r'yolo "Swa\g \" ho" x'
        assert tokenize(line) == ["yolo", r'"Swa\g \" ho"', "x"]

    def test_escaped_backslash_inside_quotes(self):
        line = r'"a\\" b'
        assert tokenize(line) == [r'"a\\"', "b"]

    def test_backslash_outside_quotes_is_literal(self):
        assert tokenize(r"C:\logs x") == [r"C:\logs", "x"]

    def test_quote_inside_unquoted_token_is_literal(self):
        """Only a quote at the start of a token opens a quoted token."""
        assert tokenize('ab"cd ef') == ['ab"cd', "ef"]

    def test_closing_quote_ends_token(self):
        """Text right after a closing quote starts a new token."""
        assert tokenize('"ab"cd') == ['"ab"', "cd"]

    def test_quoted_token_at_end_of_line(self):
        assert tokenize('a "forward"') == ["a", '"forward"']

    def test_unicode_content(self):
        assert tokenize('"Mozilla ☃" é') == ['"Mozilla ☃"', "é"]

    def test_classic_tcp_line(self, sample_classic_lb_lines):
        """A TCP listener line has 15 tokens including the dashed request."""
        tokens = tokenize(sample_classic_lb_lines[2])

        assert len(tokens) == 15
        assert tokens[11] == '"- - - "'
        assert tokens[12] == '"-"'

    def test_alb_line_token_count(self, sample_alb_line):
        assert len(tokenize(sample_alb_line)) == 23


class TestUnterminatedQuote:
    """Tests for lines whose quoted token is never closed."""

    def test_raises_malformed_line(self):
        with pytest.raises(MalformedLineError) as exc_info:
            tokenize('a "b c')

        assert exc_info.value.position == 2
        assert "column 3" in exc_info.value.message

    def test_is_a_parse_error(self):
        with pytest.raises(ParseError):
            tokenize('"never closed')

    def test_escaped_closing_quote_is_not_a_close(self):
        with pytest.raises(MalformedLineError) as exc_info:
            tokenize(r'x "abc\"')

        assert exc_info.value.position == 2

    def test_backslash_at_end_of_line(self):
        with pytest.raises(MalformedLineError):
            tokenize('x "abc\\')

    def test_error_keeps_line(self):
        with pytest.raises(MalformedLineError) as exc_info:
            tokenize('yolo "quo\n')

        assert exc_info.value.line == 'yolo "quo'
        assert exc_info.value.position == 5


class TestTokenSpans:
    """Tests for token_spans()."""

    def test_spans_slice_tokens(self):
        line = 'a "b c"  d'

        spans = token_spans(line)

        assert spans == [(0, 1), (2, 7), (9, 10)]
        assert [line[start:end] for start, end in spans] == tokenize(line)

    def test_empty_line(self):
        assert token_spans("") == []
