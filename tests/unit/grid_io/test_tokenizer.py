"""Tests for the raster grid TokenStream."""

import io

from rastergrid.io.tokenizer import TokenStream


def test_tokens_span_lines():
    stream = TokenStream(io.StringIO("a b\n\n  c\td\n"))
    assert [stream.next() for _ in range(4)] == ["a", "b", "c", "d"]
    assert stream.next() is None


def test_line_numbers_follow_first_line():
    stream = TokenStream(io.StringIO("x\ny\n"), first_line=2)
    stream.next()
    assert stream.line_number == 2
    stream.next()
    assert stream.line_number == 3


def test_peek_does_not_consume():
    stream = TokenStream(io.StringIO("1 2"))
    assert stream.peek() == "1"
    assert stream.peek() == "1"
    assert stream.next() == "1"
    assert stream.next() == "2"
    assert stream.at_end()


def test_empty_stream():
    stream = TokenStream(io.StringIO(""))
    assert stream.at_end()
    assert stream.next() is None
