from __future__ import annotations

import pytest

from nudwim.source import Source, SourceSpan


def test_line_col_basic():
    s = Source(b"ab\nc\r\nd\n")
    # indexes: 0 1 2 3 4 5 6 7  (len=8)
    assert s.line_col(0) == (1, 1)
    assert s.line_col(2) == (1, 3)     # '\n' at end of line 1
    assert s.line_col(3) == (2, 1)     # 'c'
    assert s.line_col(5) == (2, 3)     # end of CRLF line
    assert s.line_col(8) == (4, 1)     # EOF (line 4 start)


def test_line_col_out_of_range():
    with pytest.raises(ValueError):
        Source(b"ab").line_col(3)


def test_line_at_strips_line_endings():
    s = Source(b"ab\nc\r\nd")
    assert s.line_at(1) == (0, "ab")
    assert s.line_at(4) == (3, "c")
    assert s.line_at(6) == (6, "d")


@pytest.mark.parametrize(
    "start,end,expected",
    [
        (0, None, (0, 1)),
        (1, 5, (1, 2)),      # the emoji is one character
        (6, None, (3, 4)),
        (10, None, (3, 4)),  # past the end clamps to the last character
        (6, 6, (3, 4)),      # empty range widens to one character
    ],
)
def test_byte_span_maps_bytes_to_characters(start, end, expected):
    s = Source("a🍳 x".encode())
    assert s.byte_span(start, end) == SourceSpan(*expected)


def test_byte_span_of_empty_text_is_empty():
    assert Source(b"").byte_span(0) == SourceSpan(0, 0)


def test_span_rejects_backwards_range():
    with pytest.raises(ValueError):
        SourceSpan(3, 2)


def test_undecodable_bytes_count_as_one_character():
    s = Source(bytearray(b"a\xffb"))
    assert s.raw == b"a\xffb"
    assert s.text == "a�b"
    assert s.char_index(2) == 2
