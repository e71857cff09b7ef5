from __future__ import annotations

import msgspec
import pytest

from nudwim.cmdline.graphemes import GraphemeBuffer
from nudwim.wire import WireError, decode_request, encode_response


def test_decode_request() -> None:
    data = msgspec.msgpack.encode([3, "foo 'bar'"])
    assert decode_request(data) == GraphemeBuffer("foo 'bar'", 3)


def test_encode_response_is_cursor_then_text() -> None:
    data = encode_response(GraphemeBuffer("$'()'", 3))
    assert msgspec.msgpack.decode(data) == [3, "$'()'"]


def test_cursor_counts_graphemes_on_the_wire() -> None:
    data = msgspec.msgpack.encode([2, "🍳🍳x"])
    assert decode_request(data).to_bytes().cursor == 8


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"\xc1",  # never valid msgpack
        msgspec.msgpack.encode("just text"),
        msgspec.msgpack.encode(["3", "text"]),
        msgspec.msgpack.encode([1, 2, 3]),
    ],
)
def test_decode_request_rejects_bad_payloads(payload: bytes) -> None:
    with pytest.raises(WireError):
        decode_request(payload)


@pytest.mark.parametrize("cursor", [-1, 4])
def test_decode_request_rejects_cursor_out_of_range(cursor: int) -> None:
    with pytest.raises(WireError, match="out of range"):
        decode_request(msgspec.msgpack.encode([cursor, "abc"]))
