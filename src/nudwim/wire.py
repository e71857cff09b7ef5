"""
The shell side talks to us in MessagePack: a two-element array of
``[grapheme_cursor, text]`` on stdin, answered the same way on stdout.
"""

from __future__ import annotations

import msgspec
import msgspec.msgpack

from nudwim.cmdline.graphemes import GraphemeBuffer

__all__ = ["WireError", "decode_request", "encode_response"]

Payload = tuple[int, str]

_decoder = msgspec.msgpack.Decoder(Payload)
_encoder = msgspec.msgpack.Encoder()


class WireError(ValueError):
    """The payload on stdin is not a ``[cursor, text]`` pair."""


def decode_request(data: bytes) -> GraphemeBuffer:
    try:
        cursor, text = _decoder.decode(data)
    except msgspec.DecodeError as e:
        raise WireError(f"Unable to decode [cursor, text] from {len(data)} bytes: {e}") from e
    try:
        return GraphemeBuffer(text, cursor)
    except ValueError as e:
        raise WireError(str(e)) from e


def encode_response(buf: GraphemeBuffer) -> bytes:
    return _encoder.encode((buf.cursor, buf.text))
