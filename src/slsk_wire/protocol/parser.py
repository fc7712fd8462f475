"""Payload decoders.

Each ``decode_*`` function takes the payload of a frame (not the frame
itself) and returns its fields. Decoding is all-or-nothing: the first
malformed field raises and nothing partial is returned.
"""

from __future__ import annotations

import io
import logging
from typing import NamedTuple

from .constants import MessageType, message_name
from .errors import InvalidLength
from .framing import Frame
from .primitives import MAX_CHUNK_LEN, read_bytes, read_int64, read_string

logger = logging.getLogger(__name__)


class Hello(NamedTuple):
    """Decoded HELLO handshake."""

    username: str


class Ping(NamedTuple):
    """Decoded PING keepalive."""


class FileAdvert(NamedTuple):
    """Decoded FILE_ADVERT."""

    file_id: str
    name: str
    size: int


class GetFile(NamedTuple):
    """Decoded GET_FILE request."""

    transfer_id: str
    file_id: str
    offset: int


class FileChunk(NamedTuple):
    """Decoded FILE_CHUNK. ``chunk`` is ``b""`` for a zero-length chunk."""

    transfer_id: str
    offset: int
    chunk: bytes

    def __repr__(self) -> str:
        return (
            f"FileChunk(transfer_id={self.transfer_id!r}, "
            f"offset={self.offset}, chunk_len={len(self.chunk)})"
        )


def decode_hello(payload: bytes) -> str:
    """Return the username carried by a HELLO payload."""
    return read_string(io.BytesIO(payload))


def decode_ping(payload: bytes) -> Ping:
    """Validate a PING payload, which must be empty."""
    if payload:
        raise InvalidLength("ping payload", len(payload))
    return Ping()


def decode_file_advert(payload: bytes) -> FileAdvert:
    r = io.BytesIO(payload)
    file_id = read_string(r)
    name = read_string(r)
    size = read_int64(r)
    return FileAdvert(file_id, name, size)


def decode_get_file(payload: bytes) -> GetFile:
    r = io.BytesIO(payload)
    transfer_id = read_string(r)
    file_id = read_string(r)
    offset = read_int64(r)
    return GetFile(transfer_id, file_id, offset)


def decode_file_chunk(payload: bytes) -> FileChunk:
    """Decode a FILE_CHUNK payload.

    The chunk length is checked against ``MAX_CHUNK_LEN`` before any chunk
    bytes are read.
    """
    r = io.BytesIO(payload)
    transfer_id = read_string(r)
    offset = read_int64(r)
    chunk = read_bytes(r, MAX_CHUNK_LEN, "chunk")
    return FileChunk(transfer_id, offset, chunk)


_DECODERS = {
    MessageType.HELLO: lambda payload: Hello(decode_hello(payload)),
    MessageType.PING: decode_ping,
    MessageType.FILE_ADVERT: decode_file_advert,
    MessageType.GET_FILE: decode_get_file,
    MessageType.FILE_CHUNK: decode_file_chunk,
}


def decode_message(frame: Frame):
    """Auto-dispatch a frame to the decoder for its type.

    Returns the decoded message tuple, or the frame itself when its type has
    no structured payload (opaque or unknown types).
    """
    decoder = _DECODERS.get(frame.msg_type)
    if decoder is None:
        logger.debug("no payload decoder for %s, returning raw frame",
                     message_name(frame.msg_type))
        return frame
    return decoder(frame.payload)
