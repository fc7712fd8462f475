"""Message builders.

Each builder lays out its payload field by field in wire order and returns
a complete frame ready to send. Payload layouts::

    HELLO         string username
    PING          (empty)
    FILE_ADVERT   string file_id | string name | int64 size
    GET_FILE      string transfer_id | string file_id | int64 offset
    FILE_CHUNK    string transfer_id | int64 offset | int32 length | chunk

The remaining message types have no defined payload layout; send them with
:func:`build_message` and an opaque payload.
"""

from __future__ import annotations

from .constants import MessageType
from .errors import InvalidLength
from .framing import pack_message
from .primitives import MAX_CHUNK_LEN, write_int32, write_int64, write_string


def build_message(msg_type: int, payload: bytes = b"") -> bytes:
    """Build a frame for any message type with a pre-encoded payload."""
    return pack_message(msg_type, payload)


def encode_hello(username: str) -> bytes:
    """Build a HELLO handshake carrying the peer's username."""
    return build_message(MessageType.HELLO, write_string(username))


def encode_ping() -> bytes:
    """Build a PING keepalive (no payload)."""
    return build_message(MessageType.PING)


def encode_file_advert(file_id: str, name: str, size: int) -> bytes:
    """Build a FILE_ADVERT announcing one shared file.

    Args:
        file_id: Peer-local identifier of the file.
        name: Display name.
        size: File size in bytes.
    """
    payload = write_string(file_id) + write_string(name) + write_int64(size)
    return build_message(MessageType.FILE_ADVERT, payload)


def encode_get_file(transfer_id: str, file_id: str, offset: int) -> bytes:
    """Build a GET_FILE request.

    Args:
        transfer_id: Caller-chosen token; chunks sent in reply carry it back.
        file_id: Identifier from a previous FILE_ADVERT.
        offset: Byte offset to start from, non-zero when resuming.
    """
    payload = write_string(transfer_id) + write_string(file_id) + write_int64(offset)
    return build_message(MessageType.GET_FILE, payload)


def encode_file_chunk(transfer_id: str, offset: int, chunk: bytes) -> bytes:
    """Build a FILE_CHUNK carrying part of a transfer.

    Raises:
        InvalidLength: If the chunk is larger than ``MAX_CHUNK_LEN``.
        TypeError: If ``chunk`` is not a bytes-like object.
    """
    if chunk is None:
        chunk = b""
    elif not isinstance(chunk, (bytes, bytearray, memoryview)):
        raise TypeError(f"chunk must be bytes, got {type(chunk).__name__}")
    chunk = bytes(chunk)
    if len(chunk) > MAX_CHUNK_LEN:
        raise InvalidLength("chunk", len(chunk))
    payload = (
        write_string(transfer_id)
        + write_int64(offset)
        + write_int32(len(chunk))
        + chunk
    )
    return build_message(MessageType.FILE_CHUNK, payload)
