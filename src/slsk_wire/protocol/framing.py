"""Length-prefixed message framing.

Frame layout::

    +-----------+-----------+-------------------+
    |  Length   | Type tag  |      Payload      |
    |  4 bytes  |  4 bytes  |  Length - 4 bytes |
    +-----------+-----------+-------------------+

- Length: little-endian int32 counting (type tag + payload), not itself
- Type tag: little-endian int32 message type
- Payload: message-specific bytes, possibly empty

A frame with no payload has Length == 4, so every frame names its type
without a special case.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Iterator, NamedTuple

from .constants import MessageType, message_name, to_message_type
from .errors import InvalidLength, TruncatedRead
from .primitives import read_exact, read_int32, write_int32

HEADER_SIZE = 4
TYPE_TAG_SIZE = 4
MIN_FRAME_LENGTH = TYPE_TAG_SIZE

_LENGTH = struct.Struct("<i")


class Frame(NamedTuple):
    """A decoded frame: type tag and raw payload.

    ``msg_type`` is a :class:`MessageType` member when the tag is known,
    otherwise the plain integer.
    """

    msg_type: MessageType | int
    payload: bytes

    @property
    def name(self) -> str:
        return message_name(self.msg_type)

    def __repr__(self) -> str:
        return (
            f"Frame(msg_type={self.name}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def pack_message(msg_type: int, payload: bytes | None = b"") -> bytes:
    """Frame a payload for transmission.

    Args:
        msg_type: Message type tag (any int32, known or not).
        payload: Message-specific bytes; ``None`` or empty for no payload.

    Returns:
        The complete frame, length prefix included.
    """
    payload = payload or b""
    body = write_int32(int(msg_type)) + payload
    return write_int32(len(body)) + body


def _read_frame(stream: BinaryIO, header: bytes) -> Frame:
    (length,) = _LENGTH.unpack(header)
    if length < MIN_FRAME_LENGTH:
        raise InvalidLength("frame", length)
    msg_type = read_int32(stream)
    payload = read_exact(stream, length - TYPE_TAG_SIZE)
    return Frame(to_message_type(msg_type), payload)


def read_message(stream: BinaryIO) -> Frame:
    """Read one frame from a byte stream.

    The payload is returned verbatim; its structure is not checked here.

    Raises:
        TruncatedRead: If the stream ends inside the frame.
        InvalidLength: If the length field is too small to hold a type tag.
    """
    return _read_frame(stream, read_exact(stream, HEADER_SIZE))


def parse_frame(data: bytes) -> Frame:
    """Parse a buffer holding exactly one frame.

    Raises:
        TruncatedRead: If the buffer is shorter than the declared frame.
        InvalidLength: If the length field is too small, or bytes remain
            after the frame.
    """
    stream = io.BytesIO(data)
    frame = read_message(stream)
    extra = len(data) - stream.tell()
    if extra:
        raise InvalidLength("trailing data", extra)
    return frame


def iter_messages(stream: BinaryIO) -> Iterator[Frame]:
    """Yield frames until the stream ends on a frame boundary.

    Raises:
        TruncatedRead: If the stream ends part way through a frame.
    """
    while True:
        header = stream.read(HEADER_SIZE)
        if not header:
            return
        if len(header) < HEADER_SIZE:
            try:
                header += read_exact(stream, HEADER_SIZE - len(header))
            except TruncatedRead as e:
                raise TruncatedRead(HEADER_SIZE, len(header) + e.received) from None
        yield _read_frame(stream, header)
