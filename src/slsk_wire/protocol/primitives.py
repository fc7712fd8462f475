"""Fixed-width integers and length-prefixed strings.

All integers are signed, two's complement, little-endian::

    int32:   4 bytes
    int64:   8 bytes
    string:  int32 length | length bytes   (0 <= length <= MAX_STRING_LEN)

Readers take any object with a ``read(n) -> bytes`` method. A short or
empty read is treated as end-of-stream.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from .errors import InvalidLength, StringTooLarge, TruncatedRead

MAX_STRING_LEN = 50_000_000
MAX_CHUNK_LEN = 100 * 1024 * 1024  # 104,857,600

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

_INT32 = struct.Struct("<i")
_INT64 = struct.Struct("<q")


def read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read exactly ``n`` bytes from ``stream``.

    Raises:
        TruncatedRead: If the stream ends first.
    """
    if n == 0:
        return b""
    chunks = []
    received = 0
    while received < n:
        chunk = stream.read(n - received)
        if not chunk:
            raise TruncatedRead(n, received)
        chunks.append(chunk)
        received += len(chunk)
    return b"".join(chunks)


def write_int32(n: int) -> bytes:
    if not INT32_MIN <= n <= INT32_MAX:
        raise ValueError(f"int32 out of range: {n}")
    return _INT32.pack(n)


def read_int32(stream: BinaryIO) -> int:
    return _INT32.unpack(read_exact(stream, 4))[0]


def write_int64(n: int) -> bytes:
    if not INT64_MIN <= n <= INT64_MAX:
        raise ValueError(f"int64 out of range: {n}")
    return _INT64.pack(n)


def read_int64(stream: BinaryIO) -> int:
    return _INT64.unpack(read_exact(stream, 8))[0]


def _to_wire_bytes(s: str | bytes) -> bytes:
    if isinstance(s, str):
        return s.encode("utf-8", errors="surrogateescape")
    if isinstance(s, (bytes, bytearray, memoryview)):
        return bytes(s)
    raise TypeError(f"string must be str or bytes, got {type(s).__name__}")


def write_string(s: str | bytes) -> bytes:
    """Encode a length-prefixed string.

    ``str`` values are encoded as UTF-8; ``bytes`` pass through unmodified.
    The length prefix counts bytes, not characters.

    Raises:
        StringTooLarge: If the encoded string exceeds ``MAX_STRING_LEN``.
        TypeError: If ``s`` is neither text nor bytes.
    """
    data = _to_wire_bytes(s)
    if len(data) > MAX_STRING_LEN:
        raise StringTooLarge(len(data), MAX_STRING_LEN)
    return write_int32(len(data)) + data


def read_bytes(stream: BinaryIO, limit: int, what: str = "string") -> bytes:
    """Read an ``int32`` length followed by that many bytes.

    The length is checked against ``limit`` before the body is read, so a
    hostile length field cannot force a large allocation.

    Raises:
        InvalidLength: If the length is negative or above ``limit``.
        TruncatedRead: If the stream ends before the body is complete.
    """
    length = read_int32(stream)
    if length < 0 or length > limit:
        raise InvalidLength(what, length)
    if length == 0:
        return b""
    return read_exact(stream, length)


def read_string(stream: BinaryIO) -> str:
    """Decode a length-prefixed string.

    Bytes that are not valid UTF-8 are kept as surrogate escapes, so
    ``write_string(read_string(s))`` reproduces the original bytes.
    """
    data = read_bytes(stream, MAX_STRING_LEN, "string")
    return data.decode("utf-8", errors="surrogateescape")
