"""Codec exceptions.

Every error raised while decoding untrusted bytes derives from
:class:`ProtocolError`, which is itself a ``ValueError``. A caller that sees
one should treat the stream as desynchronized and close it: the codec never
tries to find the next frame boundary.
"""

from __future__ import annotations


class ProtocolError(ValueError):
    """Base class for wire codec errors."""


class TruncatedRead(ProtocolError, EOFError):
    """The stream ended before the required number of bytes arrived."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"truncated read: expected {expected} bytes, got {received}"
        )


class InvalidLength(ProtocolError):
    """A declared length field is outside its permitted bounds."""

    def __init__(self, what: str, length: int) -> None:
        self.what = what
        self.length = length
        super().__init__(f"invalid {what} length {length}")


class StringTooLarge(ProtocolError):
    """A string exceeds the wire string cap and cannot be encoded."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"string too large: {length} bytes (limit {limit})")
