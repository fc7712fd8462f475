"""Message type and error code identifiers.

Both are int32 values on the wire. The name tables are read-only; lookups
for codes outside them fall back to a numeric placeholder instead of
raising, so unknown traffic can still be logged and inspected.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping


class MessageType(IntEnum):
    """Frame type tags."""

    # control / discovery
    HELLO = 1
    ROOMS_LIST = 10
    JOIN_ROOM = 11
    ROOM_MEMBERS = 12

    # files / transfers
    FILE_LIST = 20
    FILE_ADVERT = 21
    GET_FILE = 30
    FILE_CHUNK = 31
    TRANSFER_INIT = 50

    CHAT = 40

    PING = 99

    def __str__(self) -> str:
        return message_name(self)


class ErrorCode(IntEnum):
    """Protocol-level failure codes reported to a peer."""

    NONE = 0
    INVALID = 1
    NOT_FOUND = 2
    PERMISSION = 3
    INTERNAL = 10

    def __str__(self) -> str:
        return error_message(self)


MESSAGE_NAMES: Mapping[int, str] = MappingProxyType({
    MessageType.HELLO: "HELLO",
    MessageType.ROOMS_LIST: "ROOMS_LIST",
    MessageType.JOIN_ROOM: "JOIN_ROOM",
    MessageType.ROOM_MEMBERS: "ROOM_MEMBERS",
    MessageType.FILE_LIST: "FILE_LIST",
    MessageType.FILE_ADVERT: "FILE_ADVERT",
    MessageType.GET_FILE: "GET_FILE",
    MessageType.FILE_CHUNK: "FILE_CHUNK",
    MessageType.TRANSFER_INIT: "TRANSFER_INIT",
    MessageType.CHAT: "CHAT",
    MessageType.PING: "PING",
})

ERROR_MESSAGES: Mapping[int, str] = MappingProxyType({
    ErrorCode.NONE: "no error",
    ErrorCode.INVALID: "invalid request",
    ErrorCode.NOT_FOUND: "not found",
    ErrorCode.PERMISSION: "permission denied",
    ErrorCode.INTERNAL: "internal error",
})

# Types declared by the protocol whose payload layout is not defined yet.
# They travel as opaque bytes.
OPAQUE_TYPES = frozenset({
    MessageType.ROOMS_LIST,
    MessageType.JOIN_ROOM,
    MessageType.ROOM_MEMBERS,
    MessageType.FILE_LIST,
    MessageType.CHAT,
    MessageType.TRANSFER_INIT,
})


def message_name(code: int) -> str:
    """Return the protocol name of a message type, e.g. ``"HELLO"``.

    Unknown codes render as ``"Msg(<code>)"``.
    """
    name = MESSAGE_NAMES.get(int(code))
    if name is None:
        return f"Msg({int(code)})"
    return name


def error_message(code: int) -> str:
    """Return the human-readable text of an error code.

    Unknown codes render as ``"ErrorCode(<code>)"``.
    """
    text = ERROR_MESSAGES.get(int(code))
    if text is None:
        return f"ErrorCode({int(code)})"
    return text


def to_message_type(code: int) -> MessageType | int:
    """Return the ``MessageType`` member for ``code``, or the plain int."""
    try:
        return MessageType(code)
    except ValueError:
        return int(code)
