"""Tests for message type and error code naming."""

import pytest

from slsk_wire.protocol.constants import (
    ERROR_MESSAGES,
    MESSAGE_NAMES,
    OPAQUE_TYPES,
    ErrorCode,
    MessageType,
    error_message,
    message_name,
    to_message_type,
)


def test_every_message_type_named():
    assert set(MESSAGE_NAMES) == set(MessageType)


def test_message_names():
    assert message_name(MessageType.HELLO) == "HELLO"
    assert message_name(MessageType.FILE_CHUNK) == "FILE_CHUNK"
    assert message_name(99) == "PING"
    assert str(MessageType.TRANSFER_INIT) == "TRANSFER_INIT"


def test_unknown_message_name():
    assert message_name(7) == "Msg(7)"
    assert message_name(-3) == "Msg(-3)"


def test_error_codes():
    assert ErrorCode.NONE == 0
    assert ErrorCode.INVALID == 1
    assert ErrorCode.NOT_FOUND == 2
    assert ErrorCode.PERMISSION == 3
    assert ErrorCode.INTERNAL == 10
    assert set(ERROR_MESSAGES) == set(ErrorCode)


def test_error_messages():
    assert error_message(ErrorCode.PERMISSION) == "permission denied"
    assert str(ErrorCode.NOT_FOUND) == "not found"
    assert error_message(0) == "no error"


def test_unknown_error_message():
    assert error_message(42) == "ErrorCode(42)"


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        MESSAGE_NAMES[1] = "X"
    with pytest.raises(TypeError):
        ERROR_MESSAGES[0] = "X"


def test_opaque_types():
    """Only the five structured types have decoders."""
    structured = set(MessageType) - OPAQUE_TYPES
    assert structured == {
        MessageType.HELLO,
        MessageType.PING,
        MessageType.FILE_ADVERT,
        MessageType.GET_FILE,
        MessageType.FILE_CHUNK,
    }


def test_to_message_type():
    assert to_message_type(21) is MessageType.FILE_ADVERT
    assert to_message_type(22) == 22
    assert type(to_message_type(22)) is int
