"""Tests for message builders."""

import io

import pytest

from slsk_wire.protocol.constants import MessageType
from slsk_wire.protocol.errors import InvalidLength, StringTooLarge
from slsk_wire.protocol.framing import parse_frame, read_message
from slsk_wire.protocol.messages import (
    build_message,
    encode_file_advert,
    encode_file_chunk,
    encode_get_file,
    encode_hello,
    encode_ping,
)
from slsk_wire.protocol.primitives import MAX_CHUNK_LEN, MAX_STRING_LEN


def test_message_type_values():
    """Verify type tags match the protocol."""
    assert MessageType.HELLO == 1
    assert MessageType.ROOMS_LIST == 10
    assert MessageType.JOIN_ROOM == 11
    assert MessageType.ROOM_MEMBERS == 12
    assert MessageType.FILE_LIST == 20
    assert MessageType.FILE_ADVERT == 21
    assert MessageType.GET_FILE == 30
    assert MessageType.FILE_CHUNK == 31
    assert MessageType.CHAT == 40
    assert MessageType.TRANSFER_INIT == 50
    assert MessageType.PING == 99


def test_encode_hello_bytes():
    """HELLO payload is a single length-prefixed string."""
    assert encode_hello("bob") == (
        b"\x0b\x00\x00\x00"   # length: tag(4) + string(4 + 3)
        b"\x01\x00\x00\x00"   # HELLO
        b"\x03\x00\x00\x00bob"
    )


def test_encode_ping():
    """PING carries no payload."""
    frame = parse_frame(encode_ping())
    assert frame.msg_type == MessageType.PING
    assert frame.payload == b""


def test_encode_file_advert_layout():
    frame = parse_frame(encode_file_advert("id1", "a.txt", 42))
    assert frame.msg_type == MessageType.FILE_ADVERT
    assert frame.payload == (
        b"\x03\x00\x00\x00id1"
        b"\x05\x00\x00\x00a.txt"
        b"\x2a\x00\x00\x00\x00\x00\x00\x00"
    )


def test_encode_get_file_layout():
    frame = parse_frame(encode_get_file("tx", "f", 99))
    assert frame.msg_type == MessageType.GET_FILE
    assert frame.payload == (
        b"\x02\x00\x00\x00tx"
        b"\x01\x00\x00\x00f"
        b"\x63\x00\x00\x00\x00\x00\x00\x00"
    )


def test_encode_file_chunk_layout():
    frame = parse_frame(encode_file_chunk("tx", 7, b"\x01\x02\x03"))
    assert frame.msg_type == MessageType.FILE_CHUNK
    assert frame.payload == (
        b"\x02\x00\x00\x00tx"
        b"\x07\x00\x00\x00\x00\x00\x00\x00"
        b"\x03\x00\x00\x00\x01\x02\x03"
    )


def test_encode_file_chunk_empty():
    """An empty chunk still writes its zero length."""
    frame = parse_frame(encode_file_chunk("tx", 0, b""))
    assert frame.payload.endswith(b"\x00\x00\x00\x00")
    assert len(frame.payload) == 4 + 2 + 8 + 4


def test_encode_file_chunk_too_large():
    """Chunks above the cap are refused at encode time."""
    with pytest.raises(InvalidLength):
        encode_file_chunk("tx", 0, bytes(MAX_CHUNK_LEN + 1))


def test_encode_hello_string_too_large():
    with pytest.raises(StringTooLarge):
        encode_hello(b"u" * (MAX_STRING_LEN + 1))


def test_encode_file_advert_size_out_of_range():
    with pytest.raises(ValueError):
        encode_file_advert("id", "name", 2**63)


def test_build_message_opaque():
    """Types without a payload layout are framed as-is."""
    frame = read_message(io.BytesIO(build_message(MessageType.CHAT, b"opaque")))
    assert frame == (MessageType.CHAT, b"opaque")


def test_encode_hello_rejects_non_string():
    """Usernames must be text or bytes."""
    with pytest.raises(TypeError):
        encode_hello(5)


def test_encode_file_chunk_rejects_int():
    """An int chunk is refused before anything is allocated."""
    with pytest.raises(TypeError):
        encode_file_chunk("t", 0, 10**9)


def test_encode_file_chunk_none_is_empty():
    assert encode_file_chunk("t", 0, None) == encode_file_chunk("t", 0, b"")
