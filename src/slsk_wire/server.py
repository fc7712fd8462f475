"""MCP server exposing the wire codec for inspecting protocol traffic.

Tools build frames from message fields and decode hex captures back into
messages, using the official Python MCP SDK with stdio transport. The
server opens no sockets and keeps no connection state.
"""

from __future__ import annotations

import io
import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .protocol.constants import (
    ERROR_MESSAGES,
    MESSAGE_NAMES,
    OPAQUE_TYPES,
    message_name,
)
from .protocol.errors import ProtocolError
from .protocol.framing import Frame, iter_messages
from .protocol.messages import (
    build_message,
    encode_file_advert,
    encode_file_chunk,
    encode_get_file,
    encode_hello,
    encode_ping,
)
from .protocol.parser import (
    FileAdvert,
    FileChunk,
    GetFile,
    Hello,
    Ping,
    decode_message,
)
from .protocol.primitives import MAX_CHUNK_LEN, MAX_STRING_LEN

logger = logging.getLogger(__name__)

SERVER_NAME = "slsk-wire"

mcp = FastMCP(
    SERVER_NAME,
    instructions="Encode and decode Soulseek-style peer protocol frames",
)


def _error(exc: Exception, message: str | None = None) -> dict[str, Any]:
    text = message or str(exc)
    logger.warning("codec error: %s", text)
    return {"error": text, "kind": type(exc).__name__}


def _text(s: str) -> str:
    """Render a decoded wire string as valid JSON text.

    Peer bytes that are not UTF-8 come back from the codec as surrogate
    escapes; show them as ``\\xNN`` instead.
    """
    return s.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def _message_to_dict(frame: Frame, message: Any) -> dict[str, Any]:
    """Render a decoded message as JSON-friendly fields."""
    result: dict[str, Any] = {
        "type": message_name(frame.msg_type),
        "code": int(frame.msg_type),
        "payload_length": len(frame.payload),
    }
    if isinstance(message, Hello):
        result["username"] = _text(message.username)
    elif isinstance(message, Ping):
        pass
    elif isinstance(message, FileAdvert):
        result["file_id"] = _text(message.file_id)
        result["name"] = _text(message.name)
        result["size"] = message.size
    elif isinstance(message, GetFile):
        result["transfer_id"] = _text(message.transfer_id)
        result["file_id"] = _text(message.file_id)
        result["offset"] = message.offset
    elif isinstance(message, FileChunk):
        result["transfer_id"] = _text(message.transfer_id)
        result["offset"] = message.offset
        result["chunk_length"] = len(message.chunk)
        result["chunk_hex"] = message.chunk.hex()
    else:
        result["payload_hex"] = frame.payload.hex()
    return result


def _encode(kind: str, fields: dict[str, Any]) -> bytes:
    kind = kind.lower()
    if kind == "hello":
        return encode_hello(fields["username"])
    if kind == "ping":
        return encode_ping()
    if kind == "file_advert":
        return encode_file_advert(fields["file_id"], fields["name"], int(fields["size"]))
    if kind == "get_file":
        return encode_get_file(
            fields["transfer_id"], fields["file_id"], int(fields.get("offset", 0))
        )
    if kind == "file_chunk":
        chunk = bytes.fromhex(fields.get("chunk_hex", ""))
        return encode_file_chunk(fields["transfer_id"], int(fields.get("offset", 0)), chunk)
    raise ValueError(
        f"Unknown message kind '{kind}'. "
        "Valid: hello, ping, file_advert, get_file, file_chunk"
    )


# ─── TABLE TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def list_message_types() -> dict[str, Any]:
    """List every known message type with its code and payload status."""
    return {
        "message_types": [
            {
                "code": int(code),
                "name": name,
                "structured": code not in OPAQUE_TYPES,
            }
            for code, name in sorted(MESSAGE_NAMES.items())
        ]
    }


@mcp.tool()
def list_error_codes() -> dict[str, Any]:
    """List protocol error codes and their descriptions."""
    return {
        "error_codes": [
            {"code": int(code), "message": text}
            for code, text in sorted(ERROR_MESSAGES.items())
        ]
    }


@mcp.tool()
def describe_message_type(code: int) -> dict[str, Any]:
    """Name a message type code, known or not.

    Args:
        code: Numeric type tag as seen on the wire.
    """
    known = code in MESSAGE_NAMES
    return {
        "code": code,
        "name": message_name(code),
        "known": known,
        "structured": known and code not in OPAQUE_TYPES,
    }


# ─── CODEC TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def encode_message(kind: str, fields: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a framed message and return it as hex.

    Args:
        kind: One of hello, ping, file_advert, get_file, file_chunk.
        fields: Message fields, e.g. {"username": "alice"} for hello or
            {"transfer_id": "tx", "offset": 0, "chunk_hex": "0102"} for
            file_chunk.
    """
    try:
        frame = _encode(kind, fields or {})
    except KeyError as e:
        return _error(e, f"Missing field {e.args[0]!r} for {kind}")
    except (ValueError, TypeError) as e:
        return _error(e)
    return {"frame_hex": frame.hex(), "length": len(frame)}


@mcp.tool()
def pack_raw(msg_type: int, payload_hex: str = "") -> dict[str, Any]:
    """Frame an opaque payload under any message type.

    Use this for types without a defined payload layout (rooms, chat,
    file lists, transfer init) or for unknown codes.

    Args:
        msg_type: Numeric type tag.
        payload_hex: Payload bytes as hex.
    """
    try:
        frame = build_message(msg_type, bytes.fromhex(payload_hex))
    except ValueError as e:
        return _error(e)
    return {
        "type": message_name(msg_type),
        "frame_hex": frame.hex(),
        "length": len(frame),
    }


@mcp.tool()
def decode_frames(data_hex: str) -> dict[str, Any]:
    """Split a hex capture into frames and decode each one.

    Frames decoded before a malformed one are still returned, alongside
    the error that stopped decoding.

    Args:
        data_hex: Captured stream bytes as hex.
    """
    try:
        data = bytes.fromhex(data_hex)
    except ValueError as e:
        return _error(e, f"Invalid hex: {e}")

    frames: list[dict[str, Any]] = []
    try:
        for frame in iter_messages(io.BytesIO(data)):
            frames.append(_message_to_dict(frame, decode_message(frame)))
    except ProtocolError as e:
        result = _error(e)
        result["frames"] = frames
        return result
    return {"frames": frames, "count": len(frames)}


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("slsk://tables/message-types")
def resource_message_types() -> str:
    """Message type table."""
    return json.dumps(list_message_types())


@mcp.resource("slsk://tables/error-codes")
def resource_error_codes() -> str:
    """Error code table."""
    return json.dumps(list_error_codes())


@mcp.resource("slsk://limits")
def resource_limits() -> str:
    """Length caps enforced while decoding."""
    return json.dumps({
        "max_string_len": MAX_STRING_LEN,
        "max_chunk_len": MAX_CHUNK_LEN,
    })


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
