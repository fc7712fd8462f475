"""Protocol layer: framing, primitives, message builders, and payload decoders."""

from .constants import ErrorCode, MessageType, error_message, message_name
from .errors import InvalidLength, ProtocolError, StringTooLarge, TruncatedRead
from .framing import Frame, iter_messages, pack_message, parse_frame, read_message
from .primitives import MAX_CHUNK_LEN, MAX_STRING_LEN, read_string, write_string
from .messages import (
    build_message,
    encode_file_advert,
    encode_file_chunk,
    encode_get_file,
    encode_hello,
    encode_ping,
)
from .parser import (
    FileAdvert,
    FileChunk,
    GetFile,
    Hello,
    Ping,
    decode_file_advert,
    decode_file_chunk,
    decode_get_file,
    decode_hello,
    decode_message,
    decode_ping,
)
