"""Protocol-wide constants for the WebSocket subset spoken by the server."""

ENCODING = "utf-8"
WEBSOCKET_MAGIC_GUID = "258EAFA5-E914-47DA-95CA-C5AB0DC85B11"
HTTP_HEAD_DELIMITER = b"\r\n\r\n"
CRLF = "\r\n"

SEVEN_BITS_INTEGER_MARKER = 125
SIXTEEN_BITS_INTEGER_MARKER = 126
SIXTYFOUR_BITS_INTEGER_MARKER = 127
MAX_SIXTEEN_BITS_LENGTH = 0xFFFF

MASK_KEY_LENGTH = 4
MASK_BIT = 0b10000000
LENGTH_BITS = 0b01111111
FIN_BIT = 0b10000000
OPCODE_BITS = 0b00001111
OPCODE_TEXT = 0x1
FIRST_BYTE_TEXT = FIN_BIT | OPCODE_TEXT  # 0b10000001

__all__ = [
    "ENCODING",
    "WEBSOCKET_MAGIC_GUID",
    "HTTP_HEAD_DELIMITER",
    "CRLF",
    "SEVEN_BITS_INTEGER_MARKER",
    "SIXTEEN_BITS_INTEGER_MARKER",
    "SIXTYFOUR_BITS_INTEGER_MARKER",
    "MAX_SIXTEEN_BITS_LENGTH",
    "MASK_KEY_LENGTH",
    "MASK_BIT",
    "LENGTH_BITS",
    "FIN_BIT",
    "OPCODE_BITS",
    "OPCODE_TEXT",
    "FIRST_BYTE_TEXT",
]
