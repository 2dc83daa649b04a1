"""
WebSocket protocol package: handshake negotiation, masking, frame
encoding/decoding and the parsed upgrade-request model.
"""

from .constants import ENCODING, MASK_KEY_LENGTH, WEBSOCKET_MAGIC_GUID
from .errors import ErrorCode, OversizedIncomingFrame, OversizedOutgoingMessage, ProtocolError, StatusCode
from .framing import Frame, FrameDecoder, async_decode_frame, encode_frame
from .handshake import build_handshake_request, build_handshake_response, derive_accept, generate_client_key
from .masking import mask, unmask
from .messages import HandshakeRequest

__all__ = [
    "ENCODING",
    "MASK_KEY_LENGTH",
    "WEBSOCKET_MAGIC_GUID",
    "ErrorCode",
    "OversizedIncomingFrame",
    "OversizedOutgoingMessage",
    "ProtocolError",
    "StatusCode",
    "Frame",
    "FrameDecoder",
    "async_decode_frame",
    "encode_frame",
    "build_handshake_request",
    "build_handshake_response",
    "derive_accept",
    "generate_client_key",
    "mask",
    "unmask",
    "HandshakeRequest",
]
