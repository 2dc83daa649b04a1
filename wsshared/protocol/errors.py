from __future__ import annotations

from enum import IntEnum
from typing import Optional


class StatusCode(IntEnum):
    """HTTP status codes the server answers with."""

    SUCCESS = 200
    BAD_REQUEST = 400
    INTERNAL_ERROR = 500


class ErrorCode(IntEnum):
    """WebSocket close-code style error codes (RFC 6455 section 7.4.1)."""

    PROTOCOL_ERROR = 1002
    MESSAGE_TOO_BIG = 1009


class ProtocolError(Exception):
    """Structured protocol exception carrying status + code + message."""

    def __init__(self, status: StatusCode, code: Optional[ErrorCode] = None, message: str = "") -> None:
        self.status = status
        self.code = code
        self.message = message
        super().__init__(f"{status.name} ({int(status)}): {message} (code={code.name if code else 'n/a'})")


class OversizedIncomingFrame(ProtocolError):
    """Inbound frame announced the 64-bit extended payload length."""

    def __init__(self, message: str = "Your message is too long to be read.") -> None:
        super().__init__(StatusCode.BAD_REQUEST, ErrorCode.MESSAGE_TOO_BIG, message)


class OversizedOutgoingMessage(ProtocolError):
    """Outbound payload does not fit in the 16-bit extended length."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(
            StatusCode.INTERNAL_ERROR,
            ErrorCode.MESSAGE_TOO_BIG,
            f"Your message is too long to be sent ({size} bytes).",
        )


__all__ = ["StatusCode", "ErrorCode", "ProtocolError", "OversizedIncomingFrame", "OversizedOutgoingMessage"]
