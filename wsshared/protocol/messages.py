from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import CRLF, HTTP_HEAD_DELIMITER
from .errors import ErrorCode, ProtocolError, StatusCode


class HandshakeRequest(BaseModel):
    """Parsed head of an inbound HTTP request (request line + headers)."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(..., min_length=1, description="Request method such as GET")
    target: str = Field(..., min_length=1, description="Request target, usually a path")
    version: str = Field(..., pattern=r"^HTTP/\d\.\d$", description="HTTP version token")
    headers: Dict[str, str] = Field(default_factory=dict, description="Header names lower-cased")

    @field_validator("headers")
    @classmethod
    def _lower_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {name.lower(): text for name, text in value.items()}

    @property
    def is_upgrade(self) -> bool:
        return "upgrade" in self.headers

    @property
    def websocket_key(self) -> Optional[str]:
        return self.headers.get("sec-websocket-key")

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)

    @classmethod
    def from_head(cls, data: bytes) -> "HandshakeRequest":
        """Parse raw head bytes; a trailing blank line is optional."""
        text = data.split(HTTP_HEAD_DELIMITER, 1)[0].decode("latin-1")
        lines = text.split(CRLF)
        parts = lines[0].split(" ")
        if len(parts) != 3:
            raise ProtocolError(
                StatusCode.BAD_REQUEST, ErrorCode.PROTOCOL_ERROR, f"Malformed request line: {lines[0]!r}"
            )

        headers: Dict[str, str] = {}
        for line in lines[1:]:
            if not line:
                continue
            name, sep, value = line.partition(":")
            if not sep or not name.strip():
                raise ProtocolError(StatusCode.BAD_REQUEST, ErrorCode.PROTOCOL_ERROR, f"Malformed header: {line!r}")
            headers[name.strip()] = value.strip()

        try:
            return cls(method=parts[0], target=parts[1], version=parts[2], headers=headers)
        except ValidationError as exc:
            raise ProtocolError(StatusCode.BAD_REQUEST, message=f"Request validation failed: {exc}") from exc


__all__ = ["HandshakeRequest"]
