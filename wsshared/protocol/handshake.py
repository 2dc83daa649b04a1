from __future__ import annotations

import base64
import hashlib
import os

from .constants import CRLF, ENCODING, WEBSOCKET_MAGIC_GUID


def derive_accept(client_key: str) -> str:
    """
    Compute the ``Sec-WebSocket-Accept`` value for a client key.

    The key is trusted verbatim: any string yields a deterministic answer.
    """
    digest = hashlib.sha1((client_key + WEBSOCKET_MAGIC_GUID).encode(ENCODING)).digest()
    return base64.b64encode(digest).decode("ascii")


def build_handshake_response(client_key: str) -> bytes:
    """Render the ``101 Switching Protocols`` response for an upgrade request."""
    lines = [
        "HTTP/1.1 101 Switching Protocols",
        "Upgrade: websocket",
        "Connection: Upgrade",
        f"Sec-WebSocket-Accept: {derive_accept(client_key)}",
        "",
    ]
    return "".join(line + CRLF for line in lines).encode(ENCODING)


def generate_client_key() -> str:
    """Random 16-byte nonce, base64 encoded, as a browser would send it."""
    return base64.b64encode(os.urandom(16)).decode("ascii")


def build_handshake_request(host: str, key: str, path: str = "/") -> bytes:
    """Client side upgrade request; used by tooling and tests."""
    lines = [
        f"GET {path} HTTP/1.1",
        f"Host: {host}",
        "Upgrade: websocket",
        "Connection: Upgrade",
        f"Sec-WebSocket-Key: {key}",
        "Sec-WebSocket-Version: 13",
        "",
    ]
    return "".join(line + CRLF for line in lines).encode(ENCODING)


__all__ = ["derive_accept", "build_handshake_response", "generate_client_key", "build_handshake_request"]
