"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds the HTTP/1.1 response that carries an envelope back to the client.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  ┌─ STATUS LINE ──────────────────────────────────────────────────┐ │
    │  │    HTTP/1.1 200 OK\\r\\n                                         │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ HEADERS ──────────────────────────────────────────────────────┐ │
    │  │    Content-Type: application/json\\r\\n                          │ │
    │  │    Access-Control-Allow-Origin: *\\r\\n                          │ │
    │  │    Access-Control-Allow-Methods: POST, GET, OPTIONS\\r\\n        │ │
    │  │    Access-Control-Allow-Headers: Content-Type\\r\\n              │ │
    │  │    Content-Length: 79\\r\\n                                      │ │
    │  │    Connection: close\\r\\n                                       │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ EMPTY LINE (separator) ───────────────────────────────────────┐ │
    │  │    \\r\\n                                                         │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ BODY ─────────────────────────────────────────────────────────┐ │
    │  │    {"input":"ping","output":"pong","timestamp":"..."}           │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The server only ever answers 200 OK. Failures on a connection are logged
and the client gets nothing (or a partial write), never an error status.

=============================================================================
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Dict, List, Optional

from ..envelope import Envelope


JSON_CONTENT_TYPE = "application/json"

CORS_METHODS = ["POST", "GET", "OPTIONS"]
CORS_HEADERS = ["Content-Type"]


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    Use ResponseBuilder for a more convenient way to construct responses.

        Handler builds           to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{self.version} {self.status.value} {self.status.phrase}"

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        Content-Length is filled in from the encoded body unless a header
        already sets it. Headers keep their insertion order, except that an
        automatic Content-Length goes right before Connection.

        Returns:
            Complete HTTP response as bytes ready for socket.sendall()
        """
        response_headers: Dict[str, str] = {}
        needs_length = "Content-Length" not in self.headers

        for name, value in self.headers.items():
            if name == "Connection" and needs_length:
                response_headers["Content-Length"] = str(len(self.body))
                needs_length = False
            response_headers[name] = value

        if needs_length:
            response_headers["Content-Length"] = str(len(self.body))

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")

        # Empty line separates headers from body
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

    Each method returns ``self`` except ``build()``:

        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .json('{"input":"ping"}')
            .cors()
            .close_connection()
            .build())
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def json(self, document: str) -> "ResponseBuilder":
        """
        Set an already serialized JSON document as the body.

        Args:
            document: JSON text. Encoded as UTF-8.

        Returns:
            Self for method chaining
        """
        self._body = document.encode("utf-8")
        self._headers["Content-Type"] = JSON_CONTENT_TYPE
        return self

    def cors(
        self,
        origin: str = "*",
        methods: Optional[List[str]] = None,
        headers: Optional[List[str]] = None,
    ) -> "ResponseBuilder":
        """
        Add CORS (Cross-Origin Resource Sharing) headers.

        Browsers only let page scripts read a cross-origin response when the
        server allows it:

            Access-Control-Allow-Origin: *
            Access-Control-Allow-Methods: POST, GET, OPTIONS
            Access-Control-Allow-Headers: Content-Type

        Args:
            origin: Allowed origin ("*" for any, or specific URL)
            methods: Allowed HTTP methods (for preflight)
            headers: Allowed request headers (for preflight)

        Returns:
            Self for method chaining
        """
        self._headers["Access-Control-Allow-Origin"] = origin

        if methods:
            self._headers["Access-Control-Allow-Methods"] = ", ".join(methods)

        if headers:
            self._headers["Access-Control-Allow-Headers"] = ", ".join(headers)

        return self

    def close_connection(self) -> "ResponseBuilder":
        """Tell the client the connection closes after this response."""
        self._headers["Connection"] = "close"
        return self

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status=self._status,
            headers=dict(self._headers),
            body=self._body,
        )


def envelope_response(envelope: Envelope) -> HTTPResponse:
    """
    Wrap an envelope in the server's one and only response shape.

    200 OK, JSON body, permissive CORS and ``Connection: close``.
    """
    return (ResponseBuilder()
        .status(HTTPStatus.OK)
        .json(envelope.to_json())
        .cors(methods=CORS_METHODS, headers=CORS_HEADERS)
        .close_connection()
        .build())
