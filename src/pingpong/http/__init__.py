"""
=============================================================================
HTTP PROTOCOL COMPONENTS
=============================================================================

The little HTTP the ping-pong server speaks:

    body.py       Find the body in a raw request (headers are ignored)
    response.py   Frame an envelope as an HTTP/1.1 200 response

There is no request parser, router or status-code table: every request,
whatever its method or path, is answered the same way.

=============================================================================
"""

from .body import decode_request, extract_body, trim
from .response import HTTPResponse, ResponseBuilder, envelope_response

__all__ = [
    # Request side
    "decode_request",
    "extract_body",
    "trim",

    # Response side
    "HTTPResponse",
    "ResponseBuilder",
    "envelope_response",
]
