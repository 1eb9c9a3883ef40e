"""
=============================================================================
PINGPONG - Minimal HTTP Ping-Pong Responder
=============================================================================

A tiny HTTP server on raw Python sockets. Every connection gets exactly one
answer: the request body is read, matched against a handful of commands,
and returned as a JSON envelope.

    $ curl -X POST http://127.0.0.1:8080 -d 'ping'
    {"input":"ping","output":"pong","timestamp":"2026-10-19T08:15:02.531904+00:00"}

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    pingpong/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m pingpong)
    ├── server.py            # PingPongServer: dispatch + per-connection handler
    ├── config.py            # ServerConfig dataclass
    ├── responder.py         # Message → reply table
    ├── envelope.py          # input/output/timestamp record
    ├── core/
    │   ├── socket_server.py # Listener loop
    │   └── connection.py    # Connection wrapper
    └── http/
        ├── body.py          # Body extraction
        └── response.py      # HTTP response framing

=============================================================================
KNOWN LIMITATIONS
=============================================================================

- One recv() per connection: requests over 2048 bytes, or split across
  packets, are answered from the first chunk only.
- No timeouts: a client that connects and stays silent keeps its thread.
- No keep-alive: one request per connection.

=============================================================================
"""

__version__ = "1.0.0"

from .server import PingPongServer, create_app
from .config import ServerConfig
from .envelope import Envelope, build_envelope
from .responder import respond

__all__ = [
    "PingPongServer",
    "ServerConfig",
    "Envelope",
    "build_envelope",
    "create_app",
    "respond",
    "__version__",
]
