"""
=============================================================================
CORE NETWORKING COMPONENTS
=============================================================================

    socket_server.py   Listener loop: bind, listen, accept forever
    connection.py      One client socket: read once, send, close

Concurrency lives one level up, in PingPongServer, which runs every
accepted Connection on its own thread.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # Accepts connections
    "Connection",       # Wrapper for a client socket
    "ConnectionState",  # Enum for connection lifecycle states
]
