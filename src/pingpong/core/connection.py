"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

This module wraps one accepted client socket with the small API the
ping-pong handler needs: read once, write everything, close.

=============================================================================
ONE READ, NO ACCUMULATION
=============================================================================

TCP is a byte stream and does not preserve message boundaries. A request
sent by the client may arrive in several recv() chunks:

    Client sends:
        POST / HTTP/1.1\\r\\n ... \\r\\n\\r\\nping

    Server might receive:
        First recv():  "POST / HTTP/1.1\\r\\nHo"
        Second recv(): "st: ...\\r\\n\\r\\nping"

A general HTTP server keeps reading until it has the full request. This
server deliberately does not: it performs exactly ONE recv() of at most
``buffer_size`` bytes and works with whatever arrived. Short requests from
curl or a browser fit in a single packet, so this is enough in practice.
Longer or fragmented requests are answered from the first chunk only.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──► READING ──┬──► PROCESSING ──► WRITING ──► CLOSED
                      │                                 ▲
                      ├──► CLOSED  (peer sent nothing)  │
                      │                                 │
                      └──► FAILED  (read error) ────────┘
                                    (socket released when the handler ends)

=============================================================================
"""

import socket
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional
import uuid

from ..config import READ_BUFFER_SIZE


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and for tests."""
    NEW = "new"                # Just accepted, nothing read yet
    READING = "reading"        # Waiting on the single recv()
    PROCESSING = "processing"  # Request read, building the reply
    WRITING = "writing"        # Sending response data
    FAILED = "failed"          # recv() raised
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier used as a log prefix.
        state: Current connection state.
        buffer_size: Capacity of the single read.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    buffer_size: int = READ_BUFFER_SIZE

    def __post_init__(self):
        # Accepted sockets may inherit the listener's accept-poll timeout.
        # Reads and writes here block until the peer acts.
        self.socket.settimeout(None)

    @property
    def peer(self) -> str:
        """Client address formatted as ``ip:port`` for log lines."""
        if isinstance(self.address, tuple) and len(self.address) >= 2:
            return f"{self.address[0]}:{self.address[1]}"
        return str(self.address)

    # =========================================================================
    # READING
    # =========================================================================

    def read_once(self) -> Optional[bytes]:
        """
        Perform the one and only read on this connection.

        Returns:
            The received bytes (at most ``buffer_size``), or None if the
            peer closed the connection without sending anything.

        Raises:
            OSError: If the read fails (reset, aborted, ...). The state is
                     left at FAILED.
        """
        self.state = ConnectionState.READING

        try:
            data = self.socket.recv(self.buffer_size)
        except OSError:
            self.state = ConnectionState.FAILED
            raise

        if not data:
            return None

        self.state = ConnectionState.PROCESSING
        return data

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> None:
        """
        Send the whole response.

        sendall() keeps calling send() until every byte is written, so a
        short write never leaves part of the response behind.

        Raises:
            OSError: If the peer went away mid-write.
        """
        self.state = ConnectionState.WRITING
        self.socket.sendall(data)

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        Performs the usual TCP shutdown sequence:

        1. shutdown(SHUT_WR): tell the client we're done sending (FIN)
        2. drain: read whatever the client sent past our single read,
           so the kernel does not answer it with a RST that could
           destroy the response still in flight
        3. close(): release the file descriptor

        A FAILED connection skips straight to step 3 and stays FAILED.
        """
        if self.state == ConnectionState.CLOSED:
            return

        if self.state != ConnectionState.FAILED:
            try:
                self.socket.shutdown(socket.SHUT_WR)
            except OSError:
                pass  # Already disconnected

            try:
                self.socket.settimeout(0.5)
                while self.socket.recv(1024):
                    pass
            except OSError:
                pass  # Includes socket.timeout

        try:
            self.socket.close()
        except OSError:
            pass

        if self.state != ConnectionState.FAILED:
            self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection to {self.peer} released")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
