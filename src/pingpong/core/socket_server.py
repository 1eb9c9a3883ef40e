"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

This module implements the listener loop: it binds the listening socket,
accepts connections forever and hands each one to a callback.

SOCKET LIFECYCLE (Server Side):
────────────────────────────────

    1. socket()    Create a socket file descriptor
    2. bind()      Associate the socket with 127.0.0.1:8080
    3. listen()    OS starts queueing incoming connections
    4. accept()    Wait for a client, get a NEW socket just for it
    5. close()     Release the listening socket on shutdown

                    ┌───────────────────────┐
                    │   Listening Socket    │ ◄── Created once at startup
                    └───────────┬───────────┘
                                │
        ┌───────────────────────┼───────────────────────┐
        ▼                       ▼                       ▼
    ┌───────────┐         ┌───────────┐         ┌───────────┐
    │ Client 1  │         │ Client 2  │         │ Client 3  │
    │ (thread)  │         │ (thread)  │         │ (thread)  │
    └───────────┘         └───────────┘         └───────────┘

The callback must return quickly. PingPongServer starts a new thread per
connection in it, so a slow client never delays the next accept().

=============================================================================
ERRORS
=============================================================================

Bind and accept failures are fatal: they are logged and re-raised, which
stops the server. Everything that goes wrong on an individual connection
is the handler's business and never reaches this loop.

=============================================================================
"""

import socket
import logging
import threading
from typing import Optional, Callable, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)

# How often the accept loop wakes up to check for shutdown().
ACCEPT_POLL_INTERVAL = 1.0


class SocketServer:
    """
    Low-level TCP socket server.

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the socket server.

        Args:
            config: Server configuration containing host, port, backlog, etc.

        The socket is created lazily in start().
        """
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._bound_address: Optional[Tuple[str, int]] = None

        self._running = False

        # Set once the socket is listening, cleared again on shutdown
        self._ready_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The address the server is bound to.

        With ``port=0`` this reports the port the OS actually picked.
        Before start() it falls back to the configured address.
        """
        if self._bound_address is not None:
            return self._bound_address
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """Create and configure the listening socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Restarting the server must not fail with "Address already in use"
        # while old connections sit in TIME_WAIT.
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # Responses are written in a single sendall(); don't let Nagle hold
        # back the tail of it.
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

        # Bounded accept() so the loop can notice shutdown()
        sock.settimeout(ACCEPT_POLL_INTERVAL)

        return sock

    def start(
        self,
        connection_handler: Callable[[Connection], None],
        on_listening: Optional[Callable[[], None]] = None,
    ):
        """
        Bind, listen and accept connections.

        This method BLOCKS until shutdown() is called.

        Args:
            connection_handler: Called with each accepted Connection.
            on_listening: Called once the socket is listening, before the
                          first accept().

        Raises:
            OSError: If binding, listening or accepting fails.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
            self._socket.listen(self.config.backlog)
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._cleanup()
            raise

        self._bound_address = self._socket.getsockname()[:2]
        self._running = True
        self._ready_event.set()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")

        try:
            if on_listening is not None:
                on_listening()
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        """
        Main loop for accepting connections.

            while self._running:
                accept()                  BLOCKS (at most 1s)
                Connection(...)           wrap the client socket
                connection_handler(conn)  hand off, returns immediately
        """
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                # Normal: gives us a chance to check self._running
                continue
            except OSError as e:
                if not self._running:
                    break  # Socket closed by shutdown()
                logger.error(f"Accept error: {e}")
                raise

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
            )

            logger.info(f"Client connected: {conn.peer}")

            connection_handler(conn)

    def shutdown(self):
        """
        Stop the accept loop.

        Safe to call from any thread and more than once. Connections that
        are already being handled run to completion on their own threads.
        """
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        """Close the listening socket."""
        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._running = False
        self._ready_event.clear()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the socket is bound and listening.

        Returns:
            True if the server is listening, False on timeout.
        """
        return self._ready_event.wait(timeout)
