"""
=============================================================================
PING-PONG SERVER
=============================================================================

The orchestrator that ties the listener loop, the per-connection handler
and the reply pipeline together.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. CLIENT CONNECTS
       └── SocketServer accepts the TCP connection

    2. DISPATCH
       └── A new thread is started for the connection; the accept loop
           goes straight back to accept()

    3. READ (worker thread)
       └── ONE recv() of at most 2048 bytes
       └── 0 bytes  → client disconnected, nothing is sent
       └── OSError  → logged, nothing is sent

    4. EXTRACT
       └── Decode as UTF-8 (lossy), take the body, strip whitespace

    5. RESPOND
       └── ping → pong, pong → ping, hello, help, else "Echo: ..."

    6. ENVELOPE
       └── {"input": ..., "output": ..., "timestamp": ...}

    7. SEND
       └── 200 OK + JSON + CORS headers + Connection: close

    8. CLOSE
       └── One request per connection, always

=============================================================================
ISOLATION
=============================================================================

Handlers share nothing: each thread owns its socket, its buffer and every
value derived from them. There are no locks because there is nothing to
lock. An exception in one handler is logged and ends that thread only.

=============================================================================
"""

import logging
import threading
from typing import Optional, Tuple

from .config import ServerConfig
from .core.socket_server import SocketServer
from .core.connection import Connection
from .envelope import Envelope, build_envelope
from .http.body import decode_request, extract_body, trim
from .http.response import envelope_response
from .responder import respond


logger = logging.getLogger(__name__)


class PingPongServer:
    """
    HTTP ping-pong responder.

    Usage:
        server = PingPongServer()
        server.run()  # Blocks until Ctrl+C
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Initialize the server.

        Args:
            config: Server configuration. Defaults to 127.0.0.1:8080.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port), or the configured one before run()."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start the server (blocking).

        Returns when stop() is called or on Ctrl+C.

        Raises:
            OSError: If the address cannot be bound or accept() fails.
        """
        self._setup_logging()

        try:
            self._socket_server.start(
                self._handle_connection,
                on_listening=self._print_startup_banner,
            )
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
            self._socket_server.shutdown()

    def stop(self):
        """Stop accepting connections. In-flight handlers finish on their own."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the listening socket is bound. For tests and embedding."""
        return self._socket_server.wait_until_ready(timeout)

    def _print_startup_banner(self):
        """Print the URL and a curl example."""
        host, port = self.address
        print()
        print(f"HTTP Ping-Pong server listening on {host}:{port}")
        print(f"Test with: curl -X POST http://{host}:{port} -d 'ping'")
        print()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("pingpong").setLevel(level)

    # =========================================================================
    # CONNECTION HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Dispatch a connection to its own handler thread.

        Called by SocketServer on the accept thread, so it must not block.
        """
        thread = threading.Thread(
            target=self.handle_connection,
            args=(conn,),
            name=f"pingpong-{conn.id}",
            daemon=True,
        )
        thread.start()

    def handle_connection(self, conn: Connection) -> Optional[Envelope]:
        """
        Serve exactly one request on a connection, then close it.

        Args:
            conn: The accepted client connection.

        Returns:
            The envelope that was sent, or None if nothing was sent.
        """
        with conn:
            try:
                return self._serve(conn)
            except Exception as e:
                logger.exception(f"[{conn.id}] Handler error: {e}")
                return None

    def _serve(self, conn: Connection) -> Optional[Envelope]:
        try:
            raw_request = conn.read_once()
        except OSError as e:
            logger.error(f"[{conn.id}] Failed to read from socket; err = {e!r}")
            return None

        if raw_request is None:
            logger.info(f"[{conn.id}] Client {conn.peer} disconnected")
            return None

        logger.info(f"[{conn.id}] Received HTTP request from {conn.peer}")

        envelope = self.process(decode_request(raw_request))
        logger.info(f"[{conn.id}] Message: '{envelope.input}'")

        try:
            conn.send_response(envelope_response(envelope).to_bytes())
        except OSError as e:
            logger.error(f"[{conn.id}] Failed to write to socket; err = {e!r}")
            return None

        logger.debug(f"[{conn.id}] Replied '{envelope.output}'")
        return envelope

    @staticmethod
    def process(request: str) -> Envelope:
        """
        Turn a decoded request into its envelope.

        Pure apart from the timestamp: extract the body, trim it, and pair
        it with the responder's reply.
        """
        message = trim(extract_body(request))
        return build_envelope(message, respond(message))


def create_app(config: Optional[ServerConfig] = None) -> PingPongServer:
    """Factory for a server instance."""
    return PingPongServer(config)
