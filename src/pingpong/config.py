"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the ping-pong responder.

The responder has no configuration surface of its own: it always listens on
127.0.0.1:8080 and reads at most 2048 bytes per request. The values still
live in one typed dataclass so that tests can bind to a free port and the
CLI can change log verbosity.

=============================================================================
CONFIGURATION GROUPS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        SERVERCONFIG FIELDS                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   NETWORK                                                            │
    │     host, port, backlog                                             │
    │                                                                      │
    │   READING                                                            │
    │     buffer_size   (one recv() call, no accumulation)                │
    │                                                                      │
    │   LOGGING                                                            │
    │     log_level                                                        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from dataclasses import dataclass


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

# A request larger than this is truncated to its first READ_BUFFER_SIZE bytes.
READ_BUFFER_SIZE = 2048

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """
    Configuration for the ping-pong server.

    =========================================================================
    USAGE
    =========================================================================

    Normal operation (fixed address):
        ServerConfig()

    Tests (let the OS pick a free port):
        ServerConfig(port=0, log_level="DEBUG")

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = DEFAULT_HOST
    """The IP address to bind to. Localhost only."""

    port: int = DEFAULT_PORT
    """
    The port number to listen on.
    0 asks the OS for any free port (useful in tests).
    """

    backlog: int = 128
    """Maximum number of queued connections before new ones are refused."""

    # ─────────────────────────────────────────────────────────────────────
    # READING
    # ─────────────────────────────────────────────────────────────────────

    buffer_size: int = READ_BUFFER_SIZE
    """
    Capacity of the single read performed per connection, in bytes.
    Requests that are longer, or that arrive split across several
    packets, are processed with whatever the first recv() returned.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at server construction so that a bad value fails
        immediately instead of on the first connection.

        Raises:
            ValueError: If any field is out of range.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {', '.join(LOG_LEVELS)}."
            )
