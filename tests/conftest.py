"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Dict, Generator, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pingpong import PingPongServer, ServerConfig


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request the way curl -d sends it."""
    body = b"ping"
    head = (
        "POST / HTTP/1.1\r\n"
        "Host: 127.0.0.1:8080\r\n"
        "User-Agent: curl/8.5.0\r\n"
        "Accept: */*\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Content-Type: application/x-www-form-urlencoded\r\n"
        "\r\n"
    )
    return head.encode("ascii") + body


@pytest.fixture
def config() -> ServerConfig:
    """Test server configuration: any free port."""
    return ServerConfig(host="127.0.0.1", port=0, log_level="INFO")


def build_request(body: str, method: str = "POST") -> bytes:
    """Build a minimal HTTP request carrying ``body``."""
    payload = body.encode("utf-8")
    return (
        f"{method} / HTTP/1.1\r\n"
        f"Host: localhost\r\n"
        f"Content-Length: {len(payload)}\r\n"
        f"\r\n"
    ).encode("utf-8") + payload


def read_until_closed(sock: socket.socket) -> bytes:
    """Read from ``sock`` until the peer closes it."""
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def split_response(raw: bytes) -> Tuple[str, Dict[str, str], bytes]:
    """Split a raw HTTP response into (status line, headers, body)."""
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(":")
        headers[name.strip()] = value.strip()
    return lines[0], headers, body


class ServerThread:
    """Runs a PingPongServer in a background thread."""

    def __init__(self, server: PingPongServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def address(self) -> Tuple[str, int]:
        return self.server.address

    def start(self):
        """Start server in background thread and wait until it listens."""
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.stop()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def connect(self) -> socket.socket:
        sock = socket.create_connection(self.address, timeout=5.0)
        return sock

    def exchange(self, data: bytes) -> bytes:
        """Send ``data`` on a fresh connection and return the full reply."""
        with self.connect() as sock:
            sock.sendall(data)
            return read_until_closed(sock)


@pytest.fixture
def running_server(config: ServerConfig) -> Generator[ServerThread, None, None]:
    """A live server on a free port."""
    server_thread = ServerThread(PingPongServer(config))
    server_thread.start()

    yield server_thread

    server_thread.stop()
