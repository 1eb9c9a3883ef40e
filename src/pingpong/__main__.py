"""
=============================================================================
PINGPONG CLI ENTRY POINT
=============================================================================

    # Run on the fixed address 127.0.0.1:8080
    python -m pingpong

    # More verbose logging
    python -m pingpong --log-level DEBUG

The listening address is not configurable. Only log verbosity is.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig, LOG_LEVELS
from .server import PingPongServer


def main(argv=None):
    """Parse arguments, build the server, run it until Ctrl+C."""
    parser = argparse.ArgumentParser(
        prog="pingpong",
        description="HTTP ping-pong responder on 127.0.0.1:8080",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m pingpong                        # Run with defaults
  python -m pingpong --log-level DEBUG      # Verbose logging
  curl -X POST http://127.0.0.1:8080 -d 'ping'
        """
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"PingPong {__version__}"
    )

    args = parser.parse_args(argv)

    server = PingPongServer(ServerConfig(log_level=args.log_level))

    try:
        server.run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
