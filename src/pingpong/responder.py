"""
=============================================================================
RESPONDER
=============================================================================

Maps an incoming message to the reply the server sends back.

    ┌──────────────┬──────────────────────────────────────┐
    │  Message     │  Reply                               │
    ├──────────────┼──────────────────────────────────────┤
    │  ping        │  pong                                │
    │  pong        │  ping                                │
    │  hello       │  Hello there!                        │
    │  help        │  Commands: ping, pong, hello, help   │
    │  <anything>  │  Echo: <anything>                    │
    └──────────────┴──────────────────────────────────────┘

Matching is case-insensitive ("PING" and "Ping" both get "pong"), but the
echo reply repeats the message exactly as it was received.

=============================================================================
"""

from typing import Dict


# Checked in insertion order.
COMMANDS: Dict[str, str] = {
    "ping": "pong",
    "pong": "ping",
    "hello": "Hello there!",
    "help": "Commands: ping, pong, hello, help",
}


def respond(message: str) -> str:
    """
    Derive the reply for a message.

    Args:
        message: The trimmed request body.

    Returns:
        The canned reply for a known command, otherwise ``"Echo: <message>"``.
    """
    reply = COMMANDS.get(message.lower())
    if reply is not None:
        return reply
    return f"Echo: {message}"
