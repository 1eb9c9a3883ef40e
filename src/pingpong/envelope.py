"""
=============================================================================
RESPONSE ENVELOPE
=============================================================================

The envelope is the JSON document every successful request gets back:

    {"input":"ping","output":"pong","timestamp":"2026-10-19T08:15:02.531904+00:00"}

    input       The trimmed message the client sent
    output      The reply chosen by the responder
    timestamp   When the reply was built, RFC 3339 in UTC

The document is compact (no whitespace between tokens) and keeps non-ASCII
characters as UTF-8 instead of \\u escapes.

=============================================================================
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Envelope:
    """
    One request/response pair plus the time it was answered.

    Attributes:
        input: Original trimmed message.
        output: Derived reply.
        timestamp: Aware UTC datetime, set when the envelope is built.
    """

    input: str
    output: str
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input": self.input,
            "output": self.output,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Serialize to a compact JSON document."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "Envelope":
        """
        Parse a document produced by ``to_json()``.

        Raises:
            ValueError: If the text is not JSON or the timestamp is not ISO-8601.
            KeyError: If a field is missing.
        """
        data = json.loads(text)
        return cls(
            input=data["input"],
            output=data["output"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


def build_envelope(input: str, output: str) -> Envelope:
    """Wrap a message and its reply, stamped with the current UTC time."""
    return Envelope(input=input, output=output, timestamp=utc_now())
