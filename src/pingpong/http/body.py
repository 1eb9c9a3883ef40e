"""
=============================================================================
BODY EXTRACTION
=============================================================================

The server ignores the request line and every header. The only part of an
HTTP request it cares about is the body:

    POST / HTTP/1.1\\r\\n
    Host: 127.0.0.1:8080\\r\\n
    Content-Length: 4\\r\\n
    \\r\\n                   ◄── header/body separator
    ping                   ◄── body

=============================================================================
SEPARATOR FALLBACKS
=============================================================================

Clients are not always well behaved, so three rules are tried in order:

    1. "\\r\\n\\r\\n"   The separator required by RFC 7230
    2. "\\n\\n"       Bare newlines (netcat, hand-typed requests)
    3. last line    No separator at all, e.g. `echo ping | nc ...`

Extraction never fails. The worst case is an empty string.

=============================================================================
"""

CRLF_SEPARATOR = "\r\n\r\n"
LF_SEPARATOR = "\n\n"

# Unicode White_Space. str.strip() with no argument also removes the
# information separators U+001C..U+001F, which belong to the message.
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def decode_request(raw: bytes) -> str:
    """
    Decode raw request bytes as UTF-8.

    Invalid byte sequences become U+FFFD, so a request truncated in the
    middle of a multi-byte character still decodes.
    """
    return raw.decode("utf-8", errors="replace")


def extract_body(request: str) -> str:
    """
    Return the part of a request after the first header/body separator.

    Args:
        request: The full decoded request text.

    Returns:
        The body, which may be empty. Not trimmed.

    Example:
        >>> extract_body("POST / HTTP/1.1\\r\\nHost: x\\r\\n\\r\\nping")
        'ping'
        >>> extract_body("ping")
        'ping'
    """
    index = request.find(CRLF_SEPARATOR)
    if index != -1:
        return request[index + len(CRLF_SEPARATOR):]

    index = request.find(LF_SEPARATOR)
    if index != -1:
        return request[index + len(LF_SEPARATOR):]

    return last_line(request)


def last_line(text: str) -> str:
    """
    Return the last line of ``text``.

    A trailing newline ends the last line rather than starting an empty one,
    and a CRLF line ending is stripped along with the LF.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    if not lines:
        return ""
    line = lines[-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def trim(text: str) -> str:
    """Strip leading and trailing Unicode whitespace from a message."""
    return text.strip(WHITESPACE)
