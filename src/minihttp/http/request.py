"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Turns the raw bytes of ONE socket read into a structured HTTPRequest.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    POST /files/notes.txt HTTP/1.1\r\n        ← request line
    Host: localhost:4221\r\n                   ← header lines
    User-Agent: curl/8.4.0\r\n
    Content-Length: 11\r\n
    \r\n                                        ← blank line separator
    hello\r\nworld                              ← body (rest of the buffer)

=============================================================================
PARSING ALGORITHM
=============================================================================

    1. Split the whole buffer on CRLF.
    2. Line 0 must be exactly "METHOD SP TARGET SP VERSION".
       └─ anything else → MalformedRequestLine
    3. TARGET is parsed as a URI.
       └─ bad percent-escapes, control characters, bad authority → MalformedTarget
    4. Lines up to the first empty one are headers, split on the FIRST ':'.
       └─ a line without ':' → MalformedHeaderLine
    5. Every line after the blank one is glued back together with CRLF.
       This restores the CRLFs inside the body that step 1 split apart.

There is NO Content-Length framing. The body is whatever arrived in the
single read, even if the client announced more. Requests larger than the
read buffer are silently truncated.

=============================================================================
BYTES VS TEXT
=============================================================================

The request line and header lines are decoded as UTF-8 with the
"surrogateescape" error handler. Invalid bytes become lone surrogates
instead of raising, and encoding back with the same handler restores the
exact original bytes. That keeps "/echo/<anything>" and file names
byte-transparent. The body is never decoded.

=============================================================================
"""

import re
from dataclasses import dataclass, field
from typing import List
from urllib.parse import SplitResult, unquote, urlsplit

from .headers import Headers


WIRE_ENCODING = "utf-8"
WIRE_ERRORS = "surrogateescape"

CRLF = b"\r\n"

# A '%' that is not followed by two hex digits
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# ASCII control characters (and DEL) are never valid inside a URI
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class HTTPParseError(Exception):
    """
    Raised when the request bytes cannot be turned into an HTTPRequest.

    The router is never reached for such a request. The connection handler
    answers with 502 and the error text as body.
    """


class MalformedRequestLine(HTTPParseError):
    """The first line is not exactly three space-separated tokens."""


class MalformedTarget(HTTPParseError):
    """The request target cannot be parsed as a URI."""


class MalformedHeaderLine(HTTPParseError):
    """A header line has no ':' separator."""


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed HTTP request.

    Built once per connection by RequestParser and never modified afterwards.

    Attributes:
        method:  Request method token, e.g. "GET". Not validated.
        target:  The parsed request target. Only the path is used for routing.
        version: Version token from the request line, e.g. "HTTP/1.1".
        headers: Request headers (case-insensitive).
        body:    Raw body bytes. Possibly empty, possibly truncated.
    """

    method: str
    target: SplitResult
    version: str = "HTTP/1.1"
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    @property
    def path(self) -> str:
        """Percent-decoded path component of the target."""
        return unquote(self.target.path, encoding=WIRE_ENCODING, errors=WIRE_ERRORS)

    @property
    def query(self) -> str:
        """Raw query string (ignored by routing)."""
        return self.target.query

    @property
    def user_agent(self) -> str:
        return self.headers.get("User-Agent")

    def get_header(self, name: str) -> str:
        """Case-insensitive header lookup; "" when absent."""
        return self.headers.get(name)


class RequestParser:
    """
    Parses one raw request buffer into an HTTPRequest.

    Usage:
        parser = RequestParser()
        try:
            request = parser.parse(raw_bytes)
        except HTTPParseError as e:
            ...  # 502 with str(e) as body
    """

    def parse(self, data: bytes) -> HTTPRequest:
        """
        Parse raw request bytes.

        Args:
            data: Everything the single socket read returned.

        Returns:
            The parsed HTTPRequest.

        Raises:
            MalformedRequestLine, MalformedTarget, MalformedHeaderLine
        """
        lines = data.split(CRLF)

        method, raw_target, version = self._parse_request_line(lines[0])
        target = self._parse_target(raw_target)

        headers = Headers()
        body_lines: List[bytes] = []

        # ─────────────────────────────────────────────────────────────────
        # HEADERS: everything up to the first empty line
        # ─────────────────────────────────────────────────────────────────
        for index, line in enumerate(lines[1:], start=1):
            if not line:
                body_lines = lines[index + 1:]
                break
            name, value = self._parse_header_line(line)
            headers.set(name, value)

        # ─────────────────────────────────────────────────────────────────
        # BODY: re-join what the CRLF split broke apart
        # ─────────────────────────────────────────────────────────────────
        body = CRLF.join(body_lines)

        return HTTPRequest(
            method=method,
            target=target,
            version=version,
            headers=headers,
            body=body,
        )

    def _parse_request_line(self, line: bytes) -> List[str]:
        """
        Split "METHOD SP TARGET SP VERSION" into its three tokens.

        Splitting is on single spaces, so "GET  / HTTP/1.1" (two spaces)
        has four tokens and is rejected.
        """
        parts = _decode(line).split(" ")
        if len(parts) != 3:
            raise MalformedRequestLine(f"invalid request line parts: {len(parts)}")
        return parts

    def _parse_target(self, raw_target: str) -> SplitResult:
        if _CONTROL_CHARS.search(raw_target):
            raise MalformedTarget(f"invalid request line url: {raw_target!r}")

        try:
            target = urlsplit(raw_target)
        except ValueError as e:
            raise MalformedTarget(f"invalid request line url: {raw_target!r}") from e

        for component in (target.path, target.fragment):
            if _BAD_PERCENT_ESCAPE.search(component):
                raise MalformedTarget(f"invalid request line url: {raw_target!r}")

        return target

    def _parse_header_line(self, line: bytes) -> List[str]:
        parts = _decode(line).split(":", 1)
        if len(parts) != 2:
            raise MalformedHeaderLine(f"invalid header line parts: {len(parts)}")
        name, value = parts
        return [name.lower(), value.lstrip(" ")]


def _decode(raw: bytes) -> str:
    return raw.decode(WIRE_ENCODING, errors=WIRE_ERRORS)


def parse_request(data: bytes) -> HTTPRequest:
    """
    Convenience function for parsing a request.

    Creates a RequestParser and parses the data.

    Args:
        data: Raw request bytes.

    Returns:
        Parsed HTTPRequest.
    """
    return RequestParser().parse(data)
