"""
=============================================================================
HTTP RESPONSE SERIALIZER
=============================================================================

An HTTPResponse is a plain data holder. The router builds it and
to_bytes() turns it into wire bytes exactly once.

=============================================================================
WIRE FORMAT
=============================================================================

    HTTP/1.1 200 OK\r\n                 ← status line
    Content-Type: text/plain\r\n        ← one line per header, any order
    Content-Length: 3\r\n
    \r\n                                ← blank line separator
    abc                                 ← body bytes, verbatim
    \r\n                                ← ONLY when the body is non-empty

The trailing CRLF is sent on top of Content-Length bytes. Clients that
honour Content-Length simply never read it.

=============================================================================
CONTENT-LENGTH POLICY
=============================================================================

Content-Length is set ONLY when the body is non-empty. An empty-bodied
response carries no Content-Length at all. to_bytes() does NOT add it
automatically. Call set_content_length() once the body is final.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Union

from .headers import Headers
from .request import WIRE_ENCODING, WIRE_ERRORS
from .status_codes import HTTPStatus, status_text


HTTP_VERSION = "HTTP/1.1"

# Header names and media types the server produces
CONTENT_TYPE = "Content-Type"
CONTENT_LENGTH = "Content-Length"
CONTENT_ENCODING = "Content-Encoding"
TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    Attributes:
        status:  Integer status code. Codes outside the fixed table are
                 allowed and render with an empty reason phrase.
        headers: Response headers, mutated while the response is built.
        body:    Response body bytes (possibly gzip-compressed).
        version: HTTP version for the status line.
    """

    status: int = HTTPStatus.OK
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    version: str = HTTP_VERSION

    @property
    def status_line(self) -> str:
        """
        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE

        Example: "HTTP/1.1 404 Not Found"
        """
        return f"{self.version} {int(self.status)} {status_text(self.status)}"

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a response header. Returns self for method chaining."""
        self.headers.set(name, value)
        return self

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        """
        Set the response body.

        Strings are encoded the same way request text was decoded, so a
        path segment echoed back comes out as the exact bytes that came in.
        """
        if isinstance(body, str):
            self.body = body.encode(WIRE_ENCODING, errors=WIRE_ERRORS)
        else:
            self.body = body
        return self

    def set_content_length(self) -> "HTTPResponse":
        """Set Content-Length to the body size, but only for a non-empty body."""
        if self.body:
            self.headers.set(CONTENT_LENGTH, str(len(self.body)))
        return self

    def to_bytes(self) -> bytes:
        """
        Serialize the response for socket.sendall().

        Returns:
            Status line, headers, blank line, body, and a trailing CRLF
            when the body is non-empty.
        """
        lines = [self.status_line]

        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")

        # Empty line separates headers from body
        lines.append("")

        head = ("\r\n".join(lines) + "\r\n").encode(WIRE_ENCODING, errors=WIRE_ERRORS)

        if not self.body:
            return head
        return head + self.body + b"\r\n"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def text_response(body: Union[str, bytes] = b"", status: int = HTTPStatus.OK) -> HTTPResponse:
    """A text/plain response."""
    return HTTPResponse(status=status).set_header(CONTENT_TYPE, TEXT_PLAIN).set_body(body)


def empty_response(status: int) -> HTTPResponse:
    """A header-less, body-less response (404, 400, 201, 502...)."""
    return HTTPResponse(status=status)


def error_response(message: str) -> HTTPResponse:
    """
    The 502 sent when a request cannot be parsed.

    The error text becomes the body. Content-Length is set like any other
    non-empty response.
    """
    return (HTTPResponse(status=HTTPStatus.BAD_GATEWAY)
        .set_body(message)
        .set_content_length())
