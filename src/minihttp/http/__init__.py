"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

Everything between "bytes arrived" and "bytes to send":

    raw bytes ──parse──► HTTPRequest ──dispatch──► HTTPResponse ──to_bytes──► raw bytes
               request.py            router.py                  response.py

Key points:
- Lines end with CRLF (\r\n), not just \n
- Headers and body are separated by an empty line (\r\n\r\n)
- Header names are case-insensitive ("Content-Type" = "content-type")
- One request per connection; the body is whatever the single read got

=============================================================================
"""

from .headers import Headers
from .request import (
    HTTPRequest,
    RequestParser,
    HTTPParseError,
    MalformedRequestLine,
    MalformedTarget,
    MalformedHeaderLine,
    parse_request,
)
from .response import HTTPResponse, text_response, empty_response, error_response
from .router import Router, Route
from .status_codes import HTTPStatus, status_text
from .encoding import accepts_gzip, gzip_body

__all__ = [
    # Headers
    "Headers",

    # Request parsing
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "MalformedRequestLine",
    "MalformedTarget",
    "MalformedHeaderLine",
    "parse_request",

    # Responses
    "HTTPResponse",
    "text_response",
    "empty_response",
    "error_response",

    # Routing
    "Router",
    "Route",

    # Status codes
    "HTTPStatus",
    "status_text",

    # Content negotiation
    "accepts_gzip",
    "gzip_body",
]
