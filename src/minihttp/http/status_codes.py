"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The server only ever produces five status codes:

    200 OK            - "/", "/user-agent", "/echo/...", GET "/files/..."
    201 Created       - POST "/files/<name>" stored the body
    400 Bad Request   - POST "/files/..." with the wrong path shape
    404 Not Found     - unknown route, or the requested file is absent
    502 Bad Gateway   - unparseable request, or the filesystem failed

Anything else renders with an EMPTY reason phrase. That is still a valid
status line ("HTTP/1.1 418 \r\n"), just an unusual one.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    Status codes surfaced by the server.

    IntEnum, so members compare and format as plain integers:

        >>> HTTPStatus.OK == 200
        True
        >>> f"{HTTPStatus.NOT_FOUND:d}"
        '404'
    """

    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    NOT_FOUND = 404
    BAD_GATEWAY = 502

    @property
    def phrase(self) -> str:
        """Reason phrase for the status line."""
        return _STATUS_PHRASES[self]


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.BAD_GATEWAY: "Bad Gateway",
}


def status_text(code: int) -> str:
    """
    Look up the reason phrase for any integer status code.

    Returns "" for codes outside the fixed table.
    """
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""
