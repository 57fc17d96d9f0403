"""
=============================================================================
REQUEST ROUTER
=============================================================================

Maps a parsed request to one of a fixed set of behaviors and builds the
response.

=============================================================================
ROUTE TABLE (first match wins, in this order)
=============================================================================

    PATTERN            MATCH     METHODS     BEHAVIOR
    ─────────────────  ────────  ──────────  ─────────────────────────────────
    /                  exact     any         200, empty text/plain
    /user-agent        exact     any         200, User-Agent header as body
    /echo/{text}       prefix    any         200, {text} as body (gzip if asked)
    /files/{name}      prefix    GET         200 file bytes | 404 | 502
                                 POST        201 | 400 bad shape | 502
                                 other       404
    (anything else)                          404, empty body

Only the path decides the route. The query string and fragment never
take part.

=============================================================================
SEGMENTS
=============================================================================

Paths are split on "/" and the route argument is the segment right after
the prefix:

    "/echo/abc"         → ["", "echo", "abc"]          text = "abc"
    "/echo/abc/def"     → ["", "echo", "abc", "def"]   text = "abc"
    "/files/a.txt"      → ["", "files", "a.txt"]       name = "a.txt"
    "/files/a/b.txt"    → 4 segments                   GET → 404, POST → 400

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .encoding import ENCODING_GZIP, accepts_gzip, gzip_body
from .request import HTTPRequest
from .response import (
    CONTENT_ENCODING,
    CONTENT_TYPE,
    OCTET_STREAM,
    HTTPResponse,
    empty_response,
    text_response,
)
from .status_codes import HTTPStatus
from ..storage import FileStore, NotFound, StorageError


logger = logging.getLogger(__name__)


# Type alias for handler functions
Handler = Callable[[HTTPRequest], HTTPResponse]

METHOD_GET = "GET"
METHOD_POST = "POST"


@dataclass
class Route:
    """
    A registered route.

    Attributes:
        path:    Literal path ("/user-agent") or prefix ("/echo/").
        handler: Called with the request when the route matches.
        prefix:  Match by str.startswith instead of equality.
        name:    Label for logs and debugging.
    """

    path: str
    handler: Handler
    prefix: bool = False
    name: Optional[str] = None

    def matches(self, path: str) -> bool:
        if self.prefix:
            return path.startswith(self.path)
        return path == self.path


class Router:
    """
    Fixed-table request dispatcher.

    A pure function of the request plus its collaborators (the FileStore
    and gzip negotiation). It keeps no state between requests.

    Usage:
        router = Router(FileStore("/tmp/data"))
        response = router.dispatch(request)
        conn.send_response(response.to_bytes())
    """

    def __init__(self, store: FileStore):
        self.store = store
        self._routes: List[Route] = []
        self._register_routes()

    def _register_routes(self):
        # Order matters: first-registered, first-matched
        self.add_route("/", self.index, name="index")
        self.add_route("/user-agent", self.user_agent, name="user_agent")
        self.add_route("/echo/", self.echo, prefix=True, name="echo")
        self.add_route("/files/", self.files, prefix=True, name="files")

    # =========================================================================
    # ROUTE REGISTRATION & MATCHING
    # =========================================================================

    def add_route(
        self,
        path: str,
        handler: Handler,
        prefix: bool = False,
        name: Optional[str] = None,
    ) -> Route:
        """Append a route to the end of the table."""
        route = Route(path=path, handler=handler, prefix=prefix, name=name)
        self._routes.append(route)
        return route

    def match(self, path: str) -> Optional[Route]:
        """Return the first route matching path, or None."""
        for route in self._routes:
            if route.matches(path):
                return route
        return None

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def dispatch(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a request and finalize the response.

        Unmatched paths get 404 with an empty body. After the handler runs,
        Content-Length is set when (and only when) the body is non-empty.
        """
        route = self.match(request.path)
        if route is None:
            response = empty_response(HTTPStatus.NOT_FOUND)
        else:
            logger.debug(f"{request.method} {request.path} → {route.name}")
            response = route.handler(request)

        return response.set_content_length()

    # =========================================================================
    # HANDLERS
    # =========================================================================

    def index(self, request: HTTPRequest) -> HTTPResponse:
        return text_response()

    def user_agent(self, request: HTTPRequest) -> HTTPResponse:
        return text_response(request.user_agent)

    def echo(self, request: HTTPRequest) -> HTTPResponse:
        """
        Echo the path segment after /echo/ back as the body.

        If the client accepts gzip, the body is compressed and
        Content-Encoding: gzip is added. Content-Type is always text/plain.
        """
        text = _segments(request.path)[2]
        response = text_response(text)

        if accepts_gzip(request.headers):
            try:
                compressed = gzip_body(response.body)
            except (OSError, ValueError) as e:
                logger.error(f"Error compressing echo body: {e}")
                return empty_response(HTTPStatus.BAD_GATEWAY)
            response.set_header(CONTENT_ENCODING, ENCODING_GZIP)
            response.body = compressed

        return response

    def files(self, request: HTTPRequest) -> HTTPResponse:
        """Dispatch /files/{name} on method: GET reads, POST writes."""
        segments = _segments(request.path)

        if request.method == METHOD_GET:
            return self._get_file(segments)
        if request.method == METHOD_POST:
            return self._post_file(segments, request.body)
        return empty_response(HTTPStatus.NOT_FOUND)

    def _get_file(self, segments: List[str]) -> HTTPResponse:
        """
        Read /files/{name}.

        Both 200 and 404 carry Content-Type: application/octet-stream.
        A storage failure is a bare 502.
        """
        status = HTTPStatus.OK
        content = b""

        if len(segments) != 3:
            status = HTTPStatus.NOT_FOUND
        else:
            try:
                content = self.store.read(segments[2])
            except NotFound:
                status = HTTPStatus.NOT_FOUND
            except StorageError as e:
                logger.error(f"Error getting file: {e}")
                return empty_response(HTTPStatus.BAD_GATEWAY)

        return (HTTPResponse(status=status)
            .set_header(CONTENT_TYPE, OCTET_STREAM)
            .set_body(content))

    def _post_file(self, segments: List[str], body: bytes) -> HTTPResponse:
        if len(segments) != 3:
            return empty_response(HTTPStatus.BAD_REQUEST)

        try:
            self.store.write(segments[2], body)
        except StorageError as e:
            logger.error(f"Error posting file: {e}")
            return empty_response(HTTPStatus.BAD_GATEWAY)

        return empty_response(HTTPStatus.CREATED)


def _segments(path: str) -> List[str]:
    return path.split("/")
