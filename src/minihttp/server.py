"""
=============================================================================
HTTP SERVER
=============================================================================

Wires the pieces together:

    SocketServer.accept()
        └──► HTTPServer._handle_connection(conn)        (accept thread)
                └──► new Thread ──► _process_connection(conn)
                                        │
                                        ├── conn.read_request()     one recv()
                                        ├── parser.parse()          bytes → HTTPRequest
                                        ├── router.dispatch()       HTTPRequest → HTTPResponse
                                        ├── response.to_bytes()
                                        ├── conn.send_response()
                                        └── conn.close()            always

=============================================================================
CONCURRENCY MODEL
=============================================================================

One thread per accepted connection:
- no pool, no queue, no admission limit
- no state shared between connections except the filesystem behind FileStore
- a slow client blocks only its own thread

=============================================================================
FAILURE ISOLATION
=============================================================================

    read fails / client sends nothing  → log WARNING, close, no response
    request cannot be parsed           → 502, error text as body
    handler raises unexpectedly        → log traceback, 502
    write fails                        → log WARNING, close

Nothing raised while handling a connection escapes its thread.

=============================================================================
"""

import time
import logging
import threading
from typing import Optional, Tuple

from .access_log import RequestLog, log_request, now_timestamp
from .config import ServerConfig
from .core import Connection, ConnectionState, SocketServer, TransportError
from .http.request import HTTPParseError, HTTPRequest, RequestParser
from .http.response import HTTPResponse, empty_response, error_response
from .http.router import Router
from .http.status_codes import HTTPStatus
from .storage import FileStore


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    The minihttp server.

    Usage:
        server = HTTPServer(ServerConfig(port=4221, directory="/tmp/files"))
        server.run()            # Blocks until Ctrl+C / SIGTERM / shutdown()
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Args:
            config: Server configuration. Uses defaults if not provided.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()
        self._store = FileStore(self.config.directory)
        self._router = Router(self._store)

        self._running = False

    @property
    def router(self) -> Router:
        return self._router

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port), once run() has started listening."""
        return self._socket_server.bound_address

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Start the server (blocking).

        Args:
            host: Override config host.
            port: Override config port.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        self._setup_logging()
        self._running = True

        logger.info(
            f"Starting {self.config.server_name} on {self.config.host}:{self.config.port}, "
            f"serving files from {self.config.directory!r}"
        )

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._running = False
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. In-flight connections finish on their own."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("minihttp").setLevel(level)

    # =========================================================================
    # CONNECTION HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Start one thread for a newly accepted connection.

        Called on the accept thread, so it must return immediately.
        """
        thread = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        thread.start()

    def _process_connection(self, conn: Connection):
        """
        Run one request/response cycle (in the connection's own thread).

        The connection is always closed on the way out.
        """
        with conn:
            try:
                self._serve(conn)
            except TransportError as e:
                logger.warning(f"[{conn.id}] {e}")
            except Exception:
                logger.exception(f"[{conn.id}] Unexpected connection error")

    def _serve(self, conn: Connection):
        start_time = time.time()

        raw_request = conn.read_request()

        conn.state = ConnectionState.PROCESSING
        request: Optional[HTTPRequest] = None
        try:
            request = self._parser.parse(raw_request)
        except HTTPParseError as e:
            logger.warning(f"[{conn.id}] Error parsing request: {e}")
            response = error_response(str(e))
        else:
            response = self._dispatch(conn, request)

        conn.send_response(response.to_bytes())

        log_request(
            RequestLog(
                request_id=conn.id,
                client_ip=conn.client_ip,
                method=request.method if request else "-",
                path=request.path if request else "-",
                user_agent=(request.user_agent if request else "") or "-",
                status_code=int(response.status),
                content_length=len(response.body),
                duration_ms=(time.time() - start_time) * 1000,
                timestamp=now_timestamp(),
            ),
            log_format=self.config.log_format,
        )

    def _dispatch(self, conn: Connection, request: HTTPRequest) -> HTTPResponse:
        try:
            return self._router.dispatch(request)
        except Exception:
            logger.exception(f"[{conn.id}] Handler error for {request.method} {request.path}")
            return empty_response(HTTPStatus.BAD_GATEWAY)


def create_app(config: Optional[ServerConfig] = None) -> HTTPServer:
    """Factory function for creating server instances."""
    return HTTPServer(config)
