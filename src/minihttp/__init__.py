"""
=============================================================================
MINIHTTP - A Minimal HTTP/1.1 Server on Raw Sockets
=============================================================================

No HTTP library underneath. Requests are parsed from raw bytes, routed to
a handful of built-in behaviors, and serialized back by hand.

=============================================================================
ROUTES
=============================================================================

    GET  /                  200, empty body
    GET  /user-agent        200, echoes the User-Agent header
    GET  /echo/{text}       200, echoes {text} (gzip if Accept-Encoding allows)
    GET  /files/{name}      200 with file bytes, or 404
    POST /files/{name}      201, stores the request body as {name}

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    minihttp/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m minihttp)
    ├── server.py            # HTTPServer: one thread per connection
    ├── config.py            # ServerConfig dataclass
    ├── access_log.py        # Per-request access log records
    ├── core/
    │   ├── socket_server.py # Listen/accept loop
    │   └── connection.py    # One client: read once, write once, close
    ├── http/
    │   ├── headers.py       # Case-insensitive header container
    │   ├── request.py       # Request parsing
    │   ├── response.py      # Response serialization
    │   ├── router.py        # Fixed route table
    │   ├── encoding.py      # gzip negotiation
    │   └── status_codes.py  # Status codes and reason phrases
    └── storage/
        └── file_store.py    # Files under the base directory

=============================================================================
QUICK START
=============================================================================

    from minihttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=4221, directory="/tmp/files"))
    server.run()

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig

__all__ = ["HTTPServer", "ServerConfig", "__version__"]
