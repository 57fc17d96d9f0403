"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

All knobs live in one dataclass, filled from code, the environment, or the
command line (see __main__.py):

    ServerConfig()                              # defaults
    ServerConfig(port=0, directory=tmp_path)    # tests: any free port
    ServerConfig.from_env()                     # HTTP_PORT=8080 minihttp

The base directory for /files is part of the config and is handed to the
FileStore at construction. There is no module-level global for it.

=============================================================================
"""

import os
from dataclasses import dataclass


LOG_FORMATS = ("text", "json")


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size

    FILES
    - directory

    LOGGING
    - log_level, log_format, server_name

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """IP address to bind to. "0.0.0.0" listens on every interface."""

    port: int = 4221
    """Port to listen on. 0 lets the OS pick a free one (handy in tests)."""

    backlog: int = 128
    """Maximum number of queued, not-yet-accepted connections."""

    buffer_size: int = 1024
    """
    Size of the ONE read per connection.
    Anything the client sends beyond this is never read: long requests
    are truncated, not re-read.
    """

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    directory: str = "."
    """Base directory for GET/POST /files/<name>."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)."""

    log_format: str = "text"
    """Access log format: 'text' (combined-log style) or 'json'."""

    server_name: str = "minihttp/1.0"
    """Name shown in the startup log line."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        HTTP_HOST        Server host (default: 0.0.0.0)
        HTTP_PORT        Server port (default: 4221)
        HTTP_DIRECTORY   Base directory for /files (default: .)
        HTTP_LOG_LEVEL   Logging level (default: INFO)
        HTTP_LOG_FORMAT  Access log format (default: text)
        """
        return cls(
            host=os.getenv("HTTP_HOST", "0.0.0.0"),
            port=int(os.getenv("HTTP_PORT", "4221")),
            directory=os.getenv("HTTP_DIRECTORY", "."),
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
            log_format=os.getenv("HTTP_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at startup, so a bad value fails immediately instead of on
        the first request.

        Raises:
            ValueError: Describing the first invalid value found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 64:
            raise ValueError("buffer_size must be >= 64")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log_format: {self.log_format!r}. Must be one of {LOG_FORMATS}."
            )
