"""
=============================================================================
MINIHTTP CLI ENTRY POINT
=============================================================================

    # Serve ./ on 0.0.0.0:4221
    python -m minihttp

    # Serve uploads from /tmp/files
    python -m minihttp --directory /tmp/files

    # Custom port, verbose logs, JSON access log
    python -m minihttp --port 8080 --log-level DEBUG --log-format json

Every option defaults to the matching environment variable (see
ServerConfig.from_env), so HTTP_PORT=8080 python -m minihttp works too.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import LOG_FORMATS, ServerConfig
from .server import HTTPServer


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="Minimal HTTP/1.1 server built on raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                          # Run with defaults
  python -m minihttp --directory /tmp/files   # Where /files/<name> lives
  python -m minihttp --port 8080              # Custom port
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})"
    )

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--directory", "-d",
        default=defaults.directory,
        help=f"Directory to serve files from (default: {defaults.directory})"
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=defaults.log_level.upper(),
        help="Logging level (default: %(default)s)"
    )

    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=defaults.log_format,
        help="Access log format (default: %(default)s)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}"
    )

    return parser


def main(argv=None):
    """
    Main CLI entry point.

    1. Read defaults from the environment
    2. Let command-line arguments override them
    3. Build the server and run it until shutdown
    """
    defaults = ServerConfig.from_env()
    args = build_parser(defaults).parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        directory=args.directory,
        log_level=args.log_level,
        log_format=args.log_format,
    )

    try:
        server = HTTPServer(config)
        server.run()
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
