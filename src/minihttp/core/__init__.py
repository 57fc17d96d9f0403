"""
Low-level networking: the listening socket and per-client connections.

    SocketServer  - bind/listen/accept loop, signal-driven shutdown
    Connection    - one client socket, one read, one write, close
"""

from .connection import (
    Connection,
    ConnectionState,
    TransportError,
    TransportReadError,
    TransportWriteError,
)
from .socket_server import SocketServer

__all__ = [
    "Connection",
    "ConnectionState",
    "TransportError",
    "TransportReadError",
    "TransportWriteError",
    "SocketServer",
]
