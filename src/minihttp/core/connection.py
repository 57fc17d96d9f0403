"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket for exactly one request/response cycle.

=============================================================================
ONE READ, ONE WRITE, CLOSE
=============================================================================

TCP is a byte stream: a request may arrive across several recv() calls.
This server does NOT loop until the request is complete. It takes one
recv(buffer_size) and treats those bytes as the whole request:

    Client sends 1500 bytes, buffer_size = 1024
        recv() → first 1024 bytes     ← parsed as the request
        (remaining 476 bytes)         ← never read, discarded at close

That is a known limitation. Framed, multi-read requests are out of scope.

    ┌──────────┐   read_request()   ┌───────────┐  send_response()  ┌────────┐
    │   NEW    │ ─────────────────► │ PROCESSING│ ────────────────► │ CLOSED │
    └──────────┘     (READING)      └───────────┘     (WRITING)     └────────┘

There is no timeout on the read. A client that connects and never sends
blocks its own connection thread indefinitely, and nothing else.

=============================================================================
"""

import socket
import time
import uuid
import logging
from dataclasses import dataclass, field
from enum import Enum


logger = logging.getLogger(__name__)

# Limits on draining unread client bytes at close
DRAIN_TIMEOUT = 0.5           # Per recv()
DRAIN_MAX_BYTES = 64 * 1024   # Total
DRAIN_MAX_SECONDS = 2.0       # Total


class TransportError(Exception):
    """A socket-level failure on a single connection."""


class TransportReadError(TransportError):
    """Reading the request failed, or the client closed before sending."""


class TransportWriteError(TransportError):
    """Writing the response failed."""


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and close()."""
    NEW = "new"                  # Just accepted
    READING = "reading"          # Waiting on the single recv()
    PROCESSING = "processing"    # Parsing and routing
    WRITING = "writing"          # Sending the response
    CLOSED = "closed"            # Socket released


@dataclass
class Connection:
    """
    A single accepted client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        buffer_size: Size of the one and only read.
        id: Short unique identifier for log lines.
        state: Current lifecycle state.
        created_at: Timestamp when the connection was accepted.
    """

    socket: socket.socket
    address: tuple
    buffer_size: int = 1024
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    def __post_init__(self):
        # Fully blocking: no timeout on client reads or writes
        self.socket.settimeout(None)

    @property
    def client_ip(self) -> str:
        return self.address[0] if self.address else ""

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> bytes:
        """
        Read the request with a single recv().

        Returns:
            Up to buffer_size bytes, never empty.

        Raises:
            TransportReadError: The socket failed, or the client closed the
                                connection without sending anything.
        """
        self.state = ConnectionState.READING
        try:
            data = self.socket.recv(self.buffer_size)
        except OSError as e:
            raise TransportReadError(f"reading from connection: {e}") from e

        if not data:
            raise TransportReadError("connection closed before a request was received")

        logger.debug(f"[{self.id}] Read {len(data)} bytes from {self.client_ip}")
        return data

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> None:
        """
        Send the whole response.

        sendall() keeps calling send() until every byte is out or the
        socket fails.

        Raises:
            TransportWriteError: The client went away or the socket failed.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
        except OSError as e:
            raise TransportWriteError(f"writing to connection: {e}") from e

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        1. shutdown(SHUT_WR) sends FIN, telling the client the response is complete.
        2. Drain whatever the client sent past the single read, up to
           DRAIN_MAX_BYTES or DRAIN_MAX_SECONDS. Closing with unread data
           makes the kernel send RST, which can destroy the response
           before the client reads it.
        3. close() releases the file descriptor.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        # Stop at DRAIN_MAX_BYTES or DRAIN_MAX_SECONDS, whichever comes first
        drained = 0
        deadline = time.monotonic() + DRAIN_MAX_SECONDS
        try:
            self.socket.settimeout(DRAIN_TIMEOUT)
            while drained < DRAIN_MAX_BYTES and time.monotonic() < deadline:
                chunk = self.socket.recv(self.buffer_size)
                if not chunk:
                    break
                drained += len(chunk)
        except OSError:
            pass  # Timeout or reset; closing anyway

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.2f}ms")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
