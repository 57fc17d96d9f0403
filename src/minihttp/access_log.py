"""
=============================================================================
ACCESS LOG
=============================================================================

One log record per completed request on the "minihttp.access" logger:

    text:  127.0.0.1 - - [19/Oct/2026:10:00:00 +0000] "GET /echo/abc" 200 3 0.41ms
    json:  {"request_id": "1a2b3c4d", "method": "GET", "path": "/echo/abc", ...}

The logger is separate from the server's own diagnostics, so it can be
routed or silenced on its own:

    logging.getLogger("minihttp.access").setLevel(logging.WARNING)

=============================================================================
"""

import json
import time
import logging
from dataclasses import asdict, dataclass


logger = logging.getLogger("minihttp.access")


@dataclass
class RequestLog:
    """Structured log entry for one request/response cycle."""

    request_id: str
    client_ip: str
    method: str
    path: str
    user_agent: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["duration_ms"] = round(self.duration_ms, 2)
        return data

    def to_text(self) -> str:
        """Apache combined-log style line."""
        return (
            f'{self.client_ip} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


def log_request(entry: RequestLog, log_format: str = "text", level: int = logging.INFO):
    """Emit an access log record in the configured format."""
    if log_format == "json":
        logger.log(level, json.dumps(entry.to_dict()))
    else:
        logger.log(level, entry.to_text())


def now_timestamp() -> str:
    return time.strftime("%d/%b/%Y:%H:%M:%S %z")
