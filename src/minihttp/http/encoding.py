"""
=============================================================================
CONTENT NEGOTIATION (gzip)
=============================================================================

The client advertises the encodings it understands:

    Accept-Encoding: deflate, gzip, br

If "gzip" is one of them, the /echo route compresses its body and adds:

    Content-Encoding: gzip

=============================================================================
MATCHING RULES (deliberately strict)
=============================================================================

    "gzip"              → yes
    "br, gzip"          → yes
    "gzip;q=1.0"        → no   (no q-value parsing)
    "GZIP"              → no   (case-sensitive)
    "*"                 → no   (no wildcard)
    "br,gzip"           → no   (tokens are split on ", " exactly)
    "gzip-ish"          → no   (exact token match only)

=============================================================================
"""

import gzip

from .headers import Headers


ACCEPT_ENCODING = "Accept-Encoding"
ENCODING_GZIP = "gzip"

# Balanced speed/ratio, same as the stdlib's usual choice for web servers
DEFAULT_COMPRESS_LEVEL = 6


def accepts_gzip(headers: Headers) -> bool:
    """
    Check whether the client accepts gzip-encoded responses.

    Args:
        headers: The request headers.

    Returns:
        True only if Accept-Encoding lists an exact "gzip" token.
    """
    accept_encoding = headers.get(ACCEPT_ENCODING)
    if not accept_encoding:
        return False
    return ENCODING_GZIP in accept_encoding.split(", ")


def gzip_body(data: bytes, level: int = DEFAULT_COMPRESS_LEVEL) -> bytes:
    """Compress a response body into the gzip container format."""
    return gzip.compress(data, compresslevel=level)
