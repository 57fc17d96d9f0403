"""
=============================================================================
HTTP HEADER CONTAINER
=============================================================================

HTTP header names are case-insensitive (RFC 7230 section 3.2):

    Content-Type: text/plain
    content-type: text/plain        ← the SAME header
    CONTENT-TYPE: text/plain

Instead of remembering to call .lower() at every call site, the Headers
class normalizes the key on every read AND every write. Nothing outside
this module ever sees a raw, un-normalized key.

    headers = Headers()
    headers.set("Content-Type", "text/plain")
    headers.get("content-type")     → "text/plain"
    headers.get("X-Missing")        → ""          (never raises)

    headers.set("CONTENT-TYPE", "application/octet-stream")
    headers.get("Content-Type")     → "application/octet-stream"  (last write wins)

The name given to the most recent set() is remembered for display only,
so responses go out as "Content-Type: ..." rather than "content-type: ...".
Lookups never depend on it.

=============================================================================
"""

from typing import Dict, Iterator, Mapping, Optional, Tuple


class Headers:
    """
    Case-insensitive mapping of header name → header value.

    Absent names read as the empty string. There are no error conditions.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        # lower-cased name → (display name, value)
        self._items: Dict[str, Tuple[str, str]] = {}
        if initial:
            for name, value in initial.items():
                self.set(name, value)

    def get(self, name: str) -> str:
        """Get a header value, or "" if the header was never set."""
        entry = self._items.get(name.lower())
        return entry[1] if entry is not None else ""

    def set(self, name: str, value: str) -> "Headers":
        """
        Set a header, replacing any existing value for the same name.

        Returns self for method chaining:
            headers.set("Content-Type", "text/plain").set("Content-Length", "3")
        """
        self._items[name.lower()] = (name, value)
        return self

    def items(self) -> Iterator[Tuple[str, str]]:
        """Yield (display name, value) pairs, one per distinct header."""
        for display_name, value in self._items.values():
            yield display_name, value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return {k: v for k, (_, v) in self._items.items()} == {
            k: v for k, (_, v) in other._items.items()
        }

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"
