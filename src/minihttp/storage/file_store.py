"""
=============================================================================
FILE STORE ADAPTER
=============================================================================

Backs the /files/<name> routes with plain files under a base directory.

    FileStore("/tmp/data")
        .write("notes.txt", b"hi")   → creates/truncates /tmp/data/notes.txt
        .read("notes.txt")           → b"hi"
        .read("missing.txt")         → raises NotFound

=============================================================================
PATH RESOLUTION
=============================================================================

The file path is os.path.join(base_dir, name) and NOTHING more:

    - no normalization ("a/../b" stays as-is)
    - no traversal check ("../../etc/passwd" is NOT rejected)
    - no symlink resolution

Serving files from a directory you do not control is unsafe with this
adapter.

=============================================================================
CONCURRENCY
=============================================================================

There is no locking. Two connections POSTing to the same name race, and
whichever write lands last wins. No ordering between them is promised.

=============================================================================
"""

import logging
import os


logger = logging.getLogger(__name__)


class FileStoreError(Exception):
    """Base class for file store failures."""


class NotFound(FileStoreError):
    """The requested file does not exist. An expected, recoverable condition."""


class StorageError(FileStoreError):
    """Any other filesystem failure: permissions, is-a-directory, disk full..."""


class FileStore:
    """
    Reads and writes named files beneath a fixed base directory.

    The base directory is given at construction, so each instance is
    self-contained and two stores never share state.
    """

    def __init__(self, base_dir: str):
        """
        Args:
            base_dir: Root directory for all file operations. Not checked
                      for existence here; a missing directory shows up as
                      NotFound on read and StorageError on write.
        """
        self.base_dir = base_dir

    def path_for(self, name: str) -> str:
        """Filesystem path for a file name (no normalization)."""
        return os.path.join(self.base_dir, name)

    def read(self, name: str) -> bytes:
        """
        Read a whole file.

        Raises:
            NotFound: The file does not exist.
            StorageError: Any other I/O failure.
        """
        path = self.path_for(name)
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise NotFound(f"file not found: {name}") from e
        except (OSError, ValueError) as e:
            # ValueError: open() rejects names with an embedded NUL byte
            raise StorageError(f"reading file {path!r}: {e}") from e

    def write(self, name: str, data: bytes) -> None:
        """
        Create or truncate a file and write all of data into it.

        Raises:
            StorageError: Any I/O failure, including a missing base directory.
        """
        path = self.path_for(name)
        try:
            with open(path, "wb") as f:
                f.write(data)
        except (OSError, ValueError) as e:
            raise StorageError(f"writing file {path!r}: {e}") from e

        logger.debug(f"Wrote {len(data)} bytes to {path}")
