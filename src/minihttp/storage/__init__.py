"""
Filesystem-backed storage for the /files routes.
"""

from .file_store import FileStore, FileStoreError, NotFound, StorageError

__all__ = ["FileStore", "FileStoreError", "NotFound", "StorageError"]
