"""Adapters - I/O implementations of ports."""

from .file_store import FileDocumentStore, ReadWriteLock

__all__ = [
    "FileDocumentStore",
    "ReadWriteLock",
]
