"""Ports - interfaces/protocols for external dependencies."""

from .document_store import DocumentStore

__all__ = [
    "DocumentStore",
]
