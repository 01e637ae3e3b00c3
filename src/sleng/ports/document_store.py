"""Document store interface."""

from typing import Protocol

from sleng.core.document import Document


class DocumentStore(Protocol):
    """Interface for loading and saving the whole dictionary document."""

    def load(self) -> Document:
        """Load the document. Returns the default empty document on any failure."""
        ...

    def save(self, doc: Document) -> bool:
        """Persist the document. Returns False if the write failed."""
        ...
