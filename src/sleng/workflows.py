"""Shared workflow layer between the HTTP API and the interactive session.

Each function loads the whole document, applies one core operation and,
on success, saves the document again. Two workflows running at the same
time are not isolated from each other: the later save wins.
"""

import logging

from .adapters.file_store import FileDocumentStore
from .config import Config
from .core import entries as entry_ops
from .core import users as user_ops
from .core.entries import Entry
from .core.users import User
from .ports import DocumentStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> FileDocumentStore:
    """Build the document store for the configured data file."""
    return FileDocumentStore(config.data_path)


def _persist(store: DocumentStore, doc) -> None:
    if not store.save(doc):
        logger.warning("Change applied but could not be saved")


def list_entries(store: DocumentStore) -> list[Entry]:
    """All entries in stored order."""
    return entry_ops.list_entries(store.load())


def add_entry(store: DocumentStore, entry: Entry) -> Entry:
    """Append an entry and save. Raises ValidationError or DuplicateError."""
    doc = store.load()
    added = entry_ops.add_entry(doc, entry)
    _persist(store, doc)
    logger.info(f"Added entry '{added.word}'")
    return added


def delete_entry(store: DocumentStore, position: int) -> Entry:
    """Delete the entry at a 1-based position and save. Raises RangeError."""
    doc = store.load()
    removed = entry_ops.delete_at(doc, position)
    _persist(store, doc)
    logger.info(f"Deleted entry {position} '{removed.word}'")
    return removed


def current_user(store: DocumentStore) -> User | None:
    """The registered user, or None."""
    return user_ops.get_user(store.load())


def register_user(store: DocumentStore, username: str, password: str) -> User:
    """Register the single user and save."""
    doc = store.load()
    user = user_ops.register(doc, username, password)
    _persist(store, doc)
    logger.info(f"Registered user '{user.username}'")
    return user


def login_user(store: DocumentStore, username: str, password: str) -> str:
    """Check credentials. Nothing is saved."""
    return user_ops.login(store.load(), username, password)


def entry_count(store: DocumentStore) -> int:
    return len(store.load().entries)
