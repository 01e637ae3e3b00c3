"""Functional core - pure business logic with no I/O."""

from .entries import (
    Entry,
    add_entry,
    delete_at,
    find_entry,
    list_entries,
    parse_position,
    parse_synonyms,
)
from .users import User, get_user, login, register
from .document import Document
from .errors import (
    SlangError,
    ValidationError,
    DuplicateError,
    RangeError,
    AlreadyRegisteredError,
    NotRegisteredError,
    InvalidCredentialsError,
    PersistenceError,
)

__all__ = [
    # Entries
    "Entry",
    "add_entry",
    "delete_at",
    "find_entry",
    "list_entries",
    "parse_position",
    "parse_synonyms",
    # Users
    "User",
    "get_user",
    "login",
    "register",
    # Document
    "Document",
    # Errors
    "SlangError",
    "ValidationError",
    "DuplicateError",
    "RangeError",
    "AlreadyRegisteredError",
    "NotRegisteredError",
    "InvalidCredentialsError",
    "PersistenceError",
]
