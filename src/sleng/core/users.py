"""Single-slot user account logic - no I/O dependencies.

Passwords are stored and compared in clear text.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import (
    AlreadyRegisteredError,
    InvalidCredentialsError,
    NotRegisteredError,
    ValidationError,
)

if TYPE_CHECKING:
    from .document import Document

MIN_PASSWORD_LENGTH = 4


@dataclass
class User:
    """The registered user. An empty username means nobody has registered."""

    username: str = ""
    password: str = ""

    @property
    def is_registered(self) -> bool:
        return self.username != ""

    def public(self) -> dict:
        """Externally visible fields (password withheld)."""
        return {"username": self.username}

    def to_dict(self) -> dict:
        return {"username": self.username, "password": self.password}

    @classmethod
    def from_dict(cls, data: dict | None) -> "User":
        """Create User from its stored shape. Raises ValueError on a wrong shape."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"user must be an object, got {type(data).__name__}")
        username = data.get("username") or ""
        password = data.get("password") or ""
        if not isinstance(username, str) or not isinstance(password, str):
            raise ValueError("user fields must be strings")
        return cls(username=username, password=password)


def get_user(doc: "Document") -> User | None:
    """Return the registered user, or None if nobody has registered."""
    if not doc.user.is_registered:
        return None
    return doc.user


def register(doc: "Document", username: str, password: str) -> User:
    """
    Register the single user.

    A second registration always fails with AlreadyRegisteredError,
    regardless of the credentials supplied.
    """
    if doc.user.is_registered:
        raise AlreadyRegisteredError("A user is already registered")

    if not username.strip() or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Username must not be empty and password must be at least "
            f"{MIN_PASSWORD_LENGTH} characters"
        )

    doc.user = User(username=username, password=password)
    return doc.user


def login(doc: "Document", username: str, password: str) -> str:
    """Check credentials against the stored user. Returns the username."""
    if not doc.user.is_registered:
        raise NotRegisteredError("Register first")

    if username != doc.user.username or password != doc.user.password:
        raise InvalidCredentialsError("Invalid username or password")

    return doc.user.username
