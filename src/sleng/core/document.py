"""The persisted document: user + version + ordered entries."""

from dataclasses import dataclass, field

from .entries import Entry
from .users import User

DEFAULT_VERSION = "1.0"


@dataclass
class Document:
    """The single unit of persistence."""

    user: User = field(default_factory=User)
    version: str = DEFAULT_VERSION
    entries: list[Entry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict(),
            "version": self.version,
            "entries": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "Document":
        """
        Build a Document from parsed JSON.

        Missing keys take their defaults; values of the wrong type raise ValueError.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"document must be an object, got {type(data).__name__}")

        version = data.get("version") or DEFAULT_VERSION
        if not isinstance(version, str):
            raise ValueError("document field 'version' must be a string")

        entries = data.get("entries") or []
        if not isinstance(entries, list):
            raise ValueError("document field 'entries' must be a list")

        return cls(
            user=User.from_dict(data.get("user")),
            version=version,
            entries=[Entry.from_dict(e) for e in entries],
        )
