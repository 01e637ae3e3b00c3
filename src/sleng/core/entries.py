"""Pure entry domain logic - no I/O dependencies."""

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import DuplicateError, RangeError, ValidationError

if TYPE_CHECKING:
    from .document import Document

POSITION_RE = re.compile(r"(0|[1-9][0-9]*)")


@dataclass
class Entry:
    """A single slang term."""

    word: str
    meaning: str
    example: str = ""
    origin: str = ""
    synonyms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to the stored/wire shape. Empty origin and synonyms are omitted."""
        data = {"word": self.word, "meaning": self.meaning, "example": self.example}
        if self.origin:
            data["origin"] = self.origin
        if self.synonyms:
            data["synonyms"] = list(self.synonyms)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        """Create Entry from its stored shape. Raises ValueError on a wrong shape."""
        if not isinstance(data, dict):
            raise ValueError(f"entry must be an object, got {type(data).__name__}")

        fields = {}
        for key in ("word", "meaning", "example", "origin"):
            value = data.get(key) or ""
            if not isinstance(value, str):
                raise ValueError(f"entry field '{key}' must be a string")
            fields[key] = value

        synonyms = data.get("synonyms") or []
        if not isinstance(synonyms, list) or not all(isinstance(s, str) for s in synonyms):
            raise ValueError("entry field 'synonyms' must be a list of strings")

        return cls(synonyms=list(synonyms), **fields)

    def matches(self, word: str) -> bool:
        """Case-insensitive word comparison."""
        return self.word.casefold() == word.casefold()


def parse_synonyms(text: str) -> list[str]:
    """Split comma-separated synonyms, trimming each piece and dropping blanks."""
    return [s.strip() for s in text.split(",") if s.strip()]


def parse_position(text: str) -> int | None:
    """Parse a strict decimal position: ASCII digits only, no sign, no leading zeros."""
    if not POSITION_RE.fullmatch(text):
        return None
    return int(text)


def list_entries(doc: "Document") -> list[Entry]:
    """Entries in stored order. Pure function - no I/O."""
    return list(doc.entries)


def find_entry(doc: "Document", word: str) -> Entry | None:
    """Find an entry by word, ignoring case."""
    for entry in doc.entries:
        if entry.matches(word):
            return entry
    return None


def add_entry(doc: "Document", candidate: Entry) -> Entry:
    """
    Append a new entry to the document.

    Raises ValidationError when word or meaning is blank and DuplicateError
    when the word already exists (case-insensitive). Pure function - the
    caller persists the document afterwards.
    """
    if not candidate.word.strip() or not candidate.meaning.strip():
        raise ValidationError("Word and meaning are required")

    if find_entry(doc, candidate.word) is not None:
        raise DuplicateError(f"Word '{candidate.word}' already exists")

    candidate.synonyms = [s.strip() for s in candidate.synonyms if s.strip()]
    doc.entries.append(candidate)
    return candidate


def delete_at(doc: "Document", position: int) -> Entry:
    """
    Remove the entry at a 1-based position and return it.

    Later entries shift left by one. Raises RangeError outside [1, count].
    """
    count = len(doc.entries)
    if position < 1 or position > count:
        raise RangeError(position, count)
    return doc.entries.pop(position - 1)
