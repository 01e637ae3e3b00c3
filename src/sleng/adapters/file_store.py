"""File-based document storage adapter."""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sleng.core.document import Document
from sleng.core.errors import PersistenceError

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


class ReadWriteLock:
    """
    Many readers or one writer.

    Readers share the lock; a writer waits until no reader or writer holds it.
    Once a writer is waiting, new readers queue behind it.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class FileDocumentStore:
    """
    JSON file document storage.

    Implements DocumentStore protocol. The whole document is read on every
    load and rewritten on every save; one ReadWriteLock guards the file.
    """

    def __init__(self, path: Path | str, lock: ReadWriteLock | None = None):
        self.path = Path(path).expanduser()
        self.lock = lock or ReadWriteLock()

    def load(self) -> Document:
        """Load the document. Returns the default empty document on any failure."""
        with self.lock.read_locked():
            if not self.path.exists():
                logger.info(f"No document at {self.path}, starting empty")
                return Document()
            try:
                return self._read()
            except PersistenceError as e:
                logger.error(f"Failed to load {self.path}: {e}")
                return Document()

    def save(self, doc: Document) -> bool:
        """Persist the document. Logs and returns False if the write failed."""
        with self.lock.write_locked():
            try:
                self._write(doc)
            except PersistenceError as e:
                logger.error(f"Failed to save {self.path}: {e}")
                return False
        logger.debug(f"Saved {len(doc.entries)} entries to {self.path}")
        return True

    def _read(self) -> Document:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"read error: {e}") from e

        if not text.strip():
            return Document()

        try:
            return Document.from_dict(json.loads(text))
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            raise PersistenceError(f"parse error: {e}") from e

    def _write(self, doc: Document) -> None:
        try:
            payload = json.dumps(doc.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"serialization error: {e}") from e

        # Write to a sibling temp file, then swap it in so readers never see a partial file.
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(payload)
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"write error: {e}") from e
