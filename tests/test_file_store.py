"""Tests for the JSON file document store."""

import json
import os
import stat
import threading
import time

import pytest

from sleng.adapters.file_store import FileDocumentStore, ReadWriteLock
from sleng.core.document import Document
from sleng.core.entries import Entry
from sleng.core.users import User


@pytest.fixture
def store(tmp_path):
    return FileDocumentStore(tmp_path / "slang.json")


@pytest.fixture
def sample_doc():
    return Document(
        user=User(username="ann", password="secr3t"),
        version="1.0",
        entries=[
            Entry(word="rizz", meaning="charisma"),
            Entry(word="cap", meaning="a lie", example="no cap", origin="AAVE"),
            Entry(word="бомба", meaning="great", synonyms=["огонь", "топ"]),
        ],
    )


class TestLoad:
    def test_missing_file_returns_default(self, store):
        doc = store.load()
        assert doc == Document()
        assert doc.version == "1.0"
        assert doc.entries == []
        assert doc.user.username == ""

    def test_empty_file_returns_default(self, store):
        store.path.write_text("")
        assert store.load() == Document()

    def test_invalid_json_returns_default(self, store, caplog):
        store.path.write_text("{not json")
        assert store.load() == Document()
        assert "Failed to load" in caplog.text

    def test_wrong_shape_returns_default(self, store):
        store.path.write_text(json.dumps({"entries": {"word": "rizz"}}))
        assert store.load() == Document()

    def test_unreadable_path_returns_default(self, tmp_path):
        directory = tmp_path / "dir"
        directory.mkdir()
        assert FileDocumentStore(directory).load() == Document()

    def test_missing_keys_take_defaults(self, store):
        store.path.write_text(json.dumps({"entries": [{"word": "rizz", "meaning": "charisma"}]}))
        doc = store.load()
        assert doc.version == "1.0"
        assert doc.user == User()
        assert doc.entries == [Entry(word="rizz", meaning="charisma")]


class TestSave:
    def test_round_trip(self, store, sample_doc):
        assert store.save(sample_doc) is True
        assert store.load() == sample_doc

    def test_preserves_optional_field_presence(self, store, sample_doc):
        store.save(sample_doc)
        raw = json.loads(store.path.read_text(encoding="utf-8"))
        assert "origin" not in raw["entries"][0]
        assert "synonyms" not in raw["entries"][0]
        assert raw["entries"][1]["origin"] == "AAVE"
        assert raw["entries"][2]["synonyms"] == ["огонь", "топ"]

    def test_indented_human_readable(self, store, sample_doc):
        store.save(sample_doc)
        text = store.path.read_text(encoding="utf-8")
        assert '\n  "version": "1.0"' in text
        assert "бомба" in text

    def test_creates_parent_directory(self, tmp_path, sample_doc):
        store = FileDocumentStore(tmp_path / "nested" / "data" / "slang.json")
        assert store.save(sample_doc) is True
        assert store.load() == sample_doc

    def test_leaves_no_temp_files(self, store, sample_doc):
        store.save(sample_doc)
        store.save(sample_doc)
        assert [p.name for p in store.path.parent.iterdir()] == ["slang.json"]

    def test_write_failure_returns_false(self, tmp_path, sample_doc, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = FileDocumentStore(blocker / "slang.json")
        assert store.save(sample_doc) is False
        assert "Failed to save" in caplog.text

    def test_unencodable_text_returns_false(self, store, sample_doc, caplog):
        store.save(sample_doc)
        before = store.path.read_bytes()

        bad = Document(entries=[Entry(word="a\ud800", meaning="m")])
        assert store.save(bad) is False

        assert "Failed to save" in caplog.text
        assert [p.name for p in store.path.parent.iterdir()] == ["slang.json"]
        assert store.path.read_bytes() == before

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_is_world_readable(self, store, sample_doc):
        store.save(sample_doc)
        assert stat.S_IMODE(store.path.stat().st_mode) == 0o644

    def test_overwrites_wholesale(self, store, sample_doc):
        store.save(sample_doc)
        store.save(Document())
        assert store.load() == Document()


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = threading.Event()
        release = threading.Event()

        def reader():
            with lock.read_locked():
                inside.set()
                release.wait(timeout=5)

        t = threading.Thread(target=reader)
        t.start()
        assert inside.wait(timeout=5)

        entered = threading.Event()

        def second_reader():
            with lock.read_locked():
                entered.set()

        t2 = threading.Thread(target=second_reader)
        t2.start()
        assert entered.wait(timeout=5)

        release.set()
        t.join(timeout=5)
        t2.join(timeout=5)

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        inside = threading.Event()
        release = threading.Event()
        wrote = threading.Event()

        def reader():
            with lock.read_locked():
                inside.set()
                release.wait(timeout=5)

        def writer():
            with lock.write_locked():
                wrote.set()

        t = threading.Thread(target=reader)
        t.start()
        assert inside.wait(timeout=5)

        w = threading.Thread(target=writer)
        w.start()
        assert not wrote.wait(timeout=0.2)

        release.set()
        assert wrote.wait(timeout=5)
        t.join(timeout=5)
        w.join(timeout=5)

    def test_reader_waits_for_writer(self):
        lock = ReadWriteLock()
        inside = threading.Event()
        release = threading.Event()
        read = threading.Event()

        def writer():
            with lock.write_locked():
                inside.set()
                release.wait(timeout=5)

        def reader():
            with lock.read_locked():
                read.set()

        w = threading.Thread(target=writer)
        w.start()
        assert inside.wait(timeout=5)

        r = threading.Thread(target=reader)
        r.start()
        assert not read.wait(timeout=0.2)

        release.set()
        assert read.wait(timeout=5)
        w.join(timeout=5)
        r.join(timeout=5)

    def test_waiting_writer_is_not_starved_by_new_readers(self):
        lock = ReadWriteLock()
        stop = threading.Event()
        wrote = threading.Event()

        def reader():
            while not stop.is_set():
                with lock.read_locked():
                    time.sleep(0.01)

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        time.sleep(0.05)

        def writer():
            with lock.write_locked():
                wrote.set()

        w = threading.Thread(target=writer)
        w.start()
        try:
            assert wrote.wait(timeout=2)
        finally:
            stop.set()
            w.join(timeout=5)
            for t in readers:
                t.join(timeout=5)

    def test_concurrent_saves_and_loads_never_see_partial_document(self, store, sample_doc):
        store.save(sample_doc)
        errors = []

        def save_many():
            for _ in range(20):
                store.save(sample_doc)

        def load_many():
            for _ in range(20):
                if store.load() != sample_doc:
                    errors.append("partial")

        threads = [threading.Thread(target=save_many) for _ in range(2)]
        threads += [threading.Thread(target=load_many) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert errors == []
