# tests/test_store.py
"""Tests for MemoryStore and JsonFileStore."""

import tempfile
import threading
from pathlib import Path

import pytest

from objectlog import (
    ACLEntry,
    AlreadyExistsError,
    BaseObject,
    JsonFileStore,
    MemoryStore,
    NotFoundError,
    ObjectKind,
)
from objectlog.store import RWLock


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def store():
    return MemoryStore()


def make_object(object_id: str, kind=ObjectKind.RECORD, **fields) -> BaseObject:
    return BaseObject(
        kind=kind,
        id=object_id,
        created_by="user-1",
        acl=[ACLEntry(actor_id="user-1", role="owner")],
        tags=["a"],
        fields=fields or {"name": object_id},
    )


class TestMemoryStore:
    """Tests for the ObjectStore contract."""

    def test_create_and_get(self, store):
        obj = make_object("obj-1")
        store.create(obj)
        assert store.get("obj-1") == obj

    def test_create_duplicate(self, store):
        store.create(make_object("obj-1", name="original"))
        with pytest.raises(AlreadyExistsError):
            store.create(make_object("obj-1", name="impostor"))
        assert store.get("obj-1").fields == {"name": "original"}

    def test_get_missing(self, store):
        with pytest.raises(NotFoundError):
            store.get("nope")

    def test_update(self, store):
        store.create(make_object("obj-1", name="before"))
        store.update(make_object("obj-1", name="after"))
        assert store.get("obj-1").fields == {"name": "after"}

    def test_update_missing(self, store):
        with pytest.raises(NotFoundError):
            store.update(make_object("nope"))
        assert store.count() == 0

    def test_delete(self, store):
        store.create(make_object("obj-1"))
        store.delete("obj-1")
        assert "obj-1" not in store
        with pytest.raises(NotFoundError):
            store.get("obj-1")

    def test_delete_missing(self, store):
        with pytest.raises(NotFoundError):
            store.delete("nope")

    def test_query_by_kind(self, store):
        store.create(make_object("r1"))
        store.create(make_object("t1", kind=ObjectKind.TASK))
        store.create(make_object("r2"))

        records = store.query(ObjectKind.RECORD, {})
        assert [o.id for o in records] == ["r1", "r2"]
        assert [o.id for o in store.query("task")] == ["t1"]
        assert store.query(ObjectKind.MESSAGE) == []

    def test_query_ignores_filters(self, store):
        store.create(make_object("r1", name="x"))
        store.create(make_object("r2", name="y"))
        assert len(store.query(ObjectKind.RECORD, {"name": "x"})) == 2

    def test_count_and_clear(self, store):
        for i in range(3):
            store.create(make_object(f"obj-{i}"))
        assert store.count() == 3
        assert len(store) == 3

        store.clear()
        assert store.count() == 0


class TestIsolation:
    """Values crossing the store boundary are copies."""

    def test_mutating_after_create(self, store):
        obj = make_object("obj-1", name="original")
        store.create(obj)

        obj.fields["name"] = "mutated"
        obj.tags.append("b")
        obj.acl.append(ACLEntry(actor_id="intruder", role="owner"))

        stored = store.get("obj-1")
        assert stored.fields == {"name": "original"}
        assert stored.tags == ["a"]
        assert len(stored.acl) == 1

    def test_mutating_get_result(self, store):
        store.create(make_object("obj-1", name="original"))
        fetched = store.get("obj-1")
        fetched.fields["name"] = "mutated"
        fetched.acl[0].role = "viewer"

        stored = store.get("obj-1")
        assert stored.fields == {"name": "original"}
        assert stored.acl[0].role == "owner"

    def test_mutating_query_result(self, store):
        store.create(make_object("obj-1", name="original"))
        store.query(ObjectKind.RECORD)[0].fields["name"] = "mutated"
        assert store.get("obj-1").fields == {"name": "original"}

    def test_mutating_after_update(self, store):
        store.create(make_object("obj-1", name="v1"))
        obj = make_object("obj-1", name="v2")
        store.update(obj)
        obj.fields["name"] = "v3"
        assert store.get("obj-1").fields == {"name": "v2"}

    def test_nested_fields_isolated(self, store):
        obj = make_object("obj-1", address={"city": "Oslo"})
        store.create(obj)
        obj.fields["address"]["city"] = "Bergen"
        assert store.get("obj-1").fields["address"] == {"city": "Oslo"}


class TestConcurrency:
    """Concurrent access to a shared store."""

    def test_concurrent_creates(self, store):
        threads_count = 8
        per_thread = 50
        errors = []

        def worker(n):
            try:
                for i in range(per_thread):
                    store.create(make_object(f"obj-{n}-{i}"))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert store.count() == threads_count * per_thread

    def test_concurrent_duplicate_creates(self, store):
        results = []
        lock = threading.Lock()

        def worker():
            try:
                store.create(make_object("contested"))
                outcome = "ok"
            except AlreadyExistsError:
                outcome = "exists"
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("ok") == 1
        assert results.count("exists") == 9

    def test_readers_alongside_writer(self, store):
        store.create(make_object("obj-0"))
        stop = threading.Event()
        errors = []

        def reader():
            while not stop.is_set():
                try:
                    store.get("obj-0")
                    store.query(ObjectKind.RECORD)
                except Exception as e:
                    errors.append(e)

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        for i in range(1, 200):
            store.create(make_object(f"obj-{i}"))
        stop.set()
        for t in readers:
            t.join()

        assert errors == []
        assert store.count() == 200


class TestRWLock:
    """Tests for the readers-writer lock."""

    def test_readers_share(self):
        lock = RWLock()
        inside = threading.Barrier(2, timeout=5)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert not inside.broken

    def test_writer_excludes_readers(self):
        lock = RWLock()
        events = []
        writer_in = threading.Event()

        def writer():
            with lock.write():
                writer_in.set()
                events.append("write-start")
                threading.Event().wait(0.05)
                events.append("write-end")

        def reader():
            writer_in.wait()
            with lock.read():
                events.append("read")

        w = threading.Thread(target=writer)
        r = threading.Thread(target=reader)
        w.start()
        r.start()
        w.join()
        r.join()

        assert events == ["write-start", "write-end", "read"]


class TestJsonFileStore:
    """Tests for the persistent store."""

    def test_index_created_on_write(self, temp_dir):
        store = JsonFileStore(temp_dir / "objects")
        store.create(make_object("obj-1"))
        assert (temp_dir / "objects" / "objects.json").exists()

    def test_persistence(self, temp_dir):
        store1 = JsonFileStore(temp_dir)
        obj = make_object("obj-1", name="Sarah")
        store1.create(obj)
        store1.create(make_object("task-1", kind=ObjectKind.TASK))

        store2 = JsonFileStore(temp_dir)
        assert store2.get("obj-1") == obj
        assert store2.count() == 2

    def test_update_and_delete_persist(self, temp_dir):
        store1 = JsonFileStore(temp_dir)
        store1.create(make_object("obj-1", name="v1"))
        store1.create(make_object("obj-2"))
        store1.update(make_object("obj-1", name="v2"))
        store1.delete("obj-2")

        store2 = JsonFileStore(temp_dir)
        assert store2.get("obj-1").fields == {"name": "v2"}
        assert "obj-2" not in store2

    def test_query_order_survives_reload(self, temp_dir):
        store1 = JsonFileStore(temp_dir)
        for name in ["c", "a", "b"]:
            store1.create(make_object(name))

        store2 = JsonFileStore(temp_dir)
        assert [o.id for o in store2.query(ObjectKind.RECORD)] == ["c", "a", "b"]

    def test_corrupt_index_starts_empty(self, temp_dir):
        (temp_dir / "objects.json").write_text("{not json")
        store = JsonFileStore(temp_dir)
        assert store.count() == 0

    @pytest.mark.parametrize("content", [
        '{"objects": 5}',
        '["not", "an", "index"]',
        '{"objects": [{"id": "x", "kind": "task", "tags": 5}]}',
        '{"objects": [{"id": "x", "kind": "task", "acl": "owner"}]}',
    ])
    def test_wrong_shape_index_starts_empty(self, temp_dir, content):
        (temp_dir / "objects.json").write_text(content)
        store = JsonFileStore(temp_dir)
        assert store.count() == 0

    def test_same_contract_errors(self, temp_dir):
        store = JsonFileStore(temp_dir)
        store.create(make_object("obj-1"))
        with pytest.raises(AlreadyExistsError):
            store.create(make_object("obj-1"))
        with pytest.raises(NotFoundError):
            store.delete("missing")
