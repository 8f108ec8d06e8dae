"""Tests for the entity stores."""

import sqlite3

import pytest

from rank_kernel.models.entity import EntityKind, OrderedEntity
from rank_kernel.ordering.errors import StoreUnavailable
from rank_kernel.store.memory import InMemoryStore
from rank_kernel.store.sqlite import SQLiteStore


def _make_list(entity_id: str, rank: int) -> OrderedEntity:
    return OrderedEntity(id=entity_id, kind=EntityKind.LIST, rank=rank, title=entity_id)


def _make_item(entity_id: str, scope: str, rank: int) -> OrderedEntity:
    return OrderedEntity(
        id=entity_id, kind=EntityKind.ITEM, scope=scope, rank=rank, title=entity_id
    )


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    if request.param == "memory":
        yield InMemoryStore()
    else:
        s = SQLiteStore(db_path=":memory:")
        yield s
        s.close()


class TestEntityStore:
    def test_persist_and_get(self, store):
        entity = _make_list("a", 1024)
        store.persist(entity)

        retrieved = store.get("a")
        assert retrieved == entity

    def test_get_missing(self, store):
        assert store.get("nope") is None

    def test_load_scope_sorted_by_rank(self, store):
        store.persist_all([
            _make_list("c", 3072),
            _make_list("a", 1024),
            _make_list("b", 2048),
            _make_item("i", "a", 1),
        ])
        assert [e.id for e in store.load_scope(None)] == ["a", "b", "c"]
        assert [e.id for e in store.load_scope("a")] == ["i"]
        assert store.load_scope("b") == []

    def test_persist_overwrites(self, store):
        store.persist(_make_list("a", 1024))
        store.persist(_make_list("a", 1024).touched(rank=5))

        retrieved = store.get("a")
        assert retrieved.rank == 5
        assert retrieved.version == 2
        assert store.count() == 1

    def test_scope_change_moves_entity(self, store):
        store.persist_all([_make_list("a", 1), _make_list("b", 2), _make_item("i", "a", 1)])
        store.persist(store.get("i").touched(scope="b"))

        assert store.load_scope("a") == []
        assert [e.id for e in store.load_scope("b")] == ["i"]

    def test_returned_entities_are_copies(self, store):
        store.persist(_make_list("a", 1024))
        loaded = store.get("a")
        loaded.rank = 1
        assert store.get("a").rank == 1024

    def test_delete_item(self, store):
        store.persist_all([_make_list("a", 1), _make_item("i", "a", 1)])
        assert store.delete("i") is True
        assert store.get("i") is None
        assert store.get("a") is not None

    def test_delete_list_cascades(self, store):
        store.persist_all([
            _make_list("a", 1),
            _make_list("b", 2),
            _make_item("i1", "a", 1),
            _make_item("i2", "a", 2),
            _make_item("j1", "b", 1),
        ])
        assert store.delete("a") is True
        assert store.get("i1") is None
        assert store.get("i2") is None
        assert store.get("j1") is not None
        assert store.count() == 2

    def test_delete_missing(self, store):
        assert store.delete("nope") is False

    def test_next_rank(self, store):
        assert store.next_rank(None) == 1024
        store.persist_all([_make_list("a", 1024), _make_list("b", 4000)])
        assert store.next_rank(None) == 5024
        assert store.next_rank(None, step=10) == 4010
        assert store.next_rank("a") == 1024

    def test_generate_id_unique(self, store):
        assert store.generate_id() != store.generate_id()

    def test_snapshot(self, store):
        store.persist_all([
            _make_list("b", 2),
            _make_list("a", 1),
            _make_item("x", "b", 5),
            _make_item("y", "a", 9),
            _make_item("z", "a", 3),
        ])
        snapshot = store.snapshot()
        assert [e.id for e in snapshot.lists] == ["a", "b"]
        assert [e.id for e in snapshot.items] == ["z", "y", "x"]


class TestSQLiteStore:
    def test_survives_reopen(self, tmp_path):
        db_path = str(tmp_path / "board.db")
        store = SQLiteStore(db_path=db_path)
        store.persist_all([_make_list("a", 1024), _make_item("i", "a", 1024)])
        store.close()

        reopened = SQLiteStore(db_path=db_path)
        assert reopened.get("i").scope == "a"
        assert reopened.count() == 2
        reopened.close()

    def test_errors_become_store_unavailable(self):
        store = SQLiteStore(db_path=":memory:")
        store.close()
        with pytest.raises(StoreUnavailable) as exc_info:
            store.load_scope(None)
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_unopenable_path(self, tmp_path):
        with pytest.raises(StoreUnavailable):
            SQLiteStore(db_path=str(tmp_path / "missing" / "dir" / "board.db"))
