"""
SQLite entity store.

Behavioral Contract:
- One row per entity; the full entity is kept as JSON next to indexed columns
- persist_all writes every entity in a single transaction
- Deleting a list removes its items in the same transaction
- sqlite3 errors are logged and re-raised as StoreUnavailable
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from rank_kernel.models.entity import EntityKind, OrderedEntity
from rank_kernel.ordering.errors import StoreUnavailable
from rank_kernel.store.base import EntityStore

logger = logging.getLogger(__name__)


class SQLiteStore(EntityStore):
    """
    Durable entity store.
    Prototype: SQLite. Production: PostgreSQL behind the same interface.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        try:
            self._conn = sqlite3.connect(db_path, check_same_thread=False)
        except sqlite3.Error as e:
            logger.error("Failed to open entity store %s", db_path, exc_info=True)
            raise StoreUnavailable(f"Cannot open {db_path}: {e}") from e
        self._conn.row_factory = sqlite3.Row
        self._init_schema()

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as e:
            logger.error("Entity store %s failed on %s", operation, self.db_path, exc_info=True)
            raise StoreUnavailable(f"{operation} failed: {e}") from e

    def _init_schema(self) -> None:
        """Create the entity table if it doesn't exist."""
        with self._guard("init_schema"):
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS entity (
                    id TEXT PRIMARY KEY,
                    kind TEXT NOT NULL,
                    scope TEXT,
                    rank INTEGER NOT NULL,
                    version INTEGER NOT NULL,
                    record_json TEXT NOT NULL
                )
            """)
            self._conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_entity_scope_rank ON entity(scope, rank)
            """)
            self._conn.commit()

    def _deserialize(self, row: sqlite3.Row) -> OrderedEntity:
        return OrderedEntity.model_validate_json(row["record_json"])

    def load_scope(self, scope: Optional[str]) -> List[OrderedEntity]:
        """All entities sharing ``scope``, ascending by rank."""
        with self._guard("load_scope"):
            rows = self._conn.execute(
                "SELECT record_json FROM entity WHERE scope IS ? ORDER BY rank, id",
                (scope,),
            ).fetchall()
        return [self._deserialize(r) for r in rows]

    def get(self, entity_id: str) -> Optional[OrderedEntity]:
        with self._guard("get"):
            row = self._conn.execute(
                "SELECT record_json FROM entity WHERE id = ?", (entity_id,)
            ).fetchone()
        return self._deserialize(row) if row else None

    def persist_all(self, entities: Iterable[OrderedEntity]) -> None:
        rows = [
            (
                e.id,
                e.kind.value,
                e.scope,
                e.rank,
                e.version,
                json.dumps(e.model_dump(mode="json")),
            )
            for e in entities
        ]
        with self._guard("persist_all"):
            with self._conn:
                self._conn.executemany(
                    """
                    INSERT INTO entity (id, kind, scope, rank, version, record_json)
                    VALUES (?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        kind = excluded.kind,
                        scope = excluded.scope,
                        rank = excluded.rank,
                        version = excluded.version,
                        record_json = excluded.record_json
                    """,
                    rows,
                )

    def delete(self, entity_id: str) -> bool:
        """Remove an entity; removing a list also removes its items."""
        with self._guard("delete"):
            with self._conn:
                row = self._conn.execute(
                    "SELECT kind FROM entity WHERE id = ?", (entity_id,)
                ).fetchone()
                if row is None:
                    return False
                if row["kind"] == EntityKind.LIST.value:
                    self._conn.execute("DELETE FROM entity WHERE scope = ?", (entity_id,))
                self._conn.execute("DELETE FROM entity WHERE id = ?", (entity_id,))
        return True

    def count(self) -> int:
        """Total number of stored entities."""
        with self._guard("count"):
            row = self._conn.execute("SELECT COUNT(*) AS cnt FROM entity").fetchone()
        return row["cnt"]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
