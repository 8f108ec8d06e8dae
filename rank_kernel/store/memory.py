"""
In-memory entity store.

Used by tests and by the default application when no database path is
configured. Production would use the SQLite store or a real database.
"""

from typing import Dict, Iterable, List, Optional

from rank_kernel.models.entity import EntityKind, OrderedEntity
from rank_kernel.store.base import EntityStore, sort_scope


class InMemoryStore(EntityStore):
    """Dict-backed store keyed by entity id."""

    def __init__(self):
        self._entities: Dict[str, OrderedEntity] = {}

    def load_scope(self, scope: Optional[str]) -> List[OrderedEntity]:
        """All entities sharing ``scope``, ascending by rank."""
        return sort_scope(
            e.model_copy() for e in self._entities.values() if e.scope == scope
        )

    def get(self, entity_id: str) -> Optional[OrderedEntity]:
        entity = self._entities.get(entity_id)
        return entity.model_copy() if entity else None

    def persist_all(self, entities: Iterable[OrderedEntity]) -> None:
        for entity in entities:
            self._entities[entity.id] = entity.model_copy()

    def delete(self, entity_id: str) -> bool:
        """Remove an entity; removing a list also removes its items."""
        entity = self._entities.pop(entity_id, None)
        if entity is None:
            return False
        if entity.kind == EntityKind.LIST:
            for item_id in [e.id for e in self._entities.values() if e.scope == entity_id]:
                del self._entities[item_id]
        return True

    def count(self) -> int:
        return len(self._entities)
