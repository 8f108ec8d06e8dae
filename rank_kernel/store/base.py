"""
Entity Store — repository contract consumed by the ordering engine.

Behavioral Contract:
- load_scope returns the scope ascending by rank (ties broken by id)
- persist / persist_all are durable before they return
- delete cascades: removing a list removes every item scoped to it
- Storage failures surface as StoreUnavailable; the engine never retries them
"""

from typing import Iterable, List, Optional
from uuid import uuid4

from rank_kernel.models.entity import DEFAULT_STEP, BoardSnapshot, OrderedEntity


class EntityStore:
    """Base repository. Subclasses provide the storage primitives."""

    def load_scope(self, scope: Optional[str]) -> List[OrderedEntity]:
        raise NotImplementedError

    def get(self, entity_id: str) -> Optional[OrderedEntity]:
        raise NotImplementedError

    def persist_all(self, entities: Iterable[OrderedEntity]) -> None:
        raise NotImplementedError

    def delete(self, entity_id: str) -> bool:
        raise NotImplementedError

    def persist(self, entity: OrderedEntity) -> None:
        self.persist_all([entity])

    def generate_id(self) -> str:
        return str(uuid4())

    def next_rank(self, scope: Optional[str], step: int = DEFAULT_STEP) -> int:
        """Rank that appends after the current last entity of ``scope``."""
        entities = self.load_scope(scope)
        if not entities:
            return step
        return max(e.rank for e in entities) + step

    def snapshot(self) -> BoardSnapshot:
        lists = self.load_scope(None)
        items: List[OrderedEntity] = []
        for board_list in lists:
            items.extend(self.load_scope(board_list.id))
        return BoardSnapshot(lists=lists, items=items)


def sort_scope(entities: Iterable[OrderedEntity]) -> List[OrderedEntity]:
    return sorted(entities, key=lambda e: (e.rank, e.id))
