"""
Move Orchestrator — the end-to-end ordering protocol.

Composes NeighborResolver, the rank allocator and the reindex engine:

    resolve neighbors -> mid_rank -> (Collision?) reindex scope -> resolve -> mid_rank

Behavioral Contract:
- Reindexes only the target scope, and at most once per move
- A collision on the freshly reindexed scope is an internal fault (RankCollision)
- Every mutated entity gets version + 1 and a fresh updated_at
- The moved entity and any reindexed siblings are written in one persist_all
- Leaves the old scope's gap alone when an item changes lists
"""

import logging
from typing import List, Optional

from rank_kernel.models.config import RankingConfig
from rank_kernel.models.entity import EntityKind, OrderedEntity
from rank_kernel.models.position import Collision, Position
from rank_kernel.ordering.errors import (
    EntityNotFound,
    InvalidMove,
    RankCollision,
    ScopeNotFound,
    VersionConflict,
)
from rank_kernel.ordering.resolver import NeighborResolver, neighbors_in
from rank_kernel.ranking.allocator import mid_rank
from rank_kernel.ranking.reindex import reindex
from rank_kernel.store.base import EntityStore

logger = logging.getLogger(__name__)


class MoveOrchestrator:
    """Creates, edits, moves and deletes ordered entities against one store."""

    def __init__(self, store: EntityStore, config: Optional[RankingConfig] = None):
        self.store = store
        self.config = config or RankingConfig()
        self.resolver = NeighborResolver(store)

    @property
    def step(self) -> int:
        return self.config.step

    # --- Lookups ---

    def _require(self, entity_id: str) -> OrderedEntity:
        entity = self.store.get(entity_id)
        if entity is None:
            raise EntityNotFound(entity_id)
        return entity

    def _require_scope(self, kind: EntityKind, scope: Optional[str]) -> None:
        """Lists live in the global scope; items need an existing parent list."""
        if kind == EntityKind.LIST:
            if scope is not None:
                raise InvalidMove("Lists cannot be placed inside another list")
            return
        if scope is None:
            raise InvalidMove("Items must belong to a list")
        parent = self.store.get(scope)
        if parent is None or parent.kind != EntityKind.LIST:
            raise ScopeNotFound(scope)

    @staticmethod
    def _check_version(entity: OrderedEntity, expected_version: Optional[int]) -> None:
        if expected_version is not None and expected_version != entity.version:
            raise VersionConflict(entity.id, expected_version, entity.version)

    def list_scope(self, scope: Optional[str]) -> List[OrderedEntity]:
        """Entities of ``scope`` ascending by rank; ScopeNotFound for a missing list."""
        if scope is not None:
            self._require_scope(EntityKind.ITEM, scope)
        return self.store.load_scope(scope)

    # --- Mutations ---

    def create_entity(
        self,
        kind: EntityKind,
        scope: Optional[str],
        title: str,
        description: Optional[str] = None,
    ) -> OrderedEntity:
        """Create an entity appended at the end of its scope."""
        self._require_scope(kind, scope)
        entity = OrderedEntity(
            id=self.store.generate_id(),
            kind=kind,
            scope=scope,
            rank=self.store.next_rank(scope, self.step),
            title=title,
            description=description,
        )
        self.store.persist(entity)
        logger.info(
            "Created %s %s in scope=%s rank=%s", kind.value, entity.id, scope, entity.rank
        )
        return entity

    def update_entity(
        self,
        entity_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> OrderedEntity:
        """Edit title/description in place."""
        entity = self._require(entity_id)
        self._check_version(entity, expected_version)
        changes = {}
        if title:
            changes["title"] = title
        if description is not None:
            changes["description"] = description
        updated = entity.touched(**changes)
        self.store.persist(updated)
        return updated

    def move_entity(
        self,
        entity_id: str,
        target_scope: Optional[str],
        position: Optional[Position] = None,
        expected_version: Optional[int] = None,
    ) -> OrderedEntity:
        """Move an entity to ``position`` within ``target_scope``."""
        position = position or Position.at_end()
        entity = self._require(entity_id)
        self._check_version(entity, expected_version)
        self._require_scope(entity.kind, target_scope)

        neighbors = self.resolver.get_neighbors(target_scope, position, exclude_id=entity.id)
        allocation = mid_rank(neighbors.left_rank, neighbors.right_rank, self.step)

        reindexed: List[OrderedEntity] = []
        if isinstance(allocation, Collision):
            reindexed = self._reindex_scope(target_scope, exclude_id=entity.id)
            neighbors = neighbors_in(reindexed, position)
            allocation = mid_rank(neighbors.left_rank, neighbors.right_rank, self.step)
            if isinstance(allocation, Collision):
                raise RankCollision(
                    f"Collision between {allocation.left_rank} and "
                    f"{allocation.right_rank} after reindexing scope {target_scope}"
                )

        moved = entity.touched(scope=target_scope, rank=allocation.rank)
        self.store.persist_all([e for e in reindexed if e.id != entity.id] + [moved])
        logger.info(
            "Moved %s %s scope=%s -> %s rank=%s -> %s",
            entity.kind.value,
            entity.id,
            entity.scope,
            target_scope,
            entity.rank,
            moved.rank,
        )
        return moved

    def _reindex_scope(
        self, scope: Optional[str], exclude_id: Optional[str] = None
    ) -> List[OrderedEntity]:
        """
        Renumber ``scope`` with evenly spaced ranks.

        Returns the scope in order with the moved entity left out; entities
        whose rank changed carry a bumped version. Nothing is written here.
        """
        current = [e for e in self.store.load_scope(scope) if e.id != exclude_id]
        renumbered = reindex(current, self.step)
        result = [
            fresh.touched() if fresh.rank != old.rank else fresh
            for old, fresh in zip(current, renumbered)
        ]
        logger.info(
            "Reindexed scope=%s entities=%d step=%d", scope, len(result), self.step
        )
        return result

    def delete_entity(self, entity_id: str, expected_version: Optional[int] = None) -> None:
        """Delete an entity; the store removes a list's items with it."""
        entity = self._require(entity_id)
        self._check_version(entity, expected_version)
        self.store.delete(entity_id)
        logger.info("Deleted %s %s", entity.kind.value, entity_id)
