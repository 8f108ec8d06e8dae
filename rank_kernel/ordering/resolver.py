"""
Neighbor Resolver — turns a target Position into the ranks around the slot.

Reads the target scope once from the store; everything else is computation.
An anchor that is not in the scope degrades to "no anchor", i.e. the entity
is appended at the end, rather than failing the move.
"""

import logging
from typing import List, Optional

from rank_kernel.models.entity import OrderedEntity
from rank_kernel.models.position import Neighbors, Position, PositionKind
from rank_kernel.store.base import EntityStore

logger = logging.getLogger(__name__)


def neighbors_in(
    entities: List[OrderedEntity],
    position: Position,
) -> Neighbors:
    """Resolve ``position`` against a scope already sorted by ascending rank."""
    ranks = [e.rank for e in entities]

    if position.kind == PositionKind.AT_START:
        return Neighbors(right_rank=ranks[0] if ranks else None)

    if position.kind in (PositionKind.BEFORE, PositionKind.AFTER):
        ids = [e.id for e in entities]
        if position.anchor_id in ids:
            i = ids.index(position.anchor_id)
            if position.kind == PositionKind.AFTER:
                # Anchor ends up immediately to the left
                right = ranks[i + 1] if i < len(ranks) - 1 else None
                return Neighbors(left_rank=ranks[i], right_rank=right)
            left = ranks[i - 1] if i > 0 else None
            return Neighbors(left_rank=left, right_rank=ranks[i])
        logger.debug(
            "Anchor %s not in scope, appending at end", position.anchor_id
        )

    return Neighbors(left_rank=ranks[-1] if ranks else None)


class NeighborResolver:
    """Resolves neighbor ranks against the store's current view of a scope."""

    def __init__(self, store: EntityStore):
        self.store = store

    def get_neighbors(
        self,
        scope: Optional[str],
        position: Position,
        exclude_id: Optional[str] = None,
    ) -> Neighbors:
        """
        Load ``scope`` and find the ranks around ``position``.

        ``exclude_id`` (the entity being moved) is left out of the scope so a
        repeated identical move resolves to the same neighbors.
        """
        entities = [e for e in self.store.load_scope(scope) if e.id != exclude_id]
        neighbors = neighbors_in(entities, position)
        logger.debug(
            "get_neighbors scope=%s position=%s ranks=%s -> left=%s right=%s",
            scope,
            position.kind.value,
            [e.rank for e in entities],
            neighbors.left_rank,
            neighbors.right_rank,
        )
        return neighbors
