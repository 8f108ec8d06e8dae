"""Rank Kernel data models."""

from rank_kernel.models.config import RankingConfig
from rank_kernel.models.entity import (
    DEFAULT_STEP,
    BoardSnapshot,
    EntityKind,
    OrderedEntity,
)
from rank_kernel.models.position import (
    Allocated,
    Allocation,
    Collision,
    Neighbors,
    Position,
    PositionKind,
)

__all__ = [
    "DEFAULT_STEP",
    "Allocated",
    "Allocation",
    "BoardSnapshot",
    "Collision",
    "EntityKind",
    "Neighbors",
    "OrderedEntity",
    "Position",
    "PositionKind",
    "RankingConfig",
]
