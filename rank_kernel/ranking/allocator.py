"""
Rank Allocator — sparse integer ranks between two neighbors.

Behavioral Contract:
- Pure numeric function: never mutates inputs, never touches storage
- Returns Allocated(rank) when an integer fits strictly between the neighbors
- Returns Collision when the gap is exhausted; the caller decides to reindex
"""

from typing import List, Optional

from rank_kernel.models.entity import DEFAULT_STEP
from rank_kernel.models.position import Allocated, Allocation, Collision


def initial_ranks(n: int, step: int = DEFAULT_STEP) -> List[int]:
    """Evenly spaced ranks for a fresh scope of ``n`` entities."""
    return [(i + 1) * step for i in range(n)]


def mid_rank(
    left: Optional[int],
    right: Optional[int],
    step: int = DEFAULT_STEP,
) -> Allocation:
    """Compute a rank strictly between ``left`` and ``right``."""
    if left is None and right is None:
        return Allocated(rank=step)

    if left is None:
        # Insert at head
        rank = max((right - 1) // 2, 1)
        if rank >= right:
            return Collision(left_rank=None, right_rank=right)
        return Allocated(rank=rank)

    if right is None:
        # Insert at tail
        return Allocated(rank=left + step)

    mid = (left + right) // 2
    if left < mid < right:
        return Allocated(rank=mid)
    return Collision(left_rank=left, right_rank=right)
