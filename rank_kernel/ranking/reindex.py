"""
Reindex Engine — reclaims rank headroom in a single scope.

Only ever applied to one scope at a time so the cost stays proportional to the
scope size, never to the whole store.
"""

from typing import List, Sequence

from rank_kernel.models.entity import DEFAULT_STEP, OrderedEntity


def reindex(
    ordered_entities: Sequence[OrderedEntity],
    step: int = DEFAULT_STEP,
) -> List[OrderedEntity]:
    """
    Assign ``(position + 1) * step`` to each entity in the order given.

    The caller supplies the sequence already sorted by current rank. Returns
    renumbered copies; the inputs are left untouched.
    """
    return [
        entity.model_copy(update={"rank": (idx + 1) * step})
        for idx, entity in enumerate(ordered_entities)
    ]


def needs_reindex(sorted_ranks: Sequence[int]) -> bool:
    """True if any adjacent pair has no integer headroom left (advisory only)."""
    for i in range(1, len(sorted_ranks)):
        if sorted_ranks[i] - sorted_ranks[i - 1] <= 1:
            return True
    return False
