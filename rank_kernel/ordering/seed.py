"""Demo board used when a fresh store is started with seeding enabled."""

from typing import Dict, List, Tuple

from rank_kernel.models.entity import EntityKind
from rank_kernel.ordering.orchestrator import MoveOrchestrator

DEFAULT_BOARD: List[Tuple[str, List[str]]] = [
    ("To Do", ["Design user interface", "Implement drag and drop"]),
    ("In Progress", ["Test functionality"]),
    ("Done", []),
]


def seed_default_board(orchestrator: MoveOrchestrator) -> Dict[str, str]:
    """
    Create the demo lists and items unless the store already holds lists.

    Returns a mapping of list title to generated list id.
    """
    if orchestrator.store.load_scope(None):
        return {}

    created = {}
    for list_title, item_titles in DEFAULT_BOARD:
        board_list = orchestrator.create_entity(EntityKind.LIST, None, list_title)
        created[list_title] = board_list.id
        for item_title in item_titles:
            orchestrator.create_entity(EntityKind.ITEM, board_list.id, item_title)
    return created
