"""
Rank Kernel API — FastAPI endpoints.

Exposes the ordering engine via a REST API for:
- List management and drag-and-drop reordering
- Item management, reordering and moves between lists
- Whole-board inspection
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from rank_kernel.config import load_config
from rank_kernel.logging_setup import configure_logging
from rank_kernel.models.config import RankingConfig
from rank_kernel.models.entity import (
    ITEM_TITLE_MAX,
    LIST_TITLE_MAX,
    EntityKind,
    OrderedEntity,
)
from rank_kernel.models.position import Position
from rank_kernel.ordering.errors import (
    EntityNotFound,
    InvalidMove,
    OrderingError,
    RankCollision,
    ScopeNotFound,
    StoreUnavailable,
    VersionConflict,
)
from rank_kernel.ordering.orchestrator import MoveOrchestrator
from rank_kernel.ordering.seed import seed_default_board
from rank_kernel.store.base import EntityStore
from rank_kernel.store.memory import InMemoryStore
from rank_kernel.store.sqlite import SQLiteStore

logger = logging.getLogger(__name__)


# --- Request/Response Models ---

class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ListCreateRequest(_WireModel):
    title: str = Field(min_length=1, max_length=LIST_TITLE_MAX)


class ListUpdateRequest(_WireModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=LIST_TITLE_MAX)
    version: Optional[int] = None


class ListMoveRequest(_WireModel):
    before_id: Optional[str] = Field(default=None, alias="beforeId")
    after_id: Optional[str] = Field(default=None, alias="afterId")
    version: Optional[int] = None


class ItemCreateRequest(_WireModel):
    list_id: str = Field(alias="listId")
    title: str = Field(min_length=1, max_length=ITEM_TITLE_MAX)
    description: Optional[str] = None


class ItemUpdateRequest(_WireModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=ITEM_TITLE_MAX)
    description: Optional[str] = None
    version: Optional[int] = None


class ItemMoveRequest(_WireModel):
    target_list_id: Optional[str] = Field(default=None, alias="targetListId")
    list_id: Optional[str] = Field(default=None, alias="listId")
    before_id: Optional[str] = Field(default=None, alias="beforeId")
    after_id: Optional[str] = Field(default=None, alias="afterId")
    version: Optional[int] = None


_ERROR_STATUS = [
    (ScopeNotFound, 404),
    (EntityNotFound, 404),
    (VersionConflict, 409),
    (InvalidMove, 422),
    (StoreUnavailable, 503),
    (RankCollision, 500),
]


def _status_for(exc: OrderingError) -> int:
    for error_type, status in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 500


async def handle_ordering_error(request: Request, exc: OrderingError) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


def _dump(entity: OrderedEntity) -> dict:
    return entity.model_dump(mode="json")


def build_store(config: RankingConfig) -> EntityStore:
    """SQLite when a database path is configured, in-memory otherwise."""
    if config.db_path:
        return SQLiteStore(db_path=config.db_path)
    return InMemoryStore()


# --- Application Factory ---

def create_app(
    store: Optional[EntityStore] = None,
    config: Optional[RankingConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    config = config or RankingConfig()
    configure_logging(config.log_level)

    app = FastAPI(
        title="Rank Kernel API",
        description="Sparse-rank ordering for lists and items",
        version="0.1.0",
    )
    app.add_exception_handler(OrderingError, handle_ordering_error)

    es = store or build_store(config)
    orchestrator = MoveOrchestrator(es, config)
    if config.seed_demo_data:
        seed_default_board(orchestrator)

    app.state.store = es
    app.state.orchestrator = orchestrator

    def _require_kind(entity_id: str, kind: EntityKind) -> OrderedEntity:
        entity = es.get(entity_id)
        if entity is None or entity.kind != kind:
            raise EntityNotFound(entity_id)
        return entity

    # === LISTS ===

    @app.get("/lists")
    def list_lists():
        """All lists ascending by rank."""
        return [_dump(e) for e in orchestrator.list_scope(None)]

    @app.post("/lists")
    def create_list(req: ListCreateRequest):
        """Create a list at the end of the board."""
        created = orchestrator.create_entity(EntityKind.LIST, None, req.title)
        return {"success": True, "list": _dump(created)}

    @app.patch("/lists/{list_id}")
    def update_list(list_id: str, req: ListUpdateRequest):
        """Rename a list."""
        _require_kind(list_id, EntityKind.LIST)
        updated = orchestrator.update_entity(
            list_id, title=req.title, expected_version=req.version
        )
        return {"success": True, "list": _dump(updated)}

    @app.delete("/lists/{list_id}")
    def delete_list(list_id: str):
        """Delete a list and every item in it."""
        _require_kind(list_id, EntityKind.LIST)
        orchestrator.delete_entity(list_id)
        return {"success": True}

    @app.patch("/lists/{list_id}/move")
    def move_list(list_id: str, req: ListMoveRequest):
        """Reorder a list relative to an anchor list."""
        _require_kind(list_id, EntityKind.LIST)
        moved = orchestrator.move_entity(
            list_id,
            None,
            Position.from_anchors(req.before_id, req.after_id),
            expected_version=req.version,
        )
        return {"success": True, "list": _dump(moved)}

    @app.get("/lists/{list_id}/items")
    def list_items(list_id: str):
        """Items of one list ascending by rank."""
        _require_kind(list_id, EntityKind.LIST)
        return {"items": [_dump(e) for e in orchestrator.list_scope(list_id)]}

    # === ITEMS ===

    @app.post("/items")
    def create_item(req: ItemCreateRequest):
        """Create an item at the end of its list."""
        created = orchestrator.create_entity(
            EntityKind.ITEM, req.list_id, req.title, req.description
        )
        return {"success": True, "item": _dump(created)}

    @app.patch("/items/{item_id}")
    def update_item(item_id: str, req: ItemUpdateRequest):
        """Edit an item's title or description."""
        _require_kind(item_id, EntityKind.ITEM)
        updated = orchestrator.update_entity(
            item_id,
            title=req.title,
            description=req.description,
            expected_version=req.version,
        )
        return {"success": True, "item": _dump(updated)}

    @app.delete("/items/{item_id}")
    def delete_item(item_id: str):
        """Delete an item."""
        _require_kind(item_id, EntityKind.ITEM)
        orchestrator.delete_entity(item_id)
        return {"success": True}

    @app.patch("/items/{item_id}/move")
    def move_item(item_id: str, req: ItemMoveRequest):
        """Reorder an item, optionally into another list."""
        item = _require_kind(item_id, EntityKind.ITEM)
        target_list_id = req.target_list_id or req.list_id or item.scope
        moved = orchestrator.move_entity(
            item_id,
            target_list_id,
            Position.from_anchors(req.before_id, req.after_id),
            expected_version=req.version,
        )
        return {"success": True, "item": _dump(moved)}

    # === BOARD ===

    @app.get("/db")
    def get_board():
        """Full snapshot of every list and item."""
        return es.snapshot().model_dump(mode="json")

    @app.get("/health")
    def health():
        return {"status": "ok", "store": type(es).__name__}

    return app


# Default application instance
app = create_app(config=load_config())
