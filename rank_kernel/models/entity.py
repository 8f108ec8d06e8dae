"""Ordered Entity — a list or an item carrying a sparse rank within its scope."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


DEFAULT_STEP = 1024

LIST_TITLE_MAX = 100
ITEM_TITLE_MAX = 200


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityKind(str, Enum):
    LIST = "list"   # Lives in the single global scope
    ITEM = "item"   # Lives in the scope of its parent list


class OrderedEntity(BaseModel):
    """An entity ordered by ascending rank among its scope siblings."""

    id: str
    kind: EntityKind
    scope: Optional[str] = None             # None for lists, parent list id for items
    rank: int = Field(ge=1)
    version: int = Field(ge=1, default=1)   # Bumped by exactly 1 on every mutation
    updated_at: datetime = Field(default_factory=utcnow)
    title: str = Field(min_length=1, max_length=ITEM_TITLE_MAX)
    description: Optional[str] = None

    @model_validator(mode="after")
    def _check_scope_matches_kind(self) -> "OrderedEntity":
        if self.kind == EntityKind.LIST:
            if self.scope is not None:
                raise ValueError("lists belong to the global scope")
            if len(self.title) > LIST_TITLE_MAX:
                raise ValueError(f"list title must be at most {LIST_TITLE_MAX} characters")
        elif self.scope is None:
            raise ValueError("items must belong to a list scope")
        return self

    def touched(self, **changes) -> "OrderedEntity":
        """Copy with ``changes`` applied, version bumped and timestamp refreshed."""
        changes["version"] = self.version + 1
        changes["updated_at"] = utcnow()
        return self.model_validate({**self.model_dump(), **changes})


class BoardSnapshot(BaseModel):
    """Every list and item, each ascending by rank."""

    lists: List[OrderedEntity] = []
    items: List[OrderedEntity] = []
